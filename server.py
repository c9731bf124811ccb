from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware
import time, uuid
import httpx

from api import config
from api.storage.pg import init_db, disconnect_db
from api.storage.dao import PgTranslationCache
from api.storage.postgrest import RestTranslationCache
from api.modules.translate.errors import ValidationError
from api.modules.translate.resolver import IngredientResolver, DEFAULT_TARGET_LANGUAGE
from api.utils.logger import setup_logger, request_id_ctx, get_request_id
from api.utils.metrics import translation_requests_total

log = setup_logger("server")

app = FastAPI(
    title="Ingredient Translator",
    description="English -> Chinese ingredient name lookup with a persistent cache",
    version="1.0.0",
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

@app.on_event("startup")
async def startup_event():
    if config.CACHE_BACKEND == "postgres":
        log.info("Connecting to database...")
        await init_db()
        log.info("Database connection established.")
    else:
        app.state.http = httpx.AsyncClient(timeout=config.CACHE_TIMEOUT)
        log.info({"msg": "rest_cache_ready", "url": config.SUPABASE_URL})

@app.on_event("shutdown")
async def shutdown_event():
    if config.CACHE_BACKEND == "postgres":
        log.info("Disconnecting from database...")
        await disconnect_db()
        log.info("Database connection closed.")
    elif getattr(app.state, "http", None) is not None:
        await app.state.http.aclose()

# ----- structured request logging -----
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        request_id_ctx.set(rid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            dur = (time.perf_counter() - start) * 1000
            log.info({
                "msg": "http_request",
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "dur_ms": round(dur,2),
                "rid_hdr": rid
            })
            response.headers["X-Request-ID"] = rid
            return response
        except Exception as ex:
            dur = (time.perf_counter() - start) * 1000
            log.error({
                "msg": "http_unhandled_exception",
                "err": str(ex),
                "method": request.method,
                "path": request.url.path,
                "dur_ms": round(dur,2)
            })
            return JSONResponse({"error": "Translation failed"}, status_code=500, headers={"X-Request-ID": rid})

# ----- CORS: same headers on every response, preflight or not -----
class CorsHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

app.add_middleware(LoggingMiddleware)
app.add_middleware(CorsHeadersMiddleware)

# ----- /metrics (Prometheus) -----
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

def get_cache_store(request: Request):
    if config.CACHE_BACKEND == "postgres":
        return PgTranslationCache()
    return RestTranslationCache(
        client=request.app.state.http,
        base_url=config.SUPABASE_URL,
        api_key=config.SUPABASE_ANON_KEY,
        authorization=request.headers.get("Authorization"),
    )

@app.get("/health")
def health():
    return {"ok": True, "rid": get_request_id()}

@app.options("/translate-ingredient")
async def translate_ingredient_preflight():
    return PlainTextResponse("ok")

@app.post("/translate-ingredient")
async def translate_ingredient(request: Request, cache=Depends(get_cache_store)):
    try:
        payload = await request.json()
        if not isinstance(payload, dict):
            payload = {}
        resolver = IngredientResolver(cache)
        result = await resolver.resolve(
            payload.get("ingredient_name"),
            payload.get("target_language") or DEFAULT_TARGET_LANGUAGE,
        )
    except ValidationError:
        translation_requests_total.labels(status="400").inc()
        return JSONResponse({"error": "ingredient_name is required"}, status_code=400)
    except Exception as ex:
        translation_requests_total.labels(status="500").inc()
        log.error({"msg": "translation_failed", "err": str(ex), "type": type(ex).__name__})
        return JSONResponse({"error": "Translation failed"}, status_code=500)

    translation_requests_total.labels(status="200").inc()
    return JSONResponse(result.model_dump())

# For development run
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host=config.HOST, port=config.PORT)
