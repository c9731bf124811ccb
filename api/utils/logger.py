import logging, os, sys, uuid, contextvars
from pythonjsonlogger import jsonlogger

SERVICE_NAME = os.getenv("SERVICE_NAME", "ingredient-translator")
DEPLOY_ENV = os.getenv("DEPLOY_ENV", "dev")

# set per request by the HTTP middleware; None outside a request
request_id_ctx = contextvars.ContextVar("request_id", default=None)

def get_request_id():
    rid = request_id_ctx.get()
    if rid:
        return rid
    rid = uuid.uuid4().hex[:12]
    request_id_ctx.set(rid)
    return rid

class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per line: the message dict plus service/request context.

    Records logged outside a request (startup, shutdown) carry ``rid: null``
    rather than a freshly minted id.
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if "message" in log_record and not log_record["message"]:
            del log_record["message"]
        log_record.setdefault("level", record.levelname)
        log_record.setdefault("ts", int(record.created * 1000))
        log_record.setdefault("logger", record.name)
        log_record.setdefault("rid", request_id_ctx.get())
        log_record.setdefault("service", SERVICE_NAME)
        log_record.setdefault("env", DEPLOY_ENV)

def setup_logger(name: str = "app", level: str | int = None, stream=None) -> logging.Logger:
    lvl = level or os.getenv("LOG_LEVEL", "INFO").upper()
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(ServiceJsonFormatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(lvl)
    return logger
