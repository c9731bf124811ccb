import os
import asyncpg

from api.utils.logger import setup_logger

log = setup_logger("pg")

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), 'schema.sql')

_pool = None

async def _dsn():
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")
    return (
        f"postgresql://{os.getenv('POSTGRES_USER','translator')}:"
        f"{os.getenv('POSTGRES_PASSWORD','change_me_strong')}@"
        f"{os.getenv('POSTGRES_HOST','localhost')}:"
        f"{os.getenv('POSTGRES_PORT','5432')}/"
        f"{os.getenv('POSTGRES_DB','translator')}"
    )

async def connect_db():
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(dsn=await _dsn(), min_size=1, max_size=10)
    return _pool

async def disconnect_db():
    global _pool
    if _pool:
        await _pool.close()
        _pool = None

async def execute(query: str, *args):
    async with _pool.acquire() as conn:
        return await conn.execute(query, *args)

async def fetchrow(query: str, *args):
    async with _pool.acquire() as conn:
        return await conn.fetchrow(query, *args)

async def init_db():
    await connect_db()
    async with _pool.acquire() as conn:
        with open(SCHEMA_PATH, 'r', encoding='utf-8') as f:
            schema_sql = f.read()
        await conn.execute(schema_sql)
        log.info({"msg": "schema_applied"})
