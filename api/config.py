import json
import os
from typing import Dict, Any

from dotenv import load_dotenv

from api.utils.logger import setup_logger

load_dotenv()

log = setup_logger("config")

CONFIG_DIR = os.path.join(os.path.dirname(__file__), 'rules')

# --- HTTP ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# --- translation cache ---
# "rest": PostgREST/Supabase table API, "postgres": direct asyncpg pool
CACHE_BACKEND = os.getenv("CACHE_BACKEND", "rest").strip().lower()
CACHE_TABLE = os.getenv("CACHE_TABLE", "ingredient_translation_cache")
CACHE_TIMEOUT = float(os.getenv("CACHE_TIMEOUT", "5.0"))

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

DICTIONARY_FILE = os.getenv("DICTIONARY_FILE", "ingredients_zh.json")


def load_rule(filename: str, required: bool = False) -> Dict[str, Any]:
    """Load a single JSON rule file from the config directory.

    Optional rules fall back to ``{}`` with a logged warning; ``required``
    rules re-raise so the process does not start without them.
    """
    path = os.path.join(CONFIG_DIR, filename)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        log.warning({"msg": "rule_file_missing", "path": path})
        if required:
            raise
        return {}
    except json.JSONDecodeError:
        log.error({"msg": "rule_file_invalid", "path": path})
        if required:
            raise
        return {}
