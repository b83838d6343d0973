import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from subtracker.rules.registry import DEFAULT_REGISTRY, Registry, load_registry

# Load .env once, globally
load_dotenv()

# Project root (independent of current working directory).
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def resolve_path(env_key: str, default: str) -> Path:
    """
    Resolve a path from ENV.
    Relative paths are resolved against PROJECT_ROOT.
    """
    path = Path(os.getenv(env_key, default))
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def services_file() -> Optional[Path]:
    value = os.getenv("SUBTRACKER_SERVICES_FILE")
    if not value:
        return None
    return resolve_path("SUBTRACKER_SERVICES_FILE", value)


LOGS_DIR = resolve_path("SUBTRACKER_LOGS_DIR", "logs")
LOG_LEVEL = os.getenv("SUBTRACKER_LOG_LEVEL", "INFO")


@lru_cache(maxsize=1)
def get_registry() -> Registry:
    """Default registry, extended by SUBTRACKER_SERVICES_FILE when set."""
    path = services_file()
    if path is None:
        return DEFAULT_REGISTRY
    return load_registry(path)
