"""Environment-driven settings for kitchenpos."""

import os
from dataclasses import dataclass
from typing import Tuple

STORAGE_BACKENDS = ("inmemory", "sqlalchemy")
_BACKEND_ALIASES = {"memory": "inmemory", "sqlite": "sqlalchemy", "sql": "sqlalchemy"}


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "inmemory"
    database_url: str = "sqlite:///kitchenpos.db"
    use_alembic: bool = False
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def normalize_backend(value: str) -> str:
    """Map a STORAGE_BACKEND value to a known backend name."""
    backend = (value or "").strip().lower()
    backend = _BACKEND_ALIASES.get(backend, backend)
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown STORAGE_BACKEND '{value}'. Expected one of: {', '.join(STORAGE_BACKENDS)}"
        )
    return backend


def load_settings() -> Settings:
    """Read settings from the environment."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        storage_backend=normalize_backend(os.getenv("STORAGE_BACKEND", "inmemory")),
        database_url=os.getenv("APP_DATABASE_URL") or "sqlite:///kitchenpos.db",
        use_alembic=_env_flag("USE_ALEMBIC"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
