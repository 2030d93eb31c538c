"""Runtime settings read from the environment (and a `.env` file if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:5174"


@dataclass
class Settings:
    store: str = "file"  # "file" | "memory"
    save_dir: str = "./writable"
    cors_origins: list[str] = field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()
        cors_origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        return cls(
            store=os.getenv("C4_STORE", "file").strip().lower(),
            save_dir=os.getenv("C4_SAVE_DIR", "./writable"),
            cors_origins=[o.strip() for o in cors_origins.split(",") if o.strip()],
            log_level=os.getenv("C4_LOG_LEVEL", "INFO").upper(),
        )
