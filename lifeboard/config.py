"""Service configuration loaded from environment variables.

See .env.example for the supported variables and their defaults.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator


_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


class Settings(BaseModel):
    """Runtime settings for the board service and HTTP server."""

    min_rows: int = Field(default=3, ge=0)
    min_cols: int = Field(default=3, ge=0)
    store_path: Optional[str] = None  # None keeps boards in memory only
    autosave: bool = False
    log_level: str = 'INFO'
    log_file: Optional[str] = None
    host: str = '127.0.0.1'
    port: int = Field(default=8000, gt=0, lt=65536)

    @field_validator('log_level')
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from LIFEBOARD_* environment variables."""
        return cls(
            min_rows=os.getenv('LIFEBOARD_MIN_ROWS', '3'),
            min_cols=os.getenv('LIFEBOARD_MIN_COLS', '3'),
            store_path=os.getenv('LIFEBOARD_STORE_PATH') or None,
            autosave=os.getenv('LIFEBOARD_AUTOSAVE', 'false').strip().lower() in _TRUE_VALUES,
            log_level=os.getenv('LIFEBOARD_LOG_LEVEL', 'INFO'),
            log_file=os.getenv('LIFEBOARD_LOG_FILE') or None,
            host=os.getenv('LIFEBOARD_HOST', '127.0.0.1'),
            port=os.getenv('LIFEBOARD_PORT', '8000'),
        )
