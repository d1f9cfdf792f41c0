# runtime settings, explicit arguments win over environment variables
# in production the environment is injected by the host, locally a .env file works too

from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from .cache import default_cache_path
from .errors import ConfigError

SOURCE_URL = "https://en.wikipedia.org/wiki/List_of_countries_by_life_expectancy"
DEFAULT_DATA_FILENAME = "default_expectancy.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean (got {raw!r})")


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be a {cast.__name__} (got {raw!r})") from exc


@dataclass
class Settings:
    cache_path: Path = field(default_factory=default_cache_path)
    # None means default_expectancy.json in the working directory at call time
    default_data_path: Optional[Path] = None
    source_url: str = SOURCE_URL
    table_class: str = "wikitable"
    table_index: int = 2  # zero-based, the third matching table
    strict_rows: bool = False
    timeout: float = 10.0

    def resolve_default_data_path(self) -> Path:
        if self.default_data_path is not None:
            return Path(self.default_data_path)
        return Path.cwd() / DEFAULT_DATA_FILENAME

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        cache_path = os.getenv("LIFEEXP_CACHE_PATH")
        default_data = os.getenv("LIFEEXP_DEFAULT_DATA")
        table_index = _env_number("LIFEEXP_TABLE_INDEX", 2, int)
        if table_index < 0:
            raise ConfigError(f"LIFEEXP_TABLE_INDEX must be >= 0 (got {table_index})")
        timeout = _env_number("LIFEEXP_TIMEOUT", 10.0, float)
        if timeout <= 0:
            raise ConfigError(f"LIFEEXP_TIMEOUT must be positive (got {timeout})")

        return cls(
            cache_path=Path(cache_path).expanduser() if cache_path else default_cache_path(),
            default_data_path=Path(default_data).expanduser() if default_data else None,
            source_url=os.getenv("LIFEEXP_SOURCE_URL") or SOURCE_URL,
            table_index=table_index,
            strict_rows=_env_bool("LIFEEXP_STRICT_ROWS", False),
            timeout=timeout,
        )
