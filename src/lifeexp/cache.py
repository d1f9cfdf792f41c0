# file-backed storage for statistics tables: the cache blob and the bundled defaults

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union
from .errors import FilesystemError
from .models import StatisticsTable, table_from_json, table_to_json

logger = logging.getLogger(__name__)


def default_cache_path() -> Path:
    # fall back to the working directory when no home directory can be resolved
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        home = Path(".")
    return home / ".config" / "live_progress" / ".tmp_expectancy.json"


def _read_table(path: Path) -> StatisticsTable:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Cannot read {path}: {exc}") from exc
    return table_from_json(text)


class CacheStore:
    """Single JSON snapshot of the last successfully fetched table.

    Entries never expire; once present the cache is trusted.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else default_cache_path()

    def exists(self) -> bool:
        # any stat failure counts as "no cache"
        try:
            return self.path.is_file()
        except OSError:
            return False

    def load(self) -> StatisticsTable:
        return _read_table(self.path)

    def save(self, table: StatisticsTable) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(table_to_json(table), encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(f"Cannot write cache {self.path}: {exc}") from exc
        logger.debug("cached %d entries at %s", len(table), self.path)


def load_default_data(path: Union[str, Path]) -> StatisticsTable:
    # returned verbatim, the bundled file already carries its Common entry
    return _read_table(Path(path))
