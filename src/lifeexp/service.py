# orchestration of the fallback chain: cache -> remote fetch -> bundled defaults
# only remote fetch failures are swallowed, everything else reaches the caller

from __future__ import annotations
import logging
from typing import Optional, Protocol
from .cache import CacheStore, load_default_data
from .client import LifeExpectancyClient
from .config import Settings
from .errors import LifeExpectancyError, NetworkError, ParseError
from .models import COMMON_KEY, StatisticsTable, compute_common
from .parser import parse_table

logger = logging.getLogger(__name__)


class FetchObserver(Protocol):
    def fetch_failed(self, error: LifeExpectancyError) -> None: ...


class LoggingFetchObserver:
    # default observer, makes repeated fetch failures visible in the logs
    def fetch_failed(self, error: LifeExpectancyError) -> None:
        logger.warning("remote fetch failed, using default data: %s", error)


class DataAcquisitionService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[CacheStore] = None,
        client: Optional[LifeExpectancyClient] = None,
        observer: Optional[FetchObserver] = None,
    ):
        self.settings = settings or Settings()
        self.cache = cache or CacheStore(self.settings.cache_path)
        # None means a client is opened per fetch and closed afterwards
        self.client = client
        self.observer = observer or LoggingFetchObserver()

    def fetch_remote(self) -> StatisticsTable:
        client = self.client or LifeExpectancyClient(
            url=self.settings.source_url, timeout=self.settings.timeout
        )
        try:
            html = client.fetch_page()
        finally:
            if self.client is None:
                client.close()

        table = parse_table(
            html,
            table_class=self.settings.table_class,
            table_index=self.settings.table_index,
            strict=self.settings.strict_rows,
        )
        if not table:
            # the aggregate of nothing is NaN, never worth caching
            raise ParseError("Source table contained no country rows")
        return table

    def get_data(self) -> StatisticsTable:
        if self.cache.exists():
            logger.info("loading statistics from cache %s", self.cache.path)
            return self.cache.load()

        try:
            table = self.fetch_remote()
        except (NetworkError, ParseError) as exc:
            self.observer.fetch_failed(exc)
            default_path = self.settings.resolve_default_data_path()
            logger.info("loading default statistics from %s", default_path)
            return load_default_data(default_path)

        table[COMMON_KEY] = compute_common(table)
        # a failed write aborts the call even though the fetch succeeded
        self.cache.save(table)
        logger.info("fetched %d countries from %s", len(table) - 1, self.settings.source_url)
        return table


def get_data() -> StatisticsTable:
    return DataAcquisitionService(Settings.from_env()).get_data()
