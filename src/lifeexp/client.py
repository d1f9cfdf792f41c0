# OOP boundary for external http i/o
# everything about url, headers, timeouts lives here so parsing and orchestration stay pure

from __future__ import annotations
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from .config import SOURCE_URL
from .errors import NetworkError


class LifeExpectancyClient:
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        url: str = SOURCE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        user_agent: str = "life-expectancy-data/0.1 (+https://github.com/live-progress/life-expectancy-data)",
    ):
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

        # no retries unless asked for, a failed fetch falls back to the bundled data
        self._retry = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
            raise_on_status=False,
        )
        self._session = self._build_session()

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def fetch_page(self) -> str:
        # GET the source page and return its body as text
        try:
            resp = self._session.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Request error for {self.url}: {exc}") from exc

        if resp.status_code >= 400:
            # include a short response snippet to speed up triage
            snippet = (resp.text or "")[:300]
            raise NetworkError(f"HTTP {resp.status_code} for {self.url}. Body: {snippet}")

        return resp.text

    def close(self) -> None:
        self._session.close()
