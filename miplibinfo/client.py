from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional

import requests

from .catalog import Catalog
from .config import MIPLIB_URL
from .errors import InvalidIdentifierError, TransportError
from .models import InstanceRecord
from .parsers import extract_instance, instance_url

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 1024 * 1024


class MiplibClient:
    """
    Fetches instance pages and files from the MIPLIB web site.

    Each worker thread gets its own session from ``session_factory``.
    """

    def __init__(
        self,
        catalog: Catalog,
        base_url: str = MIPLIB_URL,
        timeout: Optional[float] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        self.catalog = catalog
        self.base_url = base_url
        self.timeout = timeout
        self.session_factory = session_factory or requests.Session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    def __enter__(self) -> "MiplibClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self.session_factory()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

    def instance_url(self, name: str) -> str:
        return instance_url(name, self.base_url)

    def fetch_page(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Request failed. {exc}") from exc
        if not 200 <= response.status_code <= 299:
            raise TransportError(f"Request failed. Status Code: {response.status_code}.")
        return response.text

    def get_instance_info(self, name: str) -> InstanceRecord:
        if name not in self.catalog:
            raise InvalidIdentifierError(name)
        url = self.instance_url(name)
        html = self.fetch_page(url)
        return extract_instance(name, html, self.catalog, self.base_url)

    def download(self, name: str, url: str, dest: Path) -> Path:
        logger.debug("Downloading %s -> %s", url, dest)
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                if not 200 <= response.status_code <= 299:
                    raise TransportError(
                        f'Failed to download instance "{name}". Status Code: {response.status_code}.'
                    )
                with dest.open("wb") as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except TransportError:
            dest.unlink(missing_ok=True)
            raise
        except (requests.RequestException, OSError) as exc:
            dest.unlink(missing_ok=True)
            raise TransportError(f'Failed to download instance "{name}". {exc}') from exc
        return dest
