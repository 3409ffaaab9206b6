"""Preprocessor that expands M3U and PLS playlist URLs into their tracks."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlsplit

import httpx

from playqueue.application.interfaces.preprocessor import ResolvedQueueSink
from playqueue.domain.shared.types import QueueEntry
from playqueue.infrastructure.preprocessors.expanding import ExpandingPreprocessor

logger = logging.getLogger(__name__)

PLAYLIST_SUFFIXES = (".m3u", ".m3u8", ".pls")
PLS_ENTRY = re.compile(r"^File\d+\s*=\s*(?P<url>.+)$", re.IGNORECASE)


def parse_playlist(body: str, base_url: str) -> list[QueueEntry]:
    """Extract track URLs from an M3U or PLS document, in order.

    Comments, directives and blank lines are skipped; relative entries are
    resolved against ``base_url``.
    """
    urls: list[QueueEntry] = []
    for raw in body.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "[")):
            continue

        match = PLS_ENTRY.match(line)
        if match:
            line = match.group("url").strip()
        elif "=" in line and "://" not in line:
            # Other PLS keys (Title1=, Length1=, NumberOfEntries=)
            continue

        urls.append(urljoin(base_url, line))
    return urls


class M3UPlaylistPreprocessor(ExpandingPreprocessor):
    """Claims http(s) URLs whose path ends in .m3u, .m3u8 or .pls."""

    def __init__(
        self,
        sink: ResolvedQueueSink | None = None,
        *,
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(sink)
        self._timeout_s = timeout_s
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout_s, follow_redirects=True)
        return self._client

    def claims(self, url: QueueEntry) -> bool:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            return False
        return parts.path.lower().endswith(PLAYLIST_SUFFIXES)

    async def expand(self, url: QueueEntry) -> list[QueueEntry]:
        response = await self._get_client().get(url)
        response.raise_for_status()
        return parse_playlist(response.text, str(response.url))

    async def aclose(self) -> None:
        await super().aclose()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
