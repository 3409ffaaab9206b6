"""
Tests for the built-in preprocessors

Tests for:
- ExpandingPreprocessor: background expansion and re-entry into the queue
- parse_playlist: M3U and PLS parsing
- M3UPlaylistPreprocessor: claiming and fetching over HTTP
"""

import asyncio
import logging

import httpx
import pytest

from playqueue.application.services.queue_service import QueueStore
from playqueue.application.services.resolution_gate import ResolutionGate
from playqueue.infrastructure.preprocessors.expanding import ExpandingPreprocessor
from playqueue.infrastructure.preprocessors.m3u_playlist import (
    M3UPlaylistPreprocessor,
    parse_playlist,
)


class StaticExpander(ExpandingPreprocessor):
    """Claims URLs starting with ``list:`` and expands them to fixed tracks."""

    def __init__(self, tracks, sink=None, gate: asyncio.Event | None = None) -> None:
        super().__init__(sink)
        self.tracks = tracks
        self.gate = gate

    def claims(self, url: str) -> bool:
        return url.startswith("list:")

    async def expand(self, url: str) -> list[str]:
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.tracks, Exception):
            raise self.tracks
        return list(self.tracks)


# =============================================================================
# ExpandingPreprocessor Tests
# =============================================================================


class TestExpandingPreprocessor:
    """Tests for the expand-then-enqueue contract."""

    @pytest.mark.asyncio
    async def test_unclaimed_url_is_queued_directly(self):
        expander = StaticExpander(["t1"])
        store = QueueStore(gate=ResolutionGate([expander]))
        expander.bind(store)

        result = await store.append("https://plain")

        assert result.queued is True
        assert expander.pending == 0

    @pytest.mark.asyncio
    async def test_claimed_url_is_enqueued_after_expansion(self):
        release = asyncio.Event()
        expander = StaticExpander(["t1", "t2"], gate=release)
        store = QueueStore(gate=ResolutionGate([expander]))
        expander.bind(store)

        result = await store.append("list:mix")

        assert result.pending is True
        assert await store.get_all() == []

        release.set()
        await expander.wait_idle()

        assert await store.get_all() == ["t1", "t2"]

    @pytest.mark.asyncio
    async def test_expansion_failure_is_logged(self, caplog):
        expander = StaticExpander(RuntimeError("offline"))
        store = QueueStore(gate=ResolutionGate([expander]))
        expander.bind(store)

        with caplog.at_level(logging.ERROR):
            await store.append("list:broken")
            await expander.wait_idle()

        assert await store.get_all() == []
        assert "StaticExpander failed to expand list:broken" in caplog.text

    @pytest.mark.asyncio
    async def test_unbound_expander_drops_results(self, caplog):
        expander = StaticExpander(["t1"])

        with caplog.at_level(logging.WARNING):
            assert expander.attempt("list:x") is True
            await expander.wait_idle()

        assert "has no queue bound" in caplog.text

    @pytest.mark.asyncio
    async def test_aclose_cancels_pending_expansions(self):
        never = asyncio.Event()
        expander = StaticExpander(["t1"], gate=never)
        store = QueueStore(gate=ResolutionGate([expander]))
        expander.bind(store)

        await store.append("list:slow")
        assert expander.pending == 1

        await expander.aclose()

        assert expander.pending == 0
        assert await store.get_all() == []


# =============================================================================
# parse_playlist Tests
# =============================================================================


class TestParsePlaylist:
    """Tests for M3U and PLS parsing."""

    def test_extended_m3u(self):
        body = "\n".join(
            [
                "#EXTM3U",
                "#EXTINF:123,Artist - Title",
                "https://cdn.example.com/one.mp3",
                "",
                "#EXTINF:-1,Radio",
                "http://radio.example.com/stream",
            ]
        )

        assert parse_playlist(body, "https://example.com/list.m3u") == [
            "https://cdn.example.com/one.mp3",
            "http://radio.example.com/stream",
        ]

    def test_relative_entries_resolved_against_base(self):
        body = "one.mp3\nsub/two.mp3\n"

        assert parse_playlist(body, "https://example.com/music/list.m3u") == [
            "https://example.com/music/one.mp3",
            "https://example.com/music/sub/two.mp3",
        ]

    def test_pls(self):
        body = "\n".join(
            [
                "[playlist]",
                "NumberOfEntries=2",
                "File1=https://example.com/a.mp3",
                "Title1=A",
                "Length1=-1",
                "file2 = https://example.com/b.mp3",
                "Version=2",
            ]
        )

        assert parse_playlist(body, "https://example.com/list.pls") == [
            "https://example.com/a.mp3",
            "https://example.com/b.mp3",
        ]

    def test_empty_document(self):
        assert parse_playlist("#EXTM3U\n", "https://example.com/x.m3u") == []


# =============================================================================
# M3UPlaylistPreprocessor Tests
# =============================================================================


class TestM3UPlaylistPreprocessor:
    """Tests for playlist claiming and fetching."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/list.m3u",
            "http://example.com/live.M3U8",
            "https://example.com/radio.pls?token=1",
        ],
    )
    def test_claims_playlist_urls(self, url):
        assert M3UPlaylistPreprocessor().claims(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/track.mp3",
            "file:///home/me/list.m3u",
            "https://example.com/m3u",
            "not a url",
        ],
    )
    def test_ignores_other_urls(self, url):
        assert M3UPlaylistPreprocessor().claims(url) is False

    @pytest.mark.asyncio
    async def test_expand_fetches_and_parses(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/music/list.m3u"
            return httpx.Response(200, text="#EXTM3U\none.mp3\nhttps://cdn.example.com/two.mp3\n")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        preprocessor = M3UPlaylistPreprocessor(client=client)

        urls = await preprocessor.expand("https://example.com/music/list.m3u")

        assert urls == ["https://example.com/music/one.mp3", "https://cdn.example.com/two.mp3"]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_http_error_leaves_queue_untouched(self, caplog):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(404))
        )
        preprocessor = M3UPlaylistPreprocessor(client=client)
        store = QueueStore(gate=ResolutionGate([preprocessor]))
        preprocessor.bind(store)

        with caplog.at_level(logging.ERROR):
            result = await store.append("https://example.com/missing.m3u")
            await preprocessor.wait_idle()

        assert result.pending is True
        assert await store.get_all() == []
        assert "failed to expand" in caplog.text
        await client.aclose()

    @pytest.mark.asyncio
    async def test_end_to_end_expansion(self):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, text="a.mp3\nb.mp3\n")
            )
        )
        preprocessor = M3UPlaylistPreprocessor(client=client)
        store = QueueStore(gate=ResolutionGate([preprocessor]))
        preprocessor.bind(store)

        await store.append("https://example.com/list.m3u")
        await preprocessor.wait_idle()

        assert await store.get_all() == ["https://example.com/a.mp3", "https://example.com/b.mp3"]
        await client.aclose()

    @pytest.mark.asyncio
    async def test_aclose_keeps_injected_client_open(self):
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        preprocessor = M3UPlaylistPreprocessor(client=client)

        await preprocessor.aclose()

        assert client.is_closed is False
        await client.aclose()
