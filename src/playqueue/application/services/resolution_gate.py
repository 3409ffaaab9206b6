"""Resolution Gate - decides whether an appended URL is queued now or deferred."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import QueueEntry
from ..interfaces.preprocessor import Preprocessor

logger = logging.getLogger(__name__)


class ResolutionGate:
    """Offers each appended URL to every registered preprocessor.

    The gate never waits for a claiming preprocessor to finish; it only
    reports whether anyone claimed the URL.
    """

    def __init__(self, preprocessors: Iterable[Preprocessor] = ()) -> None:
        self._preprocessors: list[Preprocessor] = list(preprocessors)

    @property
    def preprocessors(self) -> tuple[Preprocessor, ...]:
        return tuple(self._preprocessors)

    def register(self, preprocessor: Preprocessor) -> None:
        self._preprocessors.append(preprocessor)
        logger.info(LogTemplates.PREPROCESSOR_REGISTERED, preprocessor.name)

    def offer(self, url: QueueEntry) -> bool:
        """Return True if any preprocessor claimed ``url``.

        Every preprocessor sees the URL, even after an earlier one claimed it.
        A preprocessor that raises is treated as not claiming.
        """
        claimed = False
        for preprocessor in self._preprocessors:
            try:
                took = preprocessor.attempt(url)
            except Exception:
                logger.exception(LogTemplates.PREPROCESSOR_ATTEMPT_FAILED, preprocessor.name, url)
                continue
            if took:
                logger.debug(LogTemplates.PREPROCESSOR_CLAIMED, preprocessor.name, url)
                claimed = True
        return claimed

    async def aclose(self) -> None:
        for preprocessor in self._preprocessors:
            await preprocessor.aclose()
