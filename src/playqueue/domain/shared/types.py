"""Reusable Pydantic Annotated types for domain-wide validation.

Constrained types are defined here once, so models can simply annotate their fields::

    from playqueue.domain.shared.types import NonNegativeInt, QueueEntry

    class MyModel(BaseModel):
        url: QueueEntry
        length: NonNegativeInt
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PortInt = Annotated[int, Field(ge=1, le=65535)]
"""TCP port: 1 … 65 535."""


# ── String constraints ──────────────────────────────────────────────

QueueEntry = str
"""A URL identifying a playable resource.

Entries are stored exactly as given: empty strings and malformed URLs are
accepted, so this alias carries no constraint.
"""
