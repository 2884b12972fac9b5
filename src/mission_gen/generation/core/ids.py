"""Sequential, deterministic entity ids (``room_1``, ``door_4``, ...)."""

from __future__ import annotations

from collections import Counter


class IdAllocator:
    """Hands out ``<kind>_<n>`` ids, numbering each kind from 1."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def next(self, kind: str) -> str:
        self._counts[kind] += 1
        return f"{kind}_{self._counts[kind]}"

    def reset(self, kind: str) -> None:
        """Restart numbering for *kind* (used when a layout attempt is retried)."""
        self._counts.pop(kind, None)
