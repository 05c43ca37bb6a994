"""Branch-aware article navigation history.

The stack holds article titles, newest last. Visiting a title already on the
stack returns to that point and drops everything visited after it, so no
title appears twice. The whole stack is written to the session store as a
JSON list after every mutation.
"""

from __future__ import annotations

import json
import logging

from wikireader.model.reader_options import DEFAULT_HISTORY_KEY
from wikireader.types import SessionStore

logger = logging.getLogger(__name__)


class NoHistoryError(RuntimeError):
    """go_back() called without an entry to go back to; gate on can_go_back()."""


def _parse_entries(raw: str | None) -> list[str] | None:
    """Return the persisted stack, or None when missing, malformed or empty."""

    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, list) or not data:
        return None
    if not all(isinstance(item, str) for item in data):
        return None
    return data


class NavigationHistory:
    def __init__(
        self,
        store: SessionStore,
        entries: list[str] | None = None,
        *,
        key: str = DEFAULT_HISTORY_KEY,
    ) -> None:
        self.store = store
        self.key = key
        self._entries: list[str] = list(entries or [])

    @classmethod
    def restore(cls, store: SessionStore, *, key: str = DEFAULT_HISTORY_KEY) -> NavigationHistory:
        """The persisted stack, or an empty one when missing, corrupt or empty."""

        raw = store.get(key)
        entries = _parse_entries(raw)
        if entries is None and raw is not None:
            logger.warning("Resetting unreadable navigation history under %r", key)
        return cls(store, entries, key=key)

    @classmethod
    def load(
        cls, store: SessionStore, current_title: str, *, key: str = DEFAULT_HISTORY_KEY
    ) -> NavigationHistory:
        """Restore the stack from the store and record the current article.

        A missing, corrupt or empty persisted value resets the stack to
        ``[current_title]``.
        """

        history = cls.restore(store, key=key)
        history.visit(current_title)
        return history

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def current(self) -> str | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def visit(self, title: str) -> None:
        if not self._entries:
            self._entries.append(title)
        elif self._entries[-1] == title:
            # Re-render of the current article, not a navigation
            return
        elif title in self._entries:
            del self._entries[self._entries.index(title) + 1 :]
        else:
            self._entries.append(title)
        self._persist()

    def can_go_back(self) -> bool:
        return len(self._entries) > 1

    def go_back(self) -> str:
        """Drop the current entry and return the one to navigate to."""

        if not self.can_go_back():
            raise NoHistoryError("No previous article in navigation history")
        self._entries.pop()
        self._persist()
        return self._entries[-1]

    def clear(self) -> None:
        self._entries.clear()
        self._persist()

    def _persist(self) -> None:
        self.store.set(self.key, json.dumps(self._entries, ensure_ascii=False))
        logger.debug("Navigation history: %s", self._entries)


__all__ = [
    "NavigationHistory",
    "NoHistoryError",
]
