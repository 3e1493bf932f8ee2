from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .content import Entry


class EntryCollection(Sequence[Entry]):
    """Lightweight helper for ordering lists of Entries."""

    def __init__(self, entries: Iterable[Entry]):
        self._entries = list(entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, item):
        return self._entries[item]

    def by_date(self, reverse: bool = True) -> EntryCollection:
        """Sort entries by date string, newest first by default.

        Dates compare as plain strings, so they must be in a sortable
        ISO-like form (YYYY-MM-DD). Entries without a date sort as ''.
        The sort is stable: equal dates keep their load order.

        Args:
            reverse: If True (default), newest first.

        Returns:
            A new EntryCollection with sorted entries.
        """
        return EntryCollection(
            sorted(self._entries, key=lambda e: e.date or "", reverse=reverse)
        )

    def by_week(self) -> EntryCollection:
        """Sort entries by week number, ascending.

        Missing or non-numeric weeks count as 0. Equal weeks keep their
        load order.

        Returns:
            A new EntryCollection with sorted entries.
        """
        return EntryCollection(sorted(self._entries, key=lambda e: e.week_number))

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"EntryCollection({len(self._entries)} entries)"
