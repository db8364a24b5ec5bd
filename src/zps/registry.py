"""Registry of defunct processes found during a scan."""

from collections.abc import Iterator

from zps.models import ProcessRecord


class DefunctRegistry:
    """
    Append-only, index-addressable collection of zombie records.

    Entries keep their discovery order and their 0-based index for the whole
    run; there is no removal.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._records: list[ProcessRecord] = []

    def add(self, record: ProcessRecord) -> int:
        """Append a record and return its index."""
        self._records.append(record)
        return len(self._records) - 1

    def at(self, index: int) -> ProcessRecord | None:
        """Return the record at `index`, or None if out of bounds."""
        if 0 <= index < len(self._records):
            return self._records[index]
        return None

    def size(self) -> int:
        """Get the number of registered records."""
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self._records)
