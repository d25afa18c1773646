"""Chronicle - the append-only narrative log shown to the player."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from hexcolony.types import Severity


@dataclass(frozen=True)
class ChronicleEntry:
    day: int
    message: str
    severity: Severity = Severity.INFO


class Chronicle:
    def __init__(self) -> None:
        self._entries: list[ChronicleEntry] = []

    def add(self, day: int, message: str, severity: Severity | str = Severity.INFO) -> ChronicleEntry:
        entry = ChronicleEntry(day=day, message=message, severity=Severity(severity))
        self._entries.append(entry)
        return entry

    def query(self, severity: Severity | str | None = None, after: int | None = None,
              before: int | None = None) -> list[ChronicleEntry]:
        result = list(self._entries)
        if severity is not None:
            sev = Severity(severity)
            result = [e for e in result if e.severity is sev]
        if after is not None:
            result = [e for e in result if e.day > after]
        if before is not None:
            result = [e for e in result if e.day < before]
        return result

    def last(self, severity: Severity | str | None = None) -> ChronicleEntry | None:
        for e in reversed(self._entries):
            if severity is None or e.severity is Severity(severity):
                return e
        return None

    def __iter__(self) -> Iterator[ChronicleEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
