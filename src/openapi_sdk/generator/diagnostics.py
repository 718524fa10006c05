"""Non-fatal findings collected while translating a document.

The type mapper never raises on a schema it cannot translate. It emits
``unknown`` and records a :class:`Diagnostic` on the run's
:class:`Diagnostics` collector, which is returned to the caller together
with the result. The CLI prints the collected diagnostics as warnings;
tests assert on them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass(frozen=True)
class Diagnostic:
    """A single finding.

    Attributes:
        message: Human-readable description.
        location: JSON-pointer-like path to the offending node, e.g.
            ``#/paths/~1pets/get/responses/200/content/application~1json/schema``.
        schema: The offending value, for display.
    """

    message: str
    location: str = "#"
    schema: Any = None

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class Diagnostics:
    """Append-only collector shared by every step of one generation run."""

    entries: list[Diagnostic] = field(default_factory=list)

    def add(self, message: str, location: str = "#", schema: Any = None) -> Diagnostic:
        """Record a finding and return it."""
        entry = Diagnostic(message=message, location=location, schema=schema)
        self.entries.append(entry)
        return entry

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


def pointer_segment(token: str) -> str:
    """Escape *token* for use in a JSON pointer (RFC 6901)."""
    return token.replace("~", "~0").replace("/", "~1")
