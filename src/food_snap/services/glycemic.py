"""Glycemic index lookup table."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from food_snap.domain.nutrition import GlycemicMatch

_logger = logging.getLogger(__name__)


@dataclass
class GlycemicIndexTable:
    """Food name to glycemic index table, kept in source order."""

    entries: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path | None) -> "GlycemicIndexTable":
        """Load a table from a JSON object file; empty when no path is set."""
        if not path:
            return cls()
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        table = cls.from_mapping(raw)
        _logger.info("Loaded glycemic index table: path=%s size=%s", path, len(table))
        return table

    @classmethod
    def from_mapping(cls, raw: dict[str, object]) -> "GlycemicIndexTable":
        """Build a table from a mapping, skipping non-numeric values."""
        entries: dict[str, float] = {}
        for name, value in raw.items():
            if isinstance(value, bool) or not isinstance(value, int | float):
                _logger.warning("Skipping glycemic index for %s: %r", name, value)
                continue
            entries[name] = float(value)
        return cls(entries=entries)

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, query: str) -> GlycemicMatch | None:
        """Return the first entry whose name matches the query.

        A name matches when it equals the query, contains it, or is contained
        in it, compared case-insensitively.
        """
        query_lower = query.strip().lower()
        if not query_lower:
            return None
        for name, glycemic_index in self.entries.items():
            name_lower = name.lower()
            if (
                name_lower == query_lower
                or query_lower in name_lower
                or name_lower in query_lower
            ):
                return GlycemicMatch(name=name, glycemic_index=glycemic_index)
        return None
