"""Tabular results returned by the graph database."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GraphRecord:
    """One result row as parallel column-name / column-value sequences."""

    keys: tuple[str, ...] = ()
    values: tuple[Any, ...] = ()

    @classmethod
    def from_mapping(cls, row: dict[str, Any]) -> "GraphRecord":
        return cls(keys=tuple(row.keys()), values=tuple(row.values()))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a column value by name."""
        for name, value in zip(self.keys, self.values, strict=False):
            if name == key:
                return value
        return default

    def to_line(self) -> str:
        """Flatten the row into ``key: value, key: value``.

        Columns whose value is None are left out.
        """
        if not self.keys or not self.values:
            return ""
        parts = [f"{key}: {value}" for key, value in zip(self.keys, self.values, strict=False) if value is not None]
        return ", ".join(parts)


@dataclass(frozen=True)
class QueryResult:
    """Ordered rows of a successful query execution."""

    records: tuple[GraphRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, rows: Sequence[dict[str, Any]]) -> "QueryResult":
        return cls(records=tuple(GraphRecord.from_mapping(row) for row in rows))

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
