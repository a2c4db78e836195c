"""Generic searchable table driven by a per-entity column schema."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


def _plain(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    render: Callable[[Any], str] | None = None
    badge: Callable[[Any], Enum] | None = None

    def text(self, record) -> str:
        if self.render is not None:
            return self.render(record)
        return _plain(getattr(record, self.key))


@dataclass(frozen=True)
class TableSchema:
    title: str
    columns: tuple[Column, ...]
    search_placeholder: str = "Cari..."
    empty_message: str = "Belum ada data"

    @property
    def labels(self) -> list[str]:
        return [column.label for column in self.columns]


@dataclass
class Row:
    key: str
    cells: dict[str, str] = field(default_factory=dict)
    badges: dict[str, str] = field(default_factory=dict)
    record: Any = None


class DataTable:
    def __init__(self, schema: TableSchema):
        self.schema = schema

    def render(self, record) -> Row:
        return Row(
            key=record.key,
            cells={column.key: column.text(record) for column in self.schema.columns},
            badges={column.key: column.badge(record).value for column in self.schema.columns if column.badge},
            record=record,
        )

    def rows(self, records, query: str = "") -> list[Row]:
        rendered = [self.render(record) for record in records]
        needle = (query or "").strip().lower()
        if not needle:
            return rendered
        return [row for row in rendered if any(needle in cell.lower() for cell in row.cells.values())]
