"""Column descriptors for the data browser."""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, Optional, Sequence, TypeVar, Union

RowT = TypeVar("RowT")

HeaderRenderer = Union[str, Callable[[], Any]]


@dataclass(frozen=True)
class ColumnDef(Generic[RowT]):
    """Describes how one column projects a row into a rendered cell.

    Args:
        id: Identifier, unique within a table.
        cell: Renderer taking a row and returning a renderable value.
        header: Header text, or a zero-argument renderer. Defaults to ``id``.
        size: Ideal width in cells.
        min_size: Minimum width in cells.
        max_size: Maximum width in cells.
    """

    id: str
    cell: Callable[[RowT], Any]
    header: Optional[HeaderRenderer] = None
    size: Optional[int] = None
    min_size: Optional[int] = None
    max_size: Optional[int] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Column id must be a non-empty string")
        if not callable(self.cell):
            raise ValueError(f"Column '{self.id}' cell renderer must be callable")
        for name in ("size", "min_size", "max_size"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"Column '{self.id}' {name} must be positive, got {value}")
        if self.min_size is not None and self.max_size is not None and self.min_size > self.max_size:
            raise ValueError(f"Column '{self.id}' min_size {self.min_size} exceeds max_size {self.max_size}")

    def render_header(self) -> Any:
        if self.header is None:
            return self.id
        if callable(self.header):
            return self.header()
        return self.header

    def render_cell(self, row: RowT) -> Any:
        return self.cell(row)

    @property
    def width(self) -> Optional[int]:
        """Effective width: ``size`` bounded by ``min_size``/``max_size``."""
        width = self.size if self.size is not None else self.min_size
        if width is None:
            return None
        if self.min_size is not None:
            width = max(width, self.min_size)
        if self.max_size is not None:
            width = min(width, self.max_size)
        return width


@dataclass(frozen=True)
class ColumnSet(Generic[RowT]):
    """Ordered, validated collection of column descriptors."""

    columns: tuple = field(default_factory=tuple)

    def __post_init__(self):
        columns = tuple(self.columns)
        if not columns:
            raise ValueError("A table needs at least one column")
        seen = set()
        for column in columns:
            if not isinstance(column, ColumnDef):
                raise ValueError(f"Expected ColumnDef, got {type(column).__name__}")
            if column.id in seen:
                raise ValueError(f"Duplicate column id '{column.id}'")
            seen.add(column.id)
        object.__setattr__(self, "columns", columns)

    @classmethod
    def of(cls, columns: Sequence[ColumnDef[RowT]]) -> "ColumnSet[RowT]":
        if isinstance(columns, ColumnSet):
            return columns
        return cls(tuple(columns))

    def __iter__(self) -> Iterator[ColumnDef[RowT]]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def ids(self) -> list[str]:
        return [column.id for column in self.columns]

    def project(self, row: RowT) -> list[Any]:
        """Render every cell of ``row`` in column order."""
        return [column.render_cell(row) for column in self.columns]
