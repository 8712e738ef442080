"""
Statement and Result Types

Statement is what callers send; QueryResult is what comes back, one per
statement and in the same position. parse_query_result() turns one element
of a server response array into a QueryResult.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from ..errors import StatementExecutionError, StatementParseError

Value = Union[None, int, float, str, bytes]


def value_to_wire(value: Any) -> Any:
    """Convert a Python value to its JSON wire form."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {"base64": base64.b64encode(bytes(value)).decode("ascii")}
    raise TypeError(f"Unsupported SQL value type: {type(value).__name__}")


def value_from_wire(raw: Any) -> Value:
    """Convert a JSON wire value back to a Python value."""
    if raw is None or isinstance(raw, (str, int, float)):
        return raw
    if isinstance(raw, dict) and set(raw) == {"base64"}:
        try:
            return base64.b64decode(raw["base64"], validate=True)
        except (binascii.Error, TypeError) as e:
            raise ValueError(f"invalid base64 blob: {e}") from e
    raise ValueError(f"unsupported cell value: {raw!r}")


@dataclass(frozen=True)
class Statement:
    """One SQL command with optional positional arguments."""

    sql: str
    args: tuple[Value, ...] = ()

    @classmethod
    def of(cls, value: StatementLike) -> Statement:
        """Convert a raw SQL string, an (sql, args) pair or a Statement."""
        if isinstance(value, Statement):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str):
            sql, args = value
            return cls(sql, tuple(args))
        raise TypeError(f"Cannot convert {type(value).__name__} to Statement")

    def to_wire(self) -> dict[str, Any]:
        return {"q": self.sql, "params": [value_to_wire(arg) for arg in self.args]}

    def __str__(self) -> str:
        return self.sql


StatementLike = Union[Statement, str, tuple[str, Sequence[Any]]]


class Row(Sequence):
    """A result row, indexable by position or column name."""

    __slots__ = ("_columns", "_values")

    def __init__(self, columns: Sequence[str], values: Sequence[Value]) -> None:
        self._columns = tuple(columns)
        self._values = tuple(values)

    def __getitem__(self, key):  # type: ignore[override]
        if isinstance(key, str):
            try:
                return self._values[self._columns.index(key)]
            except ValueError:
                raise KeyError(key) from None
        return self._values[key]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._columns == other._columns and self._values == other._values
        if isinstance(other, (tuple, list)):
            return self._values == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._columns, self._values))

    def __repr__(self) -> str:
        return f"Row({self.as_dict()!r})"

    def as_dict(self) -> dict[str, Value]:
        return dict(zip(self._columns, self._values))


@dataclass
class QueryResult:
    """Outcome of one statement: a result set or a statement-level error."""

    columns: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)
    rows_affected: int = 0
    last_insert_rowid: int | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> QueryResult:
        if self.error is not None:
            raise StatementExecutionError(self.error)
        return self


def parse_query_result(raw: Any, index: int) -> QueryResult:
    """
    Parse one element of a response array.

    Accepted shapes:
        {"results": {"columns": [...], "rows": [[...], ...],
                     "rows_affected": n, "last_insert_rowid": n}}
        {"error": {"message": "..."}} or {"error": "..."}

    Raises:
        StatementParseError: with the element's index if the shape is wrong.
    """
    if not isinstance(raw, dict):
        raise StatementParseError(index, f"expected an object, got {type(raw).__name__}")

    if "error" in raw:
        err = raw["error"]
        if isinstance(err, dict):
            err = err.get("message")
        if not isinstance(err, str):
            raise StatementParseError(index, "error entry has no message")
        return QueryResult(error=err)

    results = raw.get("results")
    if not isinstance(results, dict):
        raise StatementParseError(index, "missing 'results' or 'error' field")

    columns = results.get("columns", [])
    raw_rows = results.get("rows", [])
    if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
        raise StatementParseError(index, "'columns' must be a list of strings")
    if not isinstance(raw_rows, list):
        raise StatementParseError(index, "'rows' must be a list")

    rows: list[Row] = []
    for row_idx, raw_row in enumerate(raw_rows):
        if not isinstance(raw_row, list) or len(raw_row) != len(columns):
            raise StatementParseError(
                index, f"row {row_idx} does not match {len(columns)} columns"
            )
        try:
            rows.append(Row(columns, [value_from_wire(cell) for cell in raw_row]))
        except ValueError as e:
            raise StatementParseError(index, f"row {row_idx}: {e}") from e

    rows_affected = results.get("rows_affected", 0)
    last_insert_rowid = results.get("last_insert_rowid")
    if not isinstance(rows_affected, int) or (
        last_insert_rowid is not None and not isinstance(last_insert_rowid, int)
    ):
        raise StatementParseError(index, "row counters must be integers")

    return QueryResult(
        columns=list(columns),
        rows=rows,
        rows_affected=rows_affected,
        last_insert_rowid=last_insert_rowid,
    )
