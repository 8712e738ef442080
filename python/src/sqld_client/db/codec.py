"""
Protocol Codec

Translates an ordered list of statements into the JSON request body sent to
a sqld endpoint, and the endpoint's JSON response array back into ordered
QueryResults.

Request:  {"statements": [{"q": "...", "params": [...]}, ...]}
Response: [<result-or-error>, ...]  (same length and order as the request)
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from ..errors import ResponseCountMismatchError, ResponseShapeError
from .types import QueryResult, Statement, StatementLike, parse_query_result


def encode(statements: Iterable[StatementLike]) -> tuple[str, int]:
    """
    Encode statements into a request body.

    Returns:
        (JSON body, number of statements encoded)
    """
    wire = [Statement.of(stmt).to_wire() for stmt in statements]
    return json.dumps({"statements": wire}), len(wire)


def decode(response: Any, expected_count: int) -> list[QueryResult]:
    """
    Decode a parsed JSON response into one QueryResult per statement.

    Raises:
        ResponseShapeError: response is not an array
        ResponseCountMismatchError: array length differs from expected_count
        StatementParseError: an element could not be parsed (carries its index)
    """
    if not isinstance(response, list):
        raise ResponseShapeError(f"Expected a JSON array of results, got: {response!r:.200}")

    if len(response) != expected_count:
        raise ResponseCountMismatchError(expected_count, len(response))

    return [parse_query_result(raw, idx) for idx, raw in enumerate(response)]


def loads_response(body: str | bytes) -> Any:
    """Parse a raw response body, reporting non-JSON as a shape error."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise ResponseShapeError(f"Response body is not valid JSON: {e}") from e
