"""Testes do parsing de erros do Messaging API."""

from __future__ import annotations

import pytest

from api.connectors.line.line_errors import is_permanent_error, parse_line_error


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [(400, True), (401, True), (403, True), (404, True), (429, False), (500, False), (503, False)],
)
def test_is_permanent_error(status_code: int, expected: bool) -> None:
    assert is_permanent_error(status_code) is expected


def test_parse_line_error_with_message_and_details() -> None:
    error = parse_line_error(
        400,
        {
            "message": "The request body has 1 error(s)",
            "details": [{"message": "May not be empty", "property": "messages[0].text"}],
        },
    )
    assert error.message == "The request body has 1 error(s)"
    assert error.details == ("May not be empty",)
    assert error.is_permanent is True


def test_parse_line_error_falls_back_to_details() -> None:
    error = parse_line_error(400, {"details": [{"message": "a"}, {"message": "b"}, "x"]})
    assert error.message == "a, b"


@pytest.mark.parametrize("data", [None, "boom", [], {}])
def test_parse_line_error_unknown(data: object) -> None:
    error = parse_line_error(500, data)
    assert error.message == "Unknown error"
    assert error.is_permanent is False
