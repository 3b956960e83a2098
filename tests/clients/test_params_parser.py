"""Embedding client: a request-params parser built on Handler.

Every validation step aborts eagerly; parse() is the only boundary.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pytest

from failfast import AssertError, Handler

from tests.helpers.errors import ParseError

pytestmark = pytest.mark.unit


@dataclass
class Params:
    limit: int = 0
    offset: int = 0
    filter: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Parser(Handler):

    def parse(self, raw: bytes):
        with self.catch() as slot:
            data = self._decode(raw)
            params = Params(
                limit=data.get("limit", 0),
                offset=data.get("offset", 0),
                filter=data.get("filter", {}),
            )
            self.require(params.limit > 0, ParseError("limit must be greater than 0"))
            self.requiref(
                params.offset >= 0,
                "offset must be greater than or equal to 0. got: %d", params.offset,
            )
            params.created_at = self._parse_date(params.filter, "created_at")
            params.updated_at = self._parse_date(params.filter, "updated_at")
            return params, None
        return None, slot.error

    def _decode(self, raw):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            self.must(e)
        self.require(isinstance(data, dict), ParseError("params must be an object"))
        return data

    def _parse_date(self, filters: dict, key: str) -> datetime:
        self.require(key in filters, ParseError(f"{key} is a required field"))
        value = filters[key]
        self.require(isinstance(value, str), ParseError(f"{key} must be type string"))
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            self.must(e)


VALID = {
    "limit": 100,
    "offset": 0,
    "filter": {
        "created_at": "2024-03-05T00:00:00+00:00",
        "updated_at": "2024-03-06T12:30:00+00:00",
    },
}


def test_valid_params():
    """Valid params parse without error."""
    params, err = Parser().parse(json.dumps(VALID).encode())
    assert err is None
    assert params.limit == 100
    assert params.created_at < params.updated_at


def test_negative_limit_returns_parse_error():
    """A bad limit returns the explicit ParseError."""
    _, err = Parser().parse(b'{ "limit": -1 }')
    assert type(err) is ParseError
    assert err.msg == "limit must be greater than 0"


def test_negative_offset_returns_assert_error():
    """A bad offset returns an AssertError with the rendered message."""
    _, err = Parser().parse(b'{ "limit": 100, "offset": -1 }')
    assert type(err) is AssertError
    assert str(err) == "offset must be greater than or equal to 0. got: -1"


def test_custom_assert_factory():
    """The parser's factory turns assertion failures into ParseError."""
    p = Parser()
    p.assert_factory = lambda msg: ParseError(msg)
    _, err = p.parse(b'{ "limit": 100, "offset": -1 }')
    assert type(err) is ParseError


def test_invalid_json_returns_decode_error():
    """Malformed JSON returns the decode error."""
    _, err = Parser().parse(b"{ limit: ")
    assert isinstance(err, json.JSONDecodeError)


def test_missing_nested_field_aborts_from_helper():
    """A helper's abort reaches the parse() boundary."""
    raw = dict(VALID, filter={"created_at": VALID["filter"]["created_at"]})
    _, err = Parser().parse(json.dumps(raw).encode())
    assert err.msg == "updated_at is a required field"


def test_wrong_field_type():
    """A non-string date field returns a ParseError."""
    raw = dict(VALID, filter={"created_at": 12})
    _, err = Parser().parse(json.dumps(raw).encode())
    assert err.msg == "created_at must be type string"


def test_bad_date_returns_value_error():
    """An unparseable date returns the ValueError."""
    raw = dict(VALID, filter={"created_at": "yesterday", "updated_at": "today"})
    _, err = Parser().parse(json.dumps(raw).encode())
    assert isinstance(err, ValueError)


def test_parser_is_reusable_after_failure():
    """A parser works again after a failed parse."""
    p = Parser()
    _, err = p.parse(b'{ "limit": 0 }')
    assert err is not None
    params, err = p.parse(json.dumps(VALID).encode())
    assert err is None
    assert params.offset == 0
