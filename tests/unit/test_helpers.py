"""Tests for helper utilities."""

from datetime import date, datetime

import pytest

from trip_planner.utils.helpers import (
    generate_id,
    parse_iso_date,
    strip_data_url,
    to_data_url,
    truncate_text,
)


def test_generate_id_prefix():
    assert generate_id("day").startswith("day-")
    assert generate_id() != generate_id()


def test_parse_iso_date():
    assert parse_iso_date(" 2025-04-01 ") == date(2025, 4, 1)
    assert parse_iso_date(datetime(2025, 4, 1, 23, 30)) == date(2025, 4, 1)
    with pytest.raises(ValueError):
        parse_iso_date("04/01/2025")


def test_truncate_text():
    assert truncate_text("abcdef", 3) == "abc..."
    assert truncate_text("abc", 3) == "abc"


def test_data_urls():
    assert to_data_url("AAAA") == "data:image/png;base64,AAAA"
    assert strip_data_url("data:image/jpeg;base64,BBBB") == "BBBB"
    assert strip_data_url("CCCC") == "CCCC"
