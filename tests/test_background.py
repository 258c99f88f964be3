"""Tests for background parsing."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from ledgerport.domain import errors
from ledgerport.parsing import parse
from ledgerport.parsing.background import parse_in_background

CONTENT = b"<rows><row><cell>Date</cell></row><row><cell>2024-01-05</cell></row></rows>"


def test_runs_on_executor():
    """With an executor the parse runs there and gives the same grid."""
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = parse_in_background(CONTENT, "xml", executor=executor)
        assert future.result(timeout=10) == parse(CONTENT, "xml")


def test_without_executor_is_settled():
    """Without an executor the returned future is already done."""
    future = parse_in_background(CONTENT, "xml")
    assert future.done()
    assert future.result() == [["Date"], ["2024-01-05"]]


def test_shut_down_executor_falls_back():
    """An executor refusing work triggers an in-process parse."""
    executor = ThreadPoolExecutor(max_workers=1)
    executor.shutdown()

    future = parse_in_background(CONTENT, "xml", executor=executor)
    assert future.done()
    assert future.result() == [["Date"], ["2024-01-05"]]


def test_errors_travel_in_future():
    """Parse failures are raised by the future, not by the call."""
    future = parse_in_background(b"<rows>", "xml")
    assert isinstance(future.exception(), errors.MalformedMarkupError)


def test_unsupported_extension_fails_immediately():
    """Rejected extensions never reach the executor."""
    with ThreadPoolExecutor(max_workers=1) as executor:
        with pytest.raises(errors.UnsupportedFormatError):
            parse_in_background(CONTENT, "csv", executor=executor)
