"""Unit tests for the OperationResult types."""

import pytest

from stockroom.application.result import ErrorKind, Failure, Success, UnwrapError


class TestSuccess:

    def test_carries_value(self):
        result = Success([1, 2])
        assert result.ok is True
        assert result.unwrap() == [1, 2]

    def test_has_no_message(self):
        assert not hasattr(Success(1), "message")


class TestFailure:

    def test_carries_message(self):
        result = Failure("Article not found.", ErrorKind.NOT_FOUND)
        assert result.ok is False
        assert result.message == "Article not found."
        assert str(result) == "Article not found."
        assert result.retryable is False

    def test_defaults_to_internal(self):
        assert Failure("oops").kind == ErrorKind.INTERNAL

    def test_has_no_value(self):
        assert not hasattr(Failure("x"), "value")

    def test_unwrap_raises(self):
        with pytest.raises(UnwrapError, match="not_found: Article not found."):
            Failure("Article not found.", ErrorKind.NOT_FOUND).unwrap()

    def test_is_immutable(self):
        result = Failure("x")
        with pytest.raises(AttributeError):
            result.message = "y"
