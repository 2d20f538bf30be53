"""Tests for the error hierarchy."""

import pytest

from nattramn.errors import (
    CompressionFailure,
    ConfigurationError,
    FileNotFound,
    HandlerProducedNoData,
    IOFailure,
    NattramnError,
    RequestError,
    RouteNotFound,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [RouteNotFound, FileNotFound, HandlerProducedNoData, CompressionFailure, IOFailure]
    )
    def test_request_errors(self, cls: type[RequestError]) -> None:
        assert issubclass(cls, RequestError)
        assert issubclass(cls, NattramnError)

    def test_configuration_error_is_not_request_error(self) -> None:
        assert not issubclass(ConfigurationError, RequestError)


class TestMessages:
    def test_default_message_with_path(self) -> None:
        assert str(RouteNotFound("/missing")) == "Could not find route: '/missing'"

    def test_handler_message(self) -> None:
        exc = HandlerProducedNoData("/")
        assert exc.detail == "Could not create PageData from handler"
        assert exc.path == "/"

    def test_custom_detail(self) -> None:
        assert str(FileNotFound("/a.css", "Not a regular file")) == "Not a regular file: '/a.css'"

    def test_without_path(self) -> None:
        assert str(IOFailure()) == "I/O failed"
