"""Tests for nattramn.server.negotiation — partial mode and compression choice."""

import pytest

from nattramn.config import Compression
from nattramn.http.headers import Headers
from nattramn.http.request import Request
from nattramn.server.negotiation import choose_compression, is_partial


def _request(headers: dict[str, str] | None = None, query: bytes = b"") -> Request:
    return Request.from_asgi(
        {
            "path": "/",
            "query_string": query,
            "headers": [(k.encode(), v.encode()) for k, v in (headers or {}).items()],
        }
    )


class TestIsPartial:
    def test_full_by_default(self) -> None:
        assert is_partial(_request()) is False

    def test_header_selects_partial(self) -> None:
        assert is_partial(_request({"x-partial-content": "true"})) is True

    def test_header_is_case_insensitive(self) -> None:
        assert is_partial(_request({"X-Partial-Content": "1"})) is True

    def test_query_selects_partial(self) -> None:
        assert is_partial(_request(query=b"partialContent=true")) is True

    def test_empty_values_select_full(self) -> None:
        assert is_partial(_request({"x-partial-content": ""}, query=b"partialContent=")) is False

    def test_unrelated_query_is_ignored(self) -> None:
        assert is_partial(_request(query=b"partial=true")) is False


class TestChooseCompression:
    @pytest.mark.parametrize(
        ("configured", "accept", "expected"),
        [
            (Compression.BROTLI, "gzip, deflate, br", Compression.BROTLI),
            (Compression.GZIP, "gzip, deflate, br", Compression.GZIP),
            (Compression.BROTLI, "gzip, deflate", Compression.NONE),
            (Compression.GZIP, "br", Compression.NONE),
            (Compression.NONE, "gzip, br", Compression.NONE),
            (Compression.BROTLI, "", Compression.NONE),
        ],
    )
    def test_choice(self, configured: Compression, accept: str, expected: Compression) -> None:
        request = _request({"accept-encoding": accept} if accept else None)
        assert choose_compression(request, configured) is expected

    def test_missing_header_means_no_compression(self) -> None:
        request = Request(method="GET", path="/", headers=Headers())
        assert choose_compression(request, Compression.GZIP) is Compression.NONE
