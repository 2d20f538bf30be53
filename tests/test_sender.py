"""Tests for Response helpers and ASGI sending."""

from pathlib import Path
from typing import Any

from nattramn.http.response import FileResponse, Response, not_found, redirect
from nattramn.server.sender import CHUNK_SIZE, send_any, send_response


class Collector:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def start(self) -> dict[str, Any]:
        return self.messages[0]

    @property
    def headers(self) -> dict[bytes, bytes]:
        return dict(self.start["headers"])

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.messages[1:])


class TestResponse:
    def test_with_header_replaces_case_insensitively(self) -> None:
        response = Response().with_header("Content-Type", "text/plain").with_header("content-type", "text/html")
        assert response.headers == (("content-type", "text/html"),)

    def test_with_headers(self) -> None:
        response = Response().with_headers({"A": "1", "B": "2"})
        assert response.header("a") == "1"
        assert response.header("b") == "2"

    def test_immutable_transformations(self) -> None:
        original = Response(body=b"x")
        changed = original.with_status(201).with_body(b"y")
        assert original.status == 200
        assert original.body == b"x"
        assert (changed.status, changed.body) == (201, b"y")

    def test_with_vary(self) -> None:
        response = Response().with_vary("X-Partial-Content").with_vary("Accept-Encoding")
        assert response.header("Vary") == "X-Partial-Content, Accept-Encoding"

    def test_with_vary_skips_listed_name(self) -> None:
        response = Response(headers=(("Vary", "accept-encoding"),))
        assert response.with_vary("Accept-Encoding") is response

    def test_not_found(self) -> None:
        response = not_found()
        assert response.status == 404
        assert response.text == "Not Found"

    def test_redirect(self) -> None:
        response = redirect("https://cdn.example/x.js")
        assert response.status == 302
        assert response.header("Location") == "https://cdn.example/x.js"


class TestSendResponse:
    async def test_adds_content_length(self) -> None:
        send = Collector()
        await send_response(Response(body=b"hello", headers=(("Content-Type", "text/plain"),)), send)

        assert send.start["status"] == 200
        assert send.headers[b"content-type"] == b"text/plain"
        assert send.headers[b"content-length"] == b"5"
        assert send.body == b"hello"

    async def test_keeps_existing_content_length(self) -> None:
        send = Collector()
        await send_response(Response(body=b"hello", headers=(("Content-Length", "5"),)), send)
        assert [name for name, _ in send.start["headers"]].count(b"content-length") == 1

    async def test_head_has_no_body(self) -> None:
        send = Collector()
        await send_response(Response(body=b"hello"), send, method="HEAD")
        assert send.headers[b"content-length"] == b"5"
        assert send.body == b""

    async def test_redirect_has_no_body(self) -> None:
        send = Collector()
        await send_response(Response(status=304, body=b"stale"), send)
        assert send.body == b""


class TestSendFile:
    async def test_streams_in_chunks(self, tmp_path: Path) -> None:
        path = tmp_path / "big.bin"
        data = b"x" * (CHUNK_SIZE * 2 + 10)
        path.write_bytes(data)

        send = Collector()
        response = FileResponse(path=path, size=len(data), headers=(("Content-Length", str(len(data))),))
        await send_any(response, send)

        assert send.body == data
        assert len(send.messages) == 5
        assert send.messages[-1]["more_body"] is False

    async def test_head(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_bytes(b"abc")

        send = Collector()
        await send_any(FileResponse(path=path, size=3, headers=(("Content-Length", "3"),)), send, method="HEAD")
        assert send.body == b""
        assert send.headers[b"content-length"] == b"3"

    async def test_in_memory_dispatch(self) -> None:
        send = Collector()
        await send_any(Response(body=b"ok"), send)
        assert send.body == b"ok"
