"""Tests for nattramn.routing — positional ``:name`` matching."""

import pytest

from nattramn.errors import RouteNotFound
from nattramn.routing.route import PathSegment, Route, parse_pattern
from nattramn.routing.router import Router, extract_params, match_path


async def _handler(request, params):
    return {"body": "ok"}


def _route(pattern: str) -> Route:
    return Route(pattern=pattern, template="", handler=_handler)


class TestParsePattern:
    def test_root(self) -> None:
        assert parse_pattern("/") == (PathSegment(""), PathSegment(""))

    def test_literal_and_param(self) -> None:
        segments = parse_pattern("/posts/:slug")
        assert segments[1] == PathSegment("posts")
        assert segments[2].is_param is True
        assert segments[2].param_name == "slug"

    def test_trailing_slash_is_a_segment(self) -> None:
        assert len(parse_pattern("/about/")) == 3

    def test_route_param_names(self) -> None:
        assert _route("/u/:user/p/:post").param_names == ("user", "post")


class TestMatchPath:
    @pytest.mark.parametrize(
        ("path", "pattern"),
        [
            ("/", "/"),
            ("/about", "/about"),
            ("/posts/hello", "/posts/:slug"),
            ("/u/alice/p/42", "/u/:user/p/:post"),
            ("/users/", "/users/:id"),
        ],
    )
    def test_matches(self, path: str, pattern: str) -> None:
        assert match_path(path, pattern) is True

    @pytest.mark.parametrize(
        ("path", "pattern"),
        [
            ("/about", "/"),
            ("/", "/about"),
            ("/about/", "/about"),
            ("/posts/hello/extra", "/posts/:slug"),
            ("/posts", "/posts/:slug"),
            ("/blog/hello", "/posts/:slug"),
            ("/About", "/about"),
        ],
    )
    def test_rejects(self, path: str, pattern: str) -> None:
        assert match_path(path, pattern) is False


class TestExtractParams:
    def test_no_params(self) -> None:
        assert extract_params("/about", "/about") == {}

    def test_single_param(self) -> None:
        assert extract_params("/posts/hello", "/posts/:slug") == {"slug": "hello"}

    def test_params_in_positional_order(self) -> None:
        params = extract_params("/u/alice/p/42", "/u/:user/p/:post")
        assert list(params.items()) == [("user", "alice"), ("post", "42")]

    def test_values_are_strings(self) -> None:
        assert extract_params("/n/007", "/n/:id") == {"id": "007"}


class TestRouter:
    def test_first_registered_route_wins(self) -> None:
        r = Router()
        first = _route("/posts/:slug")
        second = _route("/posts/new")
        r.add(first)
        r.add(second)
        r.compile()

        assert r.find("/posts/new").route is first

    def test_find_binds_params(self) -> None:
        r = Router()
        r.add(_route("/"))
        r.add(_route("/posts/:slug"))
        r.compile()

        match = r.find("/posts/hello")
        assert match.route.pattern == "/posts/:slug"
        assert match.params == {"slug": "hello"}

    def test_no_match_raises(self) -> None:
        r = Router()
        r.add(_route("/"))
        r.compile()

        with pytest.raises(RouteNotFound) as exc_info:
            r.find("/does/not/exist")
        assert exc_info.value.path == "/does/not/exist"

    def test_add_after_compile_raises(self) -> None:
        r = Router()
        r.compile()
        with pytest.raises(RuntimeError):
            r.add(_route("/"))

    def test_routes_keep_registration_order(self) -> None:
        r = Router()
        r.add(_route("/b"))
        r.add(_route("/a"))
        assert [route.pattern for route in r.routes] == ["/b", "/a"]
