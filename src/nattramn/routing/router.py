"""Positional route matching.

A pattern matches a path when both split on ``/`` into the same number
of segments and every literal segment is equal.  Parameter segments
(``:name``) match any value.  There is no prefix, suffix, or wildcard
matching; the first registered route that matches wins.
"""

from collections.abc import Sequence

from nattramn.errors import RouteNotFound
from nattramn.routing.route import PathSegment, Route, RouteMatch, parse_pattern


def _matches(parts: Sequence[str], segments: Sequence[PathSegment]) -> bool:
    if len(parts) != len(segments):
        return False
    return all(seg.is_param or seg.value == part for seg, part in zip(segments, parts, strict=True))


def _bind(parts: Sequence[str], segments: Sequence[PathSegment]) -> dict[str, str]:
    return {
        seg.param_name: part
        for seg, part in zip(segments, parts, strict=False)
        if seg.is_param and seg.param_name
    }


def match_path(path: str, pattern: str) -> bool:
    """True if *path* satisfies *pattern*.

    Examples::

        match_path("/posts/hello", "/posts/:slug")  -> True
        match_path("/posts/hello/", "/posts/:slug") -> False  (extra empty segment)
        match_path("/about", "/")                    -> False
    """
    return _matches(path.split("/"), parse_pattern(pattern))


def extract_params(path: str, pattern: str) -> dict[str, str]:
    """Bind each ``:name`` segment of *pattern* to the aligned path segment.

    Literal segments are ignored.  Call after ``match_path`` succeeds;
    on a mismatched path the result is positional and meaningless.
    """
    return _bind(path.split("/"), parse_pattern(pattern))


class Router:
    """Ordered page routes, matched in registration order.

    Usage::

        router = Router()
        router.add(Route("/", template, home))
        router.add(Route("/posts/:slug", template, post))
        router.compile()
        match = router.find("/posts/hello")   # match.params == {"slug": "hello"}
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a route.  Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)

    def compile(self) -> None:
        """Freeze the route table."""
        self._compiled = True

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def find(self, path: str) -> RouteMatch:
        """Return the first route matching *path*.

        Raises ``RouteNotFound`` when nothing matches.
        """
        parts = path.split("/")
        for route in self._routes:
            if _matches(parts, route.segments):
                return RouteMatch(route=route, params=_bind(parts, route.segments))
        raise RouteNotFound(path)
