"""Route, PathSegment, and RouteMatch frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from nattramn.pages import PageHandler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-delimited piece of a route pattern.

    Literal: ``about``   (is_param=False)
    Param:   ``:slug``   (is_param=True, param_name="slug")
    """

    value: str
    is_param: bool = False
    param_name: str = ""


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Split a route pattern into segments.

    Empty segments are kept, so ``"/"`` is two empty literals and a
    trailing slash is significant::

        "/"             -> (PathSegment(""), PathSegment(""))
        "/posts/:slug"  -> (PathSegment(""), PathSegment("posts"), PathSegment(":slug", True, "slug"))
    """
    segments: list[PathSegment] = []
    for part in pattern.split("/"):
        if ":" in part:
            _, _, name = part.partition(":")
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class Route:
    """A page route: pattern, template, and handler.  Immutable once registered."""

    pattern: str
    template: str
    handler: PageHandler
    segments: tuple[PathSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", parse_pattern(self.pattern))

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.is_param and s.param_name)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    params: Mapping[str, str]
