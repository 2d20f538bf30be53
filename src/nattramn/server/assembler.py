"""Document assembly around the router marker.

The page template is one opaque string with a single recognized marker
pair, ``<nattramn-router>`` / ``</nattramn-router>``.  A full document is
the template text before the opening marker (with the page's head markup
injected after ``<head>``), the page body wrapped in the marker pair, and
the template text after the closing marker.  A partial document is the
page body alone; the page title then travels in the ``X-Header-Updates``
response header so a client-side router can update ``document.title``.

Segments are joined with ``"\\n"``.  Output is a pure function of
``(page_data, template, partial)``.
"""

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from nattramn.http.response import Response
from nattramn.pages import coerce_page_data

logger = logging.getLogger("nattramn.server")

ROUTER_OPEN = "<nattramn-router>"
ROUTER_CLOSE = "</nattramn-router>"
HEAD_TAG = "<head>"

HEADER_UPDATES = "X-Header-Updates"
PARTIAL_VARY = "X-Partial-Content"
DEFAULT_CACHE_CONTROL = "public, max-age=3600"
HTML_CONTENT_TYPE = "text/html"

_TITLE_RE = re.compile(r"<title>(.+)</title>", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class TemplateRegions:
    """The template text around the router marker, located in a single scan.

    ``pre`` is everything before the first opening marker and ``post``
    everything after the first closing marker (up to a second closing
    marker, if the template has one).  A missing marker makes the
    corresponding region the whole template.
    """

    pre: str
    post: str
    opening_count: int
    closing_count: int

    @property
    def has_markers(self) -> bool:
        return self.opening_count > 0 and self.closing_count > 0

    @property
    def has_duplicate_markers(self) -> bool:
        return self.opening_count > 1 or self.closing_count > 1

    @classmethod
    def scan(cls, template: str) -> "TemplateRegions":
        open_at = template.find(ROUTER_OPEN)
        close_at = template.find(ROUTER_CLOSE)

        pre = template if open_at == -1 else template[:open_at]

        if close_at == -1:
            post = template
        else:
            post_start = close_at + len(ROUTER_CLOSE)
            next_close = template.find(ROUTER_CLOSE, post_start)
            post = template[post_start:] if next_close == -1 else template[post_start:next_close]

        return cls(
            pre=pre,
            post=post,
            opening_count=template.count(ROUTER_OPEN),
            closing_count=template.count(ROUTER_CLOSE),
        )


def extract_title(head: str) -> str | None:
    """Text of the first ``<title>…</title>`` in *head* (case-insensitive)."""
    match = _TITLE_RE.search(head)
    return match.group(1) if match else None


def encode_header_updates(title: str) -> str:
    """Encode ``{"title": title}`` for the ``X-Header-Updates`` header.

    Wire format: standard base64 of the UTF-8 bytes of compact JSON.
    """
    payload = json.dumps({"title": title}, ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_header_updates(value: str) -> dict[str, Any]:
    """Inverse of ``encode_header_updates``."""
    return json.loads(base64.b64decode(value).decode("utf-8"))


def _inject_head(pre: str, head: str) -> list[str]:
    before, _, after = pre.partition(HEAD_TAG)
    return [segment for segment in (before, HEAD_TAG + head, after) if segment]


def assemble(page_data: Any, template: str, partial: bool, *, path: str = "") -> Response:
    """Build the uncompressed HTML response for one page.

    Both modes carry ``Vary: X-Partial-Content`` so shared caches keep
    fragments and full documents apart.

    Raises ``HandlerProducedNoData`` when *page_data* is empty or carries
    headers that cannot be sent.
    """
    data = coerce_page_data(page_data, path)

    response = Response().with_headers(data.headers)
    if response.header("Cache-Control") is None:
        response = response.with_header("Cache-Control", DEFAULT_CACHE_CONTROL)
    response = response.with_header("Content-Type", HTML_CONTENT_TYPE).with_vary(PARTIAL_VARY)

    segments: list[str] = []

    if partial:
        title = extract_title(data.head) if data.head else None
        if title is not None:
            response = response.with_header(HEADER_UPDATES, encode_header_updates(title))
        segments.append(data.body)
    else:
        regions = TemplateRegions.scan(template)
        if not regions.has_markers:
            logger.debug("Template for %s has no complete <nattramn-router> marker pair.", path)
        elif regions.has_duplicate_markers:
            logger.debug("Template for %s has more than one <nattramn-router> marker; using the first.", path)
        if regions.pre:
            segments.extend(_inject_head(regions.pre, data.head) if data.head else [regions.pre])
        segments.append(f"{ROUTER_OPEN}{data.body}{ROUTER_CLOSE}")
        if regions.post:
            segments.append(regions.post)

    return response.with_body("\n".join(segments).encode("utf-8"))
