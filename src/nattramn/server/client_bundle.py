"""The reserved ``/nattramn-client.js`` route.

Two strategies, selected by ``ServerConfig.client_bundle``:

- ``redirect``: ``302`` to the versioned CDN bundle, with an ETag derived
  from the version string.
- ``inline``: the bundle bytes are fetched once (over HTTP with httpx, or
  from disk when the source has no URL scheme), memoised, and served like
  any other response: negotiated compression, ETag over the final bytes.
"""

import logging
from urllib.parse import urlsplit

import anyio
import httpx

from nattramn.config import BundleMode, ServerConfig
from nattramn.errors import IOFailure
from nattramn.http.request import Request
from nattramn.http.response import Response, redirect
from nattramn.server.finalizer import compute_etag, finalize
from nattramn.server.negotiation import choose_compression

logger = logging.getLogger("nattramn.client")

CLIENT_BUNDLE_PATH = "/nattramn-client.js"
BUNDLE_CACHE_CONTROL = "public, max-age=3600"


class ClientBundle:
    """Serves the client-side router bundle.

    ``transport`` is forwarded to ``httpx.AsyncClient`` (tests pass an
    ``httpx.MockTransport``).
    """

    __slots__ = ("_config", "_source", "_transport")

    def __init__(
        self,
        config: ServerConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._source: bytes | None = None

    @property
    def mode(self) -> BundleMode:
        return self._config.client_bundle

    @property
    def cdn_url(self) -> str:
        return self._config.client_cdn_url.format(version=self._config.client_version)

    @property
    def loaded(self) -> bool:
        return self._source is not None

    async def load(self) -> bytes:
        """Fetch the bundle source once; later calls return the cached bytes."""
        if self._source is None:
            self._source = await self._fetch(self._config.client_bundle_url)
            logger.info("Loaded client bundle from %s (%d bytes)", self._config.client_bundle_url, len(self._source))
        return self._source

    async def _fetch(self, source: str) -> bytes:
        if urlsplit(source).scheme in ("http", "https"):
            try:
                async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
                    response = await client.get(source)
                    response.raise_for_status()
                    return response.content
            except httpx.HTTPError as exc:
                raise IOFailure(CLIENT_BUNDLE_PATH, f"Could not fetch client bundle: {exc}") from exc
        try:
            return await anyio.Path(source).read_bytes()
        except OSError as exc:
            raise IOFailure(CLIENT_BUNDLE_PATH, f"Could not read client bundle: {exc}") from exc

    async def respond(self, request: Request) -> Response:
        if self.mode is BundleMode.REDIRECT:
            etag = compute_etag(self._config.client_version.encode("utf-8"))
            return redirect(self.cdn_url).with_header("ETag", etag)

        source = await self.load()
        response = Response(
            body=source,
            headers=(
                ("Content-Type", "application/javascript"),
                ("Cache-Control", BUNDLE_CACHE_CONTROL),
            ),
        )
        compression = choose_compression(request, self._config.compression)
        return finalize(response, compression, path=CLIENT_BUNDLE_PATH)
