"""Static asset resolution for requests whose path has a file extension.

Paths already under the static root (``/public/app.css`` with
``serve_static="public"``) resolve as-is; anything else is looked up
inside the static root (``/app.css`` -> ``public/app.css``).

Uncompressed files stream from disk with ``Content-Length`` taken from
``stat``.  When compression is negotiated the file is read fully into
memory first, then compressed and given an ETag over the compressed
bytes.
"""

import logging
from pathlib import Path, PurePosixPath

import anyio

from nattramn.config import Compression, ServerConfig
from nattramn.errors import FileNotFound
from nattramn.http.request import Request
from nattramn.http.response import AnyResponse, FileResponse, Response
from nattramn.server.finalizer import finalize
from nattramn.server.negotiation import choose_compression

logger = logging.getLogger("nattramn.static")

STATIC_CACHE_CONTROL = "public, max-age=3600"

MEDIA_TYPES: dict[str, str] = {
    ".md": "text/markdown",
    ".css": "text/css",
    ".html": "text/html",
    ".htm": "text/html",
    ".json": "application/json",
    ".map": "application/json",
    ".txt": "text/plain",
    ".js": "application/javascript",
    ".jsx": "text/jsx",
    ".gz": "application/gzip",
    ".webp": "image/webp",
    ".jpg": "image/jpeg",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    # Source assets, served as-is for development
    ".ts": "text/typescript",
    ".tsx": "text/tsx",
}


def content_type_for(path: str | Path) -> str | None:
    """MIME type for *path*'s extension, or ``None`` when unknown."""
    return MEDIA_TYPES.get(PurePosixPath(str(path)).suffix)


def _url_prefix(static_root: str) -> str:
    parts = [p for p in PurePosixPath(static_root).parts if p not in ("/", ".")]
    return "/" + "/".join(parts)


def resolve_static_path(path: str, static_root: str) -> Path:
    """Map a request path to a file inside *static_root*.

    Raises ``FileNotFound`` when the result would escape the static root.
    """
    root = Path(static_root)
    prefix = _url_prefix(static_root)

    if prefix != "/" and path.startswith(prefix + "/"):
        candidate = root / path[len(prefix) + 1 :]
    else:
        candidate = root / path.lstrip("/")

    resolved = candidate.resolve()
    if not resolved.is_relative_to(root.resolve()):
        raise FileNotFound(path, "Path escapes the static root")
    return resolved


async def serve_static(request: Request, path: str, config: ServerConfig) -> AnyResponse:
    """Build the response for a static asset.

    Any filesystem failure (missing file, directory, permission) raises
    ``FileNotFound``.
    """
    if config.serve_static is None:
        raise FileNotFound(path, "Static serving is not configured")

    file_path = resolve_static_path(path, str(config.serve_static))
    async_path = anyio.Path(file_path)

    try:
        stat = await async_path.stat()
        is_file = await async_path.is_file()
    except OSError as exc:
        raise FileNotFound(path, str(exc)) from exc
    if not is_file:
        raise FileNotFound(path, "Not a regular file")

    headers: list[tuple[str, str]] = [("Cache-Control", STATIC_CACHE_CONTROL)]
    content_type = content_type_for(file_path)
    if content_type:
        headers.append(("Content-Type", content_type))

    compression = choose_compression(request, config.compression)
    if compression is Compression.NONE:
        logger.debug("streaming %s (%d bytes)", file_path, stat.st_size)
        return FileResponse(
            path=file_path,
            size=stat.st_size,
            headers=(*headers, ("Content-Length", str(stat.st_size))),
        )

    try:
        data = await async_path.read_bytes()
    except OSError as exc:
        raise FileNotFound(path, str(exc)) from exc

    return finalize(Response(body=data, headers=tuple(headers)), compression, path=path)
