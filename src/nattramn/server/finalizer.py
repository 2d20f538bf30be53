"""Response finalization — compression, ETag, and length headers.

Runs last for every in-memory response.  The ETag is the SHA-1 hex digest
of the final (possibly compressed) body bytes, so identical bytes always
produce identical validators.
"""

import gzip
import hashlib
import logging

import brotli

from nattramn.config import Compression
from nattramn.errors import CompressionFailure
from nattramn.http.response import Response

logger = logging.getLogger("nattramn.server")


def compress(data: bytes, compression: Compression, *, path: str = "") -> bytes:
    """Encode *data* with the selected codec.

    gzip output uses a zero mtime so equal input always yields equal bytes.
    Raises ``CompressionFailure`` if the codec fails.
    """
    try:
        match compression:
            case Compression.GZIP:
                return gzip.compress(data, mtime=0)
            case Compression.BROTLI:
                return brotli.compress(data)
            case _:
                return data
    except (brotli.error, OSError, ValueError) as exc:
        raise CompressionFailure(path, f"{compression.value} encoding failed: {exc}") from exc


def compute_etag(data: bytes) -> str:
    """SHA-1 hex digest of *data*."""
    return hashlib.sha1(data).hexdigest()  # noqa: S324


def finalize(response: Response, compression: Compression, *, path: str = "") -> Response:
    """Apply the negotiated compression and set ETag and Content-Length.

    *compression* is the per-request choice from ``choose_compression``;
    ``Compression.NONE`` leaves the body untouched.
    """
    body = response.body
    if compression is not Compression.NONE:
        body = compress(body, compression, path=path)
        response = (
            response.with_header("content-encoding", compression.value)
            .with_vary("Accept-Encoding")
        )
        logger.debug("%s compressed %d -> %d bytes (%s)", path, len(response.body), len(body), compression.value)

    return (
        response.with_body(body)
        .with_header("ETag", compute_etag(body))
        .with_header("Content-Length", str(len(body)))
    )
