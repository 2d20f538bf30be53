"""Testing utilities for nattramn applications.

Provides an in-process ASGI client that returns the same ``Response``
type the pipeline produces::

    from nattramn.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/", headers={"x-partial-content": "1"})
        assert response.status == 200
"""

from nattramn.testing.client import TestClient

__all__ = ["TestClient"]
