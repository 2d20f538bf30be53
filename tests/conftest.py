"""Shared fixtures: page templates and a temporary static root."""

from pathlib import Path

import pytest

TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
</head>
<body>
  <nattramn-router></nattramn-router>
  <script type="module" src="nattramn-client.js"></script>
</body>
</html>"""


@pytest.fixture
def template() -> str:
    return TEMPLATE


@pytest.fixture
def static_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A ``public/`` directory under a temporary working directory."""
    monkeypatch.chdir(tmp_path)
    public = tmp_path / "public"
    public.mkdir()
    (public / "style.css").write_text("body { color: red; }\n" * 20)
    (public / "app.js").write_text("console.log('hello');")
    (public / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (public / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (public / "docs").mkdir()
    (public / "docs" / "guide.md").write_text("# Guide")
    (tmp_path / "secret.txt").write_text("top secret")
    return public
