"""Test fixtures: a temporary browsed root, fake host tools and an ASGI test client."""

import json
import shlex
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from arcbrowse.api.deps import get_tools
from arcbrowse.main import create_app
from arcbrowse.services.external_tools import ExternalTools

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def _python_command(script: Path) -> str:
    return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"


FAKE_7Z = _python_command(FIXTURES_DIR / "fake_7z.py")
FAKE_FILE = _python_command(FIXTURES_DIR / "fake_file.py")

PKG_MEMBERS = {
    "readme.md": "hello world",
    "src/main": "x" * 42,
}


@pytest.fixture
def root_dir(tmp_path) -> Path:
    """Browsed root with hello.txt, d/{a,b} and pkg.zip."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "hello.txt").write_bytes(b"abc")
    (root / "d").mkdir()
    (root / "d" / "a").write_bytes(b"1")
    (root / "d" / "b").write_bytes(b"22")
    (root / "pkg.zip").write_text(json.dumps(PKG_MEMBERS), encoding="utf-8")
    return root


@pytest.fixture
def tools() -> ExternalTools:
    return ExternalTools(
        classifier_command=FAKE_FILE,
        archive_command=FAKE_7Z,
        scratch_prefix="arcbrowse-test-",
    )


@pytest_asyncio.fixture
async def client(root_dir: Path, tools: ExternalTools):
    """Async test client serving ``root_dir`` with the fake tools."""
    app = create_app(root=str(root_dir))
    app.dependency_overrides[get_tools] = lambda: tools

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
