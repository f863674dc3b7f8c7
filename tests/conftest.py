import logging
import stat
from pathlib import Path
from typing import Dict, Optional

import pytest
import pytest_asyncio
import structlog
from aiohttp import web
from aiohttp.test_utils import TestServer

from ghost_tab_installer.config import InstallerConfig
from ghost_tab_installer.types import Distribution, Installation

DIST_VERSION = "1.3.0"

DIST_FILES = {
    "bin/ghost-tab": ("#!/usr/bin/env bash\necho ghost-tab \"$@\"\n", 0o755),
    "lib/tui.sh": ("tui() { :; }\n", 0o644),
    "lib/helpers/path.sh": ("resolve() { :; }\n", 0o644),
    "lib/helpers/run.sh": ("#!/bin/sh\nexit 0\n", 0o750),
    "templates/config.tmpl": ("key = value\n", 0o644),
    "ghostty/config": ("font-size = 13\n", 0o644),
    "terminals/kitty.sh": ("kitty() { :; }\n", 0o644),
    "wrapper.sh": ("#!/bin/sh\nexec \"$@\"\n", 0o755),
    # Packaging metadata that must never be installed
    "package.json": ("{}\n", 0o644),
    "scripts/release.sh": ("#!/bin/sh\n", 0o755),
}


def tui_script(version: str) -> bytes:
    return f"#!/bin/sh\necho \"ghost-tab-tui version {version}\"\n".encode()


def write_tree(root: Path, files: Dict[str, tuple], version: Optional[str] = DIST_VERSION) -> Path:
    for rel, (content, mode) in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        path.chmod(mode)
    if version is not None:
        (root / "VERSION").write_text(version + "\n")
    return root


class FakeVersionProbe:
    """Version probe returning a fixed answer and recording every lookup."""

    def __init__(self, version: Optional[str] = None):
        self.version = version
        self.calls = []

    async def installed_version(self, binary: Path) -> Optional[str]:
        self.calls.append(binary)
        return self.version


def is_executable(path: Path) -> bool:
    return bool(path.stat().st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging configuration installed by a test"""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers = []


@pytest.fixture
def dist_root(tmp_path: Path) -> Path:
    """Packaged distribution tree with a VERSION file"""
    return write_tree(tmp_path / "dist", DIST_FILES)


@pytest.fixture
def distribution(dist_root: Path) -> Distribution:
    return Distribution(root=dist_root, version=DIST_VERSION)


@pytest.fixture
def installation(tmp_path: Path) -> Installation:
    return Installation(root=tmp_path / "home" / ".local" / "share" / "ghost-tab")


@pytest.fixture
def config(tmp_path: Path, dist_root: Path) -> InstallerConfig:
    """Config for a macOS run that never downloads or hands off"""
    return InstallerConfig.for_home(
        tmp_path / "home",
        distribution_dir=dist_root,
        mock_platform="darwin",
        arch="arm64",
        skip_download=True,
        skip_exec=True,
    )


class ReleaseStore:
    """In-process stand-in for the GitHub release download endpoint."""

    def __init__(self):
        self.assets: Dict[str, bytes] = {}
        self.requests = []
        self.server: Optional[TestServer] = None

    @property
    def base_url(self) -> str:
        return str(self.server.make_url("/")).rstrip("/")

    def publish(self, version: str, os_name: str, arch: str, body: bytes) -> str:
        path = f"/JackUait/ghost-tab/releases/download/v{version}/ghost-tab-tui-{os_name}-{arch}"
        self.assets[path] = body
        return path

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests.append(request.path)
        if request.path.startswith("/redirect/"):
            raise web.HTTPFound(request.path[len("/redirect"):])
        body = self.assets.get(request.path)
        if body is None:
            raise web.HTTPNotFound()
        return web.Response(body=body, content_type="application/octet-stream")


@pytest_asyncio.fixture
async def release_store():
    store = ReleaseStore()
    app = web.Application()
    app.router.add_get("/{tail:.*}", store.handle)
    store.server = TestServer(app)
    await store.server.start_server()
    try:
        yield store
    finally:
        await store.server.close()
