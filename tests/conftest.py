"""
Pytest fixtures for oderland tests.

Provides:
- Isolated logging (log files under tmp_path, fixed run-id)
- A fake cPanel account laid out under tmp_path
- Stubbed du / df queries
"""

import logging
from pathlib import Path

import pytest

import modules.utils as utils
from config import MIB
from modules.cpanel.domains import DomainRecord
from modules.odercache import disk
from modules.odercache.context import OdercacheContext


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Keep log files and the run-id inside the test."""
    monkeypatch.setattr(utils, "LOG_DIR", str(tmp_path / "log"))
    monkeypatch.setattr(utils, "_RUN_ID", "")
    monkeypatch.setenv("ODERLAND_RID", "testrun")
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def home(tmp_path) -> Path:
    path = tmp_path / "home" / "u1"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def docroot(home) -> Path:
    path = home / "public_html"
    path.mkdir()
    return path


@pytest.fixture
def ctx(home) -> OdercacheContext:
    """Context whose depth strips everything up to the fake home, as /home/u1 does in production."""
    return OdercacheContext.for_home(home, home_depth=len(str(home).split("/")))


@pytest.fixture
def record(docroot) -> DomainRecord:
    return DomainRecord(name="example.com", docroot=str(docroot), kind="main")


@pytest.fixture
def domains(record):
    return {record.name: record}


class FakeDisk:
    def __init__(self):
        self.free = 10 * 1024 * MIB
        self.sizes = {}
        self.default_size = MIB

    def free_bytes(self, path):
        return self.free

    def usage_bytes(self, path):
        return self.sizes.get(Path(path), self.default_size)


@pytest.fixture
def fake_disk(monkeypatch) -> FakeDisk:
    fake = FakeDisk()
    monkeypatch.setattr(disk, "free_bytes", fake.free_bytes)
    monkeypatch.setattr(disk, "usage_bytes", fake.usage_bytes)
    return fake
