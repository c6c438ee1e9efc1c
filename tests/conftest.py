"""
Pytest configuration and fixtures.

Provides ready-made buffers, structured loggers and an isolated process
environment for configuration tests.
"""

import os
import tempfile
import shutil
from pathlib import Path

import pytest

from cbuffer import RingBuffer
from cbuffer.core import config as config_module
from cbuffer.utils.logging import StructuredLogger


@pytest.fixture
def buffer():
    """A buffer with the default capacity of 50."""
    return RingBuffer()


@pytest.fixture
def small_buffer():
    """A capacity-5 buffer, small enough to wrap quickly."""
    return RingBuffer(5)


@pytest.fixture
def memory_logger():
    """A DEBUG structured logger without file output."""
    return StructuredLogger("cbuffer.test", level="DEBUG", max_memory_entries=100)


@pytest.fixture
def temp_dir():
    """A temporary directory removed after the test."""
    path = tempfile.mkdtemp()
    yield Path(path)
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def clean_env(monkeypatch):
    """
    Strip CBUFFER_* variables and restore the environment afterwards.

    load_dotenv() writes straight into os.environ, so the whole mapping is
    snapshotted and restored rather than relying on monkeypatch alone.
    """
    saved = dict(os.environ)
    for key in list(os.environ):
        if key.startswith("CBUFFER_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_config_manager", None)
    monkeypatch.setattr(config_module, "DEFAULT_ENV_FILE", Path("/nonexistent/cbuffer/.env"))

    yield os.environ

    os.environ.clear()
    os.environ.update(saved)
