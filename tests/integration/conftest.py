"""Shared fixtures for integration tests against a real wallbox."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from dotenv import load_dotenv

from pykeba import KebaClient

# Load .env file before running tests
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load wallbox address from environment
KEBA_HOST = os.getenv("KEBA_HOST")
KEBA_LOCAL_PORT = int(os.getenv("KEBA_LOCAL_PORT", "0"))


@pytest.fixture(scope="function")
async def client() -> AsyncGenerator[KebaClient, None]:
    """Create a client for the wallbox configured in KEBA_HOST."""
    if not KEBA_HOST:
        pytest.skip("KEBA_HOST not set")
    async with KebaClient(KEBA_HOST, local_port=KEBA_LOCAL_PORT) as client:
        yield client
