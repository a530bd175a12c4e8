"""
Shiftbook Test Configuration

Shared fixtures for all tests.
"""
import json
from datetime import datetime

import pytest

from shiftbook.config import LocalStorageConfig, ServiceConfig, StorageConfig
from shiftbook.models import normalize_shifts
from shiftbook.storage import JSONGateway, LocalFileStorage
from shiftbook.store import ShiftStore
from tests.fixtures.shifts import SAMPLE_RECORDS


# =============================================================================
# FIXTURES: Sample Data
# =============================================================================

@pytest.fixture
def sample_records() -> list[dict]:
    """Stored shift records in wire format (fresh copy per test)."""
    return json.loads(json.dumps(SAMPLE_RECORDS))


@pytest.fixture
def sample_shifts(sample_records):
    return normalize_shifts(sample_records)


@pytest.fixture
def wednesday() -> datetime:
    """Wednesday 8 May 2024, mid-day."""
    return datetime(2024, 5, 8, 14, 0)


# =============================================================================
# FIXTURES: Storage
# =============================================================================

@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "storage.json"


@pytest.fixture
def local_backend(storage_path):
    return LocalFileStorage(path=str(storage_path))


@pytest.fixture
def seeded_backend(storage_path, sample_records):
    """Local backend whose file already holds the sample collection."""
    storage_path.write_text(
        json.dumps({"taxiShifts": json.dumps(sample_records)}),
        encoding="utf-8",
    )
    return LocalFileStorage(path=str(storage_path))


@pytest.fixture
def store(local_backend):
    return ShiftStore(JSONGateway(local_backend))


@pytest.fixture
def local_config(storage_path) -> ServiceConfig:
    return ServiceConfig(
        storage=StorageConfig(
            backend="local",
            local=LocalStorageConfig(path=str(storage_path)),
        ),
    )
