"""Root conftest: shared records for the validation tests."""

import logging

import pytest

from allele_beacon.model import Beacon


def allele_request(**overrides) -> dict:
    raw = {
        "referenceName": "1",
        "start": 100,
        "referenceBases": "A",
        "alternateBases": "T",
        "assemblyId": "GRCh37",
    }
    raw.update(overrides)
    return raw


def dataset(dataset_id: str = "ds1", **overrides) -> dict:
    raw = {
        "id": dataset_id,
        "name": f"Dataset {dataset_id}",
        "assemblyId": "GRCh37",
        "createDateTime": "2019-01-01T00:00:00Z",
        "updateDateTime": "2020-05-01T00:00:00Z",
        "variantCount": 1200,
        "callCount": 3400,
        "sampleCount": 56,
    }
    raw.update(overrides)
    return raw


def beacon(**overrides) -> dict:
    raw = {
        "id": "org.example.beacon",
        "name": "Example Beacon",
        "apiVersion": "v0.4.0",
        "organization": {
            "id": "org.example",
            "name": "Example Organisation",
            "welcomeUrl": "https://example.org/",
        },
        "datasets": [dataset("ds1"), dataset("ds2")],
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def raw_request() -> dict:
    return allele_request()


@pytest.fixture
def raw_beacon() -> dict:
    return beacon()


@pytest.fixture
def beacon_record() -> Beacon:
    return Beacon.model_validate(beacon())


@pytest.fixture
def restore_logging():
    """Restores logger state changed by apply_logger_config()."""
    root = logging.root
    app_logger = logging.getLogger("allele_beacon")
    saved = (
        root.level, list(root.handlers),
        app_logger.level, list(app_logger.handlers), app_logger.propagate,
    )
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    app_logger.setLevel(saved[2])
    app_logger.handlers[:] = saved[3]
    app_logger.propagate = saved[4]
