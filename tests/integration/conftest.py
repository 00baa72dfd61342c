"""Pytest fixtures for integration tests.

This module provides trained models in a temporary model store and
repository doubles for exercising the plugin end to end.
"""

import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import Mock

import numpy as np
import pytest
from domain.value_objects import Attribute, AttributeType, DatasetHeader
from infrastructure.adapters import FileModelStorage
from sklearn.cluster import KMeans
from sklearn.linear_model import LogisticRegression, SGDClassifier

FEATURES = np.array(
    [[0.0, 0.1], [0.2, 0.0], [0.1, 0.3], [0.3, 0.2], [3.0, 3.1], [3.2, 2.9], [2.9, 3.3], [3.1, 3.0]]
)
LABELS = np.array(["low", "low", "low", "low", "high", "high", "high", "high"])


@pytest.fixture
def temp_model_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for model storage."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def labelled_header() -> DatasetHeader:
    """Header with the class in the first slot."""
    return DatasetHeader(
        attributes=(
            Attribute("level", AttributeType.NOMINAL, ("high", "low")),
            Attribute("x1"),
            Attribute("x2"),
        ),
        class_index=0,
        relation_name="levels",
    )


@pytest.fixture
def rows() -> list[list[float]]:
    """Rows laid out like labelled_header, with the class missing."""
    return [[np.nan, *features] for features in FEATURES.tolist()]


@pytest.fixture
def storage(temp_model_dir: Path, labelled_header: DatasetHeader) -> FileModelStorage:
    """Model store holding a classifier, an incremental classifier and a clusterer."""
    storage = FileModelStorage(temp_model_dir)
    storage.save_model("logistic", LogisticRegression().fit(FEATURES, LABELS), labelled_header)
    storage.save_model(
        "sgd", SGDClassifier(random_state=0).fit(FEATURES, LABELS), labelled_header
    )
    storage.save_model(
        "kmeans",
        KMeans(n_clusters=2, n_init=10, random_state=0).fit(FEATURES),
        DatasetHeader(attributes=(Attribute("x1"), Attribute("x2"))),
    )
    return storage


@pytest.fixture
def pypi_payloads() -> dict[str, dict]:
    """JSON API responses for a small fake index, keyed by URL path."""
    return {
        "/pypi/imbalanced-learn/json": {
            "releases": {
                "0.13.0": [{"yanked": False}],
                "0.12.0": [{"yanked": False}],
            }
        },
        "/pypi/imbalanced-learn/0.13.0/json": {
            "info": {
                "name": "imbalanced-learn",
                "version": "0.13.0",
                "requires_dist": ["scikit-learn<2,>=1.6"],
                "requires_python": ">=3.9",
            }
        },
        "/pypi/imbalanced-learn/0.12.0/json": {
            "info": {
                "name": "imbalanced-learn",
                "version": "0.12.0",
                "requires_dist": ["scikit-learn>=1.0.2"],
                "requires_python": ">=3.8",
            }
        },
    }


@pytest.fixture
def fake_get(pypi_payloads: dict[str, dict]):
    """Replacement for requests.get serving pypi_payloads."""

    def get(url: str, timeout: int) -> Mock:
        path = url.removeprefix("https://pypi.example")
        response = Mock()
        if path in pypi_payloads:
            response.status_code = 200
            response.json.return_value = pypi_payloads[path]
        else:
            response.status_code = 404
        return response

    return get
