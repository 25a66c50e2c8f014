"""Shared test fixtures for the jam_steering test suite.

WHY: Several test modules need the same backend status payloads and a
session with a few styles loaded. Centralizing them keeps the payload
shapes in one place.

HOW: Plain dict payloads mirror what the backend's status endpoint
returns; fixtures build fresh state objects per test.

RULES:
- Every fixture returns a new object (no shared mutable state)
- Payload dicts use the backend's snake_case keys exactly
"""

from typing import Any, Dict

import pytest

from jam_steering.core.session import SessionParameters, StyleEntry
from jam_steering.core.steering import SteeringState


LOADED_STATUS: Dict[str, Any] = {
    "repo_id": "thecollabagepatch/magenta-ft-assets",
    "mean_loaded": True,
    "centroids_loaded": True,
    "centroid_count": 5,
    "embedding_dim": 768,
}

UNLOADED_STATUS: Dict[str, Any] = {
    "repo_id": None,
    "mean_loaded": False,
    "centroids_loaded": False,
    "centroid_count": None,
    "embedding_dim": None,
}


@pytest.fixture
def loaded_status():
    """Status payload with a mean vector and five centroids loaded."""
    return dict(LOADED_STATUS)


@pytest.fixture
def unloaded_status():
    """Status payload with no steering assets loaded."""
    return dict(UNLOADED_STATUS)


@pytest.fixture
def steering():
    """Fresh SteeringState with no status applied yet."""
    return SteeringState()


@pytest.fixture
def steering_with_centroids():
    """SteeringState reconciled against a three-centroid status."""
    state = SteeringState()
    state.apply_assets_status({
        "repo_id": "assets",
        "mean_loaded": False,
        "centroids_loaded": True,
        "centroid_count": 3,
        "embedding_dim": 768,
    })
    return state


@pytest.fixture
def session():
    """SessionParameters with three styles and non-default scalars."""
    return SessionParameters(
        styles=[
            StyleEntry(text="acid house", weight=1.0),
            StyleEntry(text="breakbeat", weight=0.75),
            StyleEntry(text="ambient pads", weight=0.3),
        ],
        loop_weight=0.8,
        bars=8,
        temperature=1.1,
        top_k=40,
        guidance_weight=5.0,
    )
