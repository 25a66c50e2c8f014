"""Backend status and session request dataclasses.

WHY: The generation backend reports which steering assets it has loaded
as a small JSON object, and the audio/session layer consumes a flat
bundle of session parameters. Typed dataclasses make both shapes
explicit and keep field-name mismatches out of the state classes.

HOW: AssetsStatus maps the inbound status payload; its from_dict is
deliberately permissive because the payload arrives asynchronously from
a backend that may be mid-reload. PendingJamRequest is the outbound
session request value; to_dict/from_dict use the camelCase wire names
the session layer expects.

RULES:
- AssetsStatus.from_dict never raises; absent or mistyped fields mean "unavailable"
- A JSON bool is never accepted where an integer count is expected
- "assets_repo" (model config response) is accepted when "repo_id" is absent
- PendingJamRequest values are copied verbatim (no clamping)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


def _as_bool(value: Any) -> bool:
    return isinstance(value, bool) and value


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass
class AssetsStatus:
    """Snapshot of the steering assets currently loaded on the backend.

    WHY: The mean vector and the centroid set are loaded together with a
    finetune checkpoint and can change whenever the user switches models.
    The steering state reconciles itself against each new snapshot.

    HOW: Fields map 1:1 to the status payload. Everything is optional so a
    partial or empty payload still decodes to a usable "nothing loaded"
    snapshot.

    RULES:
    - repo_id: asset bundle identifier, informational only
    - mean_loaded / centroids_loaded: False unless the payload says true
    - centroid_count: None when absent or not an integer
    - embedding_dim: carried for display, unused by reconciliation
    """

    repo_id: str | None = None
    mean_loaded: bool = False
    centroids_loaded: bool = False
    centroid_count: int | None = None
    embedding_dim: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> AssetsStatus:
        """Parse an AssetsStatus from a raw status payload.

        WHY: Status payloads are decoded on an async path where raising
        would leave the UI with stale steering controls.

        HOW: Each field is type-checked individually; anything unexpected
        falls back to its "unavailable" default.

        RULES:
        - Non-dict input yields an empty snapshot (logged as a warning)
        - repo_id falls back to the "assets_repo" key
        """
        if not isinstance(data, dict):
            logger.warning("Ignoring non-object assets status payload: %r", data)
            return cls()

        repo = data.get("repo_id")
        if repo is None:
            repo = data.get("assets_repo")

        return cls(
            repo_id=_as_str(repo),
            mean_loaded=_as_bool(data.get("mean_loaded")),
            centroids_loaded=_as_bool(data.get("centroids_loaded")),
            centroid_count=_as_int(data.get("centroid_count")),
            embedding_dim=_as_int(data.get("embedding_dim")),
        )

    @property
    def usable_centroid_count(self) -> int:
        """Centroid count to apply: positive only when centroids are loaded."""
        if self.centroids_loaded and self.centroid_count is not None and self.centroid_count > 0:
            return self.centroid_count
        return 0


@dataclass
class PendingJamRequest:
    """Session request handed to the audio/session layer to (re)start a jam.

    WHY: Starting or restarting a session needs every parameter at once,
    and the session layer keeps the last request around so the parameter
    popup can be re-seeded from it.

    HOW: Parallel styles/style_weights lists plus the sampling scalars and
    the externally owned tempo.

    RULES:
    - styles[i] pairs with style_weights[i]
    - bars_per_chunk is 4 or 8 by contract, not enforced here
    """

    bpm: int
    bars_per_chunk: int
    styles: list[str]
    style_weights: list[float]
    loop_weight: float
    temperature: float
    top_k: int
    guidance_weight: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the session layer's camelCase field names."""
        return {
            "bpm": self.bpm,
            "barsPerChunk": self.bars_per_chunk,
            "styles": list(self.styles),
            "styleWeights": list(self.style_weights),
            "loopWeight": self.loop_weight,
            "temperature": self.temperature,
            "topK": self.top_k,
            "guidanceWeight": self.guidance_weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PendingJamRequest:
        """Parse a PendingJamRequest from its camelCase wire form.

        RULES:
        - All eight fields are required (KeyError otherwise)
        """
        return cls(
            bpm=data["bpm"],
            bars_per_chunk=data["barsPerChunk"],
            styles=list(data["styles"]),
            style_weights=list(data["styleWeights"]),
            loop_weight=data["loopWeight"],
            temperature=data["temperature"],
            top_k=data["topK"],
            guidance_weight=data["guidanceWeight"],
        )
