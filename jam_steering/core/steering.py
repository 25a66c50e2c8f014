"""Latent steering state: mean scalar, centroid weights, compact mixer.

WHY: Finetuned checkpoints ship optional steering assets — a mean vector
and a set of centroids in the model's embedding space. The user steers
generation with one weight per centroid, but a slider per centroid does
not fit a phone screen, so the popup shows a compact mixer instead: pick
one centroid, adjust its intensity. The backend can reload assets (and
change the centroid count) at any time. This module keeps the full
weight vector, the compact projection, and the backend-reported count
consistent with each other.

HOW: SteeringState owns all steering fields. The backend's status
snapshot reaches it through apply_assets_status(), the only path by
which the centroid count changes. The compact mixer is synchronized
explicitly: select_compact_centroid() pulls a weight into the compact
intensity, apply_compact_mixer() pushes the intensity back.

RULES:
- len(centroid_weights) == centroid_count when the count is positive, else 0
- 0 <= compact_centroid_index <= max(centroid_count - 1, 0)
- A count change resets all weights to 0.0; the same count keeps them
- Changing the count does NOT refresh compact_centroid_intensity; callers
  re-select to refresh the compact view
- Length reconciliation always runs before an indexed write
- Nothing here raises on boundary input
"""

from __future__ import annotations

import logging
from typing import Any

from jam_steering.api.models import AssetsStatus
from jam_steering.config import DEFAULT_MEAN, WEIGHT_FORMAT
from jam_steering.core.events import ChangeNotifier

logger = logging.getLogger(__name__)


def format_weights_csv(weights: list[float]) -> str:
    """Join weights as fixed 4-decimal text, e.g. ``"0.5000,1.2500"``."""
    return ",".join(WEIGHT_FORMAT % w for w in weights)


class SteeringState(ChangeNotifier):
    """Steering assets reported by the backend plus the user's weights.

    Attributes:
        mean: Global steering scalar (0–2), usable without centroids.
        centroid_weights: One weight per backend centroid, indexed by id.
        centroid_count: Backend centroid count; None until a status arrives.
        assets_repo: Backend asset bundle identifier, informational only.
        mean_available: Whether the backend has a mean vector loaded.
        compact_centroid_index: Centroid shown by the compact mixer.
        compact_centroid_intensity: Compact mixer value (0–2). Written
            directly by the UI, pushed with apply_compact_mixer().
        show_advanced_centroids: Display toggle for per-centroid sliders.
    """

    def __init__(self, mean: float = DEFAULT_MEAN) -> None:
        super().__init__()
        self.mean = mean
        self.centroid_weights: list[float] = []
        self.centroid_count: int | None = None
        self.assets_repo: str | None = None
        self.mean_available = False
        self.compact_centroid_index = 0
        self.compact_centroid_intensity = 0.0
        self.show_advanced_centroids = False

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def has_centroids(self) -> bool:
        return self.centroid_count is not None and self.centroid_count > 0

    @property
    def assets_available(self) -> bool:
        """True when there is anything to steer with (centroids or mean)."""
        return self.has_centroids or self.mean_available

    @property
    def centroid_weights_csv(self) -> str:
        return format_weights_csv(self.centroid_weights)

    @property
    def centroid_labels(self) -> list[str]:
        """Chip labels for the compact picker: C1…Ck."""
        if not self.has_centroids:
            return []
        return [f"C{i + 1}" for i in range(self.centroid_count)]

    # ------------------------------------------------------------------
    # Backend status
    # ------------------------------------------------------------------

    def apply_assets_status(self, status: AssetsStatus | dict | Any) -> None:
        """Reconcile against a backend assets snapshot.

        WHY: The backend may swap the finetune assets between two polls;
        the steering controls must follow without ever indexing past the
        end of the weight vector.

        HOW: Raw payloads are decoded with AssetsStatus.from_dict. The
        repo and mean flags are copied, then the centroid count is set to
        the reported count when centroids are loaded, else to 0.

        RULES:
        - centroids_loaded=False forces the count to 0 whatever count is sent
        - Partial or malformed payloads never raise
        """
        if not isinstance(status, AssetsStatus):
            status = AssetsStatus.from_dict(status)

        self.assets_repo = status.repo_id
        self.mean_available = status.mean_loaded
        if not status.centroids_loaded and status.centroid_count:
            logger.debug(
                "Ignoring centroid_count=%s: centroids not loaded",
                status.centroid_count,
            )
        self._set_centroid_count(status.usable_centroid_count)
        logger.info(
            "Assets status applied: repo=%s mean=%s centroids=%s",
            self.assets_repo,
            self.mean_available,
            self.centroid_count,
        )
        self._notify("apply_assets_status")

    def set_centroid_count(self, k: int | None) -> None:
        """Set the centroid count, resetting weights when it changes.

        RULES:
        - k <= 0 (or None) clears the weights, index and intensity
        - k > 0 with a different vector length resets every weight to 0.0
        - The compact intensity is left as is when k > 0
        """
        self._set_centroid_count(k)
        self._notify("set_centroid_count")

    def _set_centroid_count(self, k: int | None) -> None:
        self.centroid_count = k
        if k is None or k <= 0:
            if any(self.centroid_weights):
                logger.warning(
                    "Centroids unloaded; discarding %d centroid weights",
                    len(self.centroid_weights),
                )
            self.centroid_weights = []
            self.compact_centroid_index = 0
            self.compact_centroid_intensity = 0.0
            return

        self._reconcile_length()
        self.compact_centroid_index = self._clamp_index(self.compact_centroid_index)

    # ------------------------------------------------------------------
    # Compact mixer
    # ------------------------------------------------------------------

    def apply_compact_mixer(self) -> None:
        """Push the compact intensity into the selected centroid weight.

        Only the selected index is written. No-op without centroids.
        """
        if not self.has_centroids:
            return
        self._reconcile_length()
        self.centroid_weights[self.compact_centroid_index] = self.compact_centroid_intensity
        self._notify("apply_compact_mixer")

    def select_compact_centroid(self, idx: int) -> None:
        """Select a centroid for the compact mixer and pull its weight.

        The index is clamped into range. If a length mismatch is pending
        the vector is reset first, so the pulled value is then 0.0.
        No-op without centroids.
        """
        if not self.has_centroids:
            return
        clamped = self._clamp_index(idx)
        if clamped != idx:
            logger.debug("Compact centroid index %s clamped to %s", idx, clamped)
        self.compact_centroid_index = clamped
        self._reconcile_length()
        self.compact_centroid_intensity = self.centroid_weights[self.compact_centroid_index]
        self._notify("select_compact_centroid")

    # ------------------------------------------------------------------
    # Advanced (per-centroid) editing
    # ------------------------------------------------------------------

    def set_centroid_weight(self, idx: int, value: float) -> None:
        """Edit one weight of the full vector from the advanced sliders.

        The compact intensity follows when idx is the selected centroid.
        Out-of-range indices are ignored.
        """
        if not self.has_centroids:
            return
        self._reconcile_length()
        if not 0 <= idx < len(self.centroid_weights):
            logger.debug("Ignoring weight for out-of-range centroid %s", idx)
            return
        self.centroid_weights[idx] = value
        if idx == self.compact_centroid_index:
            self.compact_centroid_intensity = value
        self._notify("set_centroid_weight")

    def set_mean(self, value: float) -> None:
        self.mean = value
        self._notify("set_mean")

    def set_show_advanced_centroids(self, show: bool) -> None:
        self.show_advanced_centroids = show
        self._notify("set_show_advanced_centroids")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _clamp_index(self, idx: int) -> int:
        upper = max((self.centroid_count or 0) - 1, 0)
        return min(max(idx, 0), upper)

    def _reconcile_length(self) -> None:
        # Caller guarantees a positive count.
        k = self.centroid_count
        if len(self.centroid_weights) == k:
            return
        if any(self.centroid_weights):
            logger.warning(
                "Centroid count changed %d -> %d; resetting centroid weights",
                len(self.centroid_weights),
                k,
            )
        self.centroid_weights = [0.0] * k
