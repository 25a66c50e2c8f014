"""Session parameters: style prompts and sampling controls.

WHY: A jam is started (and later updated) with a list of text style
prompts, each with a blend weight, plus loop influence, chunk length and
sampling knobs. The popup edits these in place while a session runs, and
re-seeds them from the last session request when it reopens.

HOW: StyleEntry is one prompt slot with an identity independent of its
content. SessionParameters owns the ordered slot list and five scalars,
converts to/from PendingJamRequest, and exposes the comma-joined text
fields the request encoder sends. It holds a SteeringState so the
centroid weights can be serialized alongside the styles.

RULES:
- A fresh session has exactly one style: text "" and weight 1.0
- At most MAX_STYLE_SLOTS styles via add_style(); the last one is never removed
- from_pending_request pairs styles with weights up to the shorter list
- Scalars are copied verbatim; bounds are the caller's concern
- CSV fields are recomputed on every access and do not escape commas
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from jam_steering.api.models import PendingJamRequest
from jam_steering.config import (
    DEFAULT_BARS,
    DEFAULT_GUIDANCE_WEIGHT,
    DEFAULT_LOOP_WEIGHT,
    DEFAULT_STYLE_WEIGHT,
    DEFAULT_TEMPERATURE,
    DEFAULT_TOP_K,
    MAX_STYLE_SLOTS,
)
from jam_steering.core.events import ChangeNotifier
from jam_steering.core.steering import SteeringState, format_weights_csv

logger = logging.getLogger(__name__)


def _new_style_id() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class StyleEntry:
    """One style prompt slot.

    Equality is identity: two slots with the same text and weight are
    still different slots.
    """

    text: str = ""
    weight: float = DEFAULT_STYLE_WEIGHT
    id: str = field(default_factory=_new_style_id)


class SessionParameters(ChangeNotifier):
    """User-facing generation parameters for one jam session."""

    def __init__(
        self,
        styles: list[StyleEntry] | None = None,
        loop_weight: float = DEFAULT_LOOP_WEIGHT,
        bars: int = DEFAULT_BARS,
        temperature: float = DEFAULT_TEMPERATURE,
        top_k: int = DEFAULT_TOP_K,
        guidance_weight: float = DEFAULT_GUIDANCE_WEIGHT,
        steering: SteeringState | None = None,
    ) -> None:
        super().__init__()
        if styles is None:
            styles = [StyleEntry(text="", weight=1.0)]
        self.styles = list(styles)
        self.loop_weight = loop_weight
        self.bars = bars
        self.temperature = temperature
        self.top_k = top_k
        self.guidance_weight = guidance_weight
        self.steering = steering if steering is not None else SteeringState()

    # ------------------------------------------------------------------
    # Session request conversion
    # ------------------------------------------------------------------

    def from_pending_request(self, req: PendingJamRequest) -> None:
        """Re-seed every parameter from a previous session request.

        WHY: When the popup reopens during a running jam it must show the
        parameters the session was started with.

        HOW: styles[i] is paired with style_weights[i]; each pair becomes
        a new StyleEntry with a fresh id. Scalars are copied as-is.

        RULES:
        - Mismatched list lengths truncate to the shorter list
        - Steering state is untouched
        """
        if len(req.styles) != len(req.style_weights):
            logger.warning(
                "Session request has %d styles but %d weights; keeping %d",
                len(req.styles),
                len(req.style_weights),
                min(len(req.styles), len(req.style_weights)),
            )
        self.styles = [
            StyleEntry(text=text, weight=weight)
            for text, weight in zip(req.styles, req.style_weights)
        ]
        self.loop_weight = req.loop_weight
        self.bars = req.bars_per_chunk
        self.temperature = req.temperature
        self.top_k = req.top_k
        self.guidance_weight = req.guidance_weight
        self._notify("from_pending_request")

    def to_pending_request(self, bpm: int) -> PendingJamRequest:
        """Build a session request from the current parameters and ``bpm``."""
        return PendingJamRequest(
            bpm=bpm,
            bars_per_chunk=self.bars,
            styles=[s.text for s in self.styles],
            style_weights=[s.weight for s in self.styles],
            loop_weight=self.loop_weight,
            temperature=self.temperature,
            top_k=self.top_k,
            guidance_weight=self.guidance_weight,
        )

    # ------------------------------------------------------------------
    # Style slots
    # ------------------------------------------------------------------

    def add_style(self, text: str = "", weight: float = DEFAULT_STYLE_WEIGHT) -> StyleEntry | None:
        """Append a style slot; returns None once all slots are in use."""
        if len(self.styles) >= MAX_STYLE_SLOTS:
            logger.info("Style limit reached (%d); not adding", MAX_STYLE_SLOTS)
            return None
        entry = StyleEntry(text=text, weight=weight)
        self.styles.append(entry)
        self._notify("add_style")
        return entry

    def remove_style(self, style_id: str) -> bool:
        """Remove a style slot by id. The last remaining slot stays."""
        if len(self.styles) <= 1:
            return False
        for i, entry in enumerate(self.styles):
            if entry.id == style_id:
                del self.styles[i]
                self._notify("remove_style")
                return True
        return False

    def update_style(
        self,
        style_id: str,
        text: str | None = None,
        weight: float | None = None,
    ) -> bool:
        """Edit a style slot in place. Returns False for an unknown id."""
        entry = self._find_style(style_id)
        if entry is None:
            return False
        if text is not None:
            entry.text = text
        if weight is not None:
            entry.weight = weight
        self._notify("update_style")
        return True

    def _find_style(self, style_id: str) -> StyleEntry | None:
        for entry in self.styles:
            if entry.id == style_id:
                return entry
        return None

    # ------------------------------------------------------------------
    # Derived text fields
    # ------------------------------------------------------------------

    @property
    def styles_csv(self) -> str:
        return ",".join(s.text for s in self.styles)

    @property
    def style_weights_csv(self) -> str:
        return format_weights_csv([s.weight for s in self.styles])

    @property
    def centroid_weights_csv(self) -> str:
        return self.steering.centroid_weights_csv
