"""Form-field encoding for the jam start and jam update endpoints.

WHY: The backend takes multipart form fields, all as text. The start
and update endpoints share most fields but differ in a few (tempo and
chunk length are fixed once a session runs; updates name the session).
Centralizing the text formatting keeps both requests byte-identical for
the shared fields.

HOW: build_start_fields() and build_update_fields() return plain
dict[str, str] mappings that the transport layer adds to its form.
Steering fields are appended only when the backend has assets loaded.

RULES:
- Weights and sampling floats use "%.4f"; loop_weight uses "%.3f"
- topk is sent as an integer string
- styles / style_weights are comma-joined without escaping
- "mean" is sent only when a mean vector is loaded
- "centroid_weights" is sent only when the centroid count is positive
"""

from __future__ import annotations

from jam_steering.config import BEATS_PER_BAR, LOOP_WEIGHT_FORMAT, WEIGHT_FORMAT
from jam_steering.core.session import SessionParameters


def _sampling_fields(params: SessionParameters) -> dict[str, str]:
    return {
        "styles": params.styles_csv,
        "style_weights": params.style_weights_csv,
        "loop_weight": LOOP_WEIGHT_FORMAT % params.loop_weight,
        "guidance_weight": WEIGHT_FORMAT % params.guidance_weight,
        "temperature": WEIGHT_FORMAT % params.temperature,
        "topk": str(int(params.top_k)),
    }


def _steering_fields(params: SessionParameters) -> dict[str, str]:
    steering = params.steering
    fields: dict[str, str] = {}
    if steering.mean_available:
        fields["mean"] = WEIGHT_FORMAT % steering.mean
    if steering.has_centroids:
        fields["centroid_weights"] = params.centroid_weights_csv
    return fields


def build_start_fields(params: SessionParameters, bpm: int) -> dict[str, str]:
    """Encode the form fields for starting a jam session.

    Args:
        params: Current session parameters (with their steering state).
        bpm: Tempo of the loop being jammed on; owned by the caller.

    Returns:
        Field name → text value, excluding the audio file part.
    """
    fields = {
        "bpm": str(int(bpm)),
        "bars_per_chunk": str(int(params.bars)),
        "beats_per_bar": str(BEATS_PER_BAR),
    }
    fields.update(_sampling_fields(params))
    fields.update(_steering_fields(params))
    return fields


def build_update_fields(
    params: SessionParameters,
    session_id: str,
    use_current_mix_as_style: bool = False,
) -> dict[str, str]:
    """Encode the form fields for updating a running jam session.

    Args:
        params: Current session parameters (with their steering state).
        session_id: Identifier of the running session.
        use_current_mix_as_style: Ask the backend to add the current
            loop mix as an extra style embedding.

    Returns:
        Field name → text value.
    """
    fields = {"session_id": session_id}
    fields.update(_sampling_fields(params))
    fields["use_current_mix_as_style"] = "true" if use_current_mix_as_style else "false"
    fields.update(_steering_fields(params))
    return fields
