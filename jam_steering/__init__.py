"""Jam steering — parameter state for an interactive music-generation session.

WHY: A jam session is driven by a handful of user-adjustable knobs (style
prompts and weights, sampling parameters) plus optional latent steering
assets (a mean vector and a set of centroids) that the backend loads and
unloads on its own schedule. The UI edits a compact "one centroid + one
intensity" control while the backend expects the full weight vector.
Keeping those views consistent is the whole job of this package.

HOW: Two cooperating state objects — SessionParameters (styles and
sampling scalars) and SteeringState (mean, centroid weights, compact
mixer) — plus typed wire models for the inbound assets status and the
outbound session request, and a small encoder that turns the state into
form fields for the jam start/update endpoints.

RULES:
- No operation raises on bad boundary input; state is always consistent
- Every public mutation emits one change notification
- Transport, audio, and widget rendering live outside this package
"""

__version__ = "0.1.0"
