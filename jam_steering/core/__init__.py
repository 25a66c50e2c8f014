"""Core state objects for a jam session.

WHY: The steering and session state are the stable heart of the package;
the UI binding and the transport both depend on them.

HOW: steering.py holds SteeringState, session.py holds StyleEntry and
SessionParameters, request_fields.py turns them into form fields, and
events.py provides the change notification both state classes emit.

RULES:
- State classes never import UI or transport code
- Every public mutation emits exactly one change notification
"""

from jam_steering.core.session import SessionParameters, StyleEntry
from jam_steering.core.steering import SteeringState

__all__ = ["SessionParameters", "SteeringState", "StyleEntry"]
