"""Wire models exchanged with the generation backend and the session layer.

WHY: The steering state must not know about JSON key names or optional
payload fields. This package holds the typed boundary objects.

HOW: models.py defines AssetsStatus (inbound) and PendingJamRequest
(outbound) as dataclasses with dict factories.

RULES:
- No HTTP here; transport is owned by the host application
"""

from jam_steering.api.models import AssetsStatus, PendingJamRequest

__all__ = ["AssetsStatus", "PendingJamRequest"]
