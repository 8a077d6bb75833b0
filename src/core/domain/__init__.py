"""
Domain models and value objects.

Contains gate state owned by a single subscription.
"""

from src.core.domain.gate_state import EMPTY, GatePosition, GateState

__all__ = [
    "EMPTY",
    "GatePosition",
    "GateState",
]
