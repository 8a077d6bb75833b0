"""Toggle — gate оператор, управляемый bool control потоком.

- take_toggle: Observable[T] → Observable[T]
- ToggleStateMachine: переходы OPEN / CLOSED / COMPLETED / ERRORED
- TakeToggleConfig: replay_last_on_open, start_open,
  close_on_control_complete, control_error_policy
"""

from .config import ControlErrorPolicy, TakeToggleConfig
from .operator import take_toggle
from .state_machine import ToggleStateMachine, ToggleTransitionResult

__all__ = [
    "take_toggle",
    "TakeToggleConfig",
    "ControlErrorPolicy",
    "ToggleStateMachine",
    "ToggleTransitionResult",
]
