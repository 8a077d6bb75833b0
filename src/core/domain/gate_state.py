"""
GateState — состояние одной подписки gate

Владелец — ровно одна активная подписка; уничтожается вместе с ней.
Между подписками состояние не разделяется.

Инварианты:
- emitting меняется только control-событиями next
- last_value / has_emitted_once меняются только source-событиями next
- после перехода в терминальное состояние (COMPLETED / ERRORED)
  позиция больше не меняется
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class _Empty:
    """Маркер отсутствия значения (source ещё ничего не выдал)."""

    _instance: Optional["_Empty"] = None

    def __new__(cls) -> "_Empty":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY = _Empty()


class GatePosition(str, Enum):
    """
    Позиция gate.

    OPEN / CLOSED — нетерминальные, переключаются control-потоком.
    COMPLETED / ERRORED — терминальные.
    """

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    COMPLETED = "COMPLETED"
    ERRORED = "ERRORED"

    @property
    def is_terminal(self) -> bool:
        return self in (GatePosition.COMPLETED, GatePosition.ERRORED)


@dataclass
class GateState:
    """Изменяемое состояние gate для одной подписки."""

    emitting: bool
    last_value: Any = EMPTY
    has_emitted_once: bool = False
    terminal: Optional[GatePosition] = None

    @property
    def position(self) -> GatePosition:
        if self.terminal is not None:
            return self.terminal
        return GatePosition.OPEN if self.emitting else GatePosition.CLOSED

    @property
    def is_terminated(self) -> bool:
        return self.terminal is not None
