"""Toggle State Machine — переходы gate по событиям source и control потоков.

Состояния:
- OPEN: source значения уходят downstream
- CLOSED: source значения запоминаются, но не уходят downstream
- COMPLETED / ERRORED: терминальные

Переходы OPEN ↔ CLOSED — только по control next с изменившимся значением.
Терминальные состояния достижимы из OPEN и CLOSED через завершение / ошибку
source, либо (по конфигурации) через завершение / ошибку control.

State machine не знает про observers: каждое событие возвращает
ToggleTransitionResult, который применяет оператор.
"""

from dataclasses import dataclass
from typing import Any

from src.core.domain.gate_state import EMPTY, GatePosition, GateState
from src.toggle.config import ControlErrorPolicy, TakeToggleConfig


@dataclass(frozen=True)
class ToggleTransitionResult:
    """Результат обработки одного upstream события."""

    # Что доставить downstream
    emit: bool
    value: Any

    previous_position: GatePosition
    new_position: GatePosition

    # Диагностика
    transition_occurred: bool
    transition_reason: str

    # True → оператор завершает downstream и освобождает обе подписки
    terminate: bool

    # Для отладки
    details: str


class ToggleStateMachine:
    """State machine одной подписки gate.

    Каждый экземпляр владеет собственным GateState; экземпляры не
    разделяются между подписками.
    """

    def __init__(self, config: TakeToggleConfig, start_open: bool):
        """
        Args:
            config: конфигурация оператора
            start_open: уже разрешённая начальная позиция (см. resolve_start_open)
        """
        self.config = config
        self.state = GateState(emitting=start_open)

    @property
    def position(self) -> GatePosition:
        return self.state.position

    # -------------------------------------------------------------------------
    # Source events
    # -------------------------------------------------------------------------

    def on_source_next(self, value: Any) -> ToggleTransitionResult:
        """Source next: запомнить значение, пропустить если gate OPEN."""
        position = self.state.position
        if self.state.is_terminated:
            return self._no_transition(position, "after_terminal", "Source value after terminal state")

        self.state.last_value = value
        self.state.has_emitted_once = True

        if self.state.emitting:
            return self._create_result(
                emit=True,
                value=value,
                previous_position=position,
                transition_occurred=False,
                transition_reason="source_forwarded",
                terminate=False,
                details=f"Forwarded source value of type {type(value).__name__}",
            )

        return self._no_transition(
            position, "source_suppressed", f"Suppressed source value of type {type(value).__name__}"
        )

    def on_source_error(self) -> ToggleTransitionResult:
        return self._terminate(GatePosition.ERRORED, "source_error", "Source errored")

    def on_source_completed(self) -> ToggleTransitionResult:
        return self._terminate(GatePosition.COMPLETED, "source_completed", "Source completed")

    # -------------------------------------------------------------------------
    # Control events
    # -------------------------------------------------------------------------

    def on_control_next(self, flag: Any) -> ToggleTransitionResult:
        """Control next: переключение OPEN ↔ CLOSED и replay при открытии."""
        position = self.state.position
        if self.state.is_terminated:
            return self._no_transition(position, "after_terminal", "Control value after terminal state")

        emitting = bool(flag)
        if emitting == self.state.emitting:
            return self._no_transition(position, "control_repeat", f"Gate already {position.value}")

        self.state.emitting = emitting

        if not emitting:
            return self._create_result(
                emit=False,
                value=EMPTY,
                previous_position=position,
                transition_occurred=True,
                transition_reason="control_closed",
                terminate=False,
                details=f"{position.value} → CLOSED",
            )

        if self.state.has_emitted_once and self.config.replay_last_on_open:
            return self._create_result(
                emit=True,
                value=self.state.last_value,
                previous_position=position,
                transition_occurred=True,
                transition_reason="control_opened_replay",
                terminate=False,
                details=f"{position.value} → OPEN, replay last source value",
            )

        reason = "no_source_value" if not self.state.has_emitted_once else "replay_disabled"
        return self._create_result(
            emit=False,
            value=EMPTY,
            previous_position=position,
            transition_occurred=True,
            transition_reason="control_opened",
            terminate=False,
            details=f"{position.value} → OPEN, no replay ({reason})",
        )

    def on_control_error(self) -> ToggleTransitionResult:
        if self.config.control_error_policy == ControlErrorPolicy.IGNORE:
            return self._no_transition(
                self.state.position,
                "control_error_ignored",
                f"Control errored, gate frozen at {self.state.position.value}",
            )
        return self._terminate(GatePosition.ERRORED, "control_error", "Control errored")

    def on_control_completed(self) -> ToggleTransitionResult:
        if not self.config.close_on_control_complete:
            return self._no_transition(
                self.state.position,
                "control_completed_frozen",
                f"Control completed, gate frozen at {self.state.position.value}",
            )
        return self._terminate(GatePosition.COMPLETED, "control_completed", "Control completed")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _terminate(self, terminal: GatePosition, reason: str, details: str) -> ToggleTransitionResult:
        position = self.state.position
        if self.state.is_terminated:
            return self._no_transition(position, "after_terminal", details)

        self.state.terminal = terminal
        return self._create_result(
            emit=False,
            value=EMPTY,
            previous_position=position,
            transition_occurred=True,
            transition_reason=reason,
            terminate=True,
            details=f"{details}: {position.value} → {terminal.value}",
        )

    def _no_transition(self, position: GatePosition, reason: str, details: str) -> ToggleTransitionResult:
        return self._create_result(
            emit=False,
            value=EMPTY,
            previous_position=position,
            transition_occurred=False,
            transition_reason=reason,
            terminate=False,
            details=details,
        )

    def _create_result(
        self,
        emit: bool,
        value: Any,
        previous_position: GatePosition,
        transition_occurred: bool,
        transition_reason: str,
        terminate: bool,
        details: str,
    ) -> ToggleTransitionResult:
        """Создание результата перехода."""
        return ToggleTransitionResult(
            emit=emit,
            value=value,
            previous_position=previous_position,
            new_position=self.state.position,
            transition_occurred=transition_occurred,
            transition_reason=transition_reason,
            terminate=terminate,
            details=details,
        )
