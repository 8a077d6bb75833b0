"""take_toggle — gate оператор для потоков

Пропускает source значения downstream, пока последнее значение control
потока True. При False значения отбрасываются (не буферизуются); при
возврате в True последнее source значение может быть выдано повторно.

Example:
    source = Subject()
    control = Subject()

    source.pipe(take_toggle(control)).subscribe(on_next=print)

    source.on_next(1)       # prints 1
    source.on_next(2)       # prints 2
    control.on_next(False)
    source.on_next(3)
    source.on_next(4)
    control.on_next(True)   # prints 4 (replay)
    source.on_next(5)       # prints 5

Порядок подписки: source, затем control. Control, выдающий значение
синхронно при подписке (BehaviorSubject), видит last_value для значения,
которое source выдал синхронно при своей подписке.
"""

import logging
import reprlib
from typing import Any, Callable, Optional, TypeVar

from src.core.streams import Observable, Observer, Subscription
from src.toggle.config import TakeToggleConfig
from src.toggle.state_machine import ToggleStateMachine, ToggleTransitionResult
from src.utils.logger import get_logger


T = TypeVar("T")

logger = get_logger(__name__, default_level="WARNING")


def _describe(value: Any) -> str:
    """Короткое представление значения для DEBUG лога; repr значения может упасть."""
    try:
        return reprlib.repr(value)
    except Exception:
        return f"<{type(value).__name__}>"


def take_toggle(
    control: Observable[bool],
    config: Optional[TakeToggleConfig] = None,
    **overrides: Any,
) -> Callable[[Observable[T]], Observable[T]]:
    """
    Gate оператор: source → source, отфильтрованный control потоком.

    Args:
        control: поток bool значений, переключающий gate
        config: конфигурация (по умолчанию TakeToggleConfig())
        **overrides: отдельные опции поверх config
            (replay_last_on_open, start_open, close_on_control_complete,
            control_error_policy)

    Returns:
        Функция Observable[T] → Observable[T]

    Raises:
        pydantic.ValidationError: невалидная опция в overrides
    """
    resolved = (config or TakeToggleConfig()).merged(**overrides)

    def operator(source: Observable[T]) -> Observable[T]:
        def subscribe(observer: Observer) -> Subscription:
            machine = ToggleStateMachine(resolved, resolved.resolve_start_open(control))
            subscription = Subscription()
            torn_down = False

            logger.debug(f"Subscribed, initial position={machine.position.value}")

            def teardown() -> None:
                nonlocal torn_down
                if not torn_down:
                    torn_down = True
                    logger.debug(f"Teardown at position={machine.position.value}")

            # Флаг выставляется раньше освобождения upstream подписок
            subscription.add(teardown)

            def apply(result: ToggleTransitionResult) -> None:
                if result.transition_occurred:
                    logger.debug(f"{result.transition_reason}: {result.details}")
                if result.emit and logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Emitting %s", _describe(result.value))
                if result.emit and not torn_down:
                    observer.on_next(result.value)

            # 1. Source
            def on_source_error(error: Exception) -> None:
                result = machine.on_source_error()
                if result.terminate:
                    logger.info(f"{result.details}: {error!r}")
                    observer.on_error(error)

            def on_source_completed() -> None:
                result = machine.on_source_completed()
                if result.terminate:
                    logger.info(result.details)
                    observer.on_completed()

            source_subscription = source.subscribe(
                on_next=lambda value: apply(machine.on_source_next(value)),
                on_error=on_source_error,
                on_completed=on_source_completed,
            )
            subscription.add(source_subscription)

            if machine.state.is_terminated or torn_down:
                return subscription

            # 2. Control
            def on_control_error(error: Exception) -> None:
                result = machine.on_control_error()
                if result.terminate:
                    logger.info(f"{result.details}: {error!r}")
                    source_subscription.unsubscribe()
                    observer.on_error(error)
                else:
                    logger.warning(f"{result.details}: {error!r}")

            def on_control_completed() -> None:
                result = machine.on_control_completed()
                if result.terminate:
                    logger.info(result.details)
                    source_subscription.unsubscribe()
                    observer.on_completed()
                else:
                    logger.debug(result.details)

            control_subscription = control.subscribe(
                on_next=lambda flag: apply(machine.on_control_next(flag)),
                on_error=on_control_error,
                on_completed=on_control_completed,
            )
            subscription.add(control_subscription)

            return subscription

        return Observable(subscribe)

    return operator
