"""
Observer — интерфейсы получателя событий потока

Push-based модель: поток доставляет три вида событий
- on_next(value)
- on_error(error)   — терминальное
- on_completed()    — терминальное

HasCurrentValue — отдельная capability для потоков, у которых есть
синхронно читаемое текущее значение (например BehaviorSubject).
Проверяется через isinstance(), а не по конкретному типу потока.
"""

from typing import Any, Callable, Generic, Optional, Protocol, TypeVar, runtime_checkable


T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

OnNext = Callable[[Any], None]
OnError = Callable[[Exception], None]
OnCompleted = Callable[[], None]


# =============================================================================
# PROTOCOLS
# =============================================================================


@runtime_checkable
class Observer(Protocol):
    """Получатель событий потока."""

    def on_next(self, value: Any) -> None: ...

    def on_error(self, error: Exception) -> None: ...

    def on_completed(self) -> None: ...


@runtime_checkable
class HasCurrentValue(Protocol[T_co]):
    """Поток с синхронно доступным текущим значением."""

    @property
    def value(self) -> T_co: ...


# =============================================================================
# CALLBACK OBSERVER
# =============================================================================


def default_error(error: Exception) -> None:
    """Необработанная ошибка потока не проглатывается."""
    raise error


class AnonymousObserver(Generic[T]):
    """
    Observer из набора callbacks.

    Отсутствующий on_error поднимает ошибку (default_error),
    отсутствующие on_next / on_completed — no-op.
    """

    def __init__(
        self,
        on_next: Optional[OnNext] = None,
        on_error: Optional[OnError] = None,
        on_completed: Optional[OnCompleted] = None,
    ):
        self._on_next = on_next
        self._on_error = on_error or default_error
        self._on_completed = on_completed

    def on_next(self, value: T) -> None:
        if self._on_next is not None:
            self._on_next(value)

    def on_error(self, error: Exception) -> None:
        self._on_error(error)

    def on_completed(self) -> None:
        if self._on_completed is not None:
            self._on_completed()
