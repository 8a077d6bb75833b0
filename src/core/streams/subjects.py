"""
Subjects — hot multicast потоки

Subject одновременно Observable и Observer: события, переданные в
on_next / on_error / on_completed, рассылаются всем текущим подписчикам.

BehaviorSubject дополнительно хранит текущее значение:
- value доступен синхронно (capability HasCurrentValue)
- каждый новый подписчик сразу получает текущее значение
"""

from typing import Callable, List, Optional, TypeVar

from src.core.streams.observable import Observable
from src.core.streams.observer import Observer


T = TypeVar("T")


class Subject(Observable[T]):
    """Multicast поток с ручным управлением событиями."""

    def __init__(self):
        super().__init__()
        self._observers: List[Observer] = []
        self._stopped = False
        self._error: Optional[Exception] = None

    @property
    def has_observers(self) -> bool:
        return len(self._observers) > 0

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def _subscribe_core(self, observer: Observer) -> Optional[Callable[[], None]]:
        if self._error is not None:
            observer.on_error(self._error)
            return None
        if self._stopped:
            observer.on_completed()
            return None

        self._observers.append(observer)
        return lambda: self._remove(observer)

    def _remove(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def on_next(self, value: T) -> None:
        if self._stopped:
            return
        # Snapshot: подписчики могут отписаться во время dispatch
        for observer in list(self._observers):
            observer.on_next(value)

    def on_error(self, error: Exception) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._error = error
        observers, self._observers = self._observers, []
        for observer in observers:
            observer.on_error(error)

    def on_completed(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        observers, self._observers = self._observers, []
        for observer in observers:
            observer.on_completed()


class BehaviorSubject(Subject[T]):
    """Subject с текущим значением, которое получает каждый новый подписчик."""

    def __init__(self, value: T):
        super().__init__()
        self._value = value

    @property
    def value(self) -> T:
        """Текущее значение. После on_error поднимает ошибку потока."""
        if self._error is not None:
            raise self._error
        return self._value

    def _subscribe_core(self, observer: Observer) -> Optional[Callable[[], None]]:
        teardown = super()._subscribe_core(observer)
        if self._stopped:
            return teardown

        try:
            observer.on_next(self._value)
        except Exception:
            self._remove(observer)
            raise
        return teardown

    def on_next(self, value: T) -> None:
        if self._stopped:
            return
        self._value = value
        super().on_next(value)
