"""
Observable — push-based поток событий

Observable создаётся из subscribe-функции:
    subscribe_fn(observer) -> teardown | Subscription | None

Каждая подписка оборачивается в SafeSubscriber:
- после on_error / on_completed последующие события отбрасываются
- терминальное событие освобождает подписку (teardown)
- после unsubscribe() ни одно событие не доходит до observer

Dispatch синхронный и однопоточный: событие доставляется в том же
стеке вызовов, в котором upstream его произвёл.
"""

from functools import reduce
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar, Union

from src.core.streams.observer import (
    AnonymousObserver,
    Observer,
    OnCompleted,
    OnError,
    OnNext,
)
from src.core.streams.subscription import Subscription


T = TypeVar("T")

SubscribeFn = Callable[[Observer], Union[Subscription, Callable[[], None], None]]
Operator = Callable[["Observable[Any]"], "Observable[Any]"]


# =============================================================================
# SAFE SUBSCRIBER
# =============================================================================


class SafeSubscriber(Subscription, Generic[T]):
    """
    Observer + Subscription с гарантией грамматики событий.

    Грамматика: on_next* (on_error | on_completed)?
    """

    def __init__(self, destination: Observer):
        super().__init__()
        self._destination = destination
        self._stopped = False

    @property
    def is_stopped(self) -> bool:
        return self._stopped or self.closed

    def on_next(self, value: T) -> None:
        if self.is_stopped:
            return
        self._destination.on_next(value)

    def on_error(self, error: Exception) -> None:
        if self.is_stopped:
            return
        self._stopped = True
        try:
            self._destination.on_error(error)
        finally:
            self.unsubscribe()

    def on_completed(self) -> None:
        if self.is_stopped:
            return
        self._stopped = True
        try:
            self._destination.on_completed()
        finally:
            self.unsubscribe()


# =============================================================================
# OBSERVABLE
# =============================================================================


class Observable(Generic[T]):
    """Поток событий типа T."""

    def __init__(self, subscribe_fn: Optional[SubscribeFn] = None):
        self._subscribe_fn = subscribe_fn

    def subscribe(
        self,
        observer: Optional[Observer] = None,
        *,
        on_next: Optional[OnNext] = None,
        on_error: Optional[OnError] = None,
        on_completed: Optional[OnCompleted] = None,
    ) -> Subscription:
        """
        Подписка на поток.

        Args:
            observer: готовый Observer; если None — собирается из callbacks
            on_next: callback для значений
            on_error: callback для ошибки (без него ошибка поднимается)
            on_completed: callback для завершения

        Returns:
            Subscription для teardown
        """
        if observer is None:
            observer = AnonymousObserver(on_next, on_error, on_completed)

        subscriber: SafeSubscriber[T] = SafeSubscriber(observer)

        try:
            teardown = self._subscribe_core(subscriber)
        except Exception as e:
            if subscriber.is_stopped:
                raise
            subscriber.on_error(e)
            return subscriber

        subscriber.add(teardown)
        return subscriber

    def _subscribe_core(self, observer: Observer) -> Union[Subscription, Callable[[], None], None]:
        if self._subscribe_fn is None:
            return None
        return self._subscribe_fn(observer)

    def pipe(self, *operators: Operator) -> "Observable[Any]":
        """Применить операторы слева направо: source.pipe(a, b) == b(a(source))."""
        return reduce(lambda acc, op: op(acc), operators, self)

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> "Observable[T]":
        """Синхронно выдать все элементы iterable и завершиться."""

        def subscribe(observer: SafeSubscriber) -> None:
            for item in iterable:
                if observer.is_stopped:
                    return
                observer.on_next(item)
            observer.on_completed()

        return cls(subscribe)

    @classmethod
    def of(cls, *values: T) -> "Observable[T]":
        return cls.from_iterable(values)

    @classmethod
    def empty(cls) -> "Observable[Any]":
        return cls(lambda observer: observer.on_completed())

    @classmethod
    def throw(cls, error: Exception) -> "Observable[Any]":
        return cls(lambda observer: observer.on_error(error))

    @classmethod
    def never(cls) -> "Observable[Any]":
        return cls(lambda observer: None)
