"""
Subscription — handle для teardown подписки

Subscription владеет одной teardown-функцией и набором дочерних teardown
с тем же временем жизни. unsubscribe() идемпотентен: повторный вызов — no-op.

Добавление дочернего teardown в уже закрытую подписку выполняет его сразу,
поэтому порядок "подписаться → связать" безопасен даже если upstream
завершился синхронно во время subscribe.
"""

from typing import Callable, List, Optional, Union


Teardown = Union["Subscription", Callable[[], None]]


class UnsubscriptionError(Exception):
    """Одна или несколько teardown-функций упали во время unsubscribe()."""

    def __init__(self, errors: List[BaseException]):
        self.errors = list(errors)
        summary = "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        super().__init__(f"{len(self.errors)} error(s) during unsubscribe: {summary}")


class Subscription:
    """
    Teardown handle с дочерними подписками.

    Порядок teardown:
    1. Собственная teardown-функция
    2. Дочерние teardown в порядке добавления

    Ошибки teardown не прерывают остальные — они собираются и поднимаются
    одним UnsubscriptionError после полного освобождения ресурсов.
    """

    def __init__(self, teardown: Optional[Callable[[], None]] = None):
        self._teardown = teardown
        self._children: List[Teardown] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def add(self, teardown: Optional[Teardown]) -> None:
        """
        Связать дочерний teardown с временем жизни этой подписки.

        Args:
            teardown: Subscription, callable или None (игнорируется)
        """
        if teardown is None or teardown is self:
            return

        if self._closed:
            _run_teardown(teardown)
            return

        self._children.append(teardown)

    def remove(self, teardown: Teardown) -> None:
        """Отвязать дочерний teardown без его выполнения."""
        if teardown in self._children:
            self._children.remove(teardown)

    def unsubscribe(self) -> None:
        """Освободить подписку и все дочерние. Идемпотентно."""
        if self._closed:
            return
        self._closed = True

        errors: List[BaseException] = []

        teardown, self._teardown = self._teardown, None
        if teardown is not None:
            try:
                teardown()
            except Exception as e:
                errors.append(e)

        children, self._children = self._children, []
        for child in children:
            try:
                _run_teardown(child)
            except UnsubscriptionError as e:
                errors.extend(e.errors)
            except Exception as e:
                errors.append(e)

        if errors:
            raise UnsubscriptionError(errors)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


def _run_teardown(teardown: Teardown) -> None:
    if isinstance(teardown, Subscription):
        teardown.unsubscribe()
    else:
        teardown()
