"""Stream runtime — синхронные push-based потоки, на которых построен gate."""

from src.core.streams.observable import Observable, Operator, SafeSubscriber
from src.core.streams.observer import (
    AnonymousObserver,
    HasCurrentValue,
    Observer,
    default_error,
)
from src.core.streams.subjects import BehaviorSubject, Subject
from src.core.streams.subscription import Subscription, UnsubscriptionError

__all__ = [
    # Observer
    "Observer",
    "AnonymousObserver",
    "HasCurrentValue",
    "default_error",
    # Subscription
    "Subscription",
    "UnsubscriptionError",
    # Observable
    "Observable",
    "Operator",
    "SafeSubscriber",
    # Subjects
    "Subject",
    "BehaviorSubject",
]
