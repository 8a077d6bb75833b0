"""
TakeToggleConfig — конфигурация gate оператора

Immutable Pydantic модель. Все опции независимы и имеют defaults:
- replay_last_on_open (True) — replay последнего source значения при CLOSED → OPEN
- start_open (None) — позиция до первого control события;
  None = текущее значение control потока (если есть HasCurrentValue), иначе True
- close_on_control_complete (True) — завершение control завершает downstream
- control_error_policy (PROPAGATE) — обработка ошибки control потока

Dict / JSON конфигурация проверяется контрактом take_toggle_config
(src/core/contracts/schema/take_toggle_config.json).
"""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field

from src.core.contracts import validate_take_toggle_config
from src.core.streams import HasCurrentValue, Observable


class ControlErrorPolicy(str, Enum):
    """
    Обработка ошибки control потока.

    PROPAGATE — терминально: ошибка уходит downstream, обе подписки освобождаются
    IGNORE — ошибка логируется, gate замораживается в текущей позиции,
             source продолжает поступать
    """

    PROPAGATE = "PROPAGATE"
    IGNORE = "IGNORE"


class TakeToggleConfig(BaseModel):
    """Конфигурация take_toggle."""

    replay_last_on_open: bool = Field(
        default=True,
        strict=True,
        description="Replay последнего source значения при переходе CLOSED → OPEN",
    )
    start_open: bool | None = Field(
        default=None,
        strict=True,
        description="Позиция gate до первого control события (None = из control потока)",
    )
    close_on_control_complete: bool = Field(
        default=True,
        strict=True,
        description="Завершение control потока завершает downstream",
    )
    control_error_policy: ControlErrorPolicy = Field(
        default=ControlErrorPolicy.PROPAGATE,
        description="Обработка ошибки control потока",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    def resolve_start_open(self, control: Observable[bool]) -> bool:
        """
        Начальная позиция gate для конкретного control потока.

        Порядок:
        1. Явный start_open
        2. Текущее значение control (capability HasCurrentValue)
        3. True
        """
        if self.start_open is not None:
            return self.start_open

        if isinstance(control, HasCurrentValue):
            return bool(control.value)

        return True

    def merged(self, **overrides: Any) -> "TakeToggleConfig":
        """Копия с overrides, с полной повторной валидацией."""
        if not overrides:
            return self
        return type(self).model_validate({**self.model_dump(), **overrides})

    @classmethod
    def from_contract(cls, data: Dict[str, Any]) -> "TakeToggleConfig":
        """
        Конфигурация из dict (например распарсенного JSON).

        Raises:
            jsonschema.ValidationError: данные не соответствуют контракту
        """
        validate_take_toggle_config(data)
        options = {key: value for key, value in data.items() if key != "schema_version"}
        return cls.model_validate(options)
