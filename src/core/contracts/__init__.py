"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    TakeToggleConfigValidator,
    validate_take_toggle_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TakeToggleConfigValidator",
    # Functions
    "validate_take_toggle_config",
]
