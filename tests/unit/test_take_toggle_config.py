"""
Tests for TakeToggleConfig и take_toggle_config контракта

Покрывает:
- Defaults и immutability (frozen=True)
- Strict bool валидация (Pydantic)
- Разрешение start_open из control потока
- merged() overrides
- JSON Schema контракт (jsonschema)
"""

import json

import pytest
from jsonschema import ValidationError as ContractValidationError
from pydantic import ValidationError

from src.core.contracts import (
    SchemaLoader,
    TakeToggleConfigValidator,
    validate_take_toggle_config,
)
from src.core.streams import BehaviorSubject, Observable, Subject
from src.toggle import ControlErrorPolicy, TakeToggleConfig, take_toggle


# =============================================================================
# PYDANTIC MODEL
# =============================================================================


class TestTakeToggleConfig:
    """Тесты модели конфигурации."""

    def test_defaults(self):
        config = TakeToggleConfig()

        assert config.replay_last_on_open is True
        assert config.start_open is None
        assert config.close_on_control_complete is True
        assert config.control_error_policy == ControlErrorPolicy.PROPAGATE

    def test_frozen(self):
        config = TakeToggleConfig()

        with pytest.raises(ValidationError):
            config.replay_last_on_open = False

    def test_extra_forbidden(self):
        with pytest.raises(ValidationError):
            TakeToggleConfig(emit_last_value=True)

    @pytest.mark.parametrize("value", ["yes", 1, "true"])
    def test_strict_bool(self, value):
        with pytest.raises(ValidationError):
            TakeToggleConfig(replay_last_on_open=value)

    def test_policy_from_string(self):
        config = TakeToggleConfig(control_error_policy="IGNORE")

        assert config.control_error_policy == ControlErrorPolicy.IGNORE

    def test_invalid_policy(self):
        with pytest.raises(ValidationError):
            TakeToggleConfig(control_error_policy="RETRY")

    def test_merged_overrides(self):
        base = TakeToggleConfig(replay_last_on_open=False)

        merged = base.merged(start_open=False)

        assert merged.replay_last_on_open is False
        assert merged.start_open is False
        assert base.start_open is None

    def test_merged_without_overrides_returns_self(self):
        config = TakeToggleConfig()

        assert config.merged() is config

    def test_merged_validates(self):
        with pytest.raises(ValidationError):
            TakeToggleConfig().merged(start_open="closed")

    def test_operator_rejects_invalid_override(self):
        with pytest.raises(ValidationError):
            take_toggle(Subject(), unknown_option=True)

    def test_json_roundtrip(self):
        config = TakeToggleConfig(start_open=False, control_error_policy=ControlErrorPolicy.IGNORE)

        restored = TakeToggleConfig.model_validate_json(config.model_dump_json())

        assert restored == config


class TestResolveStartOpen:
    """Разрешение начальной позиции gate."""

    def test_plain_stream_defaults_open(self):
        assert TakeToggleConfig().resolve_start_open(Subject()) is True
        assert TakeToggleConfig().resolve_start_open(Observable.never()) is True

    @pytest.mark.parametrize("held", [True, False])
    def test_held_value_used(self, held):
        assert TakeToggleConfig().resolve_start_open(BehaviorSubject(held)) is held

    def test_explicit_value_wins(self):
        config = TakeToggleConfig(start_open=True)

        assert config.resolve_start_open(BehaviorSubject(False)) is True

    def test_capability_not_type(self):
        """Любой поток с атрибутом value считается HasCurrentValue."""

        class HeldStream(Observable):
            value = False

        assert TakeToggleConfig().resolve_start_open(HeldStream()) is False


# =============================================================================
# JSON SCHEMA CONTRACT
# =============================================================================


class TestTakeToggleConfigContract:
    """Тесты take_toggle_config JSON Schema контракта."""

    def test_schema_is_valid(self):
        schema = SchemaLoader().load_schema("take_toggle_config")

        assert schema["title"] == "take_toggle_config"

    def test_schema_cached(self):
        loader = SchemaLoader()

        assert loader.load_schema("take_toggle_config") is loader.load_schema("take_toggle_config")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_empty_config_valid(self):
        validate_take_toggle_config({})

    def test_full_config_valid(self):
        validate_take_toggle_config(
            {
                "replay_last_on_open": False,
                "start_open": None,
                "close_on_control_complete": False,
                "control_error_policy": "IGNORE",
            }
        )

    def test_unknown_field_rejected(self):
        with pytest.raises(ContractValidationError):
            validate_take_toggle_config({"emitLastValue": True})

    def test_wrong_type_rejected(self):
        validator = TakeToggleConfigValidator()

        assert not validator.is_valid({"start_open": "yes"})
        assert len(list(validator.iter_errors({"start_open": "yes", "control_error_policy": "RETRY"}))) == 2

    def test_from_contract(self):
        data = json.loads('{"replay_last_on_open": false, "control_error_policy": "IGNORE"}')

        config = TakeToggleConfig.from_contract(data)

        assert config.replay_last_on_open is False
        assert config.control_error_policy == ControlErrorPolicy.IGNORE
        assert config.start_open is None

    def test_from_contract_rejects_invalid(self):
        with pytest.raises(ContractValidationError):
            TakeToggleConfig.from_contract({"close_on_control_complete": "no"})

    def test_schema_version_accepted_and_stripped(self):
        config = TakeToggleConfig.from_contract({"schema_version": "1", "start_open": False})

        assert config.start_open is False
        assert "schema_version" not in config.model_dump()

    def test_unknown_schema_version_rejected(self):
        with pytest.raises(ContractValidationError):
            TakeToggleConfig.from_contract({"schema_version": "2"})

    def test_schema_version_not_a_model_option(self):
        with pytest.raises(ValidationError):
            TakeToggleConfig.model_validate({"schema_version": "1"})
