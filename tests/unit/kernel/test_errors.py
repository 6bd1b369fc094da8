"""Unit tests for kernel error hierarchy."""

from __future__ import annotations

import json
import re

import pytest

from logmask.config import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from logmask.kernel.errors import (
    BaseError,
    FieldAccessError,
    InvalidPatternError,
    MaskingError,
    UnknownStrategyError,
    UnresolvedAnnotationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"
        assert err.detail == {}

    def test_code_is_class_level(self) -> None:
        assert BaseError("m").code == "logmask_error"
        assert BaseError.code == "logmask_error"

    def test_to_dict_basic(self) -> None:
        assert BaseError("m").to_dict() == {"error": "BaseError", "code": "logmask_error", "message": "m"}

    def test_extra_detail_is_kept(self) -> None:
        assert BaseError("m", key="val").to_dict()["detail"] == {"key": "val"}

    def test_to_dict_includes_cause(self) -> None:
        err = BaseError("wrapper", cause=ValueError("original"))
        assert err.to_dict()["cause"] == "ValueError: original"

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        assert BaseError("wrap", cause=cause).__cause__ is cause

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", x=1)))
        assert parsed == {
            "error": "BaseError",
            "code": "logmask_error",
            "message": "oops",
            "detail": {"x": 1},
        }

    def test_repr(self) -> None:
        assert repr(BaseError("m")) == "BaseError('m')"


class TestDetailContract:
    def test_detail_follows_declared_order(self) -> None:
        err = InvalidPatternError("Voucher", "code", "(a")
        assert list(err.to_dict()["detail"]) == ["type", "field", "pattern"]
        assert list(json.loads(str(err))["detail"]) == ["type", "field", "pattern"]

    def test_missing_declared_detail_rejected(self) -> None:
        class StrictError(BaseError):
            code = "strict"
            detail_keys = ("type",)

        with pytest.raises(TypeError, match="type"):
            StrictError("m")
        assert StrictError("m", type="T").to_dict()["detail"] == {"type": "T"}


class TestMaskingErrors:
    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (MaskingError("m"), "masking_error"),
            (InvalidPatternError("T", "f", "("), "invalid_pattern"),
            (FieldAccessError("T", "f"), "field_access_error"),
            (UnknownStrategyError("SSN"), "unknown_strategy"),
            (UnresolvedAnnotationError("T", "f", "Annotated[X, m]"), "unresolved_annotation"),
        ],
    )
    def test_codes_and_hierarchy(self, err: MaskingError, code: str) -> None:
        assert err.code == code
        assert isinstance(err, MaskingError)
        assert isinstance(err, BaseError)

    def test_invalid_pattern_detail(self) -> None:
        cause = re.error("missing )")
        err = InvalidPatternError("Voucher", "code", "(a", cause=cause)
        assert err.detail == {"type": "Voucher", "field": "code", "pattern": "(a"}
        assert err.message == "Invalid masking pattern '(a' on Voucher.code"
        assert err.__cause__ is cause
        assert json.loads(str(err))["detail"]["field"] == "code"

    def test_field_access_detail(self) -> None:
        err = FieldAccessError("Token", "value")
        assert err.detail == {"type": "Token", "field": "value"}
        assert (err.type_name, err.field_name) == ("Token", "value")

    def test_unknown_strategy_detail(self) -> None:
        err = UnknownStrategyError(42)
        assert err.strategy == 42
        assert err.detail == {"strategy": "42"}


class TestConfigErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(MissingRequiredSettingError, ConfigError)
        assert issubclass(InvalidSettingValueError, ConfigError)
        assert issubclass(ConfigError, BaseError)

    def test_missing_required(self) -> None:
        err = MissingRequiredSettingError("APP_NAME")
        assert err.code == "missing_required_setting"
        assert err.detail == {"setting": "APP_NAME"}

    def test_invalid_value(self) -> None:
        err = InvalidSettingValueError("APP_PORT", "x", "expected int")
        assert err.code == "invalid_setting_value"
        assert err.detail == {"setting": "APP_PORT", "reason": "expected int"}
        assert "'x'" in err.message
