"""Tests for governance error classes."""

from __future__ import annotations

import pytest

from bllvm_governance.errors.governance_errors import (
    ConfigError,
    EconomicNodeError,
    GovernanceError,
    ModuleError,
    WebhookError,
)


class TestGovernanceError:
    def test_default_attributes(self) -> None:
        err = GovernanceError("something broke")
        assert str(err) == "something broke"
        assert err.message == "something broke"
        assert err.code == "governance-error"

    def test_custom_code(self) -> None:
        err = GovernanceError("bad", code="bad-thing")
        assert err.code == "bad-thing"

    def test_is_exception(self) -> None:
        with pytest.raises(GovernanceError, match="boom"):
            raise GovernanceError("boom")


class TestSubclasses:
    @pytest.mark.parametrize(
        ("cls", "prefix", "code"),
        [
            (ModuleError, "Module error: ", "module-error"),
            (WebhookError, "Webhook error: ", "webhook-error"),
            (EconomicNodeError, "Economic node error: ", "economic-node-error"),
            (ConfigError, "Configuration error: ", "config-error"),
        ],
    )
    def test_message_and_code(self, cls: type[GovernanceError], prefix: str, code: str) -> None:
        err = cls("details")
        assert isinstance(err, GovernanceError)
        assert str(err) == f"{prefix}details"
        assert err.code == code

    def test_catch_as_base(self) -> None:
        with pytest.raises(GovernanceError):
            raise WebhookError("failed")
