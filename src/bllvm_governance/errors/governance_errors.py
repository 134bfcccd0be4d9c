"""GovernanceError — base exception class for all governance module errors."""

from __future__ import annotations


class GovernanceError(Exception):
    """Base error for the governance module.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "governance-error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ModuleError(GovernanceError):
    """Connection, subscription or lifecycle failure of the module itself."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Module error: {message}", code="module-error")


class WebhookError(GovernanceError):
    """Error building or preparing a webhook notification."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Webhook error: {message}", code="webhook-error")


class EconomicNodeError(GovernanceError):
    """Error raised by the economic node registry."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Economic node error: {message}", code="economic-node-error")


class ConfigError(GovernanceError):
    """Invalid or missing configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Configuration error: {message}", code="config-error")
