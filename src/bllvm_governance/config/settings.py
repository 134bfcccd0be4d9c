"""Module settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Constructor arguments and environment variables
   (prefix: ``BLLVM_GOVERNANCE_``, nested via ``__``)
2. Node-provided environment variables (``MODULE_NAME``,
   ``BLLVM_MODULE_SOCKET``, ``MODULE_SOCKET_DIR``)
3. YAML config file (``config_path`` / ``BLLVM_GOVERNANCE_CONFIG_PATH``)
4. Defaults defined here
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Self

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bllvm_governance.errors.governance_errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_MODULE_ID = "bllvm-governance"
DEFAULT_SOCKET_PATH = Path("data/modules/modules.sock")
DEFAULT_DATA_DIR = Path("data/modules/bllvm-governance")

# Flat keys used by the node's module config map
WEBHOOK_URL_KEY = "governance.webhook_url"
NODE_ID_KEY = "governance.node_id"


class GovernanceSettings(BaseSettings):
    """Webhook notification settings."""

    model_config = SettingsConfigDict(
        env_prefix="BLLVM_GOVERNANCE_GOVERNANCE__",
        case_sensitive=False,
    )

    webhook_url: str | None = Field(
        default=None,
        description="Webhook endpoint; notifications are disabled when unset",
    )
    node_id: str | None = Field(
        default=None,
        description="Identity sent as node_id / contributor_id",
    )
    webhook_timeout: float = Field(default=10.0, gt=0)

    @field_validator("webhook_url", "node_id", mode="before")
    @classmethod
    def _empty_is_none(cls, value: Any) -> Any:
        """Treat empty strings (e.g. ``VAR=``) as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.

    Raises:
        ConfigError: If the file is not valid YAML.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {p}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def _node_env_defaults() -> dict[str, Any]:
    """Settings the node passes to every module through its own env vars."""
    defaults: dict[str, Any] = {}
    module_name = os.environ.get("MODULE_NAME")
    if module_name:
        defaults["module_id"] = module_name
    socket = os.environ.get("BLLVM_MODULE_SOCKET")
    socket_dir = os.environ.get("MODULE_SOCKET_DIR")
    if socket:
        defaults["socket_path"] = socket
    elif socket_dir:
        defaults["socket_path"] = str(Path(socket_dir) / "modules.sock")
    return defaults


class ModuleSettings(BaseSettings):
    """Top-level module configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BLLVM_GOVERNANCE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    config_path: str = ""

    module_id: str = DEFAULT_MODULE_ID
    socket_path: Path = DEFAULT_SOCKET_PATH
    data_dir: Path = DEFAULT_DATA_DIR

    governance: GovernanceSettings = Field(default_factory=GovernanceSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_defaults(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer node env vars and the YAML file under explicit values."""
        layers = [_node_env_defaults()]
        config_path = values.get("config_path", "")
        if config_path:
            layers.append(_load_yaml(config_path))
        for layer in layers:
            for key, val in layer.items():
                if key not in values or values[key] is None:
                    values[key] = val
                elif isinstance(val, dict) and isinstance(values.get(key), dict):
                    # Merge nested dicts: the lower layer fills in missing keys
                    values[key] = {**val, **values[key]}
        return values

    @property
    def webhook_enabled(self) -> bool:
        """Whether a webhook destination is configured."""
        return self.governance.webhook_url is not None

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct settings loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))

    @classmethod
    def from_mapping(cls, config: Mapping[str, str], **overrides: Any) -> Self:
        """Construct settings from the node's flat ``governance.*`` key map.

        Unknown keys are ignored.
        """
        governance: dict[str, Any] = {}
        if WEBHOOK_URL_KEY in config:
            governance["webhook_url"] = config[WEBHOOK_URL_KEY]
        if NODE_ID_KEY in config:
            governance["node_id"] = config[NODE_ID_KEY]
        return cls(governance=GovernanceSettings(**governance), **overrides)
