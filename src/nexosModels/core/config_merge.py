"""Core configuration merge functionality.

This module loads the opencode configuration file, merges freshly resolved
models into the Nexos AI provider block, and writes the result back. Only
the provider block owned by this tool is replaced; every other field of the
configuration is carried over untouched.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from nexosModels.core.log_config import logger
from nexosModels.nexos_types.config import OpenCodeConfig, ProviderConfig
from nexosModels.nexos_types.models import ModelCost, ResolvedModel

CONFIG_SCHEMA_URL = "https://opencode.ai/config.json"
PROVIDER_KEY = "nexos-ai"
PROVIDER_NPM = "@crazy-goat/nexos-provider"
PROVIDER_NAME = "Nexos AI"
PROVIDER_TIMEOUT_MS = 300000
REQUIRED_ENV_VAR = "NEXOS_API_KEY"


def default_config_path() -> Path:
    """Return the default location of the opencode configuration file."""
    return Path.home() / ".config" / "opencode" / "opencode.json"


def as_object(value: Any) -> Optional[Dict[str, Any]]:
    """Return ``value`` if it is a JSON object, otherwise None."""
    return value if isinstance(value, dict) else None


def unique_strings(values: Optional[Iterable[Any]]) -> List[str]:
    """De-duplicate strings preserving first-seen order; non-strings are dropped."""
    out: List[str] = []
    for value in values or []:
        if not isinstance(value, str) or value in out:
            continue
        out.append(value)
    return out


def _existing_provider(config: Mapping[str, Any]) -> Dict[str, Any]:
    providers = as_object(config.get("provider")) or {}
    return as_object(providers.get(PROVIDER_KEY)) or {}


def load_existing_config(path: Union[str, Path]) -> OpenCodeConfig:
    """Load the configuration file at ``path``.

    A missing, unreadable or malformed file is not an error: an empty
    configuration is returned so generation can proceed.

    Args:
        path: Path to the opencode configuration file.

    Returns:
        The parsed configuration, or an empty dict.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"No usable configuration at {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.debug(f"Ignoring configuration at {path}: top level is not an object")
        return {}
    return data


def get_existing_model_costs(config: Mapping[str, Any]) -> Dict[str, ModelCost]:
    """Collect the costs already set on provider models, keyed by model name.

    Costs that are not objects (hand-edited damage) are ignored.
    """
    models = as_object(_existing_provider(config).get("models")) or {}
    costs: Dict[str, ModelCost] = {}
    for name, model in models.items():
        cost = as_object((as_object(model) or {}).get("cost"))
        if cost:
            costs[name] = cost
    return costs


def build_provider_config(
    existing_config: Mapping[str, Any],
    models: Mapping[str, ResolvedModel],
    api_base_url: str,
) -> ProviderConfig:
    """Build the Nexos AI provider block.

    Fields the user already set (``npm``, ``name``, ``options.baseURL``,
    ``options.timeout`` and any unknown keys) are kept. The models map is
    always replaced by ``models``; previously written models that the API no
    longer lists are dropped.

    Args:
        existing_config: The configuration loaded from disk.
        models: Freshly resolved models, in display order.
        api_base_url: Base URL of the API the models were fetched from.

    Returns:
        The new provider block.
    """
    existing = _existing_provider(existing_config)
    existing_options = as_object(existing.get("options")) or {}
    timeout = existing_options.get("timeout")

    return {
        **existing,
        "npm": existing.get("npm") or PROVIDER_NPM,
        "name": existing.get("name") or PROVIDER_NAME,
        "env": unique_strings([REQUIRED_ENV_VAR, *unique_strings(existing.get("env"))]),
        "options": {
            **existing_options,
            "baseURL": existing_options.get("baseURL") or f"{api_base_url.rstrip('/')}/",
            "timeout": timeout if timeout is not None else PROVIDER_TIMEOUT_MS,
        },
        "models": dict(models),
    }


def build_config(
    existing_config: Mapping[str, Any], provider_config: ProviderConfig
) -> OpenCodeConfig:
    """Return a copy of ``existing_config`` with the provider block installed."""
    config: OpenCodeConfig = {"$schema": CONFIG_SCHEMA_URL}
    config.update(existing_config)
    config["$schema"] = CONFIG_SCHEMA_URL

    providers = dict(as_object(existing_config.get("provider")) or {})
    providers[PROVIDER_KEY] = provider_config
    config["provider"] = providers
    return config


def save_config(config: Mapping[str, Any], path: Union[str, Path]) -> None:
    """Write ``config`` to ``path`` as indented JSON, creating parent directories.

    Raises:
        OSError: If the file cannot be written.
    """
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(json.dumps(config, indent=2, ensure_ascii=False) + "\n")
    logger.info(f"Configuration written to {config_path}")
