"""Per-model metadata resolution.

Given a display name, the resolver decides which limit, cost, variants and
options apply to a model by consulting, in order, the user's existing
configuration, the model registry, and finally the catalog data or built-in
defaults.
"""

from typing import Any, Dict, Mapping, Optional

from nexosModels.core.log_config import logger
from nexosModels.core.registry import ModelRegistry
from nexosModels.nexos_types.models import ModelCost, ModelLimit, ModelVariants

DEFAULT_CONTEXT_WINDOW = 128000
DEFAULT_MAX_OUTPUT_TOKENS = 64000


class ModelResolver:
    """Resolves model metadata against an injected registry."""

    def __init__(self, registry: ModelRegistry) -> None:
        self.registry = registry

    def resolve_limit(
        self, name: str, api_model: Optional[Mapping[str, Any]] = None
    ) -> ModelLimit:
        """Return the token limits for ``name``.

        A registry-defined limit wins. Otherwise the limit is taken from the
        catalog entry's ``context_window``/``max_output_tokens``, with
        missing values defaulting to 128000/64000, and a warning is logged.
        """
        entry = self.registry.lookup(name)
        if entry and entry.get("limit"):
            return entry["limit"]

        api_model = api_model or {}
        context = api_model.get("context_window") or DEFAULT_CONTEXT_WINDOW
        output = api_model.get("max_output_tokens") or DEFAULT_MAX_OUTPUT_TOKENS
        logger.warning(
            f'No predefined limits for model "{name}", using defaults (context={context}, output={output})'
        )
        return {"context": context, "output": output}

    def resolve_cost(
        self, name: str, existing_costs: Optional[Mapping[str, ModelCost]] = None
    ) -> ModelCost:
        """Return the cost for ``name``; never None.

        A cost the user already set in the configuration is returned as-is,
        without back-filling missing fields from the registry.
        """
        if existing_costs and existing_costs.get(name):
            return existing_costs[name]

        entry = self.registry.lookup(name)
        if entry and entry.get("cost"):
            return entry["cost"]

        return self.registry.fallback_cost

    def resolve_variants(self, name: str) -> Optional[ModelVariants]:
        entry = self.registry.lookup(name)
        return entry.get("variants") if entry else None

    def resolve_options(self, name: str) -> Optional[Dict[str, Any]]:
        entry = self.registry.lookup(name)
        return entry.get("options") if entry else None

    def is_excluded(self, name: str) -> bool:
        """True if ``name`` starts with one of the skipped prefixes."""
        return any(name.startswith(prefix) for prefix in self.registry.skipped_prefixes)

    def is_supported(self, name: str) -> bool:
        return self.registry.is_known(name)
