"""Static registry of models with known metadata.

The registry maps exact display names (as reported by the Nexos AI catalog)
to their limits, costs, variants and default options. It is built once at
start-up and handed to the resolver, processor and editors. Every read
returns a deep copy, so callers may mutate what they get back.
"""

import copy
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from nexosModels.nexos_types.models import ModelCost, ModelEntry

_CLAUDE_VARIANTS = {
    "low": {"thinking": {"type": "enabled", "budgetTokens": 1024}},
    "high": {"thinking": {"type": "enabled", "budgetTokens": 32000}},
}

_GPT_REASONING_VARIANTS = {
    "low": {"reasoningEffort": "low"},
    "high": {"reasoningEffort": "high"},
}

# All prices are in USD per 1 million tokens
SUPPORTED_MODELS: Mapping[str, ModelEntry] = {
    # Anthropic Claude
    "Claude Opus 4.5": {
        "limit": {"context": 200000, "output": 64000},
        "cost": {"input": 5, "output": 25, "cache_read": 0.5, "cache_write": 6.25},
        "variants": _CLAUDE_VARIANTS,
    },
    "Claude Opus 4.6": {
        "limit": {"context": 200000, "output": 128000},
        "cost": {"input": 5, "output": 25, "cache_read": 0.5, "cache_write": 6.25},
        "variants": _CLAUDE_VARIANTS,
    },
    "Claude Sonnet 4.5": {
        "limit": {"context": 200000, "output": 64000},
        "cost": {"input": 3, "output": 15, "cache_read": 0.3, "cache_write": 3.75},
        "variants": _CLAUDE_VARIANTS,
    },
    # OpenAI GPT with reasoning
    "GPT 5.2": {
        "limit": {"context": 400000, "output": 128000},
        "cost": {"input": 1.75, "output": 14.0, "cache_read": 0.175},
        "variants": _GPT_REASONING_VARIANTS,
        "options": {"reasoningEffort": "none"},
    },
    "GPT 5": {
        "limit": {"context": 400000, "output": 128000},
        "cost": {"input": 1.25, "output": 10.0, "cache_read": 0.125},
        "variants": _GPT_REASONING_VARIANTS,
        "options": {"reasoningEffort": "none"},
    },
    # Google Gemini
    "Gemini 2.5 Pro": {
        "limit": {"context": 1048576, "output": 65536},
        "cost": {"input": 1.25, "output": 10.0, "cache_read": 0.125},
        "variants": {
            "low": {"thinking": {"type": "enabled", "budgetTokens": 1024}},
            "high": {"thinking": {"type": "enabled", "budgetTokens": 32768}},
        },
    },
    "Gemini 2.5 Flash": {
        "limit": {"context": 1048576, "output": 65536},
        "cost": {"input": 0.3, "output": 2.5, "cache_read": 0.03},
        "variants": {
            "low": {"thinking": {"type": "enabled", "budgetTokens": 1024}},
            "high": {"thinking": {"type": "enabled", "budgetTokens": 24576}},
        },
    },
    # Moonshot AI Kimi
    "Kimi K2.5": {
        "limit": {"context": 256000, "output": 64000},
        "cost": {"input": 0.6, "output": 3.0, "cache_read": 0.1},
    },
}

# Applied to models that are neither in the registry nor priced by the user.
# Uses Claude Opus 4.6 pricing as reference.
DEFAULT_FALLBACK_COSTS: ModelCost = {
    "input": 5,
    "output": 25,
    "cache_read": 0.5,
    "cache_write": 6.25,
}

# Models whose names start with these prefixes do not support tool use
SKIPPED_MODEL_PREFIXES: Tuple[str, ...] = ("Gemini 3",)


def clone(value: Any) -> Any:
    """Return an independent deep copy of ``value`` (None stays None)."""
    return None if value is None else copy.deepcopy(value)


class ModelRegistry:
    """Read-only lookup table of model metadata keyed by display name."""

    def __init__(
        self,
        entries: Mapping[str, ModelEntry],
        fallback_cost: ModelCost = DEFAULT_FALLBACK_COSTS,
        skipped_prefixes: Iterable[str] = SKIPPED_MODEL_PREFIXES,
    ) -> None:
        self._entries: Mapping[str, ModelEntry] = MappingProxyType(copy.deepcopy(dict(entries)))
        self._fallback_cost: ModelCost = copy.deepcopy(fallback_cost)
        self._skipped_prefixes: Tuple[str, ...] = tuple(skipped_prefixes)

    @classmethod
    def default(cls) -> "ModelRegistry":
        """Build the registry from the built-in model table."""
        return cls(SUPPORTED_MODELS, DEFAULT_FALLBACK_COSTS, SKIPPED_MODEL_PREFIXES)

    def lookup(self, name: str) -> Optional[ModelEntry]:
        """Return a copy of the entry for ``name``, or None if unknown."""
        return clone(self._entries.get(name))

    def is_known(self, name: str) -> bool:
        return name in self._entries

    @property
    def fallback_cost(self) -> ModelCost:
        return clone(self._fallback_cost)

    @property
    def skipped_prefixes(self) -> Tuple[str, ...]:
        return self._skipped_prefixes

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
