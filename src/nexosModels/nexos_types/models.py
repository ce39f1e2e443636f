"""Type definitions for model metadata and resolved catalog entries."""

from typing import Any, Dict, List, TypedDict, NotRequired


class ModelLimit(TypedDict):
    context: int
    output: int


class ModelCost(TypedDict, total=False):
    """Prices in USD per 1M tokens."""
    input: float
    output: float
    cache_read: float
    cache_write: float


class ModelVariants(TypedDict):
    low: Dict[str, Any]
    high: Dict[str, Any]


class ModelEntry(TypedDict, total=False):
    """Registry record for a known model.

    A missing ``limit`` means the limit is derived from the catalog data.
    """
    limit: ModelLimit
    cost: ModelCost
    variants: ModelVariants
    options: Dict[str, Any]


class ResolvedModel(TypedDict):
    """Per-model object written under ``provider.<key>.models``."""
    name: str
    limit: ModelLimit
    options: NotRequired[Dict[str, Any]]
    variants: NotRequired[ModelVariants]
    cost: NotRequired[ModelCost]


class ProcessingResult(TypedDict):
    """Outcome of processing one catalog listing."""
    models: Dict[str, ResolvedModel]
    skipped_models: List[str]
    unsupported_models: List[str]
