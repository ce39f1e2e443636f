"""Core catalog processing logic.

This module turns the raw model listing returned by the Nexos AI API into
the set of fully resolved model entries that get written to the opencode
configuration, and reports which models were left out and why.
"""

from typing import Dict, Iterable, List, Mapping, Optional

from nexosModels.core.resolver import ModelResolver
from nexosModels.nexos_types.catalog import RawApiModel
from nexosModels.nexos_types.models import ModelCost, ProcessingResult, ResolvedModel

# Privacy-restricted duplicates of regular models carry this tag in their name
PRIVACY_TAG = "(No PII)"


def get_display_name(model: RawApiModel) -> str:
    """Return the human-facing name of a catalog entry (``name``, else ``id``)."""
    return model.get("name") or model.get("id")


def sort_catalog_models(models: Iterable[RawApiModel]) -> List[RawApiModel]:
    """Sort catalog entries case-insensitively by display name."""
    return sorted(models, key=lambda m: get_display_name(m).lower())


def process_catalog(
    api_models: Iterable[RawApiModel],
    existing_costs: Optional[Mapping[str, ModelCost]],
    curated_only: bool,
    resolver: ModelResolver,
) -> ProcessingResult:
    """Resolve every catalog entry into a configuration model entry.

    Models are handled in input order, which the output map preserves.

    Args:
        api_models: Catalog entries, expected pre-sorted by display name.
        existing_costs: User-set costs by display name, taken from the
            current configuration. These always win over registry prices.
        curated_only: When True, models not present in the registry are
            excluded and reported as unsupported.
        resolver: Resolver bound to the model registry.

    Returns:
        ProcessingResult with the included models and the names of the
        skipped (tool use not supported) and unsupported models.
    """
    models: Dict[str, ResolvedModel] = {}
    skipped_models: List[str] = []
    unsupported_models: List[str] = []

    for api_model in api_models:
        if PRIVACY_TAG in (api_model.get("name") or ""):
            continue

        name = get_display_name(api_model)

        if "embedding" in name.lower():
            continue

        if resolver.is_excluded(name):
            skipped_models.append(name)
            continue

        limit = resolver.resolve_limit(name, api_model)
        variants = resolver.resolve_variants(name)
        options = resolver.resolve_options(name)
        cost = resolver.resolve_cost(name, existing_costs)

        if curated_only and not resolver.is_supported(name):
            unsupported_models.append(name)
            continue

        entry: ResolvedModel = {"name": name, "limit": limit}
        if options:
            entry["options"] = options
        if variants:
            entry["variants"] = variants
        if cost:
            entry["cost"] = cost
        models[name] = entry

    return {
        "models": models,
        "skipped_models": skipped_models,
        "unsupported_models": unsupported_models,
    }
