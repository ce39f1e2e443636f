from pathlib import Path
from typing import List, Optional, Tuple, Union

from nexosModels.core.catalog import process_catalog, sort_catalog_models
from nexosModels.core.config_merge import (
    build_config,
    build_provider_config,
    get_existing_model_costs,
    load_existing_config,
    save_config,
)
from nexosModels.core.environment import ApiSettings
from nexosModels.core.log_config import logger
from nexosModels.core.registry import ModelRegistry
from nexosModels.core.resolver import ModelResolver
from nexosModels.interfaces.base import ModelCatalogClient
from nexosModels.interfaces.nexos.client import NexosClient
from nexosModels.nexos_types.catalog import RawApiModel
from nexosModels.nexos_types.config import OpenCodeConfig
from nexosModels.nexos_types.models import ProcessingResult


def action_fetch_models(
    settings: ApiSettings, client: Optional[ModelCatalogClient] = None
) -> List[RawApiModel]:
    """Fetch the catalog and return it sorted by display name.

    Errors from the client propagate to the caller.
    """
    client = client or NexosClient(api_key=settings.api_key, base_url=settings.base_url)
    models = client.list_models()
    return sort_catalog_models(models)


def action_generate_config(
    api_models: List[RawApiModel],
    config_path: Union[str, Path],
    api_base_url: str,
    curated_only: bool = False,
    registry: Optional[ModelRegistry] = None,
) -> Tuple[OpenCodeConfig, ProcessingResult]:
    """Resolve the catalog, merge it into the configuration at ``config_path`` and save it.

    User-set costs already present in the file take precedence over registry
    prices. The whole configuration is built in memory before anything is
    written.
    """
    registry = registry or ModelRegistry.default()
    existing_config = load_existing_config(config_path)
    existing_costs = get_existing_model_costs(existing_config)
    logger.debug(f"Loaded {len(existing_costs)} existing model costs from {config_path}")

    result = process_catalog(api_models, existing_costs, curated_only, ModelResolver(registry))

    provider_config = build_provider_config(existing_config, result["models"], api_base_url)
    config = build_config(existing_config, provider_config)
    save_config(config, config_path)
    logger.info(f"Generated configuration for {len(result['models'])} models at {config_path}")
    return config, result
