"""Core functionality for nexosModels.

This package contains the model registry, metadata resolution, catalog
processing and configuration merge logic.
"""

from nexosModels.core.registry import ModelRegistry, SUPPORTED_MODELS, DEFAULT_FALLBACK_COSTS
from nexosModels.core.resolver import ModelResolver
from nexosModels.core.catalog import process_catalog, sort_catalog_models, get_display_name
from nexosModels.core.config_merge import (
    build_config,
    build_provider_config,
    get_existing_model_costs,
    load_existing_config,
    save_config,
)

__all__ = [
    'ModelRegistry',
    'SUPPORTED_MODELS',
    'DEFAULT_FALLBACK_COSTS',
    'ModelResolver',
    'process_catalog',
    'sort_catalog_models',
    'get_display_name',
    'build_config',
    'build_provider_config',
    'get_existing_model_costs',
    'load_existing_config',
    'save_config'
]
