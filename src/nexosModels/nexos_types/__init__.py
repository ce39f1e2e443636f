"""Common type definitions for the nexosModels project."""

from .models import (
    ModelLimit,
    ModelCost,
    ModelVariants,
    ModelEntry,
    ResolvedModel,
    ProcessingResult
)
from .config import (
    PermissionValue,
    AgentPermission,
    AgentConfig,
    ProviderOptions,
    ProviderConfig,
    OpenCodeConfig
)
from .catalog import (
    CatalogModel,
    CatalogResponse,
    RawApiModel
)

__all__ = [
    # Model types
    'ModelLimit',
    'ModelCost',
    'ModelVariants',
    'ModelEntry',
    'ResolvedModel',
    'ProcessingResult',

    # Configuration types
    'PermissionValue',
    'AgentPermission',
    'AgentConfig',
    'ProviderOptions',
    'ProviderConfig',
    'OpenCodeConfig',

    # Catalog types
    'CatalogModel',
    'CatalogResponse',
    'RawApiModel'
]
