"""Validation schemas for the Nexos AI model catalog.

The ``/models`` endpoint returns an OpenAI-style listing. Only the fields
used for configuration generation are declared; anything else the API sends
is kept so it can be passed through untouched.
"""

from typing import List, Optional, TypedDict, NotRequired

from pydantic import BaseModel, ConfigDict, Field


class CatalogModel(BaseModel):
    """A single entry of the ``data`` array."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: Optional[str] = None
    context_window: Optional[int] = None
    max_output_tokens: Optional[int] = None


class CatalogResponse(BaseModel):
    """Body of ``GET /models``."""

    model_config = ConfigDict(extra="allow")

    data: List[CatalogModel] = Field(default_factory=list)


class RawApiModel(TypedDict):
    """Catalog entry as consumed by the catalog processor."""
    id: str
    name: NotRequired[str]
    context_window: NotRequired[int]
    max_output_tokens: NotRequired[int]


def to_raw_models(response: CatalogResponse) -> List[RawApiModel]:
    """Convert a validated response into plain dicts, dropping null fields."""
    return [model.model_dump(exclude_none=True) for model in response.data]
