"""Nexos AI client implementation of the ModelCatalogClient protocol.

This module provides the NexosClient class that lists the models available
to an API key through the Nexos AI ``/models`` endpoint.
"""

from typing import List, Optional

import requests
from pydantic import ValidationError

from nexosModels.core.errors import CatalogFetchError
from nexosModels.core.log_config import logger
from nexosModels.interfaces.base import ModelCatalogClient
from nexosModels.nexos_types.catalog import CatalogResponse, RawApiModel, to_raw_models


class NexosClient(ModelCatalogClient):
    """Nexos AI API client implementing the ModelCatalogClient protocol."""

    def __init__(self, api_key: str, base_url: str, timeout: Optional[float] = None) -> None:
        """Initialize the Nexos AI client.

        Args:
            api_key: Bearer token for the API.
            base_url: Base URL of the API, e.g. https://api.nexos.ai/v1.
            timeout: Request timeout in seconds. None waits indefinitely.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.models_endpoint = f"{self.base_url}/models"
        self.timeout = timeout

    def list_models(self) -> List[RawApiModel]:
        """Fetch the model catalog.

        Returns:
            List of catalog entries as plain dicts, in API order.

        Raises:
            CatalogFetchError: On connection failure, a non-2xx response or
                a body that does not look like a model listing.
        """
        logger.debug(f"Requesting model catalog from {self.models_endpoint}")
        try:
            response = requests.get(
                self.models_endpoint,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            raise CatalogFetchError(f"Failed to connect to Nexos AI API: {e}", reason="connection error") from e
        except requests.exceptions.RequestException as e:
            raise CatalogFetchError(f"Failed to query Nexos AI models endpoint: {e}", reason="request error") from e

        if not response.ok:
            raise CatalogFetchError(
                f"{response.status_code} {response.reason}",
                status_code=response.status_code,
                reason=response.reason or "",
                body=response.text or "",
            )

        try:
            catalog = CatalogResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise CatalogFetchError(
                f"Unexpected response from Nexos AI models endpoint: {e}",
                status_code=response.status_code,
                reason=response.reason or "",
                body=response.text or "",
            ) from e

        models = to_raw_models(catalog)
        logger.info(f"Fetched {len(models)} models from {self.models_endpoint}")
        return models
