"""Runtime environment checks.

Reads the API settings from environment variables and verifies that the
opencode executable the generated configuration is meant for is installed.
"""

import os
import shutil
from typing import Mapping, NamedTuple, Optional

from nexosModels.core.errors import ConfigurationError, DependencyError

API_KEY_ENV = "NEXOS_API_KEY"
BASE_URL_ENV = "NEXOS_BASE_URL"
API_KEY_PREFIX = "nexos-"
DEFAULT_BASE_URL = "https://api.nexos.ai/v1"
COMPANION_EXECUTABLE = "opencode"

MISSING_KEY_HELP = f"""\
{API_KEY_ENV} environment variable is not set

You can get your API key at: https://nexos.ai

Run with the API key inline:
  {API_KEY_ENV}="your-api-key" opencode-nexos-models-config

Or set it permanently:

  Linux/macOS (bash/zsh):
    echo 'export {API_KEY_ENV}="your-api-key"' >> ~/.bashrc   # bash
    echo 'export {API_KEY_ENV}="your-api-key"' >> ~/.zshrc    # zsh (macOS default)
    source ~/.bashrc  # or source ~/.zshrc"""

INVALID_KEY_HELP = f"""\
{API_KEY_ENV} is invalid. The key must start with "{API_KEY_PREFIX}".

You can get your API key at: https://nexos.ai"""

MISSING_DEPENDENCY_HELP = f"""\
{COMPANION_EXECUTABLE} is not installed

To install opencode:
  npm install -g opencode

For more information visit: https://opencode.ai"""


class ApiSettings(NamedTuple):
    api_key: str
    base_url: str


def load_api_settings(environ: Optional[Mapping[str, str]] = None) -> ApiSettings:
    """Read and validate the API credential and base URL.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        ApiSettings with the key and the (possibly overridden) base URL.

    Raises:
        ConfigurationError: If the key is missing or lacks the expected prefix.
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get(API_KEY_ENV)
    if not api_key:
        raise ConfigurationError(MISSING_KEY_HELP)
    if not api_key.startswith(API_KEY_PREFIX):
        raise ConfigurationError(INVALID_KEY_HELP)

    base_url = environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
    return ApiSettings(api_key=api_key, base_url=base_url)


def check_dependencies() -> None:
    """Ensure the opencode executable is on PATH.

    Raises:
        DependencyError: If opencode cannot be found.
    """
    if shutil.which(COMPANION_EXECUTABLE) is None:
        raise DependencyError(MISSING_DEPENDENCY_HELP)
