"""Base protocols for external collaborators.

The catalog client and the interactive prompt primitives are expressed as
Protocols so the processing and editing logic can be exercised with
substitutes instead of a live API or a real terminal.
"""

from typing import Callable, List, Optional, Protocol, TypedDict, NotRequired

from nexosModels.nexos_types.catalog import RawApiModel


class Choice(TypedDict):
    """A selectable entry in a search or checkbox prompt."""
    name: str
    value: str
    checked: NotRequired[bool]


class ModelCatalogClient(Protocol):
    """Protocol for clients that list the models offered by a provider."""

    def list_models(self) -> List[RawApiModel]:
        """Return the raw catalog entries.

        Raises:
            CatalogFetchError: If the catalog cannot be retrieved.
        """
        ...


class PromptProvider(Protocol):
    """Protocol for the interactive prompt primitives used by the editors."""

    def search(
        self,
        message: str,
        source: Callable[[str], List[Choice]],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Let the user filter ``source(term)`` by typing and pick one value."""
        ...

    def checkbox(self, message: str, choices: List[Choice]) -> List[str]:
        """Let the user pick any number of values; pre-checked choices start selected."""
        ...

    def text(self, message: str, default: str = "") -> str:
        """Ask for a free-form string."""
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...
