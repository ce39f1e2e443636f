from typing import Any, Mapping, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nexosModels.nexos_types.models import ResolvedModel

console = Console(stderr=True)


def format_price(value: Any) -> str:
    """Render a per-1M-token price the way a user would type it back."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def pretty_print_models(
    models: Mapping[str, ResolvedModel],
    supported_only: bool = False,
    out: Optional[Console] = None,
) -> None:
    out = out or console
    title = "Supported models to be added" if supported_only else "Models to be added"
    table = Table(title=f"{title} ({len(models)})", box=box.SIMPLE)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Context", style="yellow", justify="right")
    table.add_column("Output", style="yellow", justify="right")
    table.add_column("Input $/1M", style="green", justify="right")
    table.add_column("Output $/1M", style="green", justify="right")
    table.add_column("Variants", style="magenta")
    for name, model in models.items():
        cost = model.get("cost") or {}
        table.add_row(
            escape(name),
            str(model["limit"]["context"]),
            str(model["limit"]["output"]),
            format_price(cost.get("input")),
            format_price(cost.get("output")),
            ", ".join(model.get("variants") or {}),
        )
    out.print(table)


def print_exclusions(
    skipped_models: Sequence[str],
    unsupported_models: Sequence[str],
    out: Optional[Console] = None,
) -> None:
    out = out or console
    if skipped_models:
        out.print(
            f"[yellow]Skipped {len(skipped_models)} models (tool use not supported): "
            f"{escape(', '.join(skipped_models))}[/yellow]"
        )
    if unsupported_models:
        out.print(
            f"[yellow]Filtered out {len(unsupported_models)} unsupported models: "
            f"{escape(', '.join(unsupported_models))}[/yellow]"
        )
