"""
Command-line interface entry point for nexosModels.
"""

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional, Union

from rich.console import Console
from rich.markup import escape

from nexosModels.actions import action_fetch_models, action_generate_config
from nexosModels.core.config_merge import PROVIDER_KEY, default_config_path, save_config
from nexosModels.core.environment import check_dependencies, load_api_settings
from nexosModels.core.errors import CatalogFetchError, NexosModelsError
from nexosModels.core.log_config import logger
from nexosModels.core.registry import ModelRegistry
from nexosModels.interactive_actions import edit_model_costs, select_agent_models
from nexosModels.ui.common_formatters import pretty_print_models, print_exclusions

DIST_NAME = "opencode-nexos-models-config"

# Progress and diagnostics go to stderr; stdout only carries final answers
console = Console(stderr=True)
stdout_console = Console()

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")

EPILOG = """\
Environment variables:
  NEXOS_API_KEY        Your Nexos AI API key (required)
  NEXOS_BASE_URL       Custom API base URL (default: https://api.nexos.ai/v1)
"""


def get_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "unknown"


def parse_supported_models_flag(value: Union[str, bool, None]) -> bool:
    """Interpret the value given to ``--supported-models``.

    Only an explicit false-like value (``false``, ``0``, ``no``, any case)
    disables filtering; anything else, including no value, enables it.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return True
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=DIST_NAME,
        description="Fetch available models from Nexos AI API and generate opencode configuration.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=get_version(),
        help="Show version number.",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        help="Write config to a custom file path (default: ~/.config/opencode/opencode.json).",
    )
    parser.add_argument(
        "-s", "--select-agents",
        action="store_true",
        help="Interactively select models for agents.",
    )
    parser.add_argument(
        "-m", "--supported-models",
        nargs="?",
        const="true",
        default=None,
        metavar="BOOL",
        help="Only include models with predefined metadata (true/false, default: true when given).",
    )
    parser.add_argument(
        "-c", "--custom-costs",
        action="store_true",
        help="Interactively set custom costs for configured models.",
    )
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    args, unknown = build_parser().parse_known_args(argv)
    if unknown:
        logger.debug(f"Ignoring unknown arguments: {unknown}")
    return args


def run(args: argparse.Namespace) -> int:
    """Run one configuration generation pass. Returns the exit status."""
    settings = load_api_settings()
    check_dependencies()

    console.print("Fetching models from Nexos AI API...")
    models_list = action_fetch_models(settings)

    if not models_list:
        stdout_console.print("No models found.")
        return 0

    curated_only = args.supported_models is not None and parse_supported_models_flag(args.supported_models)
    registry = ModelRegistry.default()
    config_path = args.output or default_config_path()

    config, result = action_generate_config(
        models_list,
        config_path,
        settings.base_url,
        curated_only=curated_only,
        registry=registry,
    )

    print_exclusions(result["skipped_models"], result["unsupported_models"], out=console)
    pretty_print_models(result["models"], supported_only=curated_only, out=console)
    console.print(f"\nGenerated configuration for {len(result['models'])} models")
    console.print(f"Config written to: {escape(str(config_path))}")

    if args.select_agents:
        if select_agent_models(config, list(result["models"]), PROVIDER_KEY):
            save_config(config, config_path)
            console.print("[green]Agent configuration updated.[/green]")

    if args.custom_costs:
        if edit_model_costs(config, PROVIDER_KEY, supported_only=curated_only, registry=registry):
            save_config(config, config_path)
            console.print("[green]Custom costs saved.[/green]")

    return 0


def cli_main(argv: Optional[List[str]] = None) -> int:
    args = parse_cli_args(argv)

    try:
        return run(args)
    except CatalogFetchError as e:
        logger.error(f"Catalog request failed: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.body:
            console.print(e.body, markup=False, highlight=False)
        return 1
    except NexosModelsError as e:
        logger.error(f"{type(e).__name__}: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        return 1
    except Exception as e:
        # Log the exception for debugging purposes
        logger.exception(f"An unexpected error occurred: {e}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(cli_main())
