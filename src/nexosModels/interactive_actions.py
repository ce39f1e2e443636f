"""Interactive editors that refine a generated configuration.

Both editors mutate the in-memory configuration in place and report whether
anything changed, so the caller knows whether to write the file again. The
prompt primitives are injected; without them the Rich terminal prompts are
used.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from nexosModels.core.config_merge import as_object
from nexosModels.core.log_config import logger
from nexosModels.core.registry import ModelRegistry, clone
from nexosModels.interfaces.base import Choice, PromptProvider
from nexosModels.nexos_types.config import AgentConfig, OpenCodeConfig
from nexosModels.nexos_types.models import ModelCost
from nexosModels.ui.common_formatters import format_price
from nexosModels.ui.prompts import RichPrompts

console = Console(stderr=True)

DEFAULT_AGENTS = ["build", "build-fast", "build-heavy", "plan"]

AGENT_DEFAULTS: Dict[str, AgentConfig] = {
    "plan": {
        "description": "Read-only planning agent with bash access",
        "permission": {
            "edit": "deny",
            "bash": "allow",
            "read": "allow",
            "glob": "allow",
            "grep": "allow",
            "task": "allow",
            "webfetch": "allow",
        },
    },
}

COST_FIELDS = ("input", "output", "cache_read", "cache_write")
DONE_SENTINEL = "__done__"


class EditorState(Enum):
    SELECTING = "selecting"
    EDITING = "editing"
    CONFIRMING = "confirming"
    DONE = "done"


def _default_prompts() -> PromptProvider:
    return RichPrompts(console=console)


def _filter_choices(choices: List[Choice], term: Optional[str]) -> List[Choice]:
    needle = (term or "").lower()
    return [c for c in choices if needle in c["name"].lower()]


def _apply_agent_defaults(agent_name: str, agent_config: Dict[str, Any]) -> None:
    """Fill registered defaults into fields the user has not set."""
    defaults = AGENT_DEFAULTS.get(agent_name)
    if not defaults:
        return
    if defaults.get("description") and not agent_config.get("description"):
        agent_config["description"] = defaults["description"]
    if defaults.get("permission") and not agent_config.get("permission"):
        agent_config["permission"] = clone(defaults["permission"])


def select_agent_models(
    config: OpenCodeConfig,
    model_names: List[str],
    provider_name: str,
    prompts: Optional[PromptProvider] = None,
) -> bool:
    """Interactively assign a model to each selected agent.

    Args:
        config: Configuration to update in place.
        model_names: Display names of the configured models, in order.
        provider_name: Provider key used to build ``provider/model`` values.
        prompts: Prompt primitives; defaults to the Rich terminal prompts.

    Returns:
        True if agents were assigned models, False if the user selected none.
    """
    prompts = prompts or _default_prompts()

    if as_object(config.get("agent")) is None:
        config["agent"] = {}
    agents: Dict[str, Any] = config["agent"]

    existing_agents = list(agents)
    all_agent_names = list(dict.fromkeys(DEFAULT_AGENTS + existing_agents))

    if not existing_agents:
        selected_agents = list(DEFAULT_AGENTS)
        console.print(f"\nNo agents configured, adding all defaults: {', '.join(selected_agents)}")
    else:
        selected_agents = prompts.checkbox(
            "Select agents to configure:",
            [
                {"name": name, "value": name, "checked": name in existing_agents}
                for name in all_agent_names
            ],
        )
        if not selected_agents:
            console.print("\nNo agents selected, skipping agent model selection.")
            return False

    all_choices: List[Choice] = [
        {"name": name, "value": f"{provider_name}/{name}"} for name in model_names
    ]
    # Keep models chosen elsewhere (other providers, removed models) selectable
    for agent_name in selected_agents:
        current = (as_object(agents.get(agent_name)) or {}).get("model")
        if current and not any(c["value"] == current for c in all_choices):
            all_choices.insert(0, {"name": current, "value": current})

    console.print("\n[bold]--- Agent Model Selection ---[/bold]\n")

    for agent_name in selected_agents:
        if as_object(agents.get(agent_name)) is None:
            agents[agent_name] = {}
        agent_config = agents[agent_name]
        _apply_agent_defaults(agent_name, agent_config)

        current_model = agent_config.get("model")
        desc = f" - {escape(str(agent_config['description']))}" if agent_config.get("description") else ""
        default = current_model if any(c["value"] == current_model for c in all_choices) else None

        selected = prompts.search(
            f"[bold]{escape(agent_name)}[/bold]{desc}\n  current: [yellow]{escape(str(current_model or '(not set)'))}[/yellow]",
            lambda term: _filter_choices(all_choices, term),
            default,
        )
        agent_config["model"] = selected
        logger.info(f"Agent {agent_name} assigned model {selected}")

    return True


def _parse_cost_value(raw: Optional[str]) -> Optional[float]:
    """Return ``raw`` as a finite number, or None if it is not one."""
    try:
        number = float((raw or "").strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _prompt_cost(prompts: PromptProvider, model_name: str, current: Dict[str, Any]) -> ModelCost:
    console.print(f"\nEditing costs for [cyan]{escape(model_name)}[/cyan] (USD per 1M tokens, leave empty to keep)")
    cost: Dict[str, Any] = {}
    for field in COST_FIELDS:
        raw = prompts.text(f"  {field}", default=format_price(current.get(field)))
        value = _parse_cost_value(raw)
        if value is not None:
            cost[field] = value
        elif field in current:
            cost[field] = current[field]
    return cost


def edit_model_costs(
    config: OpenCodeConfig,
    provider_name: str,
    prompts: Optional[PromptProvider] = None,
    supported_only: bool = False,
    registry: Optional[ModelRegistry] = None,
) -> bool:
    """Interactively set custom per-1M-token costs on configured models.

    Args:
        config: Configuration to update in place.
        provider_name: Key of the provider whose models are edited.
        prompts: Prompt primitives; defaults to the Rich terminal prompts.
        supported_only: Only offer models known to the registry.
        registry: Registry used by ``supported_only``.

    Returns:
        True if at least one model's cost was changed.
    """
    providers = as_object(config.get("provider")) or {}
    models = as_object((as_object(providers.get(provider_name)) or {}).get("models"))
    if not models:
        console.print(f"\nNo models configured for provider {escape(provider_name)}, skipping cost editing.")
        return False

    candidates = [name for name, model in models.items() if as_object(model) is not None]
    if supported_only:
        registry = registry or ModelRegistry.default()
        candidates = [name for name in candidates if registry.is_known(name)]
        if not candidates:
            console.print("\nNo supported models configured, skipping cost editing.")
            return False

    prompts = prompts or _default_prompts()
    changed = False
    selected: Optional[str] = None
    state = EditorState.SELECTING

    while state is not EditorState.DONE:
        if state is EditorState.SELECTING:
            choices: List[Choice] = []
            for name in candidates:
                cost = as_object(models[name].get("cost"))
                if cost:
                    label = (f"{name} (input: ${format_price(cost.get('input'))}, "
                             f"output: ${format_price(cost.get('output'))})")
                else:
                    label = f"{name} (no cost set)"
                choices.append({"name": label, "value": name})
            done_choice: Choice = {"name": "Done", "value": DONE_SENTINEL}

            selected = prompts.search(
                "Select a model to set custom costs:",
                lambda term: _filter_choices(choices, term) + [done_choice],
            )
            if not selected or selected not in candidates:
                state = EditorState.DONE
            else:
                state = EditorState.EDITING

        elif state is EditorState.EDITING:
            model = models[selected]
            new_cost = _prompt_cost(prompts, selected, as_object(model.get("cost")) or {})
            if new_cost:
                model["cost"] = new_cost
                changed = True
                logger.info(f"Custom cost set for {selected}: {new_cost}")
            state = EditorState.CONFIRMING

        elif state is EditorState.CONFIRMING:
            if prompts.confirm("Edit another model?", default=False):
                state = EditorState.SELECTING
            else:
                state = EditorState.DONE

    return changed
