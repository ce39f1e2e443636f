"""Type definitions for the persisted opencode configuration."""

from typing import Any, Dict, List, Literal, TypedDict

from .models import ResolvedModel

PermissionValue = Literal['allow', 'deny']


class AgentPermission(TypedDict, total=False):
    edit: PermissionValue
    bash: PermissionValue
    read: PermissionValue
    glob: PermissionValue
    grep: PermissionValue
    task: PermissionValue
    webfetch: PermissionValue


class AgentConfig(TypedDict, total=False):
    mode: str
    model: str
    description: str
    permission: AgentPermission


class ProviderOptions(TypedDict, total=False):
    baseURL: str
    timeout: int


class ProviderConfig(TypedDict):
    npm: str
    name: str
    env: List[str]
    options: ProviderOptions
    models: Dict[str, ResolvedModel]


# The top-level document is owned by opencode and may hold any number of
# fields this tool does not know about, so it stays a plain dict.
OpenCodeConfig = Dict[str, Any]
