import json

import pytest
from nexosModels.core.errors import CatalogFetchError, DependencyError
from nexosModels.main_cli import cli_main, parse_cli_args, parse_supported_models_flag

API_MODELS = [
    {"id": "gpt-5-2", "name": "GPT 5.2", "context_window": 400000, "max_output_tokens": 128000},
    {"id": "claude-sonnet-4-20250514", "name": "Claude Sonnet 4.5", "context_window": 200000, "max_output_tokens": 64000},
    {"id": "gemini-3-pro", "name": "Gemini 3 Pro", "context_window": 1048576, "max_output_tokens": 65536},
    {"id": "gpt-4o", "name": "GPT 4o", "context_window": 128000, "max_output_tokens": 16384},
    {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash", "context_window": 1048576, "max_output_tokens": 65536},
    {"id": "text-embedding-3-large", "name": "text-embedding-3-large"},
]


@pytest.fixture(autouse=True)
def api_env(monkeypatch):
    monkeypatch.setenv("NEXOS_API_KEY", "nexos-test-key")
    monkeypatch.setenv("NEXOS_BASE_URL", "https://mock.api.nexos.ai/v1")


@pytest.fixture
def check_deps(mocker):
    return mocker.patch("nexosModels.main_cli.check_dependencies")


@pytest.fixture
def client_cls(mocker):
    client_cls = mocker.patch("nexosModels.actions.NexosClient")
    client_cls.return_value.list_models.return_value = [dict(m) for m in API_MODELS]
    return client_cls


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "opencode" / "opencode.json"


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ("true", True),
        ("TRUE", True),
        ("1", True),
        ("yes", True),
        ("YES", True),
        ("false", False),
        ("FALSE", False),
        ("0", False),
        ("no", False),
        ("NO", False),
        ("random", True),
        (True, True),
        (False, False),
    ],
)
def test_parse_supported_models_flag(value, expected):
    assert parse_supported_models_flag(value) is expected


def test_parse_cli_args_defaults():
    args = parse_cli_args([])
    assert args.output is None
    assert args.select_agents is False
    assert args.custom_costs is False
    assert args.supported_models is None


def test_parse_cli_args_flags():
    # Act
    args = parse_cli_args(["-o", "/custom/path.json", "-s", "-c", "-m", "no", "--unknown-flag"])

    # Assert
    assert args.output == "/custom/path.json"
    assert args.select_agents is True
    assert args.custom_costs is True
    assert args.supported_models == "no"


def test_parse_cli_args_supported_models_without_value():
    assert parse_cli_args(["--supported-models"]).supported_models == "true"
    assert parse_cli_args(["-m", "-s"]).supported_models == "true"


def test_version_flag_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_cli_args(["--version"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip()


def test_missing_api_key(monkeypatch, client_cls, check_deps, capsys):
    # Arrange
    monkeypatch.delenv("NEXOS_API_KEY")

    # Act
    result = cli_main([])

    # Assert
    assert result == 1
    assert "NEXOS_API_KEY environment variable is not set" in capsys.readouterr().err
    client_cls.assert_not_called()
    check_deps.assert_not_called()


def test_invalid_api_key(monkeypatch, client_cls, check_deps, capsys):
    monkeypatch.setenv("NEXOS_API_KEY", "invalid-key")

    assert cli_main([]) == 1
    assert "NEXOS_API_KEY is invalid" in capsys.readouterr().err
    client_cls.assert_not_called()


def test_missing_dependency(check_deps, client_cls, capsys):
    check_deps.side_effect = DependencyError("opencode is not installed")

    assert cli_main([]) == 1
    assert "opencode is not installed" in capsys.readouterr().err
    client_cls.assert_not_called()


def test_api_failure(check_deps, client_cls, config_path, capsys):
    # Arrange
    client_cls.return_value.list_models.side_effect = CatalogFetchError(
        "500 Internal Server Error",
        status_code=500,
        reason="Internal Server Error",
        body="Error details",
    )

    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 1
    err = capsys.readouterr().err
    assert "Fetching models from Nexos AI API..." in err
    assert "Error: 500 Internal Server Error" in err
    assert "Error details" in err
    assert not config_path.exists()


def test_no_models_found(check_deps, client_cls, config_path, capsys):
    # Arrange
    client_cls.return_value.list_models.return_value = []

    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 0
    assert "No models found." in capsys.readouterr().out
    assert not config_path.exists()


def test_client_receives_settings(check_deps, client_cls, config_path):
    cli_main(["-o", str(config_path)])
    client_cls.assert_called_once_with(api_key="nexos-test-key", base_url="https://mock.api.nexos.ai/v1")


def test_initial_empty_config(check_deps, client_cls, config_path, capsys):
    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 0
    config = _read(config_path)
    assert config["$schema"] == "https://opencode.ai/config.json"
    provider = config["provider"]["nexos-ai"]
    assert provider["npm"] == "@crazy-goat/nexos-provider"
    assert provider["name"] == "Nexos AI"
    assert provider["env"] == ["NEXOS_API_KEY"]
    assert provider["options"] == {"baseURL": "https://mock.api.nexos.ai/v1/", "timeout": 300000}
    assert list(provider["models"]) == ["Claude Sonnet 4.5", "Gemini 2.5 Flash", "GPT 4o", "GPT 5.2"]

    err = capsys.readouterr().err
    assert "Skipped 1 models (tool use not supported): Gemini 3 Pro" in err
    assert "Generated configuration for 4 models" in err


def test_merges_into_existing_config(check_deps, client_cls, config_path):
    # Arrange
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({
        "$schema": "https://opencode.ai/config.json",
        "theme": "dark",
        "agent": {"build": {"model": "nexos-ai/GPT 4o"}},
        "provider": {
            "nexos-ai": {
                "npm": "@crazy-goat/nexos-provider",
                "name": "Nexos AI",
                "env": ["EXISTING_ENV_VAR"],
                "options": {"baseURL": "https://existing.api.nexos.ai/v1/"},
                "models": {
                    "Existing Model": {"name": "Existing Model"},
                    "GPT 4o": {"name": "GPT 4o", "cost": {"input": 1, "output": 2}},
                },
            }
        },
    }), encoding="utf-8")

    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 0
    config = _read(config_path)
    assert config["theme"] == "dark"
    assert config["agent"] == {"build": {"model": "nexos-ai/GPT 4o"}}

    provider = config["provider"]["nexos-ai"]
    assert provider["env"] == ["NEXOS_API_KEY", "EXISTING_ENV_VAR"]
    assert provider["options"] == {"baseURL": "https://existing.api.nexos.ai/v1/", "timeout": 300000}
    assert provider["models"] == {
        "Claude Sonnet 4.5": {
            "name": "Claude Sonnet 4.5",
            "limit": {"context": 200000, "output": 64000},
            "variants": {
                "low": {"thinking": {"type": "enabled", "budgetTokens": 1024}},
                "high": {"thinking": {"type": "enabled", "budgetTokens": 32000}},
            },
            "cost": {"input": 3, "output": 15, "cache_read": 0.3, "cache_write": 3.75},
        },
        "Gemini 2.5 Flash": {
            "name": "Gemini 2.5 Flash",
            "limit": {"context": 1048576, "output": 65536},
            "variants": {
                "low": {"thinking": {"type": "enabled", "budgetTokens": 1024}},
                "high": {"thinking": {"type": "enabled", "budgetTokens": 24576}},
            },
            "cost": {"input": 0.3, "output": 2.5, "cache_read": 0.03},
        },
        "GPT 4o": {
            "name": "GPT 4o",
            "limit": {"context": 128000, "output": 16384},
            "cost": {"input": 1, "output": 2},
        },
        "GPT 5.2": {
            "name": "GPT 5.2",
            "limit": {"context": 400000, "output": 128000},
            "options": {"reasoningEffort": "none"},
            "variants": {"low": {"reasoningEffort": "low"}, "high": {"reasoningEffort": "high"}},
            "cost": {"input": 1.75, "output": 14.0, "cache_read": 0.175},
        },
    }


def test_non_object_cost_falls_back_to_resolved_cost(check_deps, client_cls, config_path):
    # Arrange
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({
        "provider": {"nexos-ai": {"models": {"GPT 4o": {"cost": 5}, "GPT 5.2": {"cost": "cheap"}}}},
    }), encoding="utf-8")

    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 0
    models = _read(config_path)["provider"]["nexos-ai"]["models"]
    assert models["GPT 4o"]["cost"] == {"input": 5, "output": 25, "cache_read": 0.5, "cache_write": 6.25}
    assert models["GPT 5.2"]["cost"] == {"input": 1.75, "output": 14.0, "cache_read": 0.175}


def test_bracketed_model_name_is_written(check_deps, client_cls, config_path):
    # Arrange
    client_cls.return_value.list_models.return_value = [
        {"id": "gpt-4o-preview", "name": "GPT 4o [preview]", "context_window": 128000, "max_output_tokens": 16384},
    ]

    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 0
    assert "GPT 4o [preview]" in _read(config_path)["provider"]["nexos-ai"]["models"]


def test_corrupt_config_is_replaced(check_deps, client_cls, config_path):
    # Arrange
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{ not json", encoding="utf-8")

    # Act
    result = cli_main(["-o", str(config_path)])

    # Assert
    assert result == 0
    assert "nexos-ai" in _read(config_path)["provider"]


def test_supported_models_filter(check_deps, client_cls, config_path, capsys):
    # Act
    result = cli_main(["-o", str(config_path), "-m"])

    # Assert
    assert result == 0
    models = _read(config_path)["provider"]["nexos-ai"]["models"]
    assert list(models) == ["Claude Sonnet 4.5", "Gemini 2.5 Flash", "GPT 5.2"]
    assert "Filtered out 1 unsupported models: GPT 4o" in capsys.readouterr().err


def test_supported_models_false_disables_filter(check_deps, client_cls, config_path):
    cli_main(["-o", str(config_path), "--supported-models", "false"])
    assert "GPT 4o" in _read(config_path)["provider"]["nexos-ai"]["models"]


def test_select_agents_saves_changes(mocker, check_deps, client_cls, config_path, capsys):
    # Arrange
    def assign(config, model_names, provider_name):
        config["agent"] = {"build": {"model": f"{provider_name}/{model_names[0]}"}}
        return True

    mock_select = mocker.patch("nexosModels.main_cli.select_agent_models", side_effect=assign)

    # Act
    result = cli_main(["-o", str(config_path), "--select-agents"])

    # Assert
    assert result == 0
    args = mock_select.call_args[0]
    assert args[1] == ["Claude Sonnet 4.5", "Gemini 2.5 Flash", "GPT 4o", "GPT 5.2"]
    assert args[2] == "nexos-ai"
    assert _read(config_path)["agent"] == {"build": {"model": "nexos-ai/Claude Sonnet 4.5"}}
    assert "Agent configuration updated." in capsys.readouterr().err


def test_custom_costs_saves_changes(mocker, check_deps, client_cls, config_path):
    # Arrange
    def edit(config, provider_name, supported_only, registry):
        config["provider"][provider_name]["models"]["GPT 4o"]["cost"] = {"input": 9, "output": 9}
        return True

    mock_edit = mocker.patch("nexosModels.main_cli.edit_model_costs", side_effect=edit)

    # Act
    result = cli_main(["-o", str(config_path), "-c", "-m", "false"])

    # Assert
    assert result == 0
    assert mock_edit.call_args.kwargs["supported_only"] is False
    models = _read(config_path)["provider"]["nexos-ai"]["models"]
    assert models["GPT 4o"]["cost"] == {"input": 9, "output": 9}


def test_unexpected_error_returns_one(mocker, check_deps, client_cls, config_path, capsys):
    mocker.patch("nexosModels.main_cli.action_generate_config", side_effect=RuntimeError("boom"))

    assert cli_main(["-o", str(config_path)]) == 1
    assert "Error: boom" in capsys.readouterr().err


def test_keyboard_interrupt_returns_one(check_deps, client_cls, config_path, capsys):
    client_cls.return_value.list_models.side_effect = KeyboardInterrupt

    assert cli_main(["-o", str(config_path)]) == 1
    assert "Operation cancelled by user." in capsys.readouterr().err
