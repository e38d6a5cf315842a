"""
Tests for reading action inputs.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from autopromote.config import ActionInputs, default_message, get_input
from autopromote.exceptions import ConfigurationError


def action_env(**overrides: str) -> dict[str, str]:
    env = {
        "INPUT_GITHUB-OWNER": "octo-org",
        "INPUT_GITHUB-REPO": "manifests",
        "INPUT_BRANCH-REF": "generated/manifests",
        "INPUT_GITHUB-TOKEN": "ghs_action",
        "INPUT_ARTIFACT-GITHUB-TOKEN": "ghp_artifact",
        "INPUT_TITLE": "Update manifests",
        "INPUT_BODY": "Generated by CI",
        "INPUT_BOT-USER-NAME": "manifest-bot",
    }
    env.update(overrides)
    return env


def test_from_env_reads_all_inputs() -> None:
    inputs = ActionInputs.from_env(action_env(**{"INPUT_BASE": "release"}))

    assert inputs.owner == "octo-org"
    assert inputs.repo == "manifests"
    assert inputs.head == "generated/manifests"
    assert inputs.base == "release"
    assert inputs.title == "Update manifests"
    assert inputs.body == "Generated by CI"
    assert inputs.action_token == "ghs_action"
    assert inputs.artifact_token == "ghp_artifact"
    assert inputs.bot_user_name == "manifest-bot"
    assert inputs.api_url == "https://api.github.com"


@given(base=st.sampled_from(["", "   ", "\n"]))
@settings(max_examples=10)
def test_empty_base_defaults_to_master(base: str) -> None:
    """
    Property: an empty (or blank) base input means master
    """
    inputs = ActionInputs.from_env(action_env(**{"INPUT_BASE": base}))
    assert inputs.base == "master"


def test_missing_base_defaults_to_master() -> None:
    assert ActionInputs.from_env(action_env()).base == "master"


def test_input_names_follow_actions_convention() -> None:
    env = {"INPUT_SOME_NAME": "  spaced  ", "INPUT_GITHUB-OWNER": "octo"}

    assert get_input("some name", env) == "spaced"
    assert get_input("github-owner", env) == "octo"
    assert get_input("absent", env) == ""


@pytest.mark.parametrize(
    "missing",
    ["INPUT_GITHUB-OWNER", "INPUT_GITHUB-REPO", "INPUT_BRANCH-REF", "INPUT_GITHUB-TOKEN", "INPUT_ARTIFACT-GITHUB-TOKEN"],
)
def test_missing_required_input(missing: str) -> None:
    env = action_env()
    del env[missing]

    with pytest.raises(ConfigurationError) as exc_info:
        ActionInputs.from_env(env)

    assert missing.removeprefix("INPUT_").lower() in exc_info.value.message


def test_identical_tokens_are_rejected() -> None:
    env = action_env(**{"INPUT_ARTIFACT-GITHUB-TOKEN": "ghs_action"})

    with pytest.raises(ConfigurationError):
        ActionInputs.from_env(env)


def test_api_url_from_runner_environment() -> None:
    env = action_env(GITHUB_API_URL="https://github.example.com/api/v3")
    assert ActionInputs.from_env(env).api_url == "https://github.example.com/api/v3"

    env["INPUT_API-URL"] = "https://override.example.com"
    assert ActionInputs.from_env(env).api_url == "https://override.example.com"


def test_tokens_are_not_in_repr() -> None:
    inputs = ActionInputs.from_env(action_env())
    assert "ghs_action" not in repr(inputs)
    assert "ghp_artifact" not in repr(inputs)


@given(value=st.text(max_size=50))
@settings(max_examples=50)
def test_default_message_is_identity(value: str) -> None:
    """
    Property: title and body are passed through unchanged
    """
    assert default_message(value) == value
