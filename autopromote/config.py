"""
Action inputs.

GitHub Actions passes every ``with:`` input to the process as an environment
variable named ``INPUT_<NAME>``, where the name is upper-cased and spaces
become underscores (hyphens are kept, e.g. ``INPUT_GITHUB-TOKEN``).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from autopromote.exceptions import ConfigurationError

DEFAULT_BASE_BRANCH = "master"
DEFAULT_API_URL = "https://api.github.com"


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Read one action input, stripped. Missing inputs read as "".

    Args:
        name: Input name as declared in action.yml (e.g. "github-owner")
        environ: Environment to read from (default: os.environ)
    """
    if environ is None:
        environ = os.environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    return environ.get(key, "").strip()


def default_message(value: str) -> str:
    """Return ``value`` unchanged. Empty titles and bodies are sent as-is."""
    return value


@dataclass(frozen=True)
class ActionInputs:
    """Validated inputs for one promotion run."""

    owner: str
    repo: str
    head: str
    action_token: str = field(repr=False)
    artifact_token: str = field(repr=False)
    base: str = DEFAULT_BASE_BRANCH
    title: str = ""
    body: str = ""
    bot_user_name: str = ""
    api_url: str = DEFAULT_API_URL

    def __post_init__(self) -> None:
        if not self.base:
            object.__setattr__(self, "base", DEFAULT_BASE_BRANCH)

        missing = [
            name
            for name, value in (
                ("github-owner", self.owner),
                ("github-repo", self.repo),
                ("branch-ref", self.head),
                ("github-token", self.action_token),
                ("artifact-github-token", self.artifact_token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required inputs: {', '.join(missing)}")

        if self.action_token == self.artifact_token:
            raise ConfigurationError(
                "github-token and artifact-github-token must belong to different "
                "identities: GitHub does not let a pull request's author approve it"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionInputs":
        """
        Build inputs from the action's environment.

        Environment variables:
            INPUT_GITHUB-OWNER, INPUT_GITHUB-REPO, INPUT_BRANCH-REF (required)
            INPUT_GITHUB-TOKEN: action identity token (required)
            INPUT_ARTIFACT-GITHUB-TOKEN: artifact identity token (required)
            INPUT_BASE: target branch (optional, default: master)
            INPUT_TITLE, INPUT_BODY, INPUT_BOT-USER-NAME (optional)
            INPUT_API-URL or GITHUB_API_URL: API root (optional, default: https://api.github.com)

        Args:
            environ: Environment to read from (default: os.environ)

        Returns:
            Validated ActionInputs

        Raises:
            ConfigurationError: If required inputs are missing or the two tokens are identical
        """
        if environ is None:
            environ = os.environ

        api_url = get_input("api-url", environ) or environ.get("GITHUB_API_URL", "") or DEFAULT_API_URL

        return cls(
            owner=get_input("github-owner", environ),
            repo=get_input("github-repo", environ),
            head=get_input("branch-ref", environ),
            action_token=get_input("github-token", environ),
            artifact_token=get_input("artifact-github-token", environ),
            base=get_input("base", environ),
            title=default_message(get_input("title", environ)),
            body=default_message(get_input("body", environ)),
            bot_user_name=get_input("bot-user-name", environ),
            api_url=api_url,
        )
