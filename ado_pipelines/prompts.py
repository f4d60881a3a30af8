"""Interactive input collection for organization, project and PAT."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .config import AppConfig
from .errors import AdoConfigurationError

logger = logging.getLogger(__name__)

ORGANIZATION_PROMPT = "Enter your Azure DevOps organization: "
PROJECT_PROMPT = "Enter your Azure DevOps project: "
TOKEN_PROMPT = "Enter your Azure DevOps PAT: "


@dataclass(frozen=True)
class Inputs:
    """Values gathered before talking to Azure DevOps."""

    organization: str
    project: str
    token: str
    token_from_env: bool

    def __repr__(self) -> str:
        return (
            f"Inputs(organization={self.organization!r}, project={self.project!r}, "
            f"token={'***' if self.token else ''!r}, token_from_env={self.token_from_env})"
        )


def prompt_user(prompt: str, input_func: Callable[[str], str] = input) -> str:
    """
    Read one line from the user and strip surrounding whitespace.

    A failed read (closed stdin, terminal error) yields an empty string;
    missing values are rejected later by ``validate_inputs``.
    """
    try:
        value = input_func(prompt)
    except (EOFError, OSError) as e:
        logger.debug(f"Could not read input for prompt {prompt!r}: {e}")
        return ""
    return (value or "").strip()


def collect_inputs(config: AppConfig, input_func: Callable[[str], str] = input) -> Inputs:
    """
    Gather organization, project and PAT.

    The PAT is taken from the environment when present; only otherwise is
    the user asked for it.
    """
    organization = prompt_user(ORGANIZATION_PROMPT, input_func)
    project = prompt_user(PROJECT_PROMPT, input_func)

    token = config.token_from_environment()
    if token:
        logger.debug(f"Using PAT from {config.token_env_var}")
        return Inputs(organization, project, token, token_from_env=True)

    token = prompt_user(TOKEN_PROMPT, input_func)
    return Inputs(organization, project, token, token_from_env=False)


def validate_inputs(inputs: Inputs) -> None:
    """Raise AdoConfigurationError if any required value is empty."""
    missing = [
        name
        for name, value in (
            ("organization", inputs.organization),
            ("project", inputs.project),
            ("PAT", inputs.token),
        )
        if not value
    ]
    if missing:
        raise AdoConfigurationError(
            "All inputs (organization, project, PAT) are required.",
            context={"missing": missing},
        )
