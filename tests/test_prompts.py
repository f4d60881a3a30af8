from unittest.mock import Mock

import pytest

from ado_pipelines.config import AppConfig
from ado_pipelines.errors import AdoConfigurationError
from ado_pipelines.prompts import (
    ORGANIZATION_PROMPT,
    PROJECT_PROMPT,
    TOKEN_PROMPT,
    Inputs,
    collect_inputs,
    prompt_user,
    validate_inputs,
)


def scripted_input(*answers):
    return Mock(side_effect=list(answers))


def test_prompt_user_strips_whitespace():
    assert prompt_user("Name: ", scripted_input("  my-org \n")) == "my-org"


@pytest.mark.parametrize("error", [EOFError(), OSError("terminal gone")])
def test_prompt_user_read_failure_is_empty(error):
    assert prompt_user("Name: ", Mock(side_effect=error)) == ""


def test_collect_inputs_prompts_for_token_when_not_in_env():
    input_func = scripted_input("org", "proj", "  secret  ")

    inputs = collect_inputs(AppConfig(), input_func)

    assert inputs == Inputs("org", "proj", "secret", token_from_env=False)
    prompts = [call.args[0] for call in input_func.call_args_list]
    assert prompts == [ORGANIZATION_PROMPT, PROJECT_PROMPT, TOKEN_PROMPT], (
        f"Unexpected prompt order: {prompts}"
    )


def test_collect_inputs_never_prompts_for_token_from_env():
    input_func = scripted_input("org", "proj")

    inputs = collect_inputs(AppConfig(token="from-env"), input_func)

    assert inputs.token == "from-env"
    assert inputs.token_from_env is True
    assert input_func.call_count == 2, (
        f"Expected only organization and project prompts but got {input_func.call_count}"
    )


def test_repr_hides_token():
    inputs = Inputs("org", "proj", "super-secret", token_from_env=False)

    assert "super-secret" not in repr(inputs)


@pytest.mark.parametrize(
    "inputs, missing",
    [
        (Inputs("", "proj", "pat", False), ["organization"]),
        (Inputs("org", "", "pat", False), ["project"]),
        (Inputs("org", "proj", "", False), ["PAT"]),
        (Inputs("", "", "", False), ["organization", "project", "PAT"]),
    ],
)
def test_validate_inputs_rejects_empty_values(inputs, missing):
    with pytest.raises(AdoConfigurationError, match="are required") as exc_info:
        validate_inputs(inputs)

    assert exc_info.value.context["missing"] == missing


def test_validate_inputs_accepts_complete_inputs():
    validate_inputs(Inputs("org", "proj", "pat", True))
