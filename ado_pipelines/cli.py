"""Command-line entry point: prompt, persist the PAT, list pipelines."""

import logging
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from dotenv import find_dotenv, load_dotenv

from .client import PipelinesClient
from .config import AppConfig
from .errors import AdoError
from .models import Pipeline
from .prompts import collect_inputs, validate_inputs
from .shell import persist_token, saved_message

logger = logging.getLogger(__name__)

HEADER = "Azure DevOps Pipelines:"


def format_pipeline(pipeline: Pipeline) -> str:
    return f"ID: {pipeline.id}, Name: {pipeline.name}"


def print_pipelines(pipelines: Iterable[Pipeline], out: TextIO) -> None:
    print(HEADER, file=out)
    for pipeline in pipelines:
        print(format_pipeline(pipeline), file=out)


def run(
    config: AppConfig,
    input_func: Callable[[str], str] | None = None,
    out: TextIO | None = None,
    client_factory: Callable[..., PipelinesClient] | None = None,
) -> list[Pipeline]:
    """
    Run the whole flow once.

    Raises AdoError subclasses for every failure; deciding the exit status
    is left to ``main``.
    """
    input_func = input_func or input
    out = out or sys.stdout
    client_factory = client_factory or PipelinesClient

    inputs = collect_inputs(config, input_func)

    if not inputs.token_from_env and inputs.token:
        path = persist_token(inputs.token, config)
        if path is not None:
            print(saved_message(path), file=out)

    validate_inputs(inputs)

    with client_factory(inputs.token, config=config) as client:
        pipelines = client.list_pipelines(inputs.organization, inputs.project)

    print_pipelines(pipelines, out)
    return pipelines


def main() -> int:
    """Main entry point for the ado-pipelines command."""
    # .env is looked up from the working directory; existing variables win
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = AppConfig.from_env()
    except AdoError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        run(config)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130
    except AdoError as e:
        logger.debug(f"Fatal {e.error_code}: context={e.context}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
