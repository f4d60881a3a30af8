"""Persist a freshly entered PAT into the user's shell startup file."""

import logging
import os
from pathlib import Path

from .config import AppConfig
from .errors import ShellConfigError

logger = logging.getLogger(__name__)

MARKER_COMMENT = "# Added by Azure DevOps PAT setup"
FILE_MODE = 0o644


def resolve_home_dir(config: AppConfig) -> Path:
    """Return the configured home directory, falling back to the user's home."""
    if config.home_dir:
        return Path(config.home_dir)

    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise ShellConfigError(
            f"failed to get home directory: {e}", original_exception=e
        ) from e


def shell_config_path(home: Path, shell: str) -> Path:
    """Pick ~/.zshrc for zsh users and ~/.bashrc for everyone else."""
    if "zsh" in (shell or ""):
        return home / ".zshrc"
    return home / ".bashrc"


def export_prefix(env_var: str) -> str:
    return f"export {env_var}="


def export_block(env_var: str, token: str) -> str:
    """The exact text appended to the shell startup file."""
    return f"\n{MARKER_COMMENT}\n{export_prefix(env_var)}{token}\n"


def _read_existing(path: Path) -> bytes:
    # raw bytes; startup files are not guaranteed to be valid UTF-8
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return b""
    except OSError as e:
        raise ShellConfigError(
            f"failed to read shell config file: {e}", path=str(path), original_exception=e
        ) from e


def persist_token(token: str, config: AppConfig) -> Path | None:
    """
    Append an ``export`` line for the PAT to the user's shell startup file.

    The file is left untouched when it already exports the variable, so
    running the setup twice never duplicates the block.

    Args:
        token: The PAT to persist
        config: Run configuration (variable name, shell, home directory)

    Returns:
        Path | None: The file that was written, or None if it already had an export line

    Raises:
        ShellConfigError: If the home directory cannot be resolved or the file
            cannot be read, opened or written.
    """
    home = resolve_home_dir(config)
    path = shell_config_path(home, config.shell)

    existing = _read_existing(path)
    if export_prefix(config.token_env_var).encode() in existing:
        logger.info(f"{path} already exports {config.token_env_var}, leaving it unchanged")
        return None

    try:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, FILE_MODE)
    except OSError as e:
        raise ShellConfigError(
            f"failed to open shell config file: {e}", path=str(path), original_exception=e
        ) from e

    try:
        with os.fdopen(fd, "ab") as f:
            f.write(export_block(config.token_env_var, token).encode())
    except OSError as e:
        raise ShellConfigError(
            f"failed to write to shell config file: {e}", path=str(path), original_exception=e
        ) from e

    logger.info(f"Appended {config.token_env_var} export to {path}")
    return path


def saved_message(path: Path) -> str:
    return (
        f"PAT saved to {path}. Restart your terminal or run `source {path}` "
        "to apply the changes."
    )
