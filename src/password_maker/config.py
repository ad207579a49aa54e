"""Settings location and logging setup."""

import logging
import os
from pathlib import Path
from typing import Mapping

from rich.console import Console
from rich.logging import RichHandler

from password_maker.errors import ConfigError, ConfigErrorKind

CONFIG_HOME_ENV = "XDG_CONFIG_HOME"
HOME_ENV = "HOME"
SETTINGS_FILENAME = "passwordmaker.yaml"


def resolve_config_root(environ: Mapping[str, str] | None = None) -> Path:
    """Return the configuration directory.

    ``$XDG_CONFIG_HOME`` wins when set; otherwise ``$HOME/.config`` is used.

    Raises:
        ConfigError: If neither variable is set
    """
    env = os.environ if environ is None else environ

    config_home = env.get(CONFIG_HOME_ENV)
    if config_home:
        return Path(config_home)

    home = env.get(HOME_ENV)
    if home:
        return Path(home) / ".config"

    raise ConfigError(
        ConfigErrorKind.NO_HOME,
        f"Neither {CONFIG_HOME_ENV} nor {HOME_ENV} is set",
    )


def resolve_settings_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the full path of the settings file."""
    return resolve_config_root(environ) / SETTINGS_FILENAME


def configure_logging(verbose: bool = False) -> None:
    """Route log records to the terminal through rich.

    Only front ends call this; the library never installs handlers.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )
