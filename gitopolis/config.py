#!/usr/bin/env python3

import os
import logging
import sys
from pathlib import Path
from typing import Optional

STATE_FILENAME = ".gitopolis.toml"

logger = logging.getLogger("gitopolis")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging for the CLI.

    Messages go to stderr without decorations so that info output such as
    "Added foo" reads like ordinary command output.

    Checks in order:
    1. The explicit ``level`` argument
    2. GITOPOLIS_LOG_LEVEL environment variable
    3. INFO
    """
    level_name = (level or os.environ.get("GITOPOLIS_LOG_LEVEL") or "INFO").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )


def get_state_path() -> Path:
    """Get the path to the repository list file.

    GITOPOLIS_STATE_FILE overrides the default of .gitopolis.toml in the
    current working directory.
    """
    if os.environ.get("GITOPOLIS_STATE_FILE"):
        return Path(os.environ["GITOPOLIS_STATE_FILE"])
    return Path.cwd() / STATE_FILENAME
