import os
import json
import logging

from .config import STATE_FILE
from .errors import NoOutputDirectory

logger = logging.getLogger(__name__)


def load_last_output_dir(state_file=STATE_FILE) -> str:
    """Return the remembered output directory, or "" when there is none."""
    if not os.path.exists(state_file):
        return ""
    try:
        with open(state_file, "r", encoding="utf-8") as f:
            state = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read last output directory from {state_file}: {e}")
        return ""
    value = state.get("last_output_dir", "") if isinstance(state, dict) else ""
    return value if isinstance(value, str) else ""


def store_last_output_dir(path: str, state_file=STATE_FILE):
    try:
        os.makedirs(os.path.dirname(os.path.abspath(state_file)), exist_ok=True)
        with open(state_file, "w", encoding="utf-8") as f:
            json.dump({"last_output_dir": path}, f)
    except OSError as e:
        logger.warning(f"Could not save last output directory to {state_file}: {e}")


def resolve_output_dir(chosen) -> str:
    """
    Validate the directory chosen for a batch and make sure it exists.

    Raises:
        NoOutputDirectory: If nothing was chosen (None or blank) or it cannot be created
    """
    if not chosen or not str(chosen).strip():
        raise NoOutputDirectory("No output directory selected")
    path = os.path.abspath(os.path.expanduser(str(chosen).strip()))
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise NoOutputDirectory(f"Output directory {path} is not usable: {e}") from e
    return path
