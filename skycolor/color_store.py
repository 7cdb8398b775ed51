"""
Persisted color customizations.

The computed colors are written into a JSON object file shared with other
settings (editor color customizations). Only the status bar keys are owned
here; every other key in the file is preserved on write and on clear.
"""

import json
import os
import tempfile
import threading
from pathlib import Path

from skycolor.config import COLOR_STORE_FILE
from skycolor.logger import get_logger
from skycolor.sky import SkyColors

logger = get_logger("color_store")

BACKGROUND_KEY = "statusBar.background"
FOREGROUND_KEY = "statusBar.foreground"

# Guards load-modify-save of the store file across threads
_store_lock = threading.Lock()


def get_store_path() -> Path:
    """Get path to the customizations file, create directory if needed."""
    path = Path(COLOR_STORE_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def load_customizations() -> dict:
    """
    Load the customizations object.

    Returns:
        dict of key -> value; empty if the file is missing or unreadable
    """
    path = get_store_path()

    if not path.exists():
        return {}

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in color store {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Color store {path} does not hold a JSON object, ignoring it")
        return {}

    return data


def save_customizations(values: dict) -> None:
    """
    Write the whole customizations object.

    Writes a temp file next to the store and swaps it in, so readers never
    see a partially written file.
    """
    path = get_store_path()

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(values, f, indent=2)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Failed to save color store: {e}", exc_info=True)
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def write_colors(colors: SkyColors) -> dict:
    """
    Merge the sky colors into the store.

    Returns:
        The hex values written, keyed by customization key
    """
    hex_colors = colors.to_hex()
    new_values = {
        BACKGROUND_KEY: hex_colors["background"],
        FOREGROUND_KEY: hex_colors["foreground"],
    }

    with _store_lock:
        values = load_customizations()
        values.update(new_values)
        save_customizations(values)

    logger.debug(f"Color store updated: {new_values}")
    return new_values


def clear_colors() -> bool:
    """
    Remove the sky colors from the store, keeping other keys.

    Returns:
        True if anything was removed, False otherwise
    """
    with _store_lock:
        values = load_customizations()
        if BACKGROUND_KEY not in values and FOREGROUND_KEY not in values:
            return False

        values.pop(BACKGROUND_KEY, None)
        values.pop(FOREGROUND_KEY, None)
        save_customizations(values)

    logger.info("Cleared sky colors from color store")
    return True
