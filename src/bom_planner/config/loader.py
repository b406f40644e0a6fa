import json
from pathlib import Path
from typing import Any


def _load_json_object(final_path: Path) -> dict[str, Any]:
    with open(final_path) as f:
        data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict from {final_path}, got {type(data)}")
        return data


def load_planning_config(config_path: str | None = None) -> dict[str, Any]:
    """
    Loads the planning runtime configuration (depth caps, labor method, etc).
    If no path is provided, looks for planning_config.json in the config directory.
    """
    if config_path is None:
        # Default to the file next to this script
        final_path = Path(__file__).parent / "planning_config.json"
    else:
        final_path = Path(config_path)

    return _load_json_object(final_path)


def load_snapshot(snapshot_path: str) -> dict[str, Any]:
    """
    Loads a planning snapshot document: skus, bom, inventory, forecasts,
    processes and workers as exported by the surrounding application.
    """
    return _load_json_object(Path(snapshot_path))
