"""Loading the static list of destination names."""

import json
import os
from typing import List

import structlog

from .exceptions import InvalidArgument

logger = structlog.get_logger(__name__)

DEFAULT_STATIONS: List[str] = [
    "DARTFORD",
    "DARTMOUTH",
    "TOWER HILL",
    "DERBY",
    "DUNDEE",
    "DONCASTER",
    "LIVERPOOL",
    "LIVERPOOL LIME STREET",
    "PADDINGTON",
    "EUSTON",
    "EUSTON SQUARE",
]


def load_stations(path: str) -> List[str]:
    """
    Load destination names from a file.

    JSON files may hold a list of names or an object with a "stations" list.
    Any other file is read as UTF-8 text with one name per line; blank lines
    are skipped and surrounding whitespace is removed.

    Args:
        path: File to read

    Returns:
        Destination names in file order

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidArgument: If the path is not a readable UTF-8 file or its
            content is not a list of names
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise InvalidArgument(f"{path} could not be read: {exc}") from exc

    if path.lower().endswith(".json"):
        stations = _parse_json(content, path)
    else:
        stations = [line.strip() for line in content.splitlines() if line.strip()]

    logger.info("Stations loaded", path=path, total_stations=len(stations))
    return stations


def _parse_json(content: str, path: str) -> List[str]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("stations")
    if not isinstance(data, list):
        raise InvalidArgument(f"{path} must contain a list of station names")

    for item in data:
        if not isinstance(item, str):
            raise InvalidArgument(
                f"{path} contains a non-string station name: {item!r}"
            )
    return data
