"""Loading of pipeline graphs and plugin catalogs from JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError as PydanticValidationError

from .exceptions import GraphLoadError
from .models import Graph, Plugin

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphLoadError("Could not read file", path=str(path), original_error=e) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise GraphLoadError("File is not valid JSON", path=str(path), original_error=e) from e


def load_graph(path: Union[str, Path]) -> Graph:
    """Load a pipeline graph exported by the editor.

    Accepts either the graph object itself or an editor state wrapping it
    under a ``state`` key.

    Raises:
        GraphLoadError: If the file is missing, not JSON or not a graph
    """
    path = Path(path)
    data = _read_json(path)

    if isinstance(data, dict) and "state" in data and "nodes" not in data:
        data = data["state"]

    try:
        graph = Graph.model_validate(data)
    except PydanticValidationError as e:
        raise GraphLoadError("Invalid pipeline graph", path=str(path), original_error=e) from e

    logger.debug(f"Loaded graph with {len(graph.nodes)} nodes and {len(graph.links)} links from {path}")
    return graph


def load_plugins(path: Union[str, Path]) -> list[Plugin]:
    """Load a plugin catalog: a list of plugins or ``{"plugins": [...]}``.

    Raises:
        GraphLoadError: If the file is missing, not JSON or malformed
    """
    path = Path(path)
    data = _read_json(path)

    if isinstance(data, dict):
        data = data.get("plugins")
    if not isinstance(data, list):
        raise GraphLoadError("Plugin catalog must be a list or an object with a 'plugins' list", path=str(path))

    try:
        plugins = [Plugin.model_validate(item) for item in data]
    except PydanticValidationError as e:
        raise GraphLoadError("Invalid plugin catalog", path=str(path), original_error=e) from e

    logger.debug(f"Loaded {len(plugins)} plugins from {path}")
    return plugins
