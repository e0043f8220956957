"""Custom exceptions for cwlflow."""

from collections.abc import Sequence
from typing import Any, Optional


class CwlflowError(Exception):
    """Base exception for all cwlflow errors."""

    pass


class NoEntryPointError(CwlflowError):
    """Raised when the graph has no node without predecessors."""

    def __init__(self, message: str = "No start node found"):
        super().__init__(message)


class NotCanonicalError(CwlflowError):
    """Raised when a step identifier is requested for an unsanitized name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'cleanName "{name}" is not clean')


class InvalidIdError(CwlflowError):
    """Raised when a node id is not a valid number."""

    def __init__(self, node_id: Any):
        self.node_id = node_id
        super().__init__(f'id "{node_id}" is not a number')


class PluginNotFoundError(CwlflowError):
    """Raised when a node references a plugin that is not in the catalog."""

    def __init__(self, plugin_id: str, node_id: Optional[int] = None):
        self.plugin_id = plugin_id
        self.node_id = node_id

        message = f"Plugin {plugin_id} not found"
        if node_id is not None:
            message = f"{message} (referenced by node {node_id})"
        super().__init__(message)


class InvalidLinkError(CwlflowError):
    """Raised when a link points at a port index the plugin does not expose."""

    def __init__(self, message: str, source_id: Optional[int] = None, target_id: Optional[int] = None):
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(message)


class IncompleteSequenceError(CwlflowError):
    """Raised in strict mode when some nodes never become ready to run.

    This happens when the graph contains a cycle or nodes only reachable
    through one. The ids of the nodes left out are kept on ``missing_ids``.
    """

    def __init__(self, missing_ids: Sequence[int]):
        self.missing_ids = list(missing_ids)
        ids = ", ".join(str(node_id) for node_id in self.missing_ids)
        super().__init__(f"Nodes left out of the execution sequence (cycle or unreachable): {ids}")


class GraphLoadError(CwlflowError):
    """Raised when a graph or plugin catalog file cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None, original_error: Optional[Exception] = None):
        self.path = path
        self.original_error = original_error

        if path:
            message = f"{message}\nFile: {path}"
        if original_error:
            message = f"{message}\nOriginal error: {original_error!s}"

        super().__init__(message)
