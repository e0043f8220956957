"""Core cwlflow modules: graph model, ordering, naming and validation."""

from .cwl_schema import CWL_WORKFLOW_SCHEMA, ValidationError, validate_cwl
from .exceptions import (
    CwlflowError,
    GraphLoadError,
    IncompleteSequenceError,
    InvalidIdError,
    InvalidLinkError,
    NoEntryPointError,
    NotCanonicalError,
    PluginNotFoundError,
)
from .graph import find_unsequenced, get_sequence, simplify_graph
from .identifiers import clean_string, get_cwl_node_id
from .loader import load_graph, load_plugins
from .models import Binding, Graph, Link, Node, NodeSettings, NodeUiConfig, Plugin, SimpleNode, UiEntry
from .ports import CwlType, get_cwl_input_type, get_cwl_output_type, is_directory
from .ui_config import get_node_ui_config

__all__ = [
    "CWL_WORKFLOW_SCHEMA",
    "Binding",
    "CwlType",
    "CwlflowError",
    "Graph",
    "GraphLoadError",
    "IncompleteSequenceError",
    "InvalidIdError",
    "InvalidLinkError",
    "Link",
    "NoEntryPointError",
    "Node",
    "NodeSettings",
    "NodeUiConfig",
    "NotCanonicalError",
    "Plugin",
    "PluginNotFoundError",
    "SimpleNode",
    "UiEntry",
    "ValidationError",
    "clean_string",
    "find_unsequenced",
    "get_cwl_input_type",
    "get_cwl_node_id",
    "get_cwl_output_type",
    "get_node_ui_config",
    "get_sequence",
    "is_directory",
    "load_graph",
    "load_plugins",
    "simplify_graph",
    "validate_cwl",
]
