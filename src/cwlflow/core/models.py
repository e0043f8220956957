"""Pydantic models for the visual pipeline graph and the plugin catalog.

Field names follow the state export of the visual editor (camelCase on the
wire), while the Python attributes are snake_case. Both spellings are
accepted when validating.

Example:
    >>> graph = Graph.model_validate({
    ...     "nodes": [{"id": 1, "pluginId": "threshold", "name": "Threshold"}],
    ...     "links": [],
    ... })
    >>> graph.nodes[0].plugin_id
    'threshold'
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Binding(BaseModel):
    """A named, typed input or output port of a plugin."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str = Field(default="string", description="string, number, boolean, file, file[], directory, ...")
    required: bool = False


class UiEntry(BaseModel):
    """One element of a plugin's user interface description.

    Only ``key`` is interpreted (``inputs.<name>`` or ``outputs.<name>``);
    anything else the editor stores is kept untouched.
    """

    model_config = ConfigDict(extra="allow")

    key: str
    title: Optional[str] = None


class Plugin(BaseModel):
    """Plugin (container) metadata as published in the catalog."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    pid: str
    name: str = ""
    version: Optional[str] = None
    base_command: list[str] = Field(default_factory=list, alias="baseCommand")
    container: str = ""
    inputs: list[Binding] = Field(default_factory=list)
    outputs: list[Binding] = Field(default_factory=list)
    ui: list[UiEntry] = Field(default_factory=list)


class NodeSettings(BaseModel):
    """Per-node values keyed by port name."""

    inputs: Optional[dict[str, Any]] = None
    outputs: Optional[dict[str, Any]] = None


class Node(BaseModel):
    """A node of the visual pipeline, backed by a plugin."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    plugin_id: str = Field(..., alias="pluginId")
    name: str
    internal: bool = False
    settings: Optional[NodeSettings] = None


class Link(BaseModel):
    """A port-indexed connection between two nodes."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    source_id: int = Field(..., alias="sourceId")
    target_id: int = Field(..., alias="targetId")
    outlet_index: int = Field(default=0, alias="outletIndex", ge=0)
    inlet_index: int = Field(default=0, alias="inletIndex", ge=0)


class Graph(BaseModel):
    """The full pipeline graph: ordered nodes and ordered links."""

    model_config = ConfigDict(extra="ignore")

    nodes: list[Node] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)


class NodeUiConfig(BaseModel):
    """Bindings of a plugin in the order the user interface exposes them.

    Link outlet and inlet indices refer to positions in these lists.
    """

    inputs: list[Binding] = Field(default_factory=list)
    outputs: list[Binding] = Field(default_factory=list)
    ui: list[UiEntry] = Field(default_factory=list)

    def has_ui_entry(self, key: str) -> bool:
        return any(entry.key == key for entry in self.ui)


@dataclass
class SimpleNode:
    """Adjacency view of a node: distinct predecessor and successor ids."""

    id: int
    incoming: list[int] = field(default_factory=list)
    outgoing: list[int] = field(default_factory=list)
