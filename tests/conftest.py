"""Root-level test configuration and fixtures."""

from typing import Any, Optional

import pytest

from cwlflow.core.models import Graph, Link, Node, Plugin


@pytest.fixture
def make_plugin():
    """Factory for catalog plugins.

    Bindings are given as dicts (``{"name": "x", "type": "string"}``) and UI
    entries as keys (``"inputs.x"``).
    """

    def _make(
        pid: str,
        inputs: Optional[list[dict[str, Any]]] = None,
        outputs: Optional[list[dict[str, Any]]] = None,
        ui: Optional[list[str]] = None,
        container: str = "polusai/tool:1.0.0",
        base_command: Optional[list[str]] = None,
    ) -> Plugin:
        return Plugin.model_validate({
            "pid": pid,
            "name": pid,
            "container": container,
            "baseCommand": base_command or [],
            "inputs": inputs or [],
            "outputs": outputs or [],
            "ui": [{"key": key} for key in ui or []],
        })

    return _make


@pytest.fixture
def make_node():
    """Factory for graph nodes; ``name`` defaults to ``node<id>``."""

    def _make(
        node_id: int,
        plugin_id: str,
        name: Optional[str] = None,
        internal: bool = False,
        inputs: Optional[dict[str, Any]] = None,
        outputs: Optional[dict[str, Any]] = None,
    ) -> Node:
        data: dict[str, Any] = {
            "id": node_id,
            "pluginId": plugin_id,
            "name": name or f"node{node_id}",
            "internal": internal,
        }
        if inputs is not None or outputs is not None:
            data["settings"] = {"inputs": inputs, "outputs": outputs}
        return Node.model_validate(data)

    return _make


@pytest.fixture
def make_link():
    """Factory for links."""

    def _make(source_id: int, target_id: int, outlet: int = 0, inlet: int = 0) -> Link:
        return Link(sourceId=source_id, targetId=target_id, outletIndex=outlet, inletIndex=inlet)

    return _make


@pytest.fixture
def make_graph():
    """Build a Graph from nodes and links."""

    def _make(nodes: list[Node], links: Optional[list[Link]] = None) -> Graph:
        return Graph(nodes=nodes, links=links or [])

    return _make
