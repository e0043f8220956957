"""Settings passes run before document synthesis.

Each pass takes a list of nodes and returns a new list; the input nodes are
never modified.
"""

import logging
from collections.abc import Iterable, Sequence

from cwlflow.core.models import Link, Node, NodeSettings

from .context import CompilerContext

logger = logging.getLogger(__name__)


def has_value(value: object) -> bool:
    """A setting counts as set unless it is None or the empty string; False and 0 are values."""
    return value is not None and value != ""


def provision_settings(nodes: Iterable[Node]) -> list[Node]:
    """Give every node ``settings.inputs`` and ``settings.outputs`` mappings.

    Existing values are kept. Running it twice yields the same nodes.
    """
    provisioned = []
    for node in nodes:
        settings = node.settings or NodeSettings()
        provisioned.append(
            node.model_copy(
                update={
                    "settings": NodeSettings(
                        inputs=dict(settings.inputs or {}),
                        outputs=dict(settings.outputs or {}),
                    )
                }
            )
        )
    return provisioned


def _with_settings(node: Node, inputs: dict, outputs: dict) -> Node:
    return node.model_copy(update={"settings": NodeSettings(inputs=inputs, outputs=outputs)})


def generate_output_placeholders(
    nodes: Sequence[Node], sequence: Sequence[int], context: CompilerContext
) -> list[Node]:
    """Fill output ports the user cannot set with ``<stepId>-<output>``.

    Only outputs without a ``ui`` entry (``outputs.<name>``) are touched, and
    only when no value is present yet (see ``has_value``). Nodes outside ``sequence`` are
    returned unchanged.

    Raises:
        PluginNotFoundError: If a sequenced node's plugin is not in the catalog
    """
    sequenced = set(sequence)
    result = []

    for node in nodes:
        if node.id not in sequenced:
            result.append(node)
            continue

        ui = context.ui_for(node)
        step_id = context.step_id(node)
        outputs = dict(node.settings.outputs or {}) if node.settings else {}

        for output in ui.outputs:
            if ui.has_ui_entry(f"outputs.{output.name}"):
                continue
            if not has_value(outputs.get(output.name)):
                outputs[output.name] = f"{step_id}-{output.name}"

        inputs = dict(node.settings.inputs or {}) if node.settings else {}
        result.append(_with_settings(node, inputs, outputs))

    return result


def inline_internal_values(nodes: Sequence[Node], links: Iterable[Link], context: CompilerContext) -> list[Node]:
    """Copy values from internal nodes into the inputs they are linked to.

    Internal nodes never become steps; a link from one of them carries the
    value of its output setting straight into the target's input setting.
    Links are applied in order, so a later link into the same port wins.

    Raises:
        InvalidLinkError: If a link refers to a port index that does not exist
    """
    by_id = {node.id: node for node in nodes}

    for link in links:
        source = by_id.get(link.source_id)
        target = by_id.get(link.target_id)
        if source is None or target is None or not source.internal:
            continue

        source_port, target_port = context.link_ports(link, source, target)
        source_outputs = (source.settings.outputs if source.settings else None) or {}
        value = source_outputs.get(source_port)

        inputs = dict(target.settings.inputs or {}) if target.settings else {}
        outputs = dict(target.settings.outputs or {}) if target.settings else {}
        inputs[target_port] = value
        by_id[target.id] = _with_settings(target, inputs, outputs)

        logger.debug(
            f"Inlined {source.id}.{source_port} into {target.id}.{target_port}",
            extra={"phase": "inline", "node_id": target.id},
        )

    return [by_id[node.id] for node in nodes]
