"""Pipeline graph to CWL workflow compiler.

Compilation runs as a fixed sequence of passes:

1. simplify the graph and compute the execution sequence,
2. provision empty settings,
3. generate placeholder values for outputs the user cannot set,
4. inline values of internal nodes into the inputs they feed,
5. turn every remaining node into a workflow step.

Internal nodes only hold values. They take part in ordering and inlining
but never appear in the document.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from cwlflow.core.exceptions import IncompleteSequenceError
from cwlflow.core.graph import find_unsequenced, get_sequence, simplify_graph
from cwlflow.core.identifiers import Sanitizer, clean_string
from cwlflow.core.models import Graph, Link, Node, Plugin
from cwlflow.core.ports import get_cwl_input_type, get_cwl_output_type, is_directory
from cwlflow.core.settings import DocumentSettings
from cwlflow.core.ui_config import UiConfigLookup, get_node_ui_config

from .context import CompilerContext
from .document import CommandLineTool, CwlWorkflow, ToolInput, ToolOutput, WorkflowOutput, WorkflowStep, make_job_value
from .passes import generate_output_placeholders, has_value, inline_internal_values, provision_settings

logger = logging.getLogger(__name__)


def to_cwl(
    graph: Graph,
    plugins: Iterable[Plugin],
    *,
    sanitizer: Sanitizer = clean_string,
    ui_config: UiConfigLookup = get_node_ui_config,
    header: Optional[DocumentSettings] = None,
    strict: bool = False,
) -> CwlWorkflow:
    """Compile a pipeline graph into a CWL workflow.

    The caller's graph is not modified.

    Args:
        graph: Nodes and links from the editor
        plugins: Plugin catalog; nodes reference plugins by ``pid``
        sanitizer: Maps display names to identifier-safe names
        ui_config: Returns a plugin's bindings in UI order (link indices refer to it)
        header: Document header values, defaults from ``DocumentSettings``
        strict: Fail instead of warning when nodes are left out of the sequence

    Returns:
        The compiled workflow; ``to_dict()`` gives the CWL document

    Raises:
        NoEntryPointError: If no node lacks predecessors
        IncompleteSequenceError: In strict mode, if a cycle leaves nodes out
        PluginNotFoundError: If a node's plugin is not in the catalog
        NotCanonicalError: If ``sanitizer`` is not idempotent on a node name
        InvalidIdError: If a node id is not a number
        InvalidLinkError: If a link refers to a port index that does not exist
    """
    context = CompilerContext.from_plugins(plugins, sanitizer=sanitizer, ui_config=ui_config)
    header = header or DocumentSettings()
    links = list(graph.links)

    simple_nodes = simplify_graph(graph.nodes, links)
    sequence = get_sequence(simple_nodes)
    logger.debug(f"Execution sequence: {sequence}", extra={"phase": "sequence"})

    if strict and len(sequence) < len(simple_nodes):
        raise IncompleteSequenceError(find_unsequenced(simple_nodes, sequence))

    nodes = provision_settings(graph.nodes)
    nodes = generate_output_placeholders(nodes, sequence, context)
    nodes = inline_internal_values(nodes, links, context)

    by_id = {node.id: node for node in nodes}
    step_nodes = [by_id[node_id] for node_id in sequence if not by_id[node_id].internal]

    workflow = CwlWorkflow(header=header)
    for node in step_nodes:
        _add_step(workflow, node, by_id, links, context)

    logger.info(f"Compiled {len(workflow.step_order)} step(s) from {len(graph.nodes)} node(s)")
    return workflow


def _add_step(
    workflow: CwlWorkflow,
    node: Node,
    by_id: dict[int, Node],
    links: Sequence[Link],
    context: CompilerContext,
) -> None:
    plugin = context.plugin_for(node)
    step_id = context.step_id(node)
    settings_inputs = (node.settings.inputs or {}) if node.settings else {}
    settings_outputs = (node.settings.outputs or {}) if node.settings else {}

    logger.debug(f"Building step '{step_id}'", extra={"phase": "synthesis", "node_id": node.id})

    step = WorkflowStep(
        id=step_id,
        run=CommandLineTool(
            base_command=list(plugin.base_command),
            docker_pull=plugin.container,
            cwl_version=workflow.header.step_cwl_version,
        ),
    )
    # step order follows the execution sequence
    workflow.add_step(step)

    for binding in plugin.inputs:
        name = binding.name
        cwl_type = get_cwl_input_type(binding)
        step.run.inputs[name] = ToolInput(prefix=f"--{name}", type=cwl_type, optional=not binding.required)

        value = settings_inputs.get(name)
        if not has_value(value):
            continue

        key = f"{step_id}_{name}"
        workflow.job_inputs[key] = make_job_value(value, is_directory(binding))
        workflow.inputs[key] = cwl_type
        step.sources[name] = key

    # Tools receive the output location as an argument and write there
    for binding in plugin.outputs:
        name = binding.name
        cwl_type = get_cwl_output_type(binding)
        key = f"{step_id}_{name}"

        step.run.inputs[name] = ToolInput(prefix=f"--{name}", type=cwl_type)
        step.run.outputs[name] = ToolOutput(glob=f"$(inputs.{name}.basename)", type=cwl_type)
        step.run.writable_entries.append(f"$(inputs.{name})")

        workflow.job_inputs[key] = make_job_value(settings_outputs.get(name), is_directory(binding))
        workflow.inputs[key] = cwl_type
        workflow.outputs[key] = WorkflowOutput(type=cwl_type, output_source=f"{step_id}/{name}")

        step.sources[name] = key
        step.out.append(name)

    # Data links from other steps win over literal values
    for link in links:
        if link.target_id != node.id:
            continue
        source = by_id.get(link.source_id)
        if source is None or source.internal:
            continue

        source_port, target_port = context.link_ports(link, source, node)
        step.sources[target_port] = f"{context.step_id(source)}/{source_port}"
