"""Compilation of pipeline graphs into CWL workflow documents."""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from cwlflow.core.cwl_schema import validate_cwl
from cwlflow.core.models import Graph, Plugin
from cwlflow.core.settings import CwlflowSettings

from .context import CompilerContext
from .document import CwlWorkflow, DirectoryRef, JobValue, LiteralValue, WorkflowStep
from .passes import generate_output_placeholders, inline_internal_values, provision_settings
from .synthesizer import to_cwl

logger = logging.getLogger(__name__)


def compile_graph(
    graph: Graph,
    plugins: Iterable[Plugin],
    settings: Optional[CwlflowSettings] = None,
    strict: Optional[bool] = None,
    validate: Optional[bool] = None,
) -> dict[str, Any]:
    """Compile a graph to a CWL document dict using configured defaults.

    ``strict`` and ``validate`` override the corresponding compiler settings
    when given.

    Raises:
        CwlflowError: Any compilation error (see ``to_cwl``)
        ValidationError: If validation is enabled and the document is malformed
    """
    settings = settings or CwlflowSettings()
    strict = settings.compiler.strict if strict is None else strict
    validate = settings.compiler.validate_output if validate is None else validate

    document = to_cwl(graph, plugins, header=settings.document, strict=strict).to_dict()

    if validate:
        logger.debug("Validating generated document", extra={"phase": "validation"})
        validate_cwl(document)

    return document


__all__ = [
    "CompilerContext",
    "CwlWorkflow",
    "DirectoryRef",
    "JobValue",
    "LiteralValue",
    "WorkflowStep",
    "compile_graph",
    "generate_output_placeholders",
    "inline_internal_values",
    "provision_settings",
    "to_cwl",
]
