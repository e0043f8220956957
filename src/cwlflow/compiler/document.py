"""Typed records for the generated CWL workflow.

The compiler builds these records and only turns them into plain
dictionaries at the very end (``CwlWorkflow.to_dict``). Step order is an
explicit list rather than a property of dictionary iteration.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from cwlflow.core.ports import CwlType
from cwlflow.core.settings import DocumentSettings


@dataclass(frozen=True)
class LiteralValue:
    """A job input passed through as-is (string, number, boolean, ...)."""

    value: Any

    def to_cwl(self) -> Any:
        return self.value


@dataclass(frozen=True)
class DirectoryRef:
    """A job input that points at a directory."""

    location: Any

    def to_cwl(self) -> dict[str, Any]:
        return {"class": "Directory", "location": self.location}


JobValue = Union[LiteralValue, DirectoryRef]


def make_job_value(value: Any, directory: bool) -> JobValue:
    return DirectoryRef(location=value) if directory else LiteralValue(value=value)


@dataclass
class ToolInput:
    prefix: str
    type: CwlType
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "inputBinding": {"prefix": self.prefix},
            "type": self.type.optional() if self.optional else self.type.value,
        }


@dataclass
class ToolOutput:
    glob: str
    type: CwlType

    def to_dict(self) -> dict[str, Any]:
        return {"outputBinding": {"glob": self.glob}, "type": self.type.value}


@dataclass
class CommandLineTool:
    """The ``run`` section of a step: one containerized command."""

    base_command: list[str]
    docker_pull: str
    cwl_version: str = "v1.2"
    inputs: dict[str, ToolInput] = field(default_factory=dict)
    outputs: dict[str, ToolOutput] = field(default_factory=dict)
    # Expressions for InitialWorkDirRequirement, staged writable
    writable_entries: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseCommand": list(self.base_command),
            "class": "CommandLineTool",
            "cwlVersion": self.cwl_version,
            "inputs": {name: tool_input.to_dict() for name, tool_input in self.inputs.items()},
            "outputs": {name: tool_output.to_dict() for name, tool_output in self.outputs.items()},
            "requirements": {
                "DockerRequirement": {"dockerPull": self.docker_pull},
                "InitialWorkDirRequirement": {
                    "listing": [{"entry": entry, "writable": True} for entry in self.writable_entries],
                },
                "InlineJavascriptRequirement": {},
            },
        }


@dataclass
class WorkflowStep:
    """One executable step; ``sources`` maps a port to a job input key or ``<step>/<port>``."""

    id: str
    run: CommandLineTool
    sources: dict[str, str] = field(default_factory=dict)
    out: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "in": {port: {"source": source} for port, source in self.sources.items()},
            "run": self.run.to_dict(),
            "out": list(self.out),
        }


@dataclass
class WorkflowOutput:
    type: CwlType
    output_source: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "outputSource": self.output_source}


@dataclass
class CwlWorkflow:
    """A compiled workflow.

    ``step_order`` lists step ids in execution order; ``steps`` is the
    lookup. ``to_dict`` emits steps in ``step_order``.
    """

    header: DocumentSettings = field(default_factory=DocumentSettings)
    job_inputs: dict[str, JobValue] = field(default_factory=dict)
    inputs: dict[str, CwlType] = field(default_factory=dict)
    outputs: dict[str, WorkflowOutput] = field(default_factory=dict)
    step_order: list[str] = field(default_factory=list)
    steps: dict[str, WorkflowStep] = field(default_factory=dict)

    def add_step(self, step: WorkflowStep) -> None:
        self.step_order.append(step.id)
        self.steps[step.id] = step

    def job_dict(self) -> dict[str, Any]:
        """Job input values, as written to a CWL job file."""
        return {key: value.to_cwl() for key, value in self.job_inputs.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.header.name,
            "cwlVersion": self.header.cwl_version,
            "driver": self.header.driver,
            "class": "Workflow",
            "$namespaces": dict(self.header.namespaces),
            "$schemas": list(self.header.schemas),
            "cwlJobInputs": self.job_dict(),
            "inputs": {key: {"type": cwl_type.value} for key, cwl_type in self.inputs.items()},
            "outputs": {key: output.to_dict() for key, output in self.outputs.items()},
            "steps": {step_id: self.steps[step_id].to_dict() for step_id in self.step_order},
        }
