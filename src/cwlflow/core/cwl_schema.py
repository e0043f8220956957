"""JSON Schema for the generated CWL workflow document.

This is a structural check of what the compiler emits, not a full CWL
validator: it verifies the shape of the document and that every reference
inside it (step ``in`` sources, workflow ``outputSource`` values) points at
something declared in the same document.

Example usage:
    >>> from cwlflow.core.cwl_schema import validate_cwl
    >>> validate_cwl(document)  # No exception raised for a compiled document
"""

import json
from typing import Any, Union

import jsonschema
from jsonschema import Draft7Validator
from jsonschema import ValidationError as JsonSchemaValidationError

CWL_TYPE_PATTERN = r"^(string|int|boolean|File|File\[\]|Directory)\??$"
CWL_VERSION_PATTERN = r"^v\d+\.\d+"


class ValidationError(Exception):
    """Validation error with a readable message and the path of the offending field.

    Attributes:
        message (str): The validation error message
        path (str): Dotted path to the invalid field (e.g., "steps.threshold_1.in")
        suggestion (str): Optional suggestion for fixing the error
    """

    def __init__(self, message: str, path: str = "", suggestion: str = ""):
        self.message = message
        self.path = path
        self.suggestion = suggestion

        full_message = "Validation error"
        if path:
            full_message += f" at {path}"
        full_message += f": {message}"
        if suggestion:
            full_message += f"\n{suggestion}"

        super().__init__(full_message)


_PARAMETER_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"type": {"type": "string", "pattern": CWL_TYPE_PATTERN}},
    "required": ["type"],
}

_TOOL_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "baseCommand": {"type": "array", "items": {"type": "string"}},
        "class": {"const": "CommandLineTool"},
        "cwlVersion": {"type": "string", "pattern": CWL_VERSION_PATTERN},
        "inputs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "inputBinding": {
                        "type": "object",
                        "properties": {"prefix": {"type": "string", "pattern": "^--"}},
                        "required": ["prefix"],
                    },
                    "type": {"type": "string", "pattern": CWL_TYPE_PATTERN},
                },
                "required": ["inputBinding", "type"],
                "additionalProperties": False,
            },
        },
        "outputs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "outputBinding": {
                        "type": "object",
                        "properties": {"glob": {"type": "string"}},
                        "required": ["glob"],
                    },
                    "type": {"type": "string", "pattern": CWL_TYPE_PATTERN},
                },
                "required": ["outputBinding", "type"],
                "additionalProperties": False,
            },
        },
        "requirements": {
            "type": "object",
            "properties": {
                "DockerRequirement": {
                    "type": "object",
                    "properties": {"dockerPull": {"type": "string"}},
                    "required": ["dockerPull"],
                },
                "InitialWorkDirRequirement": {
                    "type": "object",
                    "properties": {
                        "listing": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "entry": {"type": "string"},
                                    "writable": {"type": "boolean"},
                                },
                                "required": ["entry", "writable"],
                            },
                        }
                    },
                    "required": ["listing"],
                },
                "InlineJavascriptRequirement": {"type": "object"},
            },
            "required": ["DockerRequirement", "InitialWorkDirRequirement"],
        },
    },
    "required": ["baseCommand", "class", "cwlVersion", "inputs", "outputs", "requirements"],
}

# JSON Schema for the compiled workflow document
CWL_WORKFLOW_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "cwlVersion": {"type": "string", "pattern": CWL_VERSION_PATTERN},
        "driver": {"type": "string"},
        "class": {"const": "Workflow"},
        "$namespaces": {"type": "object", "additionalProperties": {"type": "string"}},
        "$schemas": {"type": "array", "items": {"type": "string"}},
        "cwlJobInputs": {
            "type": "object",
            "additionalProperties": {
                "anyOf": [
                    {
                        "type": "object",
                        "properties": {
                            "class": {"const": "Directory"},
                            "location": {"type": ["string", "null"]},
                        },
                        "required": ["class", "location"],
                        "additionalProperties": False,
                    },
                    {"type": ["string", "number", "boolean", "array", "null"]},
                ]
            },
        },
        "inputs": {"type": "object", "additionalProperties": _PARAMETER_SCHEMA},
        "outputs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "pattern": CWL_TYPE_PATTERN},
                    "outputSource": {"type": "string", "pattern": r"^[^/]+/[^/]+$"},
                },
                "required": ["type", "outputSource"],
            },
        },
        "steps": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "in": {
                        "type": "object",
                        "additionalProperties": {
                            "type": "object",
                            "properties": {"source": {"type": "string"}},
                            "required": ["source"],
                            "additionalProperties": False,
                        },
                    },
                    "run": _TOOL_SCHEMA,
                    "out": {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
                },
                "required": ["in", "run", "out"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["cwlVersion", "class", "cwlJobInputs", "inputs", "outputs", "steps"],
}


def _format_path(path: list) -> str:
    """Format a jsonschema path into a readable string like "steps.a_1.run.inputs"."""
    formatted = ""
    for i, component in enumerate(path):
        if isinstance(component, int):
            formatted += f"[{component}]"
        else:
            if i > 0:
                formatted += "."
            formatted += str(component)
    return formatted or "root"


def _get_suggestion(error: JsonSchemaValidationError) -> str:
    """Get a helpful suggestion based on the validation error."""
    if error.validator == "required":
        match = error.message.split("'")
        if len(match) >= 2:
            return f"Add the required field '{match[1]}'"
        return "Add the missing required field"
    elif error.validator == "type":
        expected = error.validator_value
        actual = type(error.instance).__name__
        return f"Change type from '{actual}' to '{expected}'"
    elif error.validator == "pattern" and error.validator_value == CWL_TYPE_PATTERN:
        return "Use one of: string, int, boolean, File, File[], Directory (optionally suffixed with '?')"
    elif error.validator == "additionalProperties":
        return "Remove unknown properties or check field names"

    return ""


def validate_cwl(data: Union[dict[str, Any], str]) -> None:
    """Validate a compiled workflow document.

    Args:
        data: The document (dict or JSON string)

    Raises:
        ValidationError: If the document is malformed or has dangling references
        ValueError: If JSON parsing fails
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e

    validator = Draft7Validator(CWL_WORKFLOW_SCHEMA)

    try:
        validator.check_schema(CWL_WORKFLOW_SCHEMA)
    except jsonschema.SchemaError as e:
        raise RuntimeError(f"Schema definition error: {e}") from e

    errors = list(validator.iter_errors(data))
    if errors:
        error = errors[0]
        raise ValidationError(
            message=error.message,
            path=_format_path(list(error.absolute_path)),
            suggestion=_get_suggestion(error),
        )

    _validate_step_sources(data)
    _validate_output_sources(data)


def _step_reference_error(ref: str, steps: dict[str, Any]) -> str:
    """Check a ``<stepId>/<port>`` reference, returning an error message or ""."""
    step_id, _, port = ref.partition("/")
    if step_id not in steps:
        return f"Reference '{ref}' points at unknown step '{step_id}'"
    if port not in steps[step_id].get("out", []):
        return f"Reference '{ref}' points at '{port}', which step '{step_id}' does not produce"
    return ""


def _validate_step_sources(data: dict[str, Any]) -> None:
    """Every step input must come from a workflow input or another step's output."""
    steps = data["steps"]
    inputs = data["inputs"]

    for step_id, step in steps.items():
        run_inputs = step["run"]["inputs"]
        for port, binding in step["in"].items():
            path = f"steps.{step_id}.in.{port}"
            if port not in run_inputs:
                raise ValidationError(
                    message=f"Step input '{port}' is not declared by the tool",
                    path=path,
                    suggestion=f"Declared tool inputs: {sorted(run_inputs)}",
                )

            source = binding["source"]
            if "/" in source:
                message = _step_reference_error(source, steps)
                if message:
                    raise ValidationError(message=message, path=f"{path}.source")
            elif source not in inputs:
                raise ValidationError(
                    message=f"Step input references undeclared workflow input '{source}'",
                    path=f"{path}.source",
                    suggestion="Declare it under 'inputs' or link the port to another step",
                )


def _validate_output_sources(data: dict[str, Any]) -> None:
    """Workflow outputs must be produced by a step of this workflow."""
    for key, output in data["outputs"].items():
        message = _step_reference_error(output["outputSource"], data["steps"])
        if message:
            raise ValidationError(message=message, path=f"outputs.{key}.outputSource")

