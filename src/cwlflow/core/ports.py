"""Port classification helpers."""

from enum import Enum

from .models import Binding

DIRECTORY_TYPES = frozenset({"directory", "file", "path", "collection", "csvCollection"})


class CwlType(str, Enum):
    """CWL types a binding can be declared with."""

    STRING = "string"
    INT = "int"
    BOOLEAN = "boolean"
    FILE = "File"
    FILE_ARRAY = "File[]"
    DIRECTORY = "Directory"

    def optional(self) -> str:
        return f"{self.value}?"


_PRIMITIVE_TYPES = {
    "string": CwlType.STRING,
    "number": CwlType.INT,
    "boolean": CwlType.BOOLEAN,
    "file": CwlType.FILE,
    "file[]": CwlType.FILE_ARRAY,
}


def is_directory(binding: Binding) -> bool:
    """Check whether a binding carries a filesystem location.

    Classification looks at the declared type and at the port name only,
    never at the value. Names like ``inpDir``, ``outDir`` or ``filePath``
    count as directories whatever their declared type.
    """
    name = binding.name.lower()
    return binding.type in DIRECTORY_TYPES or name == "inpdir" or name.endswith("path") or name.endswith("dir")


def get_cwl_input_type(binding: Binding) -> CwlType:
    """Map a binding to its CWL type.

    Unknown types fall back to ``string``.
    """
    if is_directory(binding):
        return CwlType.DIRECTORY
    return _PRIMITIVE_TYPES.get(binding.type, CwlType.STRING)


def get_cwl_output_type(binding: Binding) -> CwlType:
    """Type used for output ports, which are always passed as a location or a name."""
    return CwlType.DIRECTORY if is_directory(binding) else CwlType.STRING
