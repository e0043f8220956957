"""Step identifiers derived from node names and ids."""

import math
import numbers
import re
from collections.abc import Callable
from typing import Any

from .exceptions import InvalidIdError, NotCanonicalError

Sanitizer = Callable[[str], str]

_NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9]+")


def clean_string(name: str) -> str:
    """Turn a display name into an identifier-safe string.

    Runs of characters outside ``[A-Za-z0-9]`` become a single underscore and
    leading/trailing underscores are dropped. Applying it twice gives the
    same result as applying it once.

    Example:
        >>> clean_string("Otsu threshold (v2)")
        'Otsu_threshold_v2'
    """
    cleaned = _NON_IDENTIFIER_RE.sub("_", name).strip("_")
    return cleaned or "node"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def get_cwl_node_id(clean_name: str, node_id: Any, sanitizer: Sanitizer = clean_string) -> str:
    """Build the step id ``<clean_name>_<node_id>``.

    Args:
        clean_name: Node name that already went through ``sanitizer``
        node_id: Numeric node id
        sanitizer: The sanitizer ``clean_name`` is expected to be a fixed point of

    Raises:
        NotCanonicalError: If sanitizing ``clean_name`` again changes it
        InvalidIdError: If ``node_id`` is not a number
    """
    if sanitizer(clean_name) != clean_name:
        raise NotCanonicalError(clean_name)

    if not _is_number(node_id):
        raise InvalidIdError(node_id)

    if isinstance(node_id, float) and node_id.is_integer():
        node_id = int(node_id)

    return f"{clean_name}_{node_id}"
