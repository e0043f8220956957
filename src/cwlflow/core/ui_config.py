"""Default lookup of a plugin's user-interface binding order."""

from collections.abc import Callable

from .models import NodeUiConfig, Plugin

UiConfigLookup = Callable[[Plugin], NodeUiConfig]


def get_node_ui_config(plugin: Plugin) -> NodeUiConfig:
    """Return the plugin's bindings in the order the editor shows them.

    Ports referenced by a ``ui`` entry come first, in ``ui`` order; the
    remaining ports follow in declaration order. Link outlet/inlet indices
    are positions in these lists.
    """
    return NodeUiConfig(
        inputs=_ordered(plugin, "inputs"),
        outputs=_ordered(plugin, "outputs"),
        ui=list(plugin.ui),
    )


def _ordered(plugin: Plugin, direction: str) -> list:
    bindings = getattr(plugin, direction)
    by_name = {binding.name: binding for binding in bindings}

    ordered = []
    prefix = f"{direction}."
    for entry in plugin.ui:
        if entry.key.startswith(prefix):
            binding = by_name.pop(entry.key[len(prefix) :], None)
            if binding is not None:
                ordered.append(binding)

    ordered.extend(binding for binding in bindings if binding.name in by_name)
    return ordered
