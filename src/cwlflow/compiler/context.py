"""Lookups shared by the compiler passes."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from cwlflow.core.exceptions import InvalidLinkError, PluginNotFoundError
from cwlflow.core.identifiers import Sanitizer, clean_string, get_cwl_node_id
from cwlflow.core.models import Link, Node, NodeUiConfig, Plugin
from cwlflow.core.ui_config import UiConfigLookup, get_node_ui_config


@dataclass
class CompilerContext:
    """Plugin catalog indexed by id plus the two naming collaborators.

    UI configurations are computed once per plugin.
    """

    plugins: dict[str, Plugin]
    sanitizer: Sanitizer = clean_string
    ui_config: UiConfigLookup = get_node_ui_config
    _ui_cache: dict[str, NodeUiConfig] = field(default_factory=dict, repr=False)

    @classmethod
    def from_plugins(
        cls,
        plugins: Iterable[Plugin],
        sanitizer: Sanitizer = clean_string,
        ui_config: UiConfigLookup = get_node_ui_config,
    ) -> "CompilerContext":
        return cls(plugins={plugin.pid: plugin for plugin in plugins}, sanitizer=sanitizer, ui_config=ui_config)

    def plugin_for(self, node: Node) -> Plugin:
        plugin = self.plugins.get(node.plugin_id)
        if plugin is None:
            raise PluginNotFoundError(node.plugin_id, node_id=node.id)
        return plugin

    def ui_for(self, node: Node) -> NodeUiConfig:
        plugin = self.plugin_for(node)
        if plugin.pid not in self._ui_cache:
            self._ui_cache[plugin.pid] = self.ui_config(plugin)
        return self._ui_cache[plugin.pid]

    def step_id(self, node: Node) -> str:
        return get_cwl_node_id(self.sanitizer(node.name), node.id, sanitizer=self.sanitizer)

    def link_ports(self, link: Link, source: Node, target: Node) -> tuple[str, str]:
        """Resolve a link's outlet and inlet indices to port names.

        Raises:
            InvalidLinkError: If an index is outside the UI-ordered binding list
        """
        source_outputs = self.ui_for(source).outputs
        target_inputs = self.ui_for(target).inputs

        if link.outlet_index >= len(source_outputs):
            raise InvalidLinkError(
                f"Link {link.source_id} -> {link.target_id} uses outlet {link.outlet_index}, "
                f"but plugin '{source.plugin_id}' has {len(source_outputs)} output(s)",
                source_id=link.source_id,
                target_id=link.target_id,
            )
        if link.inlet_index >= len(target_inputs):
            raise InvalidLinkError(
                f"Link {link.source_id} -> {link.target_id} uses inlet {link.inlet_index}, "
                f"but plugin '{target.plugin_id}' has {len(target_inputs)} input(s)",
                source_id=link.source_id,
                target_id=link.target_id,
            )

        return source_outputs[link.outlet_index].name, target_inputs[link.inlet_index].name
