from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Any, FrozenSet, List, Tuple
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_TYPES = frozenset({
    "VStack", "HStack", "ZStack", "ScrollView", "List", "Group", "Section", "Form",
    "TabView", "NavigationStack", "NavigationView", "LazyVStack", "LazyHStack",
    "LazyVGrid", "LazyHGrid", "Grid", "GeometryReader",
})
# never inlined even if a struct with the same name is declared
DEFAULT_RESERVED_NAMES = frozenset({"ForEach", "AnyView"})
DEFAULT_ROOT_PATTERNS = ("content", "main", "root", "app")
RECURSION_MARKER = "/* recursion */"


@dataclass(frozen=True)
class ParserSettings:
    container_types: FrozenSet[str] = DEFAULT_CONTAINER_TYPES
    reserved_names: FrozenSet[str] = DEFAULT_RESERVED_NAMES
    root_name_patterns: Tuple[str, ...] = DEFAULT_ROOT_PATTERNS
    max_prop_length: int = 60
    recursion_marker: str = RECURSION_MARKER

    def is_reserved(self, name: str) -> bool:
        return name in self.container_types or name in self.reserved_names


def load_settings(path: str) -> ParserSettings:
    """
    Read parser settings from a YAML file. Recognised keys:
      extra_container_types: [CardStack, ...]   added to the built-in containers
      reserved_names: [...]                     added to the never-inlined names
      root_name_patterns: [screen, ...]         replaces the root ranking terms
      max_prop_length: 80
    Anything else, or a value of the wrong shape, is ignored.
    """
    settings = ParserSettings()
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a mapping; using defaults", path)
        return settings

    extra = _string_list(data.get("extra_container_types"))
    if extra:
        settings = replace(settings, container_types=settings.container_types | frozenset(extra))
    reserved = _string_list(data.get("reserved_names"))
    if reserved:
        settings = replace(settings, reserved_names=settings.reserved_names | frozenset(reserved))
    patterns = _string_list(data.get("root_name_patterns"))
    if patterns:
        settings = replace(settings, root_name_patterns=tuple(p.lower() for p in patterns))
    limit = data.get("max_prop_length")
    # bool is an int subclass; a limit under 4 cannot hold the ellipsis
    if isinstance(limit, int) and not isinstance(limit, bool) and limit >= 4:
        settings = replace(settings, max_prop_length=limit)

    logger.debug("Loaded settings from %s: %s", path, settings)
    return settings


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [x for x in value if isinstance(x, str) and x]
