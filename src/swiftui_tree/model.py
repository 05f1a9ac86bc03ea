from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

# declaration name -> raw text inside the `body` braces
DeclarationMap = Dict[str, str]


class NodeKind(str, Enum):
    VIEW = "View"
    CONTAINER = "Container"
    FOR_EACH = "ForEach"
    IF = "If"
    BRANCH = "Branch"
    CUSTOM_VIEW = "CustomView"


@dataclass(eq=False)
class ViewNode:
    name: str
    kind: NodeKind = NodeKind.VIEW
    props: List[str] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)
    children: List["ViewNode"] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = "View"

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["ViewNode"]:
        yield self
        for c in self.children:
            yield from c.walk()

    def find(self, name: str) -> Optional["ViewNode"]:
        if self.name == name:
            return self
        for c in self.children:
            found = c.find(name)
            if found:
                return found
        return None

    def count(self) -> int:
        return sum(1 for _ in self.walk())
