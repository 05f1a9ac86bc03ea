from __future__ import annotations
import logging
from typing import List, Optional, Set

from .model import DeclarationMap, NodeKind, ViewNode
from .parser import SwiftUIParser
from .settings import ParserSettings

logger = logging.getLogger(__name__)


class SwiftUIParseError(Exception):
    """Unexpected failure inside the parser; lexical problems never raise this."""


class ViewTreeBuilder:
    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings()
        self.parser = SwiftUIParser(self.settings)

    def build(self, declarations: DeclarationMap, root_name: str) -> Optional[ViewNode]:
        """
        Parse the body of root_name and inline every custom view it uses.
        A body with several top-level views is wrapped in a synthetic Group.
        Returns None when the declaration is unknown or its body yields nothing.

        root_name is marked in progress before its body is resolved, so a root
        that uses itself gets the recursion marker at its first inner use.
        There is no extra round that inlines the root once more inside itself
        before marking it.
        """
        body = declarations.get(root_name)
        if body is None or not body.strip():
            logger.info("No parsable body for %s", root_name)
            return None
        kids = self.parser.parse_children(body)
        if not kids:
            logger.info("Body of %s contains no view expressions", root_name)
            return None
        if len(kids) == 1:
            root = kids[0]
        else:
            root = ViewNode(name="Group", kind=NodeKind.CONTAINER, children=kids)
        # the root's own body is already on screen, so it counts as in progress
        self.resolve(root, declarations, {root_name})
        logger.debug("Built tree for %s with %d nodes", root_name, root.count())
        return root

    def resolve(self, node: ViewNode, declarations: DeclarationMap, in_progress: Set[str]) -> ViewNode:
        """
        Inline custom views in place. in_progress holds the declarations being
        expanded on the current root-to-leaf path only, so a view can be
        inlined in sibling subtrees but never inside itself.
        """
        if not self._is_inlinable(node, declarations):
            for c in node.children:
                self.resolve(c, declarations, in_progress)
            return node

        if node.name in in_progress:
            logger.debug("Recursive use of %s left un-inlined", node.name)
            node.modifiers.append(self.settings.recursion_marker)
            return node

        node.kind = NodeKind.CUSTOM_VIEW
        node.children = self.parser.parse_children(declarations[node.name])
        in_progress.add(node.name)
        for c in node.children:
            self.resolve(c, declarations, in_progress)
        in_progress.discard(node.name)
        return node

    def _is_inlinable(self, node: ViewNode, declarations: DeclarationMap) -> bool:
        return (
            node.kind is NodeKind.VIEW
            and node.is_leaf
            and node.name in declarations
            and not self.settings.is_reserved(node.name)
        )

    def root_candidates(self, declarations: DeclarationMap) -> List[str]:
        # ContentView, MainView, RootView, MyApp... first; alphabetical within each group
        patterns = self.settings.root_name_patterns

        def rank(name: str):
            lowered = name.lower()
            return (0 if any(p in lowered for p in patterns) else 1, name)

        return sorted(declarations, key=rank)


def extract_declarations(source_text: str, settings: Optional[ParserSettings] = None) -> DeclarationMap:
    """Map every `struct X: View` with a `body` to the raw text of that body."""
    try:
        return SwiftUIParser(settings).extract_declarations(source_text)
    except Exception as e:
        raise SwiftUIParseError(f"Failed to scan view declarations: {e}") from e


def list_root_candidates(declarations: DeclarationMap, settings: Optional[ParserSettings] = None) -> List[str]:
    return ViewTreeBuilder(settings).root_candidates(declarations)


def build_tree(
    declarations: DeclarationMap, root_name: str, settings: Optional[ParserSettings] = None
) -> Optional[ViewNode]:
    try:
        return ViewTreeBuilder(settings).build(declarations, root_name)
    except Exception as e:
        raise SwiftUIParseError(f"Failed to build view tree for {root_name}: {e}") from e
