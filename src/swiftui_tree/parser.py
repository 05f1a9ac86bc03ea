from __future__ import annotations
import logging
import re
from typing import List, Optional, Tuple, Union

from .model import DeclarationMap, NodeKind, ViewNode
from .scanner import (
    find_matching_delimiter, is_word_at, mask_literals, read_balanced,
    skip_literal, skip_trivia, split_top_level,
)
from .settings import ParserSettings

logger = logging.getLogger(__name__)

ELLIPSIS = "…"


class SwiftUIParser:
    """
    Lightweight, tolerant parser for SwiftUI view declarations.
    It is not a Swift grammar: declarations are found with regexes, and view
    expressions are decomposed by string-aware delimiter matching. Good enough
    for showing the structure of a typical `body`, not for compiling it.
    """

    struct_re = re.compile(r"\bstruct\s+(\w+)\s*(?:<[^{]*?>)?\s*:\s*([^{]*?)\s*\{")
    body_re = re.compile(r"\bvar\s+body\s*:\s*some\s+(?:SwiftUI\.)?View\s*\{")
    ident_re = re.compile(r"[A-Za-z0-9_.]*")
    label_re = re.compile(r"^(\w+)\s*:\s*(.+)$", re.S)
    content_closure_re = re.compile(r"content\s*:\s*\{")
    labeled_closure_re = re.compile(r"[ \t]*(\w+)\s*:\s*\{")
    modifier_name_re = re.compile(r"\w*")
    # `item in`, `(index, item) in`, `[weak x] value -> Foo in`
    closure_params_re = re.compile(
        r"^\s*(?:\[[^\]\n]*\]\s*)?"
        r"(?:\([^(){}\"\n]*\)\s*|[A-Za-z_$][\w$]*(?:\s*,\s*[A-Za-z_$][\w$]*)*\s+)"
        r"(?:->\s*[\w.?!<>\[\]]+\s+)?"
        r"in\b"
    )

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings()

    # -- declarations -----------------------------------------------------

    def extract_declarations(self, source: str) -> DeclarationMap:
        # regexes and brace matching run on a masked copy so nothing inside
        # strings or comments is mistaken for a declaration
        masked = mask_literals(source)
        views: DeclarationMap = {}
        for m in self.struct_re.finditer(masked):
            name, conformances = m.groups()
            if not {"View", "SwiftUI.View"} & set(re.split(r"[^\w.]+", conformances)):
                continue
            struct_open = m.end() - 1
            struct_close = find_matching_delimiter(masked, struct_open)
            if struct_close is None:
                logger.debug("struct %s: declaration never closes, skipped", name)
                continue
            bm = self._own_body(masked, struct_open, struct_close)
            if not bm:
                logger.debug("struct %s has no `var body: some View` block, skipped", name)
                continue
            body_open = bm.end() - 1
            body_close = find_matching_delimiter(masked, body_open)
            if body_close is None:
                logger.debug("struct %s: body block never closes, skipped", name)
                continue
            if name in views:
                logger.warning("View %s is declared more than once; keeping the last one", name)
            views[name] = source[body_open + 1:body_close]
        logger.debug("Found %d view declarations", len(views))
        return views

    def _own_body(self, masked: str, struct_open: int, struct_close: int) -> Optional[re.Match]:
        # `var body` of a nested type sits deeper than the struct's own members
        for bm in self.body_re.finditer(masked, struct_open + 1, struct_close):
            segment = masked[struct_open + 1:bm.start()]
            if segment.count("{") == segment.count("}"):
                return bm
        return None

    # -- expressions ------------------------------------------------------

    def classify(self, name: str) -> NodeKind:
        if name == "ForEach":
            return NodeKind.FOR_EACH
        if name in self.settings.container_types:
            return NodeKind.CONTAINER
        return NodeKind.VIEW

    def parse_expression(self, expr: str) -> ViewNode:
        """
        Decompose one view expression such as
            VStack(spacing: 8) { ... }.padding().background(.white)
        into name, props, children and modifiers. Custom views are not
        inlined here.
        """
        s = expr.strip()
        n = len(s)
        m = self.ident_re.match(s)
        node = ViewNode(name=m.group(0))
        node.kind = self.classify(node.name)
        i = m.end()

        sources: List[str] = []
        k = _skip_spaces(s, i)
        if k < n and s[k] == "(":
            close = find_matching_delimiter(s, k)
            if close is None:
                logger.debug("%s: argument list never closes, props dropped", node.name)
                return node
            args = s[k + 1:close]
            content = None
            if node.kind is NodeKind.FOR_EACH:
                content = self._find_content_argument(args)
            node.props = self.parse_props(args)
            i = close + 1
            if node.kind is NodeKind.FOR_EACH and content is None:
                cm = self.content_closure_re.match(s, _skip_spaces(s, i))
                if cm:
                    blk = read_balanced(s, cm.end() - 1)
                    if blk:
                        content, end = blk
                        i = end + 1
            if content is not None:
                sources.append(content)

        k = _skip_spaces(s, i)
        if k < n and s[k] == "{":
            blk = read_balanced(s, k)
            if blk is None:
                logger.debug("%s: trailing closure never closes", node.name)
                i = n
            else:
                inner, end = blk
                sources.append(inner)
                i, labeled = self._take_labeled_closures(s, end + 1)
                sources.extend(labeled)

        for src in sources:
            node.children.extend(self.parse_children(self.strip_closure_params(src)))

        node.modifiers = self.parse_modifiers(s[i:])
        return node

    def _find_content_argument(self, args: str) -> Optional[str]:
        """Body of a `content: { ... }` argument in a ForEach argument list, if any."""
        for part in split_top_level(args):
            cm = self.content_closure_re.match(part)
            if cm:
                blk = read_balanced(part, cm.end() - 1)
                if blk:
                    return blk[0]
        return None

    def _take_labeled_closures(self, s: str, i: int) -> Tuple[int, List[str]]:
        # multiple trailing closures: `Button { ... } label: { ... }`
        found: List[str] = []
        while True:
            lm = self.labeled_closure_re.match(s, i)
            if not lm:
                return i, found
            blk = read_balanced(s, lm.end() - 1)
            if blk is None:
                return len(s), found
            found.append(blk[0])
            i = blk[1] + 1

    def strip_closure_params(self, text: str) -> str:
        m = self.closure_params_re.match(text)
        if not m:
            return text
        return text[m.end():].lstrip()

    def parse_props(self, args_text: str) -> List[str]:
        props: List[str] = []
        if not args_text or not args_text.strip():
            return props
        for part in split_top_level(args_text):
            m = self.label_re.match(part)
            if m:
                props.append(f"{m.group(1)}: {self.normalize_value(m.group(2))}")
            else:
                props.append(self.normalize_value(part))
        return props

    def normalize_value(self, value: str) -> str:
        single = " ".join(value.split())
        limit = self.settings.max_prop_length
        if len(single) > limit:
            return single[:limit - 3] + ELLIPSIS
        return single

    def parse_modifiers(self, tail: str) -> List[str]:
        """Top-level `.name` / `.name(args)` calls, left to right."""
        mods: List[str] = []
        depth = 0
        i = 0
        n = len(tail)
        while i < n:
            skipped = skip_literal(tail, i)
            if skipped != i:
                i = skipped
                continue
            ch = tail[i]
            if ch in "([{":
                depth += 1
            elif ch in ")]}":
                depth -= 1
            elif ch == "." and depth <= 0:
                m = self.modifier_name_re.match(tail, i + 1)
                name = m.group(0)
                if not name:
                    i += 1
                    continue
                j = m.end()
                args = ""
                k = _skip_spaces(tail, j)
                if k < n and tail[k] == "(":
                    close = find_matching_delimiter(tail, k)
                    if close is None:
                        mods.append(name)
                        break
                    args = " ".join(tail[k + 1:close].split())
                    j = close + 1
                k = _skip_spaces(tail, j)
                if k < n and tail[k] == "{":
                    # closure attached to the modifier (.toolbar { ... }) is not view content
                    close = find_matching_delimiter(tail, k)
                    j = n if close is None else close + 1
                    j, _ = self._take_labeled_closures(tail, j)
                mods.append(f"{name}({args})" if args else name)
                i = j
                continue
            i += 1
        return mods

    # -- blocks -----------------------------------------------------------

    def split_siblings(self, body: str) -> List[Union[str, ViewNode]]:
        """
        Split a block into its top-level sibling expressions. A sibling ends at
        a newline outside any delimiters unless the next line continues the
        modifier chain with `.`. `if` constructs come back already parsed.
        """
        items: List[Union[str, ViewNode]] = []
        i = 0
        n = len(body)
        while i < n:
            i = _skip_separators(body, i)
            if i >= n:
                break
            if is_word_at(body, i, "if"):
                node, next_index = self.parse_conditional(body, i)
                if node is not None:
                    items.append(node)
                    i = next_index
                    continue
            end = _expression_end(body, i)
            expr = body[i:end].strip()
            if expr:
                items.append(expr)
            i = max(end, i + 1)
        return items

    def parse_children(self, body: str) -> List[ViewNode]:
        return [
            item if isinstance(item, ViewNode) else self.parse_expression(item)
            for item in self.split_siblings(body)
        ]

    def parse_conditional(self, text: str, index: int) -> Tuple[Optional[ViewNode], int]:
        """
        Parse `if cond { ... } [else if ... | else { ... }]` starting at index.
        Returns the If node and the index just past the construct, or
        (None, index) when no block follows the condition.
        """
        n = len(text)
        k = _skip_spaces(text, index + 2)
        cond_start = k
        depth = 0
        while k < n:
            skipped = skip_literal(text, k)
            if skipped != k:
                k = skipped
                continue
            ch = text[k]
            if ch in "([":
                depth += 1
            elif ch in ")]":
                depth -= 1
            elif ch == "{" and depth <= 0:
                break
            k += 1
        if k >= n:
            return None, index
        then_blk = read_balanced(text, k)
        if then_blk is None:
            return None, index

        condition = " ".join(text[cond_start:k].split())
        inner, end = then_blk
        node = ViewNode(name=f"if {condition}", kind=NodeKind.IF)
        node.children.append(ViewNode(name="Then", kind=NodeKind.BRANCH, children=self.parse_children(inner)))

        cursor = skip_trivia(text, end + 1)
        if not is_word_at(text, cursor, "else"):
            return node, end + 1
        cursor = skip_trivia(text, cursor + 4)
        if is_word_at(text, cursor, "if"):
            nested, nested_end = self.parse_conditional(text, cursor)
            if nested is None:
                return node, cursor
            node.children.append(ViewNode(name="Else", kind=NodeKind.BRANCH, children=[nested]))
            return node, nested_end
        if cursor < n and text[cursor] == "{":
            else_blk = read_balanced(text, cursor)
            if else_blk is None:
                logger.debug("else block of `if %s` never closes", condition)
                return node, n
            node.children.append(
                ViewNode(name="Else", kind=NodeKind.BRANCH, children=self.parse_children(else_blk[0]))
            )
            return node, else_blk[1] + 1
        return node, cursor


def _skip_spaces(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i].isspace():
        i += 1
    return i


def _skip_separators(text: str, i: int) -> int:
    # whitespace, comments, and stray commas/semicolons between siblings
    n = len(text)
    while i < n:
        j = skip_trivia(text, i)
        while j < n and text[j] in ",;":
            j += 1
        if j == i:
            break
        i = j
    return i


def _expression_end(text: str, start: int) -> int:
    depth = 0
    i = start
    n = len(text)
    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue
        ch = text[i]
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif depth <= 0 and ch == ";":
            return i
        elif depth <= 0 and ch == "\n":
            nxt = skip_trivia(text, i)
            if nxt >= n or text[nxt] != ".":
                return i
        i += 1
    return n
