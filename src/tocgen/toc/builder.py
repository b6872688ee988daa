import re
import weakref
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from tocgen.toc.scanner import HeadingScanner, HeadingToken
from tocgen.toc.slug import slugify

ROOT_DISPLAY_DEPTH = 2

_LINK_TEXT_SPECIALS = re.compile(r"([\\\[\]])")


@dataclass
class TocNode:
    title: str
    slug: str
    display_depth: int = ROOT_DISPLAY_DEPTH
    children: list["TocNode"] = field(default_factory=list)
    _parent: "weakref.ReferenceType[TocNode] | None" = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def parent(self) -> "TocNode | None":
        """The node this one is nested under; None for roots. Not an owning reference."""
        if self._parent is None:
            return None
        return self._parent()

    def append(self, child: "TocNode") -> None:
        child._parent = weakref.ref(self)
        child.display_depth = self.display_depth + 1
        self.children.append(child)

    def walk(self) -> Iterator["TocNode"]:
        """Pre-order traversal: this node, then each subtree in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class _Slot:
    raw_depth: int
    parent: int | None
    node: TocNode


class HierarchyBuilder:
    """Places headings into a forest one at a time, remembering only the last one.

    Raw marker depths drive placement but stay inside the builder's arena;
    nodes only carry the normalized display depth.
    """

    def __init__(self):
        self.forest: list[TocNode] = []
        self._slots: list[_Slot] = []
        self._last: int | None = None

    def add(self, token: HeadingToken) -> TocNode:
        node = TocNode(title=token.raw_title, slug=slugify(token.raw_title))
        parent = self._find_parent(token.depth)

        if parent is None:
            self.forest.append(node)
        else:
            self._slots[parent].node.append(node)

        self._slots.append(_Slot(raw_depth=token.depth, parent=parent, node=node))
        self._last = len(self._slots) - 1
        return node

    def extend(self, tokens: Iterable[HeadingToken]) -> list[TocNode]:
        for token in tokens:
            self.add(token)
        return self.forest

    def _find_parent(self, depth: int) -> int | None:
        if self._last is None:
            return None

        last = self._slots[self._last]

        if last.raw_depth > depth:
            # Shallower heading: climb from the last node. The walk takes one
            # step more than the depth difference and stops at the first
            # ancestor that is strictly shallower than the new heading.
            ancestor: int | None = self._last
            for _ in range(last.raw_depth - depth + 1):
                ancestor = self._slots[ancestor].parent
                if ancestor is None or self._slots[ancestor].raw_depth < depth:
                    break
            return ancestor

        if last.raw_depth == depth:
            return last.parent

        return self._last


def build_heading_forest(text: str, marker: str = "#") -> list[TocNode]:
    """Build the table of contents of a document as a list of root nodes.

    Never fails for any text: a document without headings gives an empty
    forest, and headings that cannot be nested become roots.
    """
    return HierarchyBuilder().extend(HeadingScanner(text, marker=marker))


def render_toc(forest: list[TocNode], indent: str = "  ") -> str:
    lines = []
    for root in forest:
        for node in root.walk():
            prefix = indent * (node.display_depth - ROOT_DISPLAY_DEPTH)
            title = _LINK_TEXT_SPECIALS.sub(r"\\\1", node.title)
            lines.append(f"{prefix}- [{title}](#{node.slug})")
    return "\n".join(lines)
