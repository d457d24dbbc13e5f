"""Table of contents extraction from markdown heading structure.

The body is parsed with markdown-it-py. Headings are first arranged into a
nested list structure, where a heading deeper than the previous one opens
a nested list under it, and each list item is then converted into a
TocEntry. Anchors follow GitHub's heading slug rules so they match the ids
GitHub renders.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .models import TocEntry

# Leaf node types whose text contributes to a heading title
TITLE_LEAF_TYPES = {'text', 'code_inline'}


@dataclass
class _Paragraph:
    title: str
    url: str


@dataclass
class _ListItem:
    children: List[Union[_Paragraph, '_List']] = field(default_factory=list)


@dataclass
class _List:
    children: List[_ListItem] = field(default_factory=list)


class HeadingSlugger:
    """Generates GitHub-style heading anchors, unique within one document.

    Examples:
        >>> slugger = HeadingSlugger()
        >>> slugger.slug("Getting Started!")
        'getting-started'
        >>> slugger.slug("Getting Started")
        'getting-started-1'
    """

    def __init__(self):
        self._occurrences: Dict[str, int] = {}

    def slug(self, value: str) -> str:
        base = re.sub(r'[^\w\- ]', '', value.lower()).replace(' ', '-')
        result = base
        while result in self._occurrences:
            self._occurrences[base] += 1
            result = f"{base}-{self._occurrences[base]}"
        self._occurrences[result] = 0
        return result


class TableOfContentsExtractor:
    """Builds nested tables of contents from markdown documents.

    Example:
        >>> toc = TableOfContentsExtractor().extract("# Intro\\n## Setup\\n")
        >>> toc[0].title, toc[0].children[0].anchor
        ('Intro', '#setup')
    """

    def __init__(self):
        self._md = MarkdownIt("commonmark")

    def extract(self, body: str) -> List[TocEntry]:
        """Return the nested table of contents for body, in document order."""
        outline = self.build_outline(body)
        if outline is None:
            return []
        return _list_entries(outline)

    def build_outline(self, body: str) -> Optional[_List]:
        """Arrange the document's headings into a nested list structure.

        Returns None when the document has no headings.
        """
        root = SyntaxTreeNode(self._md.parse(body))
        # Headings nested in blockquotes or list items are not part of the outline
        headings = [node for node in root.children if node.type == 'heading']
        if not headings:
            return None

        min_level = min(_heading_level(node) for node in headings)
        slugger = HeadingSlugger()
        outline = _List()

        for heading in headings:
            title = _inline_text(heading)
            paragraph = _Paragraph(title=title, url=f"#{slugger.slug(title)}")
            _insert(paragraph, _heading_level(heading) - min_level + 1, outline)

        return outline


def _heading_level(node: SyntaxTreeNode) -> int:
    return int(node.tag[1:])


def _inline_text(node: SyntaxTreeNode) -> str:
    """Concatenate text and inline code leaves, including emphasis, strong and link text."""
    parts: List[str] = []
    for child in node.children:
        if child.type in TITLE_LEAF_TYPES:
            parts.append(child.content)
        elif child.type == 'softbreak':
            parts.append('\n')
        elif child.type == 'image':
            # alt text is not part of the title
            continue
        else:
            parts.append(_inline_text(child))
    return ''.join(parts)


def _insert(paragraph: _Paragraph, depth: int, parent: Union[_List, _ListItem]) -> None:
    """Insert a heading at a normalized depth below parent."""
    tail = parent.children[-1] if parent.children else None

    if isinstance(parent, _List):
        if depth == 1:
            parent.children.append(_ListItem(children=[paragraph]))
        elif tail is not None:
            _insert(paragraph, depth, tail)
        else:
            # Heading deeper than anything before it: open an empty item
            item = _ListItem()
            parent.children.append(item)
            _insert(paragraph, depth, item)
        return

    if isinstance(tail, _List):
        _insert(paragraph, depth - 1, tail)
    else:
        nested = _List()
        parent.children.append(nested)
        _insert(paragraph, depth - 1, nested)


def _list_entries(outline: _List) -> List[TocEntry]:
    """Convert one list level into TocEntry values.

    A paragraph's children come from the list directly following it within
    the same item. A list with no paragraph before it belongs to an empty
    item and its entries are hoisted to this level.
    """
    layer = [node for item in outline.children for node in item.children]
    entries: List[TocEntry] = []

    for index, node in enumerate(layer):
        if isinstance(node, _Paragraph):
            following = layer[index + 1] if index + 1 < len(layer) else None
            children = _list_entries(following) if isinstance(following, _List) else []
            entries.append(TocEntry(title=node.title, anchor=node.url, children=children))
        elif index == 0 or not isinstance(layer[index - 1], _Paragraph):
            entries.extend(_list_entries(node))

    return entries
