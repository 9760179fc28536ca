"""Presentation nodes: a tiny element tree the views serialise to HTML."""
from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Dict, Iterator, List

# Elements written without a closing tag
_VOID_TAGS = {'img', 'br', 'hr'}


@dataclass
class Node:
    tag: str
    classes: List[str] = field(default_factory=list)
    text: str = ''
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List['Node'] = field(default_factory=list)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def find_all(self, class_name: str) -> List['Node']:
        return [n for n in self.walk() if n.has_class(class_name)]

    def walk(self) -> Iterator['Node']:
        yield self
        for child in self.children:
            yield from child.walk()


def to_html(node: Node) -> str:
    attrs = dict(node.attrs)
    if node.classes:
        attrs = {'class': ' '.join(node.classes), **attrs}
    rendered_attrs = ''.join(f' {k}="{html.escape(str(v), quote=True)}"' for k, v in attrs.items())
    if node.tag in _VOID_TAGS:
        return f"<{node.tag}{rendered_attrs}>"
    inner = html.escape(node.text) + ''.join(to_html(c) for c in node.children)
    return f"<{node.tag}{rendered_attrs}>{inner}</{node.tag}>"


def to_html_all(nodes: List[Node]) -> str:
    return ''.join(to_html(n) for n in nodes)
