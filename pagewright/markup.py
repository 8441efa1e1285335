"""
HTML producers: inline markup trees and Markdown.

A markup tree is a nested list in the style of Clojure's hiccup, which reads
naturally in YAML descriptors:

  ["div.intro", {"id": "top"}, ["h1", "Title"], "raw <em>html</em>"]

  - first item: tag name, optionally with .class and #id shorthands
  - optional second item: attribute mapping
  - the rest: children (strings, numbers, nested trees, None)

A list that does not start with a tag name is a plain sequence of nodes.
Strings are raw HTML, so entities like &ensp; and inline tags pass through.
"""
import re

import markdown
from bs4 import BeautifulSoup, NavigableString

TAG_NAME_RE = re.compile(r"^[A-Za-z][\w-]*(?:[.#][^.#\s<>]+)*$")
TAG_SHORTHAND_RE = re.compile(r"([.#])([^.#]+)")

# <!-- ... --> and the same comment after smart-dash substitution, <!&ndash; ... &ndash;>
HTML_COMMENT_RE = re.compile(r"<!(&ndash;.*?&ndash;|--.*?--)>", re.DOTALL)

MARKDOWN_EXTENSIONS = ["toc"]


def is_tag_name(value) -> bool:
    """True for "meta" or "div.intro#top"; False for raw HTML like "<meta ...>"."""
    return isinstance(value, str) and TAG_NAME_RE.match(value) is not None


def _split_tag(name: str):
    """'div.a.b#main' -> ('div', {'class': 'a b', 'id': 'main'})"""
    tag = re.split(r"[.#]", name, maxsplit=1)[0]
    attrs = {}
    classes = []
    for kind, value in TAG_SHORTHAND_RE.findall(name[len(tag):]):
        if kind == ".":
            classes.append(value)
        else:
            attrs["id"] = value
    if classes:
        attrs["class"] = " ".join(classes)
    return tag, attrs


def _attr_value(value):
    if value is True:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def _nodes(soup, node):
    """Yield bs4 nodes for one markup-tree node."""
    if node is None or node is False:
        return
    if isinstance(node, str):
        if "<" not in node and "&" not in node:
            yield NavigableString(node)
            return
        fragment = BeautifulSoup(node, "html.parser")
        yield from list(fragment.contents)
        return
    if isinstance(node, (int, float)):
        yield from _nodes(soup, str(node))
        return
    if isinstance(node, (list, tuple)):
        if not node:
            return
        head = node[0]
        if not is_tag_name(head):
            for child in node:
                yield from _nodes(soup, child)
            return

        tag_name, attrs = _split_tag(head)
        children = list(node[1:])
        if children and isinstance(children[0], dict):
            extra = children.pop(0)
            if "class" in extra and "class" in attrs:
                extra = dict(extra, **{"class": f"{attrs['class']} {_attr_value(extra['class'])}"})
            attrs.update(extra)

        tag = soup.new_tag(tag_name)
        for key, value in attrs.items():
            if value is None or value is False:
                continue
            tag[key] = _attr_value(value)
        for child in children:
            for n in _nodes(soup, child):
                tag.append(n)
        yield tag
        return
    raise TypeError(f"cannot render {type(node).__name__} as markup: {node!r}")


def render_markup(tree) -> str:
    """Render a markup tree (or a raw HTML string) to an HTML string."""
    soup = BeautifulSoup("", "html.parser")
    for n in _nodes(soup, tree):
        soup.append(n)
    return soup.decode(formatter="html5")


def remove_comments(text: str) -> str:
    """Strip HTML comments, including entity-encoded ones, from a string."""
    return HTML_COMMENT_RE.sub("", text)


def render_markdown(text: str) -> str:
    """
    Convert Markdown to HTML.

    Headings get id anchors (toc extension); reference-style links are part of
    core Markdown. Comments are removed from the result.
    """
    return remove_comments(markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS))
