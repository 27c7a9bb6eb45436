"""
HTML document handling: parsing, locating <head>/<body>, appending asset tags
and serializing the result.
"""

from typing import Callable, Dict, List, Optional

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter
from loguru import logger

from html_insert_assets.assets import AssetKind, ScriptMode, is_external, script_mode
from html_insert_assets.errors import DocumentError
from html_insert_assets.paths import UrlBuilder


# Like bs4's "html5" formatter, but attributes keep their insertion order and
# only &, < and > are escaped so untouched text is written back as it was read.
class DocumentFormatter(HTMLFormatter):
    def attributes(self, tag):
        for key, value in tag.attrs.items():
            if self.empty_attributes_are_booleans and value == "":
                value = None
            yield key, value


HTML_FORMATTER = DocumentFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)


class DocumentDoctype(Doctype):
    """Doctype that writes back without the trailing newline bs4 adds by default."""

    SUFFIX = ">"


def parse_document(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser", element_classes={Doctype: DocumentDoctype})


def serialize(soup: BeautifulSoup) -> str:
    return soup.decode(formatter=HTML_FORMATTER)


def find_first(node: Tag, predicate: Callable[[Tag], bool]) -> Optional[Tag]:
    """Depth-first search for the first element (node included) matching predicate."""
    stack = [node]
    while stack:
        current = stack.pop()
        if predicate(current):
            return current
        children = [child for child in current.children if isinstance(child, Tag)]
        stack.extend(reversed(children))
    return None


def find_element(node: Tag, name: str) -> Optional[Tag]:
    name = name.lower()
    # The BeautifulSoup object itself is a Tag named "[document]"
    return find_first(node, lambda tag: tag.name is not None and tag.name.lower() == name)


def require_element(node: Tag, name: str) -> Tag:
    element = find_element(node, name)
    if element is None:
        raise DocumentError(f"No <{name}> tag found in HTML document")
    return element


def create_script(soup: BeautifulSoup, src: str, mode: ScriptMode = ScriptMode.PLAIN) -> Tag:
    attrs: Dict[str, str] = {}
    if mode is ScriptMode.MODULE:
        attrs["type"] = "module"
    elif mode is ScriptMode.NOMODULE:
        # An empty value serializes as a bare attribute
        attrs["nomodule"] = ""
    attrs["src"] = src
    return soup.new_tag("script", attrs=attrs)


def create_stylesheet(soup: BeautifulSoup, href: str) -> Tag:
    return soup.new_tag("link", attrs={"rel": "stylesheet", "href": href})


def create_icon(soup: BeautifulSoup, href: str) -> Tag:
    return soup.new_tag("link", attrs={"rel": "shortcut icon", "type": "image/ico", "href": href})


def inject_assets(soup: BeautifulSoup, assets: Dict[AssetKind, List[str]], urls: UrlBuilder) -> None:
    """Append <script> tags to <body> and <link> tags to <head>, in input order."""
    body = require_element(soup, "body")
    head = require_element(soup, "head")

    js = assets.get(AssetKind.JS, [])
    for path in js:
        if is_external(path):
            body.append(create_script(soup, path))
        else:
            body.append(create_script(soup, urls.to_url(path), script_mode(path, js)))

    for path in assets.get(AssetKind.CSS, []):
        head.append(create_stylesheet(soup, urls.to_url(path)))

    for path in assets.get(AssetKind.ICO, []):
        head.append(create_icon(soup, urls.to_url(path)))

    skipped = assets.get(AssetKind.UNKNOWN)
    if skipped:
        logger.debug(f"skipped (unknown type): {skipped}")
