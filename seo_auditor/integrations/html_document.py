"""
HTML Document Accessor

Thin read-only wrapper over BeautifulSoup exposing CSS-selector queries
(select / text / attr / html). Signal extractors and the crawler depend on
this interface only, never on BeautifulSoup directly.
"""

from bs4 import BeautifulSoup
from bs4.element import Tag


class Element:
    """A single matched element."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    def text(self) -> str:
        """Concatenated text content (script/style bodies only when selected directly)."""
        return self._tag.get_text()

    def attr(self, name: str) -> str | None:
        """Attribute value, or None when the attribute is absent."""
        value = self._tag.get(name)
        if value is None:
            return None
        # Multi-valued attributes (rel, class) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def html(self) -> str:
        """Inner HTML of the element."""
        return self._tag.decode_contents()

    def __repr__(self) -> str:
        return f"<Element {self._tag.name}>"


class HTMLDocument:
    """Parsed HTML (or XML) document."""

    def __init__(self, soup: BeautifulSoup, source: str):
        self._soup = soup
        self._source = source

    @property
    def source(self) -> str:
        """The raw markup the document was parsed from."""
        return self._source

    def select(self, selector: str) -> list[Element]:
        return [Element(tag) for tag in self._soup.select(selector)]

    def select_one(self, selector: str) -> Element | None:
        tag = self._soup.select_one(selector)
        return Element(tag) if tag is not None else None

    def count(self, selector: str) -> int:
        return len(self._soup.select(selector))

    def visible_text(self, selector: str = "body") -> str:
        """Whitespace-collapsed text of the first match, or of the whole document.

        Inline tags add no separator, so ``un<b>believ</b>able`` stays one word.
        Script and style bodies are not part of a container's text.
        """
        root = self._soup.select_one(selector) or self._soup
        return " ".join(root.get_text().split())


def parse(html: str, xml: bool = False) -> HTMLDocument:
    """Parse markup into an HTMLDocument."""
    source = html or ""
    soup = BeautifulSoup(source, "xml" if xml else "lxml")
    return HTMLDocument(soup, source)
