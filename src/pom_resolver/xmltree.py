"""Parse XML files into immutable element trees using lxml."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from lxml import etree

from pom_resolver.exceptions import PomNotFoundError, PomParseError
from pom_resolver.fs import File


class Element:
    """A read-only XML element.

    Only element nodes are kept; comments and processing instructions are
    dropped. Names are local names, so POMs with and without the Maven
    namespace look the same. Elements compare by identity.
    """

    __slots__ = ("name", "text", "children", "parent", "file")

    def __init__(self, name: str, text: str, file: File, parent: Element | None = None) -> None:
        self.name = name
        self.text = text
        self.file = file
        self.parent = parent
        self.children: tuple[Element, ...] = ()

    def child(self, name: str) -> Element | None:
        for c in self.children:
            if c.name == name:
                return c
        return None

    def children_named(self, name: str) -> Iterator[Element]:
        return (c for c in self.children if c.name == name)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def ancestors(self) -> Iterator[Element]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def __repr__(self) -> str:
        return f"<Element {self.name} in {self.file.base_name}>"


class XmlFile:
    """A parsed XML file: the file plus its root element."""

    __slots__ = ("file", "root")

    def __init__(self, file: File, root: Element) -> None:
        self.file = file
        self.root = root

    def __repr__(self) -> str:
        return f"<XmlFile {self.file}>"


def _characters(node: etree._Element) -> str:
    """Concatenate the character data directly inside `node` (text and child tails)."""
    parts = [node.text or ""]
    parts.extend(child.tail or "" for child in node)
    return "".join(parts).strip()


def _convert(node: etree._Element, file: File, parent: Element | None) -> Element:
    element = Element(etree.QName(node).localname, _characters(node), file, parent)
    element.children = tuple(
        _convert(child, file, element)
        for child in node
        if isinstance(child.tag, str)
    )
    return element


def parse_xml(path: str | Path) -> XmlFile:
    """Parse an XML file and return it with its root element.

    Args:
        path: Path to the XML file.

    Raises:
        PomNotFoundError: If the file does not exist.
        PomParseError: If XML cannot be parsed.

    Returns:
        The parsed file.
    """
    xml_path = Path(path)
    if not xml_path.exists():
        raise PomNotFoundError(f"XML file not found: {xml_path}")
    try:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)
        tree = etree.parse(str(xml_path), parser=parser)
    except (OSError, etree.XMLSyntaxError) as exc:
        raise PomParseError(f"Failed to parse XML file: {xml_path}") from exc
    file = File.at(xml_path)
    return XmlFile(file, _convert(tree.getroot(), file, None))
