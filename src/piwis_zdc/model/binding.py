"""Strict element binding on top of lxml.

The session format does not carry type information an off-the-shelf binder
can use: the same element name means different things depending on an
attribute. Model parsers therefore read elements through ElementReader, which
hands out attributes, text and children by wire name and, once a parser is
done, rejects whatever it did not ask for.
"""

from typing import Callable, Dict, List, Optional, Set, Tuple, TypeVar

from lxml import etree

from piwis_zdc.shared.config import DEFAULT_MAX_NESTING_DEPTH
from piwis_zdc.shared.errors import (
    DuplicateFieldError,
    MissingFieldError,
    NestingDepthError,
    UnexpectedFieldError,
)

T = TypeVar("T")

TEXT_FIELD = "$text"
SPACE_ATTRIBUTE = "space"


def local_name(name: str) -> str:
    """Strip the namespace from a Clark-notation tag or attribute name."""
    return etree.QName(name).localname


class ElementReader:
    """Consuming view of one XML element.

    Attributes are keyed by local name, so ``xml:space`` is read as ``space``
    and tags in the document's default namespace are read without it.
    Comments and processing instructions are skipped.
    """

    def __init__(
        self,
        element: etree._Element,
        path: str,
        depth: int = 0,
        max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    ) -> None:
        if depth > max_depth:
            raise NestingDepthError(max_depth, path, element.sourceline)

        self.element = element
        self.path = path
        self.depth = depth
        self.max_depth = max_depth

        self._attributes: Dict[str, str] = {
            local_name(key): value for key, value in element.attrib.items()
        }
        self._children: Dict[str, List[etree._Element]] = {}
        for child in element:
            if not isinstance(child.tag, str):
                continue
            self._children.setdefault(local_name(child.tag), []).append(child)

        self._consumed_attributes: Set[str] = set()
        self._consumed_children: Set[str] = set()
        self._text_consumed = False

    @property
    def tag(self) -> str:
        return local_name(self.element.tag)

    @property
    def line(self) -> Optional[int]:
        return self.element.sourceline

    # Attributes

    def attribute(self, name: str) -> str:
        value = self.optional_attribute(name)
        if value is None:
            raise MissingFieldError(f"@{name}", self.path, self.line)
        return value

    def optional_attribute(self, name: str) -> Optional[str]:
        self._consumed_attributes.add(name)
        return self._attributes.get(name)

    # Text content

    def _raw_text(self) -> str:
        parts = [self.element.text or ""]
        for child in self.element:
            parts.append(child.tail or "")
        return "".join(parts)

    def text(self) -> Optional[str]:
        """Return the element's text, or None when it is empty.

        Surrounding whitespace is stripped unless the element declares
        ``xml:space="preserve"``.
        """
        self._text_consumed = True
        raw = self._raw_text()
        if self._attributes.get(SPACE_ATTRIBUTE) != "preserve":
            raw = raw.strip()
        return raw or None

    def required_text(self) -> str:
        value = self.text()
        if value is None:
            raise MissingFieldError(TEXT_FIELD, self.path, self.line)
        return value

    # Child elements

    def _descend(self, element: etree._Element, name: str, index: int,
                 count: int) -> "ElementReader":
        path = f"{self.path}/{name}"
        if count > 1:
            path += f"[{index + 1}]"
        return ElementReader(element, path, self.depth + 1, self.max_depth)

    def _bind(self, element: etree._Element, name: str, index: int, count: int,
              parse: Callable[["ElementReader"], T]) -> T:
        reader = self._descend(element, name, index, count)
        value = parse(reader)
        reader.finish()
        return value

    def optional_child(
        self, name: str, parse: Callable[["ElementReader"], T]
    ) -> Optional[T]:
        self._consumed_children.add(name)
        elements = self._children.get(name, [])
        if not elements:
            return None
        if len(elements) > 1:
            duplicate = self._descend(elements[1], name, 1, len(elements))
            raise DuplicateFieldError(name, duplicate.path, duplicate.line)
        return self._bind(elements[0], name, 0, 1, parse)

    def child(self, name: str, parse: Callable[["ElementReader"], T]) -> T:
        value = self.optional_child(name, parse)
        if value is None:
            raise MissingFieldError(name, self.path, self.line)
        return value

    def children(
        self, name: str, parse: Callable[["ElementReader"], T]
    ) -> Tuple[T, ...]:
        """Bind every child called ``name``, in document order."""
        self._consumed_children.add(name)
        elements = self._children.get(name, [])
        return tuple(
            self._bind(element, name, index, len(elements), parse)
            for index, element in enumerate(elements)
        )

    def optional_children(
        self, name: str, parse: Callable[["ElementReader"], T]
    ) -> Optional[Tuple[T, ...]]:
        """Like children(), but None instead of an empty tuple."""
        return self.children(name, parse) or None

    def finish(self) -> None:
        """Reject anything the parser did not consume.

        Raises:
            UnexpectedFieldError: For the first unknown attribute, child
                element or stray text found
        """
        for name in self._attributes:
            if name not in self._consumed_attributes:
                raise UnexpectedFieldError(f"@{name}", self.path, self.line)

        for name, elements in self._children.items():
            if name not in self._consumed_children:
                stray = self._descend(elements[0], name, 0, len(elements))
                raise UnexpectedFieldError(name, stray.path, stray.line)

        if not self._text_consumed and self._raw_text().strip():
            raise UnexpectedFieldError(TEXT_FIELD, self.path, self.line)


def read_text(reader: ElementReader) -> str:
    """Child parser for elements whose text is required but may be empty."""
    return reader.text() or ""


def element_path(element: etree._Element) -> str:
    """Document path of ``element``, in the form ElementReader reports."""
    parts = []
    while element is not None:
        name = local_name(element.tag)
        parent = element.getparent()
        if parent is not None:
            siblings = [
                child for child in parent
                if isinstance(child.tag, str) and local_name(child.tag) == name
            ]
            if len(siblings) > 1:
                name += f"[{siblings.index(element) + 1}]"
        parts.append(name)
        element = parent
    return "/".join(reversed(parts))
