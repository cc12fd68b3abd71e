"""
XMI Parser.

This module decodes an XMI export of a UML model into the raw document tree
defined in ``xmi_models``.

Character set handling is explicit. The encoding named in the XML declaration
must be one of:

- UTF-8 (or no declaration at all)
- ISO-8859-1 / windows-1252 (both decoded with the windows-1252 table)

Any other declared encoding fails with ``UnknownCharsetError``.

Elements and attributes are matched by their local name, so the parser does
not depend on the exact XMI/UML namespace versions used by the exporting tool.

Usage:
    from formats.xmi.xmi_parser import XMIParser

    parser = XMIParser()
    document = parser.parse_file("data/schema.xmi")
    for model in document.models:
        print(model.name, len(model.packages))
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Tuple, Union

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from constants import CharsetConfig, XMIVocabulary as V

from .xmi_models import (
    Generalization,
    OwnedAttribute,
    OwnedLiteral,
    PackageElement,
    XMIDocument,
    XMIModel,
    XMIPackage,
)

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"
# Byte-order marks and the first four bytes of "<?xml" in wide encodings.
_WIDE_PREFIXES = (
    (b"\x00\x00\xfe\xff", "UTF-32"),
    (b"\xff\xfe\x00\x00", "UTF-32"),
    (b"\x00\x00\x00<", "UTF-32"),
    (b"<\x00\x00\x00", "UTF-32"),
    (b"\x00\x00<\x00", "UTF-32"),
    (b"\x00<\x00\x00", "UTF-32"),
    (b"\xfe\xff", "UTF-16"),
    (b"\xff\xfe", "UTF-16"),
    (b"\x00<\x00?", "UTF-16"),
    (b"<\x00?\x00", "UTF-16"),
)

_DECLARED_ENCODING = re.compile(
    rb'^\s*<\?xml[^>]*?\sencoding\s*=\s*["\']([A-Za-z0-9._:\-]+)["\']'
)
_XML_DECLARATION = re.compile(r'^\s*<\?xml[^>]*\?>')

_TRUE_VALUES = ("true", "1", "t")


class XMIParseError(Exception):
    """Exception raised when an XMI document cannot be decoded."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.file_path = file_path
        super().__init__(message)


class UnknownCharsetError(XMIParseError):
    """Raised when the XML declaration names an unsupported character set."""

    def __init__(self, charset: str, file_path: Optional[str] = None):
        self.charset = charset
        super().__init__(f"unknown charset: {charset}", file_path=file_path)


# =============================================================================
# Element helpers
# =============================================================================

def _local(name: str) -> str:
    """Strip the ``{namespace}`` part of a tag or attribute name."""
    return name.rsplit("}", 1)[-1]


def _attr(element: ET.Element, name: str, prefer_qualified: bool = False) -> str:
    """Read an attribute by local name.

    With ``prefer_qualified`` a namespaced attribute (``xmi:type``) wins over an
    unqualified one of the same local name.
    """
    plain = None
    qualified = None
    for key, value in element.attrib.items():
        if _local(key) != name:
            continue
        if key.startswith("{"):
            qualified = value if qualified is None else qualified
        else:
            plain = value
    if prefer_qualified:
        found = qualified if qualified is not None else plain
    else:
        found = plain if plain is not None else qualified
    return found or ""


def _children(element: ET.Element, name: str):
    return [child for child in element if _local(child.tag) == name]


def _first_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


class XMIParser:
    """
    Parse XMI documents into an ``XMIDocument`` tree.

    Example:
        >>> parser = XMIParser()
        >>> document = parser.parse_file("schema.xmi")
        >>> [m.name for m in document.models]
        ['EA_Model']
    """

    def parse_file(self, file_path: Union[str, Path]) -> XMIDocument:
        """
        Parse an XMI file.

        Args:
            file_path: Path to the XMI file.

        Returns:
            The parsed document tree.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            XMIParseError: If the content cannot be decoded.
        """
        path = Path(file_path)
        with open(path, "rb") as f:
            data = f.read()
        logger.info(f"Successfully opened {path}")
        return self.parse_bytes(data, source=str(path))

    def parse_bytes(self, data: bytes, source: Optional[str] = None) -> XMIDocument:
        """
        Parse raw XMI bytes.

        Args:
            data: Undecoded document content.
            source: Optional path used in error messages.

        Returns:
            The parsed document tree.

        Raises:
            UnknownCharsetError: If the declared charset is not supported.
            XMIParseError: If the content is not a well-formed XMI document.
        """
        text = self._decode(data, source)
        text = _XML_DECLARATION.sub("", text, count=1)

        try:
            root = DefusedET.fromstring(text)
        except ET.ParseError as e:
            raise XMIParseError(f"Invalid XML: {e}", file_path=source)
        except DefusedXmlException as e:
            raise XMIParseError(f"Forbidden XML construct: {e}", file_path=source)

        if _local(root.tag) != V.ROOT:
            raise XMIParseError(
                f"expected element type <{V.ROOT}> but have <{_local(root.tag)}>",
                file_path=source,
            )

        document = XMIDocument(
            models=[self._parse_model(m) for m in _children(root, V.MODEL)],
            source_path=source or "",
        )
        logger.debug(
            f"Parsed {len(document.models)} model(s) with {document.element_count} package elements"
        )
        return document

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    @staticmethod
    def detect_charset(data: bytes) -> Tuple[str, bytes]:
        """
        Determine the declared charset of a document.

        Returns:
            Tuple of (charset name as declared, data without a UTF-8 BOM).
            A missing declaration yields ``utf-8``.
            UTF-16 and UTF-32 are recognized from a byte-order mark or from
            the wide encoding of the XML declaration, declared or not.
        """
        if data.startswith(_UTF8_BOM):
            data = data[len(_UTF8_BOM):]
        else:
            for prefix, wide_charset in _WIDE_PREFIXES:
                if data.startswith(prefix):
                    return wide_charset, data
            # NUL never occurs in a single-byte or UTF-8 prolog
            if b"\x00" in data[:4]:
                return "UTF-16", data

        match = _DECLARED_ENCODING.match(data)
        if not match:
            return CharsetConfig.DEFAULT_CHARSET, data
        return match.group(1).decode("ascii"), data

    def _decode(self, data: bytes, source: Optional[str]) -> str:
        charset, data = self.detect_charset(data)
        normalized = charset.lower()

        if normalized in ("utf-8", "utf8"):
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise XMIParseError(f"Invalid UTF-8 content: {e}", file_path=source)

        if normalized in CharsetConfig.SINGLE_BYTE_CHARSETS:
            logger.debug(f"Decoding {charset} content with the windows-1252 table")
            return data.decode(CharsetConfig.SINGLE_BYTE_CODEC, errors="replace")

        raise UnknownCharsetError(charset, file_path=source)

    # -------------------------------------------------------------------------
    # Tree construction
    # -------------------------------------------------------------------------

    def _parse_model(self, element: ET.Element) -> XMIModel:
        return XMIModel(
            name=_attr(element, "name"),
            type=_attr(element, "type", prefer_qualified=True),
            packages=[
                XMIPackage(
                    name=_attr(pkg, "name"),
                    type=_attr(pkg, "type", prefer_qualified=True),
                    elements=[self._parse_element(e) for e in _children(pkg, V.PACKAGED_ELEMENT)],
                )
                for pkg in _children(element, V.PACKAGED_ELEMENT)
            ],
        )

    def _parse_element(self, element: ET.Element) -> PackageElement:
        return PackageElement(
            id=_attr(element, "id", prefer_qualified=True),
            name=_attr(element, "name"),
            type=_attr(element, "type", prefer_qualified=True),
            is_abstract=_parse_bool(_attr(element, "isAbstract")),
            elements=[self._parse_element(e) for e in _children(element, V.PACKAGED_ELEMENT)],
            attributes=[self._parse_attribute(a) for a in _children(element, V.OWNED_ATTRIBUTE)],
            generalizations=[
                Generalization(
                    type=_attr(g, "type", prefer_qualified=True),
                    general=_attr(g, "general"),
                )
                for g in _children(element, V.GENERALIZATION)
            ],
            literals=[
                OwnedLiteral(id=_attr(lit, "id", prefer_qualified=True), name=_attr(lit, "name"))
                for lit in _children(element, V.OWNED_LITERAL)
            ],
        )

    def _parse_attribute(self, element: ET.Element) -> OwnedAttribute:
        return OwnedAttribute(
            name=_attr(element, "name"),
            type=_attr(element, "type", prefer_qualified=True),
            type_ref=self._referenced_object(element),
            lower=self._bound(element, V.LOWER_VALUE),
            upper=self._bound(element, V.UPPER_VALUE),
        )

    @staticmethod
    def _referenced_object(element: ET.Element) -> str:
        """Nested ``<type xmi:idref=...>`` first, then a plain ``type`` attribute."""
        nested = _first_child(element, V.TYPE_REFERENCE)
        if nested is not None:
            ref = _attr(nested, "idref")
            if ref:
                return ref
        plain = element.attrib.get("type", "")
        if plain and not plain.startswith(V.UML_PREFIX):
            return plain
        return ""

    @staticmethod
    def _bound(element: ET.Element, name: str) -> str:
        child = _first_child(element, name)
        if child is None:
            return ""
        return _attr(child, "value")


def parse_xmi_file(file_path: Union[str, Path]) -> XMIDocument:
    """Convenience wrapper around ``XMIParser().parse_file``."""
    return XMIParser().parse_file(file_path)

