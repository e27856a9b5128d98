"""
Coercion of lxml XPath results into point values.

lxml returns XPath results as Python natives: ``bool``, ``float``, ``str``
(smart strings for attribute and text nodes) or a list of nodes. The helpers
here give those results a uniform node view (text content, local name,
attributes, parent) and turn them into the numeric strings points carry.
"""

from __future__ import annotations

import math
import re
from typing import Any, List

from lxml import etree

from ..protocols import XPathResultKind
from .numeric import format_double, scan_double

TIME_ATTRIBUTE = "time"
NAME_ATTRIBUTE = "name"

# XPath 1.0 Number production, used by number()
_XPATH_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


# --- Node view ---


def _is_element(node: Any) -> bool:
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def text_content(node: Any) -> str:
    """Concatenated descendant text of a node, like DOM ``textContent``."""
    if _is_element(node):
        return node.xpath("string()")
    if isinstance(node, etree._Element):
        # comments and processing instructions
        return node.text or ""
    if isinstance(node, tuple):
        # namespace nodes come back as (prefix, uri)
        return node[1] or ""
    return str(node)


def local_name(node: Any) -> str:
    """Local part of a node's name; ``#text`` for text nodes."""
    if _is_element(node):
        return etree.QName(node).localname
    if isinstance(node, etree._Element):
        return getattr(node, "target", None) or "#comment"
    if getattr(node, "is_attribute", False):
        return etree.QName(node.attrname).localname
    return "#text"


def attribute(node: Any, name: str) -> str | None:
    """Value of attribute *name* on an element node, else None."""
    if _is_element(node):
        return node.get(name)
    return None


def attribute_nodes(node: Any) -> List[Any]:
    """Attribute nodes of an element, as lxml smart strings."""
    if _is_element(node):
        return node.xpath("@*")
    return []


def parent_node(node: Any) -> Any:
    """XPath parent of a node; the owner element for attributes."""
    if isinstance(node, etree._Element):
        return node.getparent()
    getparent = getattr(node, "getparent", None)
    if getparent is None:
        return None
    parent = getparent()
    if parent is not None and getattr(node, "is_tail", False):
        return parent.getparent()
    return parent


# --- XPath 1.0 type conversions ---


def xpath_string(result: Any) -> str:
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, float):
        return _format_xpath_number(result)
    if isinstance(result, list):
        return text_content(result[0]) if result else ""
    return str(result)


def xpath_number(result: Any) -> float:
    if isinstance(result, bool):
        return 1.0 if result else 0.0
    if isinstance(result, (int, float)):
        return float(result)
    text = xpath_string(result).strip()
    if _XPATH_NUMBER.fullmatch(text):
        return float(text)
    return math.nan


def xpath_boolean(result: Any) -> bool:
    if isinstance(result, float):
        return result != 0 and not math.isnan(result)
    return bool(result)


def _format_xpath_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def convert_result(result: Any, kind: XPathResultKind) -> Any:
    """Convert a raw lxml XPath result to the scalar *kind* requested."""
    match kind:
        case XPathResultKind.BOOLEAN:
            return xpath_boolean(result)
        case XPathResultKind.NUMBER:
            return xpath_number(result)
        case XPathResultKind.STRING:
            return xpath_string(result)
        case XPathResultKind.NODE | XPathResultKind.NODESET:
            return result


# --- Value coercion ---


def parse_as_double(text: str) -> str:
    """Scan *text* for a leading number; return it formatted, or ``""``."""
    number = scan_double(text)
    if number is None:
        return ""
    return format_double(number)


def coerce_value(value: Any, kind: XPathResultKind) -> str:
    """Turn one XPath value of shape *kind* into a point value string.

    An empty string means the value is not numeric and no point should be
    created for it.
    """
    match kind:
        case XPathResultKind.BOOLEAN:
            return "1" if value else "0"
        case XPathResultKind.NUMBER:
            number = float(value)
            if not math.isfinite(number):
                return ""
            return format_double(number).strip()
        case XPathResultKind.NODE | XPathResultKind.NODESET:
            if isinstance(value, str):
                return parse_as_double(value.strip())
            time = attribute(value, TIME_ATTRIBUTE)
            if time is not None:
                return parse_as_double(time.strip())
            return parse_as_double(text_content(value).strip())
        case XPathResultKind.STRING:
            return parse_as_double(str(value).strip())
    return ""
