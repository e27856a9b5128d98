"""
XML series extractor.

Evaluates an XPath expression against the document and turns the result
into points. How many points come out depends on the configured result kind:

- ``NODESET``: one point per node, labelled by the node's ``name``
  attribute or tag. If any node holds non-numeric text the whole set is
  coalesced instead (see ``XmlExtractor._coalesce``).
- ``NODE``: the first node only.
- ``BOOLEAN``, ``NUMBER``, ``STRING``: a single point with the series label.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Any, Deque, Dict, List, Tuple

import structlog
from lxml import etree

from ..exceptions import DataUnavailable, ParseFailure, QueryEvaluationError
from ..protocols import XPathResultKind
from .models import MISSING_LABEL, PlotPoint
from .numeric import format_double, parse_double, parses_as_double
from .streams import SeriesContent, describe, open_binary
from .url_template import apply_url_template
from .xml_coercion import (
    NAME_ATTRIBUTE,
    attribute,
    attribute_nodes,
    coerce_value,
    convert_result,
    local_name,
    parent_node,
    text_content,
)

logger = structlog.get_logger(__name__)


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=False)


class XmlExtractor:
    """Extract points from the result of an XPath query."""

    name = "xml"

    def __init__(
        self,
        xpath: str,
        result_kind: XPathResultKind | str,
        url: str | None = None,
        label: str | None = None,
    ) -> None:
        self.xpath = xpath
        self.result_kind = XPathResultKind.parse(result_kind)
        self.url = url
        self.label = label or MISSING_LABEL
        self.logger = logger.bind(component="XmlExtractor", xpath=xpath, result_kind=self.result_kind.value)

    def extract(self, content: SeriesContent, build_number: int) -> List[PlotPoint]:
        """Parse XML *content*, run the query and return the resulting points."""
        source = describe(content)
        try:
            with open_binary(content) as stream:
                document = etree.parse(stream, _make_parser())
            self.logger.debug("Loaded XML series file", source=source)

            result = document.xpath(self.xpath)
            return self._points_for(result, build_number)

        except DataUnavailable as e:
            self.logger.warning(
                "XML series data unavailable",
                event_type=DataUnavailable.event_type,
                source=source,
                error=str(e),
            )
        except etree.XMLSyntaxError as e:
            self.logger.warning(
                "Malformed XML series data",
                event_type=ParseFailure.event_type,
                source=source,
                error=str(e),
            )
        except (etree.XPathError, QueryEvaluationError) as e:
            self.logger.error(
                "XPath evaluation failed",
                event_type=QueryEvaluationError.event_type,
                source=source,
                error=str(e),
                error_type=type(e).__name__,
            )
        except OSError as e:
            self.logger.error(
                "Failed reading XML series data",
                event_type=DataUnavailable.event_type,
                source=source,
                error=str(e),
            )
        return []

    def _points_for(self, result: Any, build_number: int) -> List[PlotPoint]:
        points: List[PlotPoint] = []

        match self.result_kind:
            case XPathResultKind.NODESET:
                nodes = self._require_nodes(result)
                self.logger.debug("Evaluated node set", nodes=len(nodes))
                for node in nodes:
                    if not parses_as_double(text_content(node).strip()):
                        return self._coalesce(nodes, build_number)
                for node in nodes:
                    self._add_node(points, node, build_number)

            case XPathResultKind.NODE:
                nodes = self._require_nodes(result)
                if nodes:
                    self._add_node(points, nodes[0], build_number)
                else:
                    self.logger.debug("XPath selected no node")

            case XPathResultKind.BOOLEAN | XPathResultKind.NUMBER | XPathResultKind.STRING:
                scalar = convert_result(result, self.result_kind)
                self._add_value(points, self.label, coerce_value(scalar, self.result_kind), build_number)

        return points

    def _require_nodes(self, result: Any) -> List[Any]:
        if not isinstance(result, list):
            raise QueryEvaluationError(
                f"XPath returned {type(result).__name__}, expected nodes for {self.result_kind.value}"
            )
        return result

    def _coalesce(self, nodes: List[Any], build_number: int) -> List[PlotPoint]:
        """Pair label text with numeric text among nodes sharing a parent.

        Used when the query selected groups of sibling nodes (a name node
        and a count node, say) rather than one numeric node per point. The
        last non-numeric child of a group is its label and the last numeric
        child its value. A child with no text is replaced by a group made of
        its own attributes, which covers elements like
        ``<testcase name="a" time="1.5"/>``. Groups without a label, or
        whose value is zero, NaN or infinite, produce no point.

        An element selected together with some of its own children forms two
        groups: one of those children and, when it has no text, one of its
        attributes.
        """
        groups: Dict[int, Tuple[Any, List[Any]]] = {}
        for node in nodes:
            parent = parent_node(node)
            groups.setdefault(id(parent), (parent, []))[1].append(node)

        points: List[PlotPoint] = []
        queue: Deque[Tuple[Any, List[Any]]] = deque(groups.values())
        while queue:
            _, children = queue.popleft()
            value = 0.0
            label = ""

            for child in children:
                text = text_content(child).strip()
                if not text:
                    queue.append((child, attribute_nodes(child)))
                    continue
                number = parse_double(text)
                if number is not None:
                    value = number
                else:
                    label = text

            # 0.0 doubles as "no value found"
            if label and value != 0.0 and math.isfinite(value):
                self._add_value(points, label, format_double(value), build_number)

        return points

    def _add_node(self, points: List[PlotPoint], node: Any, build_number: int) -> None:
        name = attribute(node, NAME_ATTRIBUTE)
        label = name.strip() if name is not None else local_name(node).strip()
        self._add_value(points, label, coerce_value(node, self.result_kind), build_number)

    def _add_value(self, points: List[PlotPoint], label: str, value: str, build_number: int) -> None:
        if not value:
            self.logger.debug("Unable to add node", label=label)
            return
        self.logger.debug("Adding node", label=label, value=value)
        points.append(PlotPoint(value, apply_url_template(self.url, label, 0, build_number), label))
