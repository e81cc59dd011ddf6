"""Conversion of raw tract rows into network nodes."""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence

from .exceptions import MalformedRecordError
from .models import ColumnLayout, TractNode

logger = logging.getLogger(__name__)


class NodeBuilder:
    """Builds TractNode objects from rows with a fixed column layout."""

    def __init__(self, layout: Optional[ColumnLayout] = None):
        self.layout = layout or ColumnLayout()

    def build_node(self, row: Sequence[str]) -> TractNode:
        """Build one node from a row of field strings.

        Raises:
            MalformedRecordError: if the tract id is missing or one of the
                score fields cannot be parsed as a finite float.
        """
        layout = self.layout

        # Ids, county and urban flag are kept verbatim, padding included
        tract_id = self._field(row, layout.census_tract)
        if not tract_id.strip():
            raise MalformedRecordError("census_tract", "missing tract identifier")

        poverty_rate = self._parse_score(row, layout.poverty_rate, "poverty_rate")
        no_supermarket = self._parse_score(row, layout.no_supermarket, "no_supermarket")
        tract_snap = self._parse_score(row, layout.tract_snap, "tract_snap")

        attributes = {
            name: self._field(row, index) for index, name in layout.attributes
        }

        return TractNode(
            tract_id=tract_id,
            county=self._field(row, layout.county),
            urban=self._field(row, layout.urban),
            poverty_rate=poverty_rate,
            no_supermarket=no_supermarket,
            tract_snap=tract_snap,
            attributes=attributes,
        )

    def build_nodes(self, rows: Iterable[Sequence[str]],
                    skip_malformed: bool = False) -> Dict[str, TractNode]:
        """Build the node mapping keyed by tract id.

        Args:
            rows: Rows of field strings, header excluded
            skip_malformed: Skip rows that fail to build instead of raising

        Returns:
            Mapping of tract id to node
        """
        nodes: Dict[str, TractNode] = {}
        skipped = 0

        for row_index, row in enumerate(rows):
            try:
                node = self.build_node(row)
            except MalformedRecordError as e:
                error = e.with_row_index(row_index)
                if not skip_malformed:
                    raise error from e
                logger.warning(f"Skipping malformed record: {error}")
                skipped += 1
                continue

            if node.tract_id in nodes:
                logger.warning(f"Duplicate tract id {node.tract_id} at row {row_index}; replacing earlier record")
            nodes[node.tract_id] = node

        if skipped:
            logger.info(f"Skipped {skipped} malformed records")
        logger.info(f"Built {len(nodes)} tract nodes")
        return nodes

    @staticmethod
    def _field(row: Sequence[str], index: int) -> str:
        if index < len(row):
            return row[index]
        return ""

    @staticmethod
    def _parse_score(row: Sequence[str], index: int, name: str) -> float:
        if index >= len(row):
            raise MalformedRecordError(name, f"column {index} is missing")

        raw = row[index]
        # float() also accepts digit separators and surrounding whitespace
        if not isinstance(raw, str) or '_' in raw or raw != raw.strip():
            raise MalformedRecordError(name, f"cannot parse {raw!r} as a number")
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise MalformedRecordError(name, f"cannot parse {raw!r} as a number") from None

        if not math.isfinite(value):
            raise MalformedRecordError(name, f"non-finite value {raw!r}")
        return value


def build_node(row: Sequence[str], layout: Optional[ColumnLayout] = None) -> TractNode:
    """Build a single TractNode with the default (or given) column layout."""
    return NodeBuilder(layout).build_node(row)


def build_nodes(rows: List[Sequence[str]], skip_malformed: bool = False,
                layout: Optional[ColumnLayout] = None) -> Dict[str, TractNode]:
    return NodeBuilder(layout).build_nodes(rows, skip_malformed=skip_malformed)
