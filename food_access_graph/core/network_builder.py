"""Tract network construction from the pairwise adjacency heuristic."""

import logging
import re
from collections import defaultdict
from itertools import combinations
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

import networkx as nx

from ..core.models import TractNode

logger = logging.getLogger(__name__)

_SUFFIX_PATTERN = re.compile(r'[+-]?[0-9]+')


class _TractKey(NamedTuple):
    """Snapshot of the fields the adjacency predicate reads."""
    tract_id: str
    county: str
    urban: str
    suffix: Optional[int]


class TractNetworkBuilder:
    """Infers edges between census tracts and registers them symmetrically.

    Two tracts are connected when they share county and urban flag, or when
    the numeric parts of their ids (after a fixed prefix) are within
    ``adjacency_threshold`` of each other.
    """

    def __init__(self, id_prefix_length: int = 5,
                 adjacency_threshold: int = 10,
                 use_index: bool = False):
        """Initialize builder with adjacency parameters.

        Args:
            id_prefix_length: Number of leading id characters to skip before
                reading the numeric suffix
            adjacency_threshold: Maximum suffix distance for numeric adjacency
            use_index: Use the bucketed fast path instead of the full pair scan
        """
        self.id_prefix_length = id_prefix_length
        self.adjacency_threshold = adjacency_threshold
        self.use_index = use_index

    def parse_suffix(self, tract_id: str) -> Optional[int]:
        """Parse the numeric suffix of a tract id, or None if there is none."""
        remainder = tract_id[self.id_prefix_length:]
        if not _SUFFIX_PATTERN.fullmatch(remainder):
            return None
        return int(remainder)

    def connects(self, node: TractNode, other: TractNode) -> bool:
        """Decide whether two tracts share an edge."""
        return self._keys_connect(self._snapshot(node), self._snapshot(other))

    def infer_edges(self, nodes: Dict[str, TractNode]) -> None:
        """Populate every node's neighbor set in place."""
        logger.info(f"Building tract network from {len(nodes)} tracts")

        edges = self.collect_edges(nodes)
        self.apply_edges(nodes, edges)

        logger.info(f"Registered {len(edges)} edges")

    def collect_edges(self, nodes: Dict[str, TractNode]) -> List[Tuple[str, str]]:
        """Decide all edges without touching neighbor sets.

        Returns:
            Sorted list of (lower_id, higher_id) pairs
        """
        keys = {tract_id: self._snapshot(node, tract_id) for tract_id, node in nodes.items()}

        if self.use_index:
            logger.debug("Collecting edges with bucketed index")
            return self._collect_indexed(keys)

        logger.debug(f"Collecting edges with full pair scan over {len(keys)} tracts")
        edges = []
        for tract_id, other_id in combinations(sorted(keys), 2):
            if self._keys_connect(keys[tract_id], keys[other_id]):
                edges.append((tract_id, other_id))
        return edges

    def apply_edges(self, nodes: Dict[str, TractNode],
                    edges: List[Tuple[str, str]]) -> None:
        for tract_id, other_id in edges:
            if tract_id == other_id:
                continue
            nodes[tract_id].neighbors.add(other_id)
            nodes[other_id].neighbors.add(tract_id)

    def _collect_indexed(self, keys: Dict[str, _TractKey]) -> List[Tuple[str, str]]:
        edges: Set[Tuple[str, str]] = set()

        # Same county and urban flag
        buckets = defaultdict(list)
        for tract_id, key in keys.items():
            buckets[(key.county, key.urban)].append(tract_id)
        for members in buckets.values():
            for tract_id, other_id in combinations(sorted(members), 2):
                edges.add((tract_id, other_id))

        # Numerically adjacent suffixes
        suffixed = sorted(
            (key.suffix, tract_id) for tract_id, key in keys.items()
            if key.suffix is not None
        )
        for i, (suffix, tract_id) in enumerate(suffixed):
            j = i + 1
            while j < len(suffixed) and suffixed[j][0] - suffix <= self.adjacency_threshold:
                other_id = suffixed[j][1]
                if other_id != tract_id:
                    edges.add((min(tract_id, other_id), max(tract_id, other_id)))
                j += 1

        return sorted(edges)

    def _snapshot(self, node: TractNode, tract_id: Optional[str] = None) -> _TractKey:
        tract_id = tract_id if tract_id is not None else node.tract_id
        return _TractKey(tract_id, node.county, node.urban, self.parse_suffix(tract_id))

    def _keys_connect(self, key: _TractKey, other: _TractKey) -> bool:
        if key.tract_id == other.tract_id:
            return False

        if key.county == other.county and key.urban == other.urban:
            return True

        if key.suffix is not None and other.suffix is not None:
            return abs(key.suffix - other.suffix) <= self.adjacency_threshold

        return False

    def to_networkx(self, nodes: Dict[str, TractNode]) -> nx.Graph:
        """Export the node mapping as an undirected networkx graph."""
        graph = nx.Graph()
        for tract_id, node in nodes.items():
            graph.add_node(
                tract_id,
                county=node.county,
                urban=node.urban,
                food_insecurity_score=node.food_insecurity_score,
            )
        for tract_id, node in nodes.items():
            for neighbor_id in node.neighbors:
                if tract_id < neighbor_id:
                    graph.add_edge(tract_id, neighbor_id)
        return graph

    def get_network_statistics(self, graph: nx.Graph) -> Dict[str, float]:
        """Calculate basic network statistics."""
        if graph.number_of_nodes() == 0:
            return {}

        n_nodes = graph.number_of_nodes()
        stats = {
            'num_nodes': n_nodes,
            'num_edges': graph.number_of_edges(),
            'density': nx.density(graph),
            'avg_degree': 2.0 * graph.number_of_edges() / n_nodes,
            'num_isolates': nx.number_of_isolates(graph),
        }

        components = list(nx.connected_components(graph))
        stats['is_connected'] = len(components) == 1
        stats['num_components'] = len(components)
        stats['largest_component_size'] = max(len(c) for c in components)

        return stats


def infer_edges(nodes: Dict[str, TractNode]) -> None:
    """Populate neighbor sets using the default adjacency parameters."""
    TractNetworkBuilder().infer_edges(nodes)
