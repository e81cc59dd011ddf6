"""Degree centrality and food insecurity ranking for tract networks."""

import logging
from typing import Dict, List, Optional

import numpy as np

from .exceptions import EmptyGraphError, InsufficientDataError
from .models import TractNode, TractRanking

logger = logging.getLogger(__name__)


class CentralityAnalyzer:
    """Ranks tracts by food insecurity score, breaking ties on degree centrality."""

    @staticmethod
    def degree_centrality(node: TractNode, total_count: int) -> float:
        """Neighbor count over (total_count - 1)."""
        if total_count <= 1:
            raise InsufficientDataError(
                f"Degree centrality needs at least 2 records, got {total_count}"
            )
        return len(node.neighbors) / (total_count - 1)

    def calculate_degree_centralities(self, nodes: Dict[str, TractNode],
                                      total_count: int) -> Dict[str, float]:
        """Calculate degree centrality for every tract."""
        self._validate(nodes, total_count)
        return {
            tract_id: self.degree_centrality(node, total_count)
            for tract_id, node in nodes.items()
        }

    def rank(self, nodes: Dict[str, TractNode], total_count: int) -> TractRanking:
        """Select the most critical tract.

        Tracts are scanned in tract id order. A strictly higher food
        insecurity score always wins; on an equal score a strictly higher
        degree centrality wins; otherwise the earlier tract is kept.

        Args:
            nodes: Tract mapping with neighbor sets populated
            total_count: Number of records originally ingested

        Raises:
            EmptyGraphError: if ``nodes`` is empty
            InsufficientDataError: if ``total_count`` <= 1
        """
        self._validate(nodes, total_count)
        logger.info(f"Ranking {len(nodes)} tracts (total records: {total_count})")

        best: Optional[TractNode] = None
        best_score = 0.0
        best_centrality = 0.0

        for tract_id in sorted(nodes):
            node = nodes[tract_id]
            score = node.food_insecurity_score
            centrality = self.degree_centrality(node, total_count)

            if best is None or score > best_score:
                best, best_score, best_centrality = node, score, centrality
            elif score == best_score and centrality > best_centrality:
                best, best_centrality = node, centrality

        logger.debug(f"Most critical tract: {best.tract_id} "
                     f"(score={best_score}, centrality={best_centrality:.4f})")

        return TractRanking(
            tract_id=best.tract_id,
            county=best.county,
            food_insecurity_score=best_score,
            degree_centrality=best_centrality,
            degree=best.degree,
            rank=1,
        )

    def rank_all(self, nodes: Dict[str, TractNode], total_count: int,
                 top_k: Optional[int] = None) -> List[TractRanking]:
        """Order all tracts by score, then centrality, then tract id."""
        if top_k is not None and top_k < 0:
            raise ValueError(f"top_k must be non-negative, got {top_k}")
        centralities = self.calculate_degree_centralities(nodes, total_count)

        ordered = sorted(
            nodes.items(),
            key=lambda item: (-item[1].food_insecurity_score, -centralities[item[0]], item[0])
        )
        if top_k is not None:
            ordered = ordered[:top_k]

        return [
            TractRanking(
                tract_id=tract_id,
                county=node.county,
                food_insecurity_score=node.food_insecurity_score,
                degree_centrality=centralities[tract_id],
                degree=node.degree,
                rank=i,
            )
            for i, (tract_id, node) in enumerate(ordered, 1)
        ]

    def calculate_centrality_statistics(self, centralities: Dict[str, float]) -> Dict[str, float]:
        """Summary statistics of a centrality distribution."""
        if not centralities:
            return {}

        values = np.array(list(centralities.values()), dtype=float)
        return {
            'mean': float(np.mean(values)),
            'median': float(np.median(values)),
            'std': float(np.std(values)),
            'min': float(np.min(values)),
            'max': float(np.max(values)),
            'q25': float(np.percentile(values, 25)),
            'q75': float(np.percentile(values, 75)),
        }

    @staticmethod
    def _validate(nodes: Dict[str, TractNode], total_count: int) -> None:
        if not nodes:
            raise EmptyGraphError("Cannot rank an empty tract network")
        if total_count <= 1:
            raise InsufficientDataError(
                f"Degree centrality needs at least 2 records, got {total_count}"
            )


def rank(nodes: Dict[str, TractNode], total_count: int) -> TractRanking:
    """Return the most critical tract of a populated network."""
    return CentralityAnalyzer().rank(nodes, total_count)
