"""Main orchestrator for food access tract network analysis."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import networkx as nx
import pandas as pd

from .centrality_analyzer import CentralityAnalyzer
from .input_parser import TractDataLoader
from .models import FoodAccessConfig, TractNode, TractRanking
from .network_builder import TractNetworkBuilder
from .node_builder import NodeBuilder

logger = logging.getLogger(__name__)


class FoodAccessAnalyzer:
    """Runs rows -> nodes -> edges -> ranking and keeps the results."""

    def __init__(self, config: Optional[FoodAccessConfig] = None):
        """Initialize with configuration."""
        self.config = config or FoodAccessConfig()

        # Initialize components
        self.loader = TractDataLoader()
        self.node_builder = NodeBuilder(self.config.layout)
        self.network_builder = TractNetworkBuilder(
            id_prefix_length=self.config.id_prefix_length,
            adjacency_threshold=self.config.adjacency_threshold,
            use_index=self.config.use_indexed_edges,
        )
        self.centrality_analyzer = CentralityAnalyzer()

        # Data storage
        self.total_count: int = 0
        self.nodes: Dict[str, TractNode] = {}
        self.ranking: Optional[TractRanking] = None
        self._graph: Optional[nx.Graph] = None

    def analyze(self, rows: Sequence[Sequence[str]]) -> TractRanking:
        """Run the complete analysis over rows of field strings."""
        logger.info("Starting food access network analysis")

        rows = list(rows)
        # total_count is the ingested row count, before any skipped rows
        self.total_count = len(rows)
        self._graph = None
        logger.info(f"Number of vertices: {self.total_count}")

        try:
            self.nodes = self.node_builder.build_nodes(
                rows, skip_malformed=self.config.skip_malformed
            )
            self.network_builder.infer_edges(self.nodes)
            self.ranking = self.centrality_analyzer.rank(self.nodes, self.total_count)
        except Exception as e:
            logger.error(f"Analysis failed: {e}")
            raise

        logger.info(f"Analysis complete. Most critical tract: {self.ranking.tract_id}")
        return self.ranking

    def analyze_file(self, input_path: Union[str, Path]) -> TractRanking:
        """Load a CSV export and analyze it."""
        rows = self.loader.read_csv(input_path)
        return self.analyze(rows)

    @property
    def graph(self) -> nx.Graph:
        if self._graph is None:
            self._graph = self.network_builder.to_networkx(self.nodes)
        return self._graph

    def get_network_statistics(self) -> Dict:
        """Get network statistics."""
        if not self.nodes:
            return {}
        return self.network_builder.get_network_statistics(self.graph)

    def get_centrality_statistics(self) -> Dict[str, float]:
        centralities = self.centrality_analyzer.calculate_degree_centralities(
            self.nodes, self.total_count
        )
        return self.centrality_analyzer.calculate_centrality_statistics(centralities)

    def get_top_tracts(self, n: int = 10) -> List[TractRanking]:
        """Get top N tracts by food insecurity score and centrality."""
        return self.centrality_analyzer.rank_all(self.nodes, self.total_count, top_k=n)

    def get_edges(self) -> Dict[str, List[str]]:
        """Neighbor lists per tract, both sorted by tract id."""
        return {
            tract_id: sorted(self.nodes[tract_id].neighbors)
            for tract_id in sorted(self.nodes)
        }

    def rankings_to_dataframe(self) -> pd.DataFrame:
        """Convert the full tract ranking to a pandas DataFrame."""
        rankings = self.centrality_analyzer.rank_all(self.nodes, self.total_count)
        data = []
        for ranking in rankings:
            node = self.nodes[ranking.tract_id]
            data.append({
                'rank': ranking.rank,
                'tract_id': ranking.tract_id,
                'county': ranking.county,
                'urban': node.urban,
                'food_insecurity_score': ranking.food_insecurity_score,
                'degree': ranking.degree,
                'degree_centrality': ranking.degree_centrality,
            })

        return pd.DataFrame(data)

    def export_results(self, output_path: Union[str, Path], format: str = 'csv') -> None:
        """Export the tract ranking table.

        Args:
            output_path: Path to output file
            format: Export format ('csv' or 'json')
        """
        if self.ranking is None:
            raise ValueError("No ranking available. Run analyze() first.")

        df = self.rankings_to_dataframe()
        output_path = Path(output_path)

        if format.lower() == 'csv':
            df.to_csv(output_path, index=False)
        elif format.lower() == 'json':
            df.to_json(output_path, orient='records', indent=2, force_ascii=False)
        else:
            raise ValueError(f"Unsupported format: {format}")

        logger.info(f"Results exported to {output_path} (format: {format})")
