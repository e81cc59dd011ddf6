"""Core components for the food access tract network."""

from .models import TractNode, TractRanking, FoodAccessConfig, ColumnLayout
from .exceptions import (
    FoodAccessError, MalformedRecordError, EmptyGraphError, InsufficientDataError,
    DataLoadError,
)
from .food_access import FoodAccessAnalyzer
from .input_parser import TractDataLoader
from .node_builder import NodeBuilder, build_node, build_nodes
from .network_builder import TractNetworkBuilder, infer_edges
from .centrality_analyzer import CentralityAnalyzer, rank

__all__ = [
    # Models
    "TractNode", "TractRanking", "FoodAccessConfig", "ColumnLayout",

    # Errors
    "FoodAccessError", "MalformedRecordError", "EmptyGraphError",
    "InsufficientDataError", "DataLoadError",

    # Core components
    "FoodAccessAnalyzer", "TractDataLoader", "NodeBuilder",
    "TractNetworkBuilder", "CentralityAnalyzer",

    # Functional interface
    "build_node", "build_nodes", "infer_edges", "rank",
]
