"""Food insecurity hotspot detection over census tract networks.

This package reads a food access table of census tracts, links tracts that
plausibly relate to each other, and reports the tract that combines the
highest food insecurity score with the highest degree centrality.

Main components:
- Node builder computing a food insecurity score per tract
  (poverty rate + supermarket access + SNAP participation)
- Tract network builder linking tracts in the same county and urban class,
  or with numerically adjacent tract ids
- Centrality analyzer ranking tracts by score, then degree centrality
"""

from .core import (
    FoodAccessAnalyzer, FoodAccessConfig, TractNode, TractRanking,
    MalformedRecordError, EmptyGraphError, InsufficientDataError, DataLoadError,
    build_node, infer_edges, rank,
)

__all__ = [
    "FoodAccessAnalyzer",
    "FoodAccessConfig",
    "TractNode",
    "TractRanking",
    "MalformedRecordError",
    "EmptyGraphError",
    "InsufficientDataError",
    "DataLoadError",
    "build_node",
    "infer_edges",
    "rank",
]

__version__ = "1.0.0"
