"""Data models for the food access tract network."""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Set, Tuple


# Opaque passthrough columns, in file order (index, name).
DEFAULT_ATTRIBUTE_COLUMNS: Tuple[Tuple[int, str], ...] = (
    (3, "pop_2010"),
    (4, "housing_units"),
    (5, "vehicle_access"),
    (6, "group_quarters"),
    (7, "low_income"),
    (9, "median_family_income"),
    (11, "tract_kids"),
    (12, "tract_seniors"),
    (13, "tract_white"),
    (14, "tract_black"),
    (15, "tract_asian"),
    (16, "tract_hispanic"),
)


@dataclass(frozen=True)
class ColumnLayout:
    """Column positions of the food access export."""
    census_tract: int = 0
    county: int = 1
    urban: int = 2
    poverty_rate: int = 8
    no_supermarket: int = 10
    tract_snap: int = 17
    attributes: Tuple[Tuple[int, str], ...] = DEFAULT_ATTRIBUTE_COLUMNS


@dataclass(frozen=True)
class TractNode:
    """A census tract, its score inputs and its adjacency set.

    The node is frozen; only ``neighbors`` is mutated in place while the
    network is being built.
    """
    tract_id: str
    county: str
    urban: str
    poverty_rate: float
    no_supermarket: float
    tract_snap: float
    attributes: Dict[str, str] = field(default_factory=dict, compare=False)
    neighbors: Set[str] = field(default_factory=set, compare=False, repr=False)

    @property
    def food_insecurity_score(self) -> float:
        return self.poverty_rate + self.no_supermarket + self.tract_snap

    @property
    def degree(self) -> int:
        return len(self.neighbors)


@dataclass
class TractRanking:
    """Ranked tract output."""
    tract_id: str
    county: str
    food_insecurity_score: float
    degree_centrality: float
    degree: int = 0
    rank: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            'rank': self.rank,
            'tract_id': self.tract_id,
            'county': self.county,
            'food_insecurity_score': self.food_insecurity_score,
            'degree_centrality': self.degree_centrality,
            'degree': self.degree,
        }


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class FoodAccessConfig:
    """Configuration for food access network analysis."""
    id_prefix_length: int = 5  # state + county FIPS digits
    adjacency_threshold: int = 10
    use_indexed_edges: bool = False
    skip_malformed: bool = False
    layout: ColumnLayout = field(default_factory=ColumnLayout)

    def __post_init__(self):
        if self.id_prefix_length < 0:
            raise ValueError("id_prefix_length must be non-negative")
        if self.adjacency_threshold < 0:
            raise ValueError("adjacency_threshold must be non-negative")

    @classmethod
    def from_env(cls) -> "FoodAccessConfig":
        """Build a config from ``FOOD_ACCESS_*`` environment variables."""
        return cls(
            id_prefix_length=int(os.getenv('FOOD_ACCESS_ID_PREFIX_LENGTH', '5')),
            adjacency_threshold=int(os.getenv('FOOD_ACCESS_ADJACENCY_THRESHOLD', '10')),
            use_indexed_edges=_env_bool('FOOD_ACCESS_USE_INDEXED_EDGES', False),
            skip_malformed=_env_bool('FOOD_ACCESS_SKIP_MALFORMED', False),
        )
