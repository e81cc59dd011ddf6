from typing import Iterable, List, Optional

import pytest

from food_access_graph.core.models import TractNode

HEADER = [
    "CensusTract", "County", "Urban", "POP2010", "OHU2010", "TractHUNV",
    "GroupQuartersFlag", "LowIncomeTracts", "PovertyRate", "MedianFamilyIncome",
    "lasnap1share", "TractKids", "TractSeniors", "TractWhite", "TractBlack",
    "TractAsian", "TractHispanic", "TractSNAP",
]


def make_row(tract_id: str, county: str = "Albany County", urban: str = "1",
             poverty_rate: str = "0.0", no_supermarket: str = "0.0",
             tract_snap: str = "0.0") -> List[str]:
    return [
        tract_id, county, urban, "1000", "500", "12", "0", "1",
        poverty_rate, "54000", no_supermarket, "340", "120", "600",
        "200", "50", "150", tract_snap,
    ]


def make_node(tract_id: str, score: float = 0.0, county: str = "Albany County",
              urban: str = "1", neighbors: Optional[Iterable[str]] = None) -> TractNode:
    node = TractNode(
        tract_id=tract_id,
        county=county,
        urban=urban,
        poverty_rate=score,
        no_supermarket=0.0,
        tract_snap=0.0,
    )
    node.neighbors.update(neighbors or ())
    return node


def rows_to_csv(rows: List[List[str]]) -> str:
    lines = [",".join(HEADER)] + [",".join(row) for row in rows]
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_rows() -> List[List[str]]:
    """Five tracts; 36001000100 ties 36001000300 on score but has degree 2."""
    return [
        make_row("36001000100", "Albany County", "1", "10.0", "2.0", "3.0"),
        make_row("36001000200", "Albany County", "1", "6.0", "3.0", "3.0"),
        make_row("36001000300", "Albany County", "0", "5.0", "5.0", "5.0"),
        make_row("36005000105", "Bronx County", "1", "2.0", "2.0", "1.0"),
        make_row("36005099999", "Bronx County", "0", "0.5", "0.25", "0.25"),
    ]


@pytest.fixture
def sample_csv(tmp_path, sample_rows):
    path = tmp_path / "food_access.csv"
    path.write_text(rows_to_csv(sample_rows), encoding="utf-8")
    return path
