import pandas as pd
import pytest

from food_access_graph.cli import main


def test_main_prints_most_critical_tract(sample_csv, capsys):
    exit_code = main(["--input-path", str(sample_csv)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Number of Vertices: 5" in out
    assert "Node with the highest degree centrality: 36001000100" in out
    assert "County: Albany County" in out
    assert "Degree Centrality: 0.5" in out
    assert "Food Insecurity Score: 15.0" in out


def test_main_shows_edges_and_writes_table(sample_csv, tmp_path, capsys):
    output = tmp_path / "out" / "ranking.csv"

    exit_code = main([
        "--input-path", str(sample_csv), "--indexed", "--show-edges",
        "--output-path", str(output),
    ])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Node: 36001000100, Edges: ['36001000200', '36005000105']" in out
    assert len(pd.read_csv(output)) == 5


def test_main_reports_malformed_rows(tmp_path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("CensusTract,County\n36001000100,Albany County\n", encoding="utf-8")

    assert main(["--input-path", str(path)]) == 1
    assert "poverty_rate" in capsys.readouterr().out


def test_main_missing_file(tmp_path):
    assert main(["--input-path", str(tmp_path / "missing.csv")]) == 1


def test_main_without_input(monkeypatch):
    monkeypatch.delenv("FOOD_ACCESS_CSV_PATH", raising=False)
    assert main([]) == 2


@pytest.mark.parametrize("payload", [b"", b"\xff\xfe"])
def test_main_reports_unreadable_file(tmp_path, capsys, payload):
    path = tmp_path / "tracts.csv"
    path.write_bytes(payload)

    assert main(["--input-path", str(path)]) == 1
    assert "Analysis failed" in capsys.readouterr().out
