"""CLI entrypoint for food access network analysis."""

import argparse
import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from .core.exceptions import FoodAccessError
from .core.food_access import FoodAccessAnalyzer
from .core.models import FoodAccessConfig

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> FoodAccessConfig:
    config = FoodAccessConfig.from_env()
    if args.skip_malformed:
        config.skip_malformed = True
    if args.indexed:
        config.use_indexed_edges = True
    return config


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the most food-insecure, most central census tract."
    )
    parser.add_argument(
        "--input-path",
        default=os.getenv("FOOD_ACCESS_CSV_PATH", ""),
        help="Path to the food access CSV export (default: $FOOD_ACCESS_CSV_PATH).",
    )
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Skip rows with a missing tract id or unparsable score fields.",
    )
    parser.add_argument(
        "--indexed",
        action="store_true",
        help="Use the bucketed edge index instead of the full pair scan.",
    )
    parser.add_argument(
        "--show-edges",
        action="store_true",
        help="Print every tract with its neighbors.",
    )
    parser.add_argument(
        "--output-path",
        default="",
        help="Optional path to write the full tract ranking table.",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "json"],
        default="csv",
        help="Format of the ranking table written to --output-path.",
    )
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if not args.input_path:
        print("No input file given. Use --input-path or set FOOD_ACCESS_CSV_PATH.")
        return 2

    analyzer = FoodAccessAnalyzer(build_config(args))
    try:
        ranking = analyzer.analyze_file(args.input_path)
    except (FoodAccessError, OSError) as e:
        print(f"Analysis failed: {e}")
        return 1

    print(f"Number of Vertices: {analyzer.total_count}")

    if args.show_edges:
        for tract_id, neighbors in analyzer.get_edges().items():
            print(f"Node: {tract_id}, Edges: {neighbors}")

    print(f"Node with the highest degree centrality: {ranking.tract_id}")
    print(f"County: {ranking.county}")
    print(f"Degree Centrality: {ranking.degree_centrality}")
    print(f"Food Insecurity Score: {ranking.food_insecurity_score}")

    if args.output_path:
        output_path = Path(args.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        analyzer.export_results(output_path, format=args.format)
        print(f"Tract ranking saved to: {output_path.resolve()}")

    return 0
