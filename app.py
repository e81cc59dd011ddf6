import os
import logging
import traceback
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict

from dotenv import load_dotenv
from flask import Flask, request, jsonify
from flask_cors import CORS

from food_access_graph import __version__
from food_access_graph.core.exceptions import FoodAccessError
from food_access_graph.core.food_access import FoodAccessAnalyzer
from food_access_graph.core.models import FoodAccessConfig

# .env ファイルから環境変数をロード
load_dotenv()

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__)

CORS(app, resources={
    r"/api/*": {
        "origins": [
            origin.strip()
            for origin in os.environ.get(
                'CORS_ORIGINS', 'http://localhost:5000,http://127.0.0.1:5000'
            ).split(',')
            if origin.strip()
        ],
        "methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "supports_credentials": False
    }
})

DEFAULT_TOP_K = int(os.environ.get('FOOD_ACCESS_TOP_K', 10))


class InvalidRequestError(Exception):
    """A request option has the wrong type or range."""


def _parse_bool(options: Dict[str, Any], key: str) -> bool:
    value = options[key]
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    raise InvalidRequestError(f"{key} must be a boolean, got {value!r}")


def _parse_int(options: Dict[str, Any], key: str, default: int) -> int:
    value = options.get(key, default)
    if isinstance(value, bool):
        raise InvalidRequestError(f"{key} must be an integer, got {value!r}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"{key} must be an integer, got {value!r}") from None
    if parsed < 0:
        raise InvalidRequestError(f"{key} must be non-negative, got {parsed}")
    return parsed


def _build_config(options: Dict[str, Any]) -> FoodAccessConfig:
    """Environment config with per-request overrides."""
    config = FoodAccessConfig.from_env()
    overrides = {}
    if 'skip_malformed' in options:
        overrides['skip_malformed'] = _parse_bool(options, 'skip_malformed')
    if 'use_indexed_edges' in options:
        overrides['use_indexed_edges'] = _parse_bool(options, 'use_indexed_edges')
    if 'adjacency_threshold' in options:
        overrides['adjacency_threshold'] = _parse_int(
            options, 'adjacency_threshold', config.adjacency_threshold
        )
    return replace(config, **overrides)


def _analysis_payload(analyzer: FoodAccessAnalyzer, top_k: int) -> Dict[str, Any]:
    return {
        'ranking': analyzer.ranking.to_dict(),
        'top_tracts': [r.to_dict() for r in analyzer.get_top_tracts(top_k)],
        'total_count': analyzer.total_count,
        'node_count': len(analyzer.nodes),
        'network_statistics': analyzer.get_network_statistics(),
        'centrality_statistics': analyzer.get_centrality_statistics(),
    }


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'version': __version__,
        'timestamp': datetime.now().isoformat(),
    })


@app.route('/api/analyze', methods=['POST'])
def analyze():
    """
    Main analysis endpoint

    Either a multipart upload with a CSV ``file`` (header row included) and
    optional form fields, or a JSON body:
    {
        "rows": [[str, ...], ...],
        "top_k": int (optional, default: 10),
        "skip_malformed": bool (optional),
        "use_indexed_edges": bool (optional),
        "adjacency_threshold": int (optional)
    }

    Returns:
    {
        "status": "success" | "error",
        "data": {...} | null,
        "error": str | null
    }
    """
    try:
        uploaded = request.files.get('file')
        if uploaded is not None:
            options = request.form.to_dict()
            analyzer = FoodAccessAnalyzer(_build_config(options))
            rows = analyzer.loader.read_csv(uploaded.stream)
        else:
            options = request.get_json(silent=True)
            if not isinstance(options, dict) or not options:
                return jsonify({
                    'status': 'error',
                    'error': 'Request body is required'
                }), 400

            rows = options.get('rows')
            if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
                return jsonify({
                    'status': 'error',
                    'error': 'rows must be a list of lists of field strings'
                }), 400
            rows = [[str(value) for value in row] for row in rows]
            analyzer = FoodAccessAnalyzer(_build_config(options))

        top_k = _parse_int(options, 'top_k', DEFAULT_TOP_K)
        logger.info(f"Analyzing {len(rows)} rows (top_k={top_k})")

        analyzer.analyze(rows)

        return jsonify({
            'status': 'success',
            'data': _analysis_payload(analyzer, top_k),
            'error': None
        })

    except InvalidRequestError as e:
        logger.warning(f"Invalid request: {e}")
        return jsonify({
            'status': 'error',
            'data': None,
            'error': str(e)
        }), 400

    except FoodAccessError as e:
        logger.error(f"Analysis rejected: {e}")
        return jsonify({
            'status': 'error',
            'data': None,
            'error': str(e)
        }), 400

    except Exception as e:
        logger.error(f"Error in analyze endpoint: {e}")
        logger.error(traceback.format_exc())
        return jsonify({
            'status': 'error',
            'data': None,
            'error': str(e)
        }), 500


@app.errorhandler(404)
def not_found(error):
    return jsonify({
        'status': 'error',
        'error': 'Endpoint not found'
    }), 404


@app.errorhandler(500)
def internal_error(error):
    return jsonify({
        'status': 'error',
        'error': 'Internal server error'
    }), 500


if __name__ == '__main__':
    logger.info("Starting Flask API server...")

    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('DEBUG', 'False').lower() == 'true'

    app.run(host='0.0.0.0', port=port, debug=debug)
