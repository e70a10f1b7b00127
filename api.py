"""
GenoFlow Engine - Flask REST API
Validation, connector layout, analysis and rendering endpoints

Run: flask --app api run --debug
 or: python api.py
"""

from flask import Flask, jsonify, request
from flask_cors import CORS

from genoflow_engine import (
    InheritanceMode, LogicValidator, PedigreeAnalyzer,
    PedigreeVisualizer, GridConfig, compute_links, load_config
)
from genoflow_engine.snapshot import SnapshotError, parse_snapshot

config = load_config()

app = Flask(__name__)
CORS(app)

validator = LogicValidator()
analyzer = PedigreeAnalyzer()
visualizer = PedigreeVisualizer(GridConfig(layout=config.layout))


def _read_request():
    """
    Request body -> (individuals, mode)

    Accepts {"individuals": [...], "mode": "AR"} or a bare list of records.
    """
    data = request.get_json(silent=True)
    if data is None:
        raise SnapshotError("Request body must be JSON")

    if isinstance(data, list):
        records, mode = data, None
    elif isinstance(data, dict):
        records, mode = data.get('individuals', []), data.get('mode')
    else:
        raise SnapshotError("Request body must be an object or a list")

    individuals = parse_snapshot(records)
    mode = InheritanceMode.parse(mode) if mode else config.default_mode
    return individuals, mode


def _bad_request(e: Exception):
    return jsonify({'success': False, 'error': str(e)}), 400


@app.route('/')
def index():
    """API info"""
    return jsonify({
        'name': 'GenoFlow Engine API',
        'version': '1.0.0',
        'description': 'Pedigree validation and layout',
        'endpoints': {
            '/modes': 'GET - available inheritance modes',
            '/validate': 'POST - validation issues for a pedigree',
            '/links': 'POST - connector lines for a pedigree',
            '/analysis': 'POST - derived statistics',
            '/render': 'POST - PNG image of the pedigree'
        }
    })


@app.route('/modes', methods=['GET'])
def get_modes():
    """Available inheritance modes"""
    modes = [{'id': m.value, 'name': m.label} for m in InheritanceMode]
    return jsonify({'modes': modes, 'default': config.default_mode.value})


@app.route('/validate', methods=['POST'])
def validate_pedigree():
    """
    Request Body:
    {
        "mode": "AR",            // AR / AD / XL / YL
        "individuals": [...]     // snapshot records
    }
    """
    try:
        individuals, mode = _read_request()
    except ValueError as e:
        return _bad_request(e)

    try:
        report = validator.validate_logic(individuals, mode)
        return jsonify({'success': True, **report.to_dict()})
    except Exception as e:
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/links', methods=['POST'])
def get_links():
    try:
        individuals, _ = _read_request()
    except ValueError as e:
        return _bad_request(e)

    try:
        links = compute_links(individuals, config.layout)
        return jsonify({'success': True, 'links': [link.to_dict() for link in links]})
    except Exception as e:
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/analysis', methods=['POST'])
def get_analysis():
    try:
        individuals, mode = _read_request()
    except ValueError as e:
        return _bad_request(e)

    try:
        report = analyzer.analyze(individuals, mode)
        return jsonify({'success': True, 'analysis': report.to_dict()})
    except Exception as e:
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/render', methods=['POST'])
def render_pedigree():
    """PNG with validation issues outlined"""
    try:
        individuals, mode = _read_request()
    except ValueError as e:
        return _bad_request(e)

    try:
        report = validator.validate_logic(individuals, mode)
        img = visualizer.draw(individuals, issues=report.issues)
        return jsonify({
            'success': True,
            'image': f"data:image/png;base64,{img}",
            'validation': report.to_dict()
        })
    except Exception as e:
        return jsonify({'success': False, 'error': str(e)}), 500


if __name__ == '__main__':
    print("=" * 50)
    print("GenoFlow Engine API Server")
    print("=" * 50)
    print(f"Server starting at http://{config.host}:{config.port}")
    print()
    app.run(debug=True, host=config.host, port=config.port)
