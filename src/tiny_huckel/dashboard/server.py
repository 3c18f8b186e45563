"""
tiny-huckel Dashboard Server.

A Flask application providing a JSON API over the Hückel calculator:
- Preset molecules
- Calculations on posted structures
- A server-side parameter table that clients can read, merge and reset
- Text reports

Usage:
    from tiny_huckel.dashboard import launch
    launch(port=8890)

    # Or via CLI:
    # tiny-huckel serve --port 8890
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from tiny_huckel.core.calculator import HuckelCalculator, HuckelResult
from tiny_huckel.core.errors import HuckelError
from tiny_huckel.core.parameters import HuckelParameters, with_overrides
from tiny_huckel.core.structure import Structure
from tiny_huckel.molecules import MoleculeLibrary
from tiny_huckel.visualization import REPORTS, render

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request handling helpers
# ---------------------------------------------------------------------------

def _structure_from_request(data: dict) -> Structure:
    """A preset name or an inline ``{"atoms": [...], "bonds": [...]}`` payload."""
    if "preset" in data:
        return MoleculeLibrary.get(str(data["preset"]))
    if "structure" in data:
        return Structure.from_dict(data["structure"])
    raise ValueError("Request needs either 'preset' or 'structure'")


def _calculate(calculator: HuckelCalculator, data: Optional[dict]) -> Tuple[HuckelResult, Structure]:
    """
    Run one calculation for a request body.

    Per-request ``parameters`` overrides apply to this calculation only;
    the server-side table is left untouched.
    """
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    structure = _structure_from_request(data)
    charge = data.get("charge", 0)
    if isinstance(charge, bool) or not isinstance(charge, int):
        raise ValueError(f"'charge' must be an integer, got {charge!r}")

    parameters: HuckelParameters = calculator.get_current_parameters()
    if data.get("parameters"):
        parameters = with_overrides(parameters, data["parameters"])

    run = HuckelCalculator(
        structure,
        parameters=parameters,
        method=data.get("method", calculator.method),
    )
    return run.calculate(charge), structure


# ---------------------------------------------------------------------------
# Flask Application
# ---------------------------------------------------------------------------

def create_app(calculator: Optional[HuckelCalculator] = None) -> Any:
    """Create and configure the Flask application."""
    try:
        from flask import Flask, jsonify, request
    except ImportError:
        raise ImportError(
            "Flask is required for the dashboard. Install it with:\n"
            "  pip install flask"
        )

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["CALCULATOR"] = calculator or HuckelCalculator()

    def _error(exc: Exception, status: int):
        logger.info("Request failed (%d): %s", status, exc)
        return jsonify({"error": str(exc), "type": type(exc).__name__}), status

    # ---- Routes ----

    @app.route("/api/presets")
    def api_presets():
        return jsonify(MoleculeLibrary.describe())

    @app.route("/api/presets/<name>")
    def api_preset(name):
        try:
            return jsonify(MoleculeLibrary.get(name).to_dict())
        except ValueError as e:
            return _error(e, 404)

    @app.route("/api/calculate", methods=["POST"])
    def api_calculate():
        try:
            result, _ = _calculate(app.config["CALCULATOR"], request.get_json(silent=True))
            return jsonify(result.to_dict())
        except HuckelError as e:
            return _error(e, 422)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            return _error(e, 400)

    @app.route("/api/report", methods=["POST"])
    def api_report():
        try:
            data = request.get_json(silent=True)
            kind = (data or {}).get("report", "all")
            if kind not in REPORTS:
                raise ValueError(f"Unknown report '{kind}'. Available: {', '.join(REPORTS)}")
            result, _ = _calculate(app.config["CALCULATOR"], data)
            return jsonify({"report": render(result, kind)})
        except HuckelError as e:
            return _error(e, 422)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            return _error(e, 400)

    @app.route("/api/parameters", methods=["GET"])
    def api_get_parameters():
        return jsonify(app.config["CALCULATOR"].get_current_parameters().to_dict())

    @app.route("/api/parameters", methods=["POST"])
    def api_update_parameters():
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValueError("Expected a JSON object with 'hX' and/or 'hXY'")
            updated = app.config["CALCULATOR"].update_parameters(data)
            return jsonify(updated.to_dict())
        except ValueError as e:
            return _error(e, 400)

    @app.route("/api/parameters", methods=["DELETE"])
    def api_reset_parameters():
        return jsonify(app.config["CALCULATOR"].reset_parameters().to_dict())

    return app


def launch(port: int = 8890, host: str = "127.0.0.1", debug: bool = False):
    """
    Serve the tiny-huckel JSON API.

    Parameters
    ----------
    port : int
        Port to serve on (default 8890).
    host : str
        Host address (default localhost).
    debug : bool
        Enable Flask debug mode.
    """
    app = create_app()
    url = f"http://{host}:{port}"
    print(f"""
╔══════════════════════════════════════════════════════╗
║            tiny-huckel  π  Hückel MO API             ║
╠══════════════════════════════════════════════════════╣
║   Endpoint: {url:<41s}║
║   Press Ctrl+C to stop the server.                   ║
╚══════════════════════════════════════════════════════╝
""")
    app.run(host=host, port=port, debug=debug)
