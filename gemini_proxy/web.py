"""Flask plumbing shared by the long-running server and the serverless functions."""
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from gemini_proxy import config
from gemini_proxy.errors import ValidationError

logger = logging.getLogger(__name__)

FUNCTION_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def configure_app(app: Flask) -> Flask:
    """Body size ceiling, CORS allow-list and JSON error pages."""
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_CONTENT_LENGTH
    CORS(app, origins=config.FRONTEND_ORIGINS)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    return app


def read_json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")
    return data


def run_operation(operation, api_key: str, route: str):
    """
    Run one proxy operation against the current request.

    Validation problems become 400s; anything else is logged and reported
    as a 500 so one bad request never takes the process down.
    """
    try:
        result = operation(read_json_body(), api_key)
        return jsonify(result.to_dict()), result.status
    except ValidationError as e:
        return jsonify({"error": str(e)}), e.status_code
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Proxy %s error: %s", route, e)
        return jsonify({"error": "Proxy failed", "details": str(e)}), 500


def create_function_app(operation, route: str) -> Flask:
    """
    Build a single-route WSGI app for on-demand hosts.

    The key is looked up on every call since there is no startup phase
    to check it once. Any path is accepted so the host decides the mount point.
    """
    app = configure_app(Flask(__name__))

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.route("/", defaults={"path": ""}, methods=FUNCTION_METHODS)
    @app.route("/<path:path>", methods=FUNCTION_METHODS)
    def handler(path):
        if request.method == "OPTIONS":
            return "", 200
        if request.method != "POST":
            return jsonify({"error": "Method not allowed"}), 405

        api_key = config.get_api_key()
        if not api_key:
            logger.error("GEMINI_API_KEY is not configured")
            return jsonify({"error": "GEMINI_API_KEY not set"}), 500

        return run_operation(operation, api_key, route)

    return app
