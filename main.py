import sys
import logging
from typing import Optional
from flask import Flask, jsonify

from gemini_proxy import config
from gemini_proxy.errors import ConfigurationError
from gemini_proxy.proxy import generate, analyze_document
from gemini_proxy.web import configure_app, run_operation

# Logging
config.configure_logging()
logger = logging.getLogger("gemini-proxy")


# ----------------------
# App Setup
# ----------------------
def create_app(api_key: Optional[str] = None) -> Flask:
    """Build the long-running proxy app; refuses to start without a Gemini key."""
    api_key = api_key or config.get_api_key()
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY missing in server .env")

    app = configure_app(Flask(__name__))

    # ----------------------
    # Endpoints
    # ----------------------
    @app.route("/api/health", methods=["GET"])
    def health_check():
        return jsonify({"ok": True}), 200

    @app.route("/api/generate", methods=["POST"])
    def generate_proxy():
        return run_operation(generate, api_key, "/api/generate")

    @app.route("/api/analyzeDocument", methods=["POST"])
    def analyze_document_proxy():
        return run_operation(analyze_document, api_key, "/api/analyzeDocument")

    return app


def main():
    try:
        app = create_app()
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)

    logger.info("Gemini proxy running on http://%s:%s", config.HOST, config.PORT)
    app.run(host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
