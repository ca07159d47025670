# Serverless entry point for POST /api/analyzeDocument.
# The host looks for a top-level WSGI callable named `app`.
from gemini_proxy import config
from gemini_proxy.proxy import analyze_document
from gemini_proxy.web import create_function_app

config.configure_logging()

app = create_function_app(analyze_document, "/api/analyzeDocument")
