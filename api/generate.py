# Serverless entry point for POST /api/generate.
# The host looks for a top-level WSGI callable named `app`.
from gemini_proxy import config
from gemini_proxy.proxy import generate
from gemini_proxy.web import create_function_app

config.configure_logging()

app = create_function_app(generate, "/api/generate")
