class ProxyError(Exception):
    """Base class for errors raised by the proxy core."""


class ValidationError(ProxyError):
    """A required request field is missing or has the wrong type."""

    status_code = 400


class ConfigurationError(ProxyError):
    """The server is missing required configuration (the Gemini key)."""


class UpstreamError(ProxyError):
    """The call to Gemini failed before a response came back."""
