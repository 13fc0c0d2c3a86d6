class ConfigurationError(Exception):
    """Raised when the middleware configuration is invalid."""
