class ConfigurationError(ValueError):
    """Raised when metrics or viewport values would produce invalid geometry."""
