class InvalidConfigurationError(ValueError):
    """Engine inputs that make the search undefined (e.g. zero machines)."""
