"""Exception types raised by alien_clicker."""


class AlienClickerError(Exception):
    """Base class for every error raised by this package."""


class CatalogError(AlienClickerError):
    """A catalog entry is malformed. Raised at import time, never recovered."""


class ConfigError(AlienClickerError):
    """A balance override names an unknown key or cannot be read."""
