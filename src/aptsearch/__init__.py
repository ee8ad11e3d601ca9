"""APT Search - terminal client for the APT search engine.

Debounced autocomplete suggestions and paginated search results against a
remote search API.
"""

__version__ = "0.1.0"

from aptsearch.config import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings", "__version__"]
