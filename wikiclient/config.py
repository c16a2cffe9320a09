# wikiclient/config.py
from __future__ import annotations

# HTTP / transport configuration
DEFAULT_UA = "wikiclient/0.1 (python-requests; +https://www.mediawiki.org/wiki/API:Etiquette)"
DEFAULT_TIMEOUT = 10.0
TOKEN_ENV_VAR = "WIKICLIENT_TOKEN"

# API endpoint configuration
LANGUAGE_URL_MARKER = "{language}"
DEFAULT_BASE_URL = "https://{language}.wikipedia.org/w/api.php"
DEFAULT_LANGUAGE = "en"

# Result sizes ("max" lets the server pick the largest page it allows)
DEFAULT_SEARCH_RESULTS = 10
DEFAULT_IMAGES_RESULTS = "max"
DEFAULT_LINKS_RESULTS = "max"
DEFAULT_CATEGORIES_RESULTS = "max"

# Redirect resolution
MAX_REDIRECT_HOPS = 20

# Geosearch bounds (meters for radius)
GEOSEARCH_MIN_RADIUS = 10
GEOSEARCH_MAX_RADIUS = 10000
