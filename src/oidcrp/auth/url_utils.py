"""URL helpers for OAuth flows: link building, URL validation and query encoding."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import parse_qsl, urlencode, urlparse

from .models import HttpTransportConfigModel

logger = logging.getLogger(__name__)


class URLHelper:
    """Builds absolute links to this application and encodes query strings.

    The base URL is resolved from the transport configuration:

    1. Explicit ``base_url``
    2. ``scheme`` + ``host`` + ``port`` (standard ports omitted)
    3. ``http://localhost:8000``
    """

    def __init__(self, transport_config: HttpTransportConfigModel | None = None):
        self.transport_config = transport_config or HttpTransportConfigModel()
        self.base_url = self._resolve_base_url()

    def _resolve_base_url(self) -> str:
        if self.transport_config.base_url:
            logger.debug(f"Using explicit base_url from config: {self.transport_config.base_url}")
            return self.transport_config.base_url.rstrip("/")

        scheme = self.transport_config.scheme or "http"
        host = self.transport_config.host or "localhost"
        port = self.transport_config.port or 8000

        if (scheme == "https" and port == 443) or (scheme == "http" and port == 80):
            base_url = f"{scheme}://{host}"
        else:
            base_url = f"{scheme}://{host}:{port}"

        logger.debug(f"Built base URL: {base_url} (scheme={scheme}, host={host}, port={port})")
        return base_url

    def verify(self, url: str | None) -> bool:
        """Return True if ``url`` is an absolute http(s) URL with a host."""
        if not url or not isinstance(url, str):
            return False
        try:
            parsed = urlparse(url)
            # Accessing .port validates the port component.
            parsed.port
        except ValueError:
            return False
        return parsed.scheme in ("http", "https") and bool(parsed.hostname)

    def link(self, path: str, query: Mapping[str, str] | None = None) -> str:
        """Build an absolute link to ``path`` on this application."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        if query:
            url = f"{url}?{self.stringify(query)}"
        return url

    def stringify(self, query: Mapping[str, str]) -> str:
        """Form-urlencode ``query``, preserving key order."""
        return urlencode(list(query.items()))

    def parse(self, query: str) -> dict[str, str]:
        """Decode a form-urlencoded query string (last value wins)."""
        return dict(parse_qsl(query.lstrip("?"), keep_blank_values=True))
