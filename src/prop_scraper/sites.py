"""Route a page URL to the schema for its site."""

import logging
import re
from typing import Any

from prop_scraper import config
from prop_scraper.schemas import SUPPORTED_SITES, Schema, load_sites_file

logger = logging.getLogger(__name__)

UNKNOWN_SITE = "Unknown Site"

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def extract_main_domain(url: str) -> str:
    """Return the registrable part of a URL's host (``www.miamidade.gov`` -> ``miamidade.gov``)."""
    host = _SCHEME_RE.sub("", url).split("/")[0]
    labels = host.split(".")
    return ".".join(labels[-2:]) if len(labels) > 2 else host


class SiteRegistry:
    """Ordered URL-pattern -> schema table; a pattern matches when it is a substring of the URL."""

    def __init__(self, supported_sites: dict[str, Schema]):
        self.supported_sites = dict(supported_sites)

    def patterns(self) -> list[str]:
        return list(self.supported_sites)

    def match(self, url: str) -> Schema | None:
        """Return the schema of the first pattern contained in *url*, or None."""
        for pattern, schema in self.supported_sites.items():
            if pattern in url:
                logger.debug("URL %s matched site pattern %s", url, pattern)
                return schema
        logger.info("No site schema for %s", url)
        return None

    def site_name(self, url: str) -> str:
        """Return the main domain of the site serving *url*, or ``"Unknown Site"``."""
        domain = extract_main_domain(url)
        for pattern in self.supported_sites:
            if extract_main_domain(pattern) == domain:
                return extract_main_domain(pattern)
        return UNKNOWN_SITE


def default_registry(extra_sites: dict[str, Any] | None = None) -> SiteRegistry:
    """Built-in sites overlaid with the configured sites file (and any *extra_sites*)."""
    sites: dict[str, Schema] = dict(SUPPORTED_SITES)
    sites.update(load_sites_file(config.SITES_FILE))
    if extra_sites:
        sites.update(extra_sites)
    return SiteRegistry(sites)
