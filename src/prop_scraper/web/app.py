"""FastAPI service for previewing and exporting scraped property records.

The browser side posts the page URL and its HTML; the URL picks the site
schema, the HTML is parsed and extracted server-side.

Usage:
    python -m prop_scraper.web.app
    # => Uvicorn running on http://localhost:8000
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from prop_scraper import config
from prop_scraper.export import CsvSheetSink, to_tsv
from prop_scraper.extraction import extract
from prop_scraper.extraction.dom import parse_document
from prop_scraper.sites import SiteRegistry, default_registry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# In-memory state (built on first use)
# ---------------------------------------------------------------------------

_REGISTRY: SiteRegistry | None = None


def get_registry() -> SiteRegistry:
    """Return the site registry, loading it on first call."""
    global _REGISTRY  # pylint: disable=global-statement
    if _REGISTRY is None:
        _REGISTRY = default_registry()
        logger.info("Site registry ready: %d sites", len(_REGISTRY.patterns()))
    return _REGISTRY


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class ScrapeRequest(BaseModel):
    url: str
    html: str
    include_headers: bool = True


class ScrapeResponse(BaseModel):
    site: str
    data: dict[str, Any]
    tsv: str
    errors: dict[str, str]


class ExportResponse(BaseModel):
    success: bool
    message: str
    path: str


def _scrape(request: ScrapeRequest) -> tuple[str, dict[str, Any], dict[str, str]]:
    """Return (site name, flattened data, section errors) or raise 404 for unsupported sites."""
    registry = get_registry()
    schema = registry.match(request.url)
    if schema is None:
        raise HTTPException(status_code=404, detail="Site not supported for scraping.")
    result = extract(schema, parse_document(request.html))
    return registry.site_name(request.url), result.flat(), result.errors


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Property Record Scraper")


@app.get("/api/sites")
def list_sites():
    return {"sites": get_registry().patterns()}


@app.post("/api/scrape", response_model=ScrapeResponse)
def scrape(request: ScrapeRequest):
    """Extract a page and return its flattened data plus a TSV rendering for copying."""
    site, flat, errors = _scrape(request)
    logger.info("Scraped %d fields from %s", len(flat), site)
    return ScrapeResponse(site=site, data=flat, tsv=to_tsv(flat, request.include_headers), errors=errors)


@app.post("/api/export", response_model=ExportResponse)
def export(request: ScrapeRequest):
    """Extract a page and append it to the site's CSV export."""
    site, flat, _errors = _scrape(request)
    if not flat:
        raise HTTPException(status_code=422, detail="Failed to scrape data")
    path, created = CsvSheetSink(config.EXPORT_DIR).append(site, flat)
    message = f"Data {'exported to new' if created else 'appended to existing'} export for {site}"
    return ExportResponse(success=True, message=message, path=str(path))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    config.setup_logging()
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
