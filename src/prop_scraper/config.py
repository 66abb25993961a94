"""Shared configuration for the property scraper (paths, environment, logging)."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVEL = os.getenv("PROP_SCRAPER_LOG_LEVEL", "INFO")

# Per-site CSV files written by the export sink
EXPORT_DIR = Path(os.getenv("PROP_SCRAPER_EXPORT_DIR", str(ROOT / "data" / "exports")))

# Optional JSON mapping of URL pattern -> schema, merged over the built-in sites
SITES_FILE = Path(os.getenv("PROP_SCRAPER_SITES_FILE", str(ROOT / "data" / "sites.json")))

HOST = os.getenv("PROP_SCRAPER_HOST", "0.0.0.0")
PORT = int(os.getenv("PROP_SCRAPER_PORT", "8000"))


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for an entry point (CLI or web server)."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
