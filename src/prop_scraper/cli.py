"""Scrape a saved property-record page from the command line.

Usage:
    prop-scraper page.html --url https://web.bcpa.net/BcpaClient/#/Record/...
    prop-scraper page.html --schema my_schema.json --format tsv --no-headers
    prop-scraper page.html --url https://www.miamidade.gov/Apps/PA/... --export
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from prop_scraper import config
from prop_scraper.export import CsvSheetSink, to_tsv
from prop_scraper.extraction import extract
from prop_scraper.extraction.dom import parse_document
from prop_scraper.schemas import load_schema_file
from prop_scraper.sites import UNKNOWN_SITE, default_registry

logger = logging.getLogger(__name__)

EXIT_NO_DATA = 1
EXIT_UNSUPPORTED_SITE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prop-scraper", description="Extract property-record tables from a saved HTML page")
    parser.add_argument("html_file", type=Path, help="Saved HTML page to scrape")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Original page URL, used to pick the site schema")
    source.add_argument("--schema", type=Path, help="JSON schema file to use instead of a built-in site")
    parser.add_argument("--format", choices=["json", "tsv"], default="json", help="Output format (default: json)")
    parser.add_argument("--no-headers", action="store_true", help="Omit the header line in TSV output")
    parser.add_argument("--export", action="store_true", help="Also append the result to the per-site CSV export")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse args, run the schema against the page, and print the flattened result."""
    args = build_parser().parse_args(argv)
    config.setup_logging(args.log_level)

    if args.schema:
        schema = load_schema_file(args.schema)
        site_name = args.schema.stem
    else:
        registry = default_registry()
        schema = registry.match(args.url)
        if schema is None:
            print(f"Site not supported for scraping: {args.url}", file=sys.stderr)
            return EXIT_UNSUPPORTED_SITE
        site_name = registry.site_name(args.url)

    doc = parse_document(args.html_file.read_text(encoding="utf-8"))
    result = extract(schema, doc)
    flat = result.flat()
    for section, message in result.errors.items():
        logger.warning("Section %s failed: %s", section, message)

    if not flat:
        print("Failed to scrape data", file=sys.stderr)
        return EXIT_NO_DATA

    if args.format == "tsv":
        print(to_tsv(flat, include_headers=not args.no_headers))
    else:
        print(json.dumps(flat, indent=2, ensure_ascii=False))

    if args.export:
        path, created = CsvSheetSink(config.EXPORT_DIR).append(site_name if site_name != UNKNOWN_SITE else "export", flat)
        logger.info("Data %s %s", "exported to new" if created else "appended to existing", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
