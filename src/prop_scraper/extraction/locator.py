"""Find the single table a schema entry refers to.

Two strategies, in priority order:

  1. ``selector`` -- the first element matching a CSS selector.
  2. ``required_text`` -- a content fingerprint: the table whose text contains
     every listed fragment (case-insensitive).  Property pages nest layout
     tables inside layout tables, so the outer wrappers match too; the least
     nested match is the data table.  Ties go to document order.

Absence is a normal outcome and is returned as ``None``.
"""

import logging

from bs4 import Tag

from prop_scraper.extraction.dom import nesting_level, select_one

logger = logging.getLogger(__name__)


def find_table_by_text(doc: Tag, required_text: list[str]) -> Tag | None:
    """Return the least-nested table whose text contains every item of *required_text*."""
    needles = [str(item).lower() for item in required_text]
    matches = [table for table in doc.find_all("table") if all(needle in table.get_text().lower() for needle in needles)]
    if not matches:
        logger.debug("No table contains all of %s", required_text)
        return None
    # min() keeps the first of equal keys, so document order breaks ties
    return min(matches, key=nesting_level)


def locate_table(doc: Tag, selector: str | None = None, required_text: list[str] | None = None) -> Tag | None:
    """Locate a table by selector, else by required text.  Never raises."""
    if selector:
        table = select_one(doc, selector)
        if table is None:
            logger.debug("Selector %r matched nothing", selector)
        return table
    if required_text:
        return find_table_by_text(doc, required_text)
    return None
