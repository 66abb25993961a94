"""BeautifulSoup helpers shared by the locator, interpreter, and site handlers.

Rows and cells mirror the browser's ``table.rows`` / ``row.cells`` view: only
the table's own rows are returned (never those of a nested table), ``thead``
rows come first and ``tfoot`` rows last.
"""

import logging
import re

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s+")

_SECTION_TAGS = ("thead", "tbody", "tfoot")


def parse_document(html: str) -> BeautifulSoup:
    """Parse an HTML string into a document tree."""
    return BeautifulSoup(html, "html.parser")


def text_of(node: Tag | None) -> str:
    """Return the node's text content with leading/trailing whitespace stripped."""
    if node is None:
        return ""
    return node.get_text().strip()


def normalized_text(node: Tag | None) -> str:
    """Return the node's text content with every whitespace run collapsed to one space."""
    if node is None:
        return ""
    return WHITESPACE_RE.sub(" ", node.get_text()).strip()


def select_one(doc: Tag, selector: str) -> Tag | None:
    """``doc.select_one`` that logs and returns None for an unparsable selector."""
    try:
        return doc.select_one(selector)
    except (SelectorSyntaxError, ValueError, NotImplementedError) as exc:
        logger.warning("Invalid selector %r: %s", selector, exc)
        return None


def table_rows(table: Tag) -> list[Tag]:
    """Return the ``<tr>`` rows that belong to *table* itself, in display order."""
    # A row-group element (e.g. a selector that hit a <tbody>) exposes its own rows
    if table.name in _SECTION_TAGS:
        return table.find_all("tr", recursive=False)

    head: list[Tag] = []
    body: list[Tag] = []
    foot: list[Tag] = []
    for child in table.find_all(recursive=False):
        if child.name == "tr":
            body.append(child)
        elif child.name == "thead":
            head.extend(child.find_all("tr", recursive=False))
        elif child.name == "tfoot":
            foot.extend(child.find_all("tr", recursive=False))
        elif child.name == "tbody":
            body.extend(child.find_all("tr", recursive=False))
    return head + body + foot


def row_cells(row: Tag) -> list[Tag]:
    """Return the ``<td>`` / ``<th>`` cells of a row."""
    return row.find_all(["td", "th"], recursive=False)


def nesting_level(table: Tag) -> int:
    """Count the ``<table>`` ancestors of *table*."""
    return sum(1 for parent in table.parents if parent.name == "table")
