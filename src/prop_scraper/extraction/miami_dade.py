"""Hard-coded extraction for the Miami-Dade property appraiser page.

The page is rendered by custom elements rather than plain data tables, so it
does not fit the horizontal / vertical / matrix model:

  <pa-propertyinformation>       label rows ("Folio: 01-...", "Owner", ...)
  <pa-taxablevalueinformation>   an authority x year matrix flattened into rows:
                                   COUNTY
                                   Exemption Value   $0   $0   $0
                                   Taxable Value     $1   $2   $3
                                   SCHOOL BOARD
                                   ...

Tax values are keyed ``{authority}_{metric}_{year}``, e.g.
``school_board_taxablevalue_2024``.
"""

import logging
import re

from bs4 import Tag

from prop_scraper.extraction.dom import normalized_text, text_of
from prop_scraper.extraction.errors import StructuralError

logger = logging.getLogger(__name__)

PROPERTY_SECTION = "pa-propertyinformation"
TAX_SECTION = "pa-taxablevalueinformation"

AUTHORITIES = ("COUNTY", "SCHOOL BOARD", "CITY", "REGIONAL")

# (row label, output metric)
TAX_METRICS = (
    ("Exemption Value", "exemptionvalue"),
    ("Taxable Value", "taxablevalue"),
)

YEAR_RE = re.compile(r"^\d+$")


def _property_info(section: Tag) -> dict[str, str]:
    info: dict[str, str] = {}
    for row in section.find_all("tr"):
        text = normalized_text(row)
        if "Folio:" in text:
            info["folio"] = text.split("Folio:", 1)[1].strip()
        if "Property Address" in text:
            info["propertyAddress"] = text_of(row.select_one(".property-add"))
        if "Owner" in text:
            info["owner"] = text_of(row.select_one(".pa-font-size-11"))
        if "Primary Land Use" in text:
            info["primaryLandUse"] = text_of(row.select_one(".pt-0.pb-0"))
    return info


def _authority_key(label: str) -> str:
    return label.lower().replace(" ", "_")


def _tax_matrix(section: Tag) -> dict[str, str | None]:
    years = [text_of(span) for span in section.select(".header-row td span")]
    years = [year for year in years if YEAR_RE.match(year)]
    if not years:
        logger.warning("Taxable value section has no year header")

    matrix: dict[str, str | None] = {}
    authority: str | None = None
    for row in section.find_all("tr"):
        text = normalized_text(row)
        if text in AUTHORITIES:
            authority = _authority_key(text)
            continue
        if authority is None:
            continue
        for label, metric in TAX_METRICS:
            if label in text:
                values = [text_of(span) for span in row.select(".text-end-mine span")]
                for idx, year in enumerate(years):
                    matrix[f"{authority}_{metric}_{year}"] = values[idx] if idx < len(values) else None
    return matrix


def _extract(doc: Tag) -> dict[str, str | None]:
    property_section = doc.find(PROPERTY_SECTION)
    tax_section = doc.find(TAX_SECTION)
    if property_section is None and tax_section is None:
        raise StructuralError(f"neither <{PROPERTY_SECTION}> nor <{TAX_SECTION}> present")

    data: dict[str, str | None] = {}
    if property_section is not None:
        data.update(_property_info(property_section))
    if tax_section is not None:
        data.update(_tax_matrix(tax_section))
    return data


def extract_miami_dade(doc: Tag) -> dict[str, str | None] | None:
    """Extract property info and the tax matrix, or None if the layout is not present."""
    try:
        data = _extract(doc)
    except StructuralError as exc:
        logger.warning("Miami-Dade layout not found: %s", exc)
        return None
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.error("Miami-Dade extraction failed: %s", exc)
        return None
    logger.info("Miami-Dade extraction produced %d fields", len(data))
    return data
