"""Built-in extraction schemas for the supported property-appraiser sites.

Each schema maps a section name to a FieldConfig-shaped dict (camelCase keys,
as in the site schema JSON files).  Section order matters: later sections
overwrite earlier ones on key collisions.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

Schema = dict[str, dict[str, Any]]

# ─── Broward County (web.bcpa.net) ───────────────────────────────────────────

BCPA_SCHEMA: Schema = {
    "propertySummary": {
        "tableData": ["Site Address", "Property Owner", "Mailing Address"],
        "tableType": "horizontal",
        "constants": {"county": "Broward"},
    },
    "valueHistory": {
        "tableData": ["Year", "Land", "Building", "Just / Market Value", "Assessed / SOH Value"],
        "tableType": "vertical",
        "ignoreRows": {"values": ["Click here to see"], "columns": [0]},
    },
    "exemptions": {
        "tableData": ["Exemptions and Taxable Values by Taxing Authority"],
        "tableType": "matrix",
        "ignoreRows": {"indices": [0]},
    },
    "salesHistory": {
        "tableData": ["Sales History", "Type", "Price", "Book/Page or CIN"],
        "tableType": "vertical",
        "ignoreRows": {"indices": [0]},
    },
}

# ─── Miami-Dade County (www.miamidade.gov) ───────────────────────────────────

MIAMIDADE_SCHEMA: Schema = {
    "propertyRecord": {
        "tableType": "horizontal",
        "function": "runmiamiexceptions",
        "constants": {"county": "Miami-Dade"},
    },
}

# ─── Duval County (paopropertysearch.coj.net) ────────────────────────────────

PAO_PROPERTY_SCHEMA: Schema = {
    "summary": {
        "tableType": "horizontal",
        "function": "getbyselectors",
        "tableSelectors": {
            "realEstateNumber": "#ctl00_cphBody_lblRealEstateNumber",
            "owner": "#ctl00_cphBody_repeaterOwnerInformation_ctl00_lblOwnerName",
            "propertyUse": "#ctl00_cphBody_lblPropertyUse",
            "siteAddress": "#ctl00_cphBody_lblPrimarySiteAddress",
        },
        "constants": {"county": "Duval"},
    },
    "valueSummary": {
        "tableSelector": "#ctl00_cphBody_gridValueSummary",
        "tableType": "matrix",
    },
    "buildingArea": {
        "tableData": ["Type", "Gross Area", "Heated Area", "Effective Area"],
        "tableType": "vertical",
        "ignoreRows": {"values": ["Total"], "columns": [0]},
    },
}

# ─── Collier County (collierappraiser.com) ───────────────────────────────────

COLLIER_SCHEMA: Schema = {
    "parcel": {
        "tableData": ["Parcel No", "Site Address"],
        "tableType": "horizontal",
        "constants": {"county": "Collier"},
    },
    "ownership": {
        "tableType": "horizontal",
        "function": "getformdata",
        "formdata": {
            "ownerName": "#OwnerLine1",
            "homestead": "#HomesteadExemption",
        },
    },
    "certifiedValues": {
        "tableData": ["Land Value", "Improved Value", "Market Value"],
        "tableType": "horizontal",
        "ignoreRows": {"values": ["Certified Tax Roll"], "columns": [0]},
    },
}

SUPPORTED_SITES: dict[str, Schema] = {
    "web.bcpa.net": BCPA_SCHEMA,
    "www.miamidade.gov": MIAMIDADE_SCHEMA,
    "paopropertysearch.coj.net": PAO_PROPERTY_SCHEMA,
    "collierappraiser.com": COLLIER_SCHEMA,
}


# ─── JSON Loading ────────────────────────────────────────────────────────────


def load_schema_file(path: Path) -> Schema:
    """Load a single schema (section name -> entry) from a JSON file."""
    with open(path, "r", encoding="utf-8") as fopen:
        schema = json.load(fopen)
    if not isinstance(schema, dict):
        raise ValueError(f"{path}: schema must be a JSON object, got {type(schema).__name__}")
    return schema


def load_sites_file(path: Path) -> dict[str, Schema]:
    """Load a URL pattern -> schema mapping from JSON; a missing file yields an empty mapping."""
    if not path.exists():
        logger.debug("No sites file at %s", path)
        return {}
    sites = load_schema_file(path)
    logger.info("Loaded %d site schema(s) from %s", len(sites), path)
    return sites
