"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


MIAMI_DADE_HTML = """
<html><body>
<pa-propertyinformation>
  <table>
    <tr><td>Folio: 01-3114-035-0010</td></tr>
    <tr><td>Property Address</td><td><div class="property-add">123 MAIN ST
        MIAMI, FL 33130</div></td></tr>
    <tr><td>Owner</td><td><div class="pa-font-size-11">JANE DOE</div></td></tr>
    <tr><td>Primary Land Use</td><td><div class="pt-0 pb-0">0101 RESIDENTIAL - SINGLE FAMILY</div></td></tr>
  </table>
</pa-propertyinformation>
<pa-taxablevalueinformation>
  <table>
    <tr class="header-row"><td><span>Year</span></td><td><span>2024</span></td><td><span>2023</span></td></tr>
    <tr><td> COUNTY </td><td></td><td></td></tr>
    <tr><td>Exemption Value</td><td class="text-end-mine"><span>$0</span></td><td class="text-end-mine"><span>$50,000</span></td></tr>
    <tr><td>Taxable Value</td><td class="text-end-mine"><span>$300,000</span></td><td class="text-end-mine"><span>$250,000</span></td></tr>
    <tr><td>SCHOOL BOARD</td></tr>
    <tr><td>Taxable Value</td><td class="text-end-mine"><span>$310,000</span></td></tr>
  </table>
</pa-taxablevalueinformation>
</body></html>
"""


@pytest.fixture
def miami_dade_html() -> str:
    """A trimmed-down Miami-Dade property appraiser page."""
    return MIAMI_DADE_HTML


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the export dir and sites file at a temp directory."""
    from prop_scraper import config  # pylint: disable=import-outside-toplevel

    monkeypatch.setattr(config, "EXPORT_DIR", tmp_path / "exports")
    monkeypatch.setattr(config, "SITES_FILE", tmp_path / "sites.json")
    return tmp_path
