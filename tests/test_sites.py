"""Unit tests for URL -> site schema routing."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

from prop_scraper.schemas import MIAMIDADE_SCHEMA, SUPPORTED_SITES, load_sites_file
from prop_scraper.sites import SiteRegistry, default_registry, extract_main_domain


class TestExtractMainDomain:

    def test_strips_scheme_path_and_subdomain(self):
        assert extract_main_domain("https://www.miamidade.gov/Apps/PA/propertysearch/") == "miamidade.gov"

    def test_two_label_host_kept(self):
        assert extract_main_domain("http://collierappraiser.com/main_search/RecordDetail.html") == "collierappraiser.com"

    def test_bare_pattern(self):
        assert extract_main_domain("paopropertysearch.coj.net") == "coj.net"


class TestSiteRegistry:

    def test_match_by_substring(self):
        registry = SiteRegistry(SUPPORTED_SITES)
        assert registry.match("https://www.miamidade.gov/Apps/PA/propertysearch/#/?folio=0131140350010") is MIAMIDADE_SCHEMA

    def test_unsupported_url(self):
        assert SiteRegistry(SUPPORTED_SITES).match("https://example.com/parcel/1") is None

    def test_first_pattern_wins(self):
        registry = SiteRegistry({"bcpa.net": {"a": {}}, "web.bcpa.net": {"b": {}}})
        assert registry.match("https://web.bcpa.net/BcpaClient/") == {"a": {}}

    def test_site_name(self):
        registry = SiteRegistry(SUPPORTED_SITES)
        assert registry.site_name("https://web.bcpa.net/BcpaClient/#/Record-Search") == "bcpa.net"
        assert registry.site_name("https://example.com/") == "Unknown Site"

    def test_patterns_in_order(self):
        assert SiteRegistry(SUPPORTED_SITES).patterns()[0] == "web.bcpa.net"


class TestDefaultRegistry:

    def test_builtin_sites_without_file(self, isolated_config):  # pylint: disable=unused-argument
        assert set(default_registry().patterns()) == set(SUPPORTED_SITES)

    def test_sites_file_overrides_and_extends(self, isolated_config):
        custom = {"www.miamidade.gov": {"only": {"tableType": "horizontal"}}, "pa.example.org": {"x": {}}}
        (isolated_config / "sites.json").write_text(json.dumps(custom), encoding="utf-8")
        registry = default_registry()
        assert registry.match("https://www.miamidade.gov/x") == custom["www.miamidade.gov"]
        assert registry.match("https://pa.example.org/parcel") == {"x": {}}

    def test_missing_sites_file_is_empty(self, tmp_path):
        assert load_sites_file(tmp_path / "absent.json") == {}
