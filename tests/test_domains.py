"""
Tests for the domain resolver and addon domains.
"""

import pytest

from modules.cpanel import domains as domains_mod
from modules.cpanel.domains import DomainRecord, add_addon_domain, resolve_domains
from modules.errors import ExternalApiError

DOMAINS_DATA = {
    "main_domain": {"domain": "example.com", "documentroot": "/home/u1/public_html"},
    "parked_domains": ["example.net"],
    "addon_domains": [
        {"domain": "shop.se", "documentroot": "/home/u1/public_html/shop.se"},
    ],
    "sub_domains": [
        {"domain": "blog.example.com", "documentroot": "/home/u1/public_html/blog"},
    ],
}


class TestResolveDomains:
    def test_flattens_all_categories_in_order(self):
        got = resolve_domains(DOMAINS_DATA)
        assert list(got) == ["example.com", "example.net", "shop.se", "blog.example.com"]
        assert got["shop.se"] == DomainRecord("shop.se", "/home/u1/public_html/shop.se", "addon")
        assert got["blog.example.com"].kind == "sub"

    def test_parked_inherits_main_docroot(self):
        got = resolve_domains(DOMAINS_DATA)
        assert got["example.net"] == DomainRecord("example.net", "/home/u1/public_html", "parked")

    def test_optional_categories(self):
        got = resolve_domains({"main_domain": DOMAINS_DATA["main_domain"]})
        assert list(got) == ["example.com"]

    def test_last_category_wins_on_collision(self):
        data = dict(DOMAINS_DATA)
        data["sub_domains"] = [{"domain": "shop.se", "documentroot": "/home/u1/sub/shop"}]
        got = resolve_domains(data)
        assert got["shop.se"] == DomainRecord("shop.se", "/home/u1/sub/shop", "sub")

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"main_domain": "example.com"},
            {"main_domain": {"domain": "example.com"}},
            {"main_domain": {"domain": "example.com", "documentroot": "public_html"}},
            {**DOMAINS_DATA, "parked_domains": "example.net"},
            {**DOMAINS_DATA, "parked_domains": [{"domain": "x"}]},
            {**DOMAINS_DATA, "addon_domains": [{"documentroot": "/home/u1/x"}]},
            [],
        ],
    )
    def test_malformed_data(self, data):
        with pytest.raises(ExternalApiError):
            resolve_domains(data)

    def test_queries_api_when_no_data(self, monkeypatch):
        monkeypatch.setattr(domains_mod, "domains_data", lambda: DOMAINS_DATA)
        assert "shop.se" in resolve_domains()


def test_add_addon_domain_defaults_subdomain(monkeypatch):
    calls = []
    monkeypatch.setattr(domains_mod, "cpapi2", lambda *a, **kw: calls.append((a, kw)))

    add_addon_domain("shop.se", "domains/shop.se")
    add_addon_domain("shop.se", "domains/shop.se", subdomain="shop")

    assert calls == [
        (
            ("AddonDomain", "addaddondomain"),
            {"dir": "domains/shop.se", "newdomain": "shop.se", "subdomain": "shop.se"},
        ),
        (
            ("AddonDomain", "addaddondomain"),
            {"dir": "domains/shop.se", "newdomain": "shop.se", "subdomain": "shop"},
        ),
    ]
