"""
Tests for database provisioning name rules.
"""

import pytest

from modules.cpanel import mysql

LIMITS = {"prefix": "u1_", "max_username_length": 10, "max_database_name_length": 12}


@pytest.fixture
def uapi_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(mysql, "uapi", lambda *a, **kw: calls.append((a, kw)))
    return calls


class TestApplyRestrictions:
    def test_already_valid(self, capsys):
        assert mysql.apply_restrictions("u1_wp", "u1_", 12, "Database name") == "u1_wp"
        assert "WARN" not in capsys.readouterr().out

    def test_adds_prefix_with_warning(self, capsys):
        assert mysql.apply_restrictions("wp", "u1_", 12, "Database name") == "u1_wp"
        assert "WARN: Database name has to be prefixed with: u1_" in capsys.readouterr().out

    def test_prefix_must_lead(self):
        assert mysql.apply_restrictions("wp_u1_", "u1_", 12, "x") == "u1_wp_u1_"

    def test_truncates_with_warning(self, capsys):
        assert mysql.apply_restrictions("u1_wordpress_db", "u1_", 12, "Database name") == "u1_wordpress"
        assert "max length is 12" in capsys.readouterr().out


def test_create_database(uapi_calls):
    assert mysql.create_database("wordpress", limits=LIMITS) == "u1_wordpress"
    assert uapi_calls == [(("Mysql", "create_database"), {"name": "u1_wordpress"})]


def test_create_database_fetches_restrictions(uapi_calls, monkeypatch):
    monkeypatch.setattr(mysql, "restrictions", lambda: LIMITS)
    assert mysql.create_database("wp") == "u1_wp"


def test_create_database_user(uapi_calls):
    assert mysql.create_database_user("wpadmin", "pw", limits=LIMITS) == "u1_wpadmin"
    assert uapi_calls == [(("Mysql", "create_user"), {"name": "u1_wpadmin", "password": "pw"})]


def test_set_database_privileges(uapi_calls):
    mysql.set_database_privileges("u1_wpadm", "u1_wp")
    assert uapi_calls == [
        (
            ("Mysql", "set_privileges_on_database"),
            {"user": "u1_wpadm", "database": "u1_wp", "privileges": "ALL PRIVILEGES"},
        )
    ]
