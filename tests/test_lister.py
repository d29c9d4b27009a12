"""
Tests for listing migrated directories and rendering the report.
"""

import json

from config import MIB
from modules.cpanel.domains import DomainRecord
from modules.odercache.lister import CacheEntry, list_entries, render_report


def write_config(ctx, document):
    ctx.config_path.parent.mkdir(parents=True, exist_ok=True)
    ctx.config_path.write_text(json.dumps(document))


def test_single_entry_scenario(ctx, domains, fake_disk):
    write_config(ctx, {"example.com": {"cache": {}}})
    stored = ctx.storage_dir / "public_html" / "cache"
    stored.mkdir(parents=True)
    fake_disk.sizes[stored] = 42 * MIB

    entries = list_entries(ctx, domains)

    assert entries == [CacheEntry("example.com", "cache", stored, 42)]
    rows = render_report(entries).splitlines()[2:]
    assert rows == ["example.com | cache | 42"]


def test_skips_stale_domains_and_missing_storage(ctx, docroot, fake_disk):
    sub = DomainRecord("blog.example.com", str(docroot / "blog"), "sub")
    main = DomainRecord("example.com", str(docroot), "main")
    write_config(
        ctx,
        {
            "gone.se": {"cache": {}},
            "example.com": {"cache": {}, "uploads": {}},
            "blog.example.com": {"wp-content/cache": {}},
        },
    )
    (ctx.storage_dir / "public_html" / "cache").mkdir(parents=True)
    (ctx.storage_dir / "public_html" / "blog" / "wp-content" / "cache").mkdir(parents=True)
    # uploads is configured but not in the storage area
    (ctx.storage_dir / "gone.se").mkdir()

    entries = list_entries(ctx, {main.name: main, sub.name: sub})

    assert [(e.domain, e.rel_path) for e in entries] == [
        ("example.com", "cache"),
        ("blog.example.com", "wp-content/cache"),
    ]


def test_no_config_lists_nothing(ctx, domains):
    assert list_entries(ctx, domains) == []


def test_report_pads_to_longest_domain(tmp_path):
    entries = [
        CacheEntry("a.se", "cache", tmp_path, 1),
        CacheEntry("much-longer-name.example.com", "wp-content/cache", tmp_path, 120),
    ]
    lines = render_report(entries).splitlines()
    width = len("much-longer-name.example.com")

    assert lines[0] == f"{'Domain':<{width}} | Directory | Size (MiB)"
    assert lines[1] == "-" * len(lines[0])
    assert len(lines[1]) == width + len(" | Directory | Size (MiB)")
    assert lines[2] == f"{'a.se':<{width}} | cache | 1"
    assert lines[3] == "much-longer-name.example.com | wp-content/cache | 120"


def test_empty_report_has_header_only():
    lines = render_report([]).splitlines()
    assert lines == ["Domain | Directory | Size (MiB)", "-" * len("Domain | Directory | Size (MiB)")]
