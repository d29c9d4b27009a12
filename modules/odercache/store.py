"""Persisted odercache configuration: {domain: {relative path: {}}}.

The document is loaded whole, changed in memory and written back whole.
There is no locking: two invocations against the same account race and the
last writer wins.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, Tuple

from modules.errors import ConfigCorrupt, ConfigWriteFailed
from modules.utils import log

Document = Dict[str, Dict[str, dict]]


class CacheStore:
    def __init__(self, path: Path, document: Document | None = None) -> None:
        self.path = Path(path)
        self.document: Document = document if document is not None else {}

    @classmethod
    def load(cls, path: Path) -> "CacheStore":
        path = Path(path)
        if not path.exists():
            return cls(path, {})
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as err:
            raise ConfigCorrupt(f"{path} is not valid json: {err}") from err
        except OSError as err:
            raise ConfigCorrupt(f"could not read {path}: {err}") from err
        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise ConfigCorrupt(f"{path} does not map domains to directories")
        # A domain is never kept without paths.
        empty = [domain for domain, paths in data.items() if not paths]
        for domain in empty:
            log(f"SKIP: {domain} has no directories in {path}")
            del data[domain]
        return cls(path, data)

    def has_entry(self, domain: str, rel: str) -> bool:
        return rel in self.document.get(domain, {})

    def entries(self) -> Iterator[Tuple[str, str]]:
        for domain, paths in self.document.items():
            for rel in paths:
                yield domain, rel

    def add_entry(self, domain: str, rel: str) -> None:
        if self.has_entry(domain, rel):
            return
        self.document.setdefault(domain, {})[rel] = {}
        self.save()
        log(f"PASS: odercache config added {domain} {rel}")

    def remove_entry(self, domain: str, rel: str) -> None:
        if not self.has_entry(domain, rel):
            return
        paths = self.document[domain]
        del paths[rel]
        if not paths:
            del self.document[domain]
        self.save()
        log(f"PASS: odercache config removed {domain} {rel}")

    def save(self) -> None:
        # ASCII escapes keep surrogate-escaped (non UTF-8) directory names loadable.
        text = json.dumps(self.document, indent=4) + "\n"
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", delete=False, dir=str(self.path.parent), encoding="utf-8"
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, self.path)
        except OSError as err:
            if tmp_path is not None and os.path.lexists(tmp_path):
                os.unlink(tmp_path)
            raise ConfigWriteFailed(f"could not write {self.path}: {err}") from err
