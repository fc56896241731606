# tests/conftest.py
import json
import sys
from dataclasses import asdict
from pathlib import Path

import pytest

# project root (config/) and src/ (sunday_prep/) on sys.path
ROOT = Path(__file__).resolve().parents[1]
for p in (ROOT, ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from sunday_prep.errors import ShortcutMetadataError  # noqa: E402
from sunday_prep.shortcuts import ShortcutOptions  # noqa: E402


class FakeShortcutStore:
    """Shortcut metadata kept as JSON inside the .lnk file itself."""

    def __init__(self, expands_variables=False, fail_query=(), fail_edit=(), fail_create=()):
        self.expands_variables = expands_variables
        self.fail_query = {Path(p).name for p in fail_query}
        self.fail_edit = {Path(p).name for p in fail_edit}
        self.fail_create = {Path(p).name for p in fail_create}
        self.edited = []

    def create(self, path, options):
        if Path(path).name in self.fail_create:
            raise ShortcutMetadataError(f"cannot create {path}")
        Path(path).write_text(json.dumps(asdict(options)), encoding="utf-8")

    def query(self, path):
        if Path(path).name in self.fail_query:
            raise ShortcutMetadataError(f"cannot read {path}")
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ShortcutMetadataError(str(e)) from e
        return ShortcutOptions(**data)

    def edit(self, path, options):
        if Path(path).name in self.fail_edit:
            raise ShortcutMetadataError(f"cannot edit {path}")
        Path(path).write_text(json.dumps(asdict(options)), encoding="utf-8")
        self.edited.append(Path(path).name)


@pytest.fixture()
def store():
    return FakeShortcutStore()


@pytest.fixture()
def make_store():
    return FakeShortcutStore


@pytest.fixture()
def template_dir(tmp_path: Path) -> Path:
    """A folder holding 'Sunday Template.pptx' with recognisable bytes."""
    d = tmp_path / "Sunday"
    d.mkdir()
    (d / "Sunday Template.pptx").write_bytes(b"PK\x03\x04 template bytes")
    return d


@pytest.fixture()
def read_shortcut():
    def _read(path):
        return json.loads(Path(path).read_text(encoding="utf-8"))
    return _read
