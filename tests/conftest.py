import json

import pytest


class FakeBaseForm:
    """Records every call; maps inflected forms through a fixed table."""

    def __init__(self, table=None):
        self.table = dict(table or {})
        self.calls = []

    def __call__(self, text):
        self.calls.append(text)
        return self.table.get(text, text)


@pytest.fixture
def fake_base_form():
    return FakeBaseForm


@pytest.fixture
def dictionaries(tmp_path):
    """Return a helper that writes {collection: {filename: payload}} under tmp_path."""
    root = tmp_path / "dictionaries"
    root.mkdir()

    def write(layout):
        for collection, files in layout.items():
            folder = root / collection
            folder.mkdir(exist_ok=True)
            for name, payload in files.items():
                path = folder / name
                if isinstance(payload, str):
                    path.write_text(payload, encoding="utf-8")
                else:
                    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return root

    return write
