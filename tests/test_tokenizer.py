# tests/test_tokenizer.py
"""Tests for the Sudachi base-form adapter."""

import sys
import types

import pytest

from yomilookup.errors import TokenizationError
from yomilookup.searching.tokenizer import SudachiBaseForm


class FakeMorpheme:
    def __init__(self, base):
        self.base = base

    def dictionary_form(self):
        return self.base


class FakeTokenizer:
    def __init__(self, table):
        self.table = table

    def tokenize(self, text):
        if text == "boom":
            raise RuntimeError("bad input")
        return [FakeMorpheme(b) for b in self.table.get(text, [])]


@pytest.fixture
def fake_sudachi(monkeypatch):
    created = []

    class Dictionary:
        def __init__(self, dict=None):
            if dict == "missing":
                raise FileNotFoundError(dict)
            created.append(dict)

        def create(self, mode=None):
            return FakeTokenizer({"食べた": ["食べる", "た"]})

    module = types.ModuleType("sudachipy")
    module.Dictionary = Dictionary
    module.SplitMode = types.SimpleNamespace(A="A", B="B", C="C")
    monkeypatch.setitem(sys.modules, "sudachipy", module)
    return created


def test_first_token_dictionary_form(fake_sudachi):
    base_form = SudachiBaseForm("core")

    assert base_form("食べた") == "食べる"
    assert base_form("食べた") == "食べる"
    assert fake_sudachi == ["core"]


def test_empty_tokenization_returns_input(fake_sudachi):
    assert SudachiBaseForm()("") == ""
    assert SudachiBaseForm()("？") == "？"


def test_dictionary_load_failure(fake_sudachi):
    with pytest.raises(TokenizationError):
        SudachiBaseForm("missing")("食べた")


def test_tokenize_failure(fake_sudachi):
    with pytest.raises(TokenizationError):
        SudachiBaseForm()("boom")


def test_real_sudachi():
    pytest.importorskip("sudachipy")
    pytest.importorskip("sudachidict_core")

    assert SudachiBaseForm("core")("食べた") == "食べる"
