"""Tests for lazy_changesets.config."""

from __future__ import annotations

import pytest
import tomlkit
from pydantic import ValidationError

from lazy_changesets.config import load_config


def test_reads_base_ref(sample_toml_doc: tomlkit.TOMLDocument) -> None:
    assert load_config(sample_toml_doc).base_ref == "origin/main"


def test_defaults_without_table() -> None:
    assert load_config(tomlkit.parse("[project]\nname = 'x'")).base_ref == "main"


def test_rejects_unknown_keys() -> None:
    doc = tomlkit.parse('[tool.lazy-changesets]\nbase_branch = "dev"\n')
    with pytest.raises(ValidationError):
        load_config(doc)
