"""Tests for rule catalogs and catalog loading."""

from __future__ import annotations

import json
from dataclasses import FrozenInstanceError

import pytest

from core.services.rules import (
    BIG_EASY_THRESHOLD_MI,
    DEFAULT_CATALOGS,
    LONG_RULES,
    QUALITY_CATALOG,
    CatalogError,
    UnknownLongRunTypeError,
    catalogs_from_payload,
    load_catalogs,
)


def _payload():
    return {
        "long_runs": {
            "easy": {"label": "Easy Long", "before": 1, "after": 1},
            "big": {"before": 2, "after": 2},
        },
        "qualities": {
            "Tempo": {"before": 1, "after": 1, "weight": 2, "desc": "Steady tempo"},
        },
    }


def test_builtin_long_rules():
    assert set(LONG_RULES) == {"easy", "progressive", "hilly", "big", "mp"}
    assert (LONG_RULES["easy"].before, LONG_RULES["easy"].after) == (1, 1)
    assert (LONG_RULES["mp"].before, LONG_RULES["mp"].after) == (2, 3)


def test_builtin_quality_catalog():
    assert len(QUALITY_CATALOG) == 8
    mp_big = QUALITY_CATALOG["MP big (continuous ≥45′ at MP)"]
    assert (mp_big.before, mp_big.after, mp_big.weight) == (2, 3, 5)
    assert all(q.desc for q in QUALITY_CATALOG.values())


def test_upgrade_threshold():
    assert BIG_EASY_THRESHOLD_MI == 21


def test_long_rule_lookup():
    assert DEFAULT_CATALOGS.long_rule("hilly").label == "Hilly Long (with descents)"


def test_long_rule_unknown_key_raises_value_error():
    with pytest.raises(UnknownLongRunTypeError) as excinfo:
        DEFAULT_CATALOGS.long_rule("ultra")
    assert isinstance(excinfo.value, ValueError)
    assert "ultra" in str(excinfo.value)


def test_quality_rule_unknown_returns_none():
    assert DEFAULT_CATALOGS.quality_rule("Nope") is None


def test_catalog_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CATALOGS.long_runs["easy"] = LONG_RULES["big"]
    with pytest.raises(FrozenInstanceError):
        LONG_RULES["easy"].before = 5


def test_catalogs_from_payload():
    catalogs = catalogs_from_payload(_payload())
    assert catalogs.long_rule("easy").label == "Easy Long"
    # label falls back to the key
    assert catalogs.long_rule("big").label == "big"
    tempo = catalogs.quality_rule("Tempo")
    assert (tempo.before, tempo.after, tempo.weight, tempo.desc) == (1, 1, 2, "Steady tempo")


def test_payload_rejects_negative_buffer():
    payload = _payload()
    payload["qualities"]["Tempo"]["before"] = -1
    with pytest.raises(CatalogError):
        catalogs_from_payload(payload)


def test_payload_rejects_mismatched_entry_key():
    payload = _payload()
    payload["long_runs"]["easy"]["key"] = "steady"
    with pytest.raises(CatalogError):
        catalogs_from_payload(payload)


def test_payload_requires_long_runs():
    with pytest.raises(CatalogError):
        catalogs_from_payload({"long_runs": {}, "qualities": {}})


def test_load_catalogs_from_file(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(_payload()), encoding="utf-8")
    catalogs = load_catalogs(path)
    assert set(catalogs.long_runs) == {"easy", "big"}
    assert set(catalogs.qualities) == {"Tempo"}


def test_load_catalogs_invalid_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalogs(path)


def test_load_catalogs_requires_object(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalogs(str(path))


def test_load_catalogs_missing_file(tmp_path):
    with pytest.raises(CatalogError) as excinfo:
        load_catalogs(tmp_path / "missing.json")
    assert "could not be read" in str(excinfo.value)


def test_load_catalogs_directory_path(tmp_path):
    with pytest.raises(CatalogError):
        load_catalogs(tmp_path)
