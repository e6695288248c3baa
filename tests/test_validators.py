"""Tests for Pydantic rule catalog validation models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.validators import LongRunRuleInput, QualityRuleInput, RuleCatalogInput


def test_long_run_rule_valid():
    rule = LongRunRuleInput(before=2, after=3)
    assert rule.label == ""
    assert rule.key is None


def test_long_run_rule_negative_after():
    with pytest.raises(ValidationError):
        LongRunRuleInput(before=1, after=-1)


def test_quality_rule_requires_weight():
    with pytest.raises(ValidationError):
        QualityRuleInput(before=1, after=1)


def test_quality_rule_negative_weight():
    with pytest.raises(ValidationError):
        QualityRuleInput(before=1, after=1, weight=-2)


def test_catalog_blank_key_rejected():
    with pytest.raises(ValidationError):
        RuleCatalogInput(long_runs={"  ": {"before": 1, "after": 1}})


def test_catalog_matching_entry_key_accepted():
    catalog = RuleCatalogInput(
        long_runs={"easy": {"key": "easy", "before": 1, "after": 1}},
        qualities={"Tempo": {"key": "Tempo", "before": 1, "after": 1, "weight": 2}},
    )
    assert catalog.qualities["Tempo"].weight == 2


def test_catalog_mismatched_quality_key_rejected():
    with pytest.raises(ValidationError):
        RuleCatalogInput(
            long_runs={"easy": {"before": 1, "after": 1}},
            qualities={"Tempo": {"key": "Intervals", "before": 1, "after": 1, "weight": 2}},
        )


def test_catalog_qualities_default_empty():
    catalog = RuleCatalogInput(long_runs={"easy": {"before": 1, "after": 1}})
    assert catalog.qualities == {}
