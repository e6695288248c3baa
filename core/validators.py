"""Pydantic validation models for rule catalogs supplied as configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class LongRunRuleInput(BaseModel):
    key: Optional[str] = None
    label: str = Field(default="", max_length=140)
    before: int = Field(ge=0)
    after: int = Field(ge=0)


class QualityRuleInput(BaseModel):
    key: Optional[str] = None
    before: int = Field(ge=0)
    after: int = Field(ge=0)
    weight: int = Field(ge=0)
    desc: str = Field(default="", max_length=500)


class RuleCatalogInput(BaseModel):
    long_runs: dict[str, LongRunRuleInput] = Field(min_length=1)
    qualities: dict[str, QualityRuleInput] = Field(default_factory=dict)

    @field_validator("long_runs", "qualities")
    @classmethod
    def keys_not_blank(cls, v):
        for key in v:
            if not key.strip():
                raise ValueError("catalog keys must be non-empty")
        return v

    @model_validator(mode="after")
    def entry_keys_match(self):
        for table in (self.long_runs, self.qualities):
            for key, entry in table.items():
                if entry.key is not None and entry.key != key:
                    raise ValueError(f"entry key {entry.key!r} does not match catalog key {key!r}")
        return self
