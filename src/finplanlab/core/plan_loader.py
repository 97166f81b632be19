"""Utilities for loading financial plans from YAML/JSON sources."""

from __future__ import annotations

import dataclasses
import json
import re
from copy import deepcopy
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .entities import (
    Asset,
    AssumptionOverride,
    Commitment,
    Event,
    FinancialPlan,
    Income,
    Loan,
    Person,
    PlanAssumptions,
    Scenario,
    ValueOverride,
)
from .errors import ConfigError, PlanLoadError

__all__ = ["load_plan", "plan_from_dict", "plan_to_dict"]

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")

# Nested mappings whose keys are data (category names), not field names
_VERBATIM_KEYS = {"asset_growth_rates", "tax_rates"}


def load_plan(
    source: str | Path | dict[str, Any], *, format: str | None = None
) -> FinancialPlan:
    """
    Parse a plan from a YAML/JSON file or a mapping.

    Keys may be camelCase (as exported by the planning application) or
    snake_case. Unknown keys such as timestamps are ignored.
    """
    mapping, label = _read_source(source, format=format)
    return plan_from_dict(mapping, label=label)


def _read_source(
    source: str | Path | dict[str, Any], *, format: str | None
) -> tuple[dict[str, Any], str]:
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    try:
        if fmt in {"yaml", "yml"}:
            data = yaml.safe_load(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            raise PlanLoadError(f"Unsupported plan format '{fmt}' for {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise PlanLoadError(f"{path}: could not parse plan: {exc}") from exc

    if not isinstance(data, dict):
        raise PlanLoadError(f"Plan root must be a mapping (source={path})")
    return data, str(path)


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def _snake_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {_snake(k): v for k, v in data.items()}


def _ensure_dict(value: Any, ctx: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PlanLoadError(f"{ctx}: expected a mapping")
    return _snake_keys(value)


def _ensure_list(value: Any, ctx: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PlanLoadError(f"{ctx}: expected a list")
    return list(value)


def _year_from(value: Any, ctx: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    # YAML parses unquoted ISO dates (covers datetime as well)
    if isinstance(value, date):
        return value.year
    if isinstance(value, str) and len(value) >= 4 and value[:4].isdigit():
        return int(value[:4])
    raise PlanLoadError(f"{ctx}: expected a year or ISO date")


def _build(cls, data: dict[str, Any], ctx: str, **nested):
    """Instantiate a dataclass from the subset of ``data`` it accepts."""
    accepted = {f.name: f for f in dataclasses.fields(cls) if f.init}
    kwargs = {k: v for k, v in data.items() if k in accepted and v is not None}
    kwargs.update(nested)
    missing = [
        name
        for name, f in accepted.items()
        if name not in kwargs
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    ]
    if missing:
        raise PlanLoadError(f"{ctx}: missing required field(s): {', '.join(missing)}")
    try:
        return cls(**kwargs)
    except (ConfigError, TypeError) as exc:
        raise PlanLoadError(f"{ctx}: {exc}") from exc


def _loan(raw: Any, ctx: str) -> Loan:
    data = _ensure_dict(raw, ctx)
    if data.get("start_year") is not None:
        data["start_year"] = _year_from(data["start_year"], f"{ctx}.start_year")
    elif data.get("start_date") is not None:
        data["start_year"] = _year_from(data["start_date"], f"{ctx}.start_date")
    if "amount" not in data and "principal" in data:
        data["amount"] = data["principal"]
    return _build(Loan, data, ctx)


def _asset(raw: Any, ctx: str) -> Asset:
    data = _ensure_dict(raw, ctx)
    loans = [
        _loan(entry, f"{ctx}.loans[{i}]")
        for i, entry in enumerate(_ensure_list(data.get("loans"), f"{ctx}.loans"))
    ]
    value_overrides = [
        _build(ValueOverride, _ensure_dict(entry, f"{ctx}.value_overrides[{i}]"), ctx)
        for i, entry in enumerate(
            _ensure_list(data.get("value_overrides"), f"{ctx}.value_overrides")
        )
    ]
    return _build(Asset, data, ctx, loans=loans, value_overrides=value_overrides)


def _assumptions(
    raw: Any, ctx: str, base: PlanAssumptions | None = None
) -> PlanAssumptions:
    """
    Build assumptions from a mapping.

    With ``base``, the mapping is a partial overlay: missing fields keep the
    base values and rate tables are merged key by key.
    """
    data = _ensure_dict(raw, ctx)
    for key in _VERBATIM_KEYS:
        if key in data and data[key] is not None and not isinstance(data[key], dict):
            raise PlanLoadError(f"{ctx}.{key}: expected a mapping")
        if data.get(key) is not None:
            data[key] = dict(data[key])
    if base is not None:
        merged = dataclasses.asdict(base)
        for key, value in data.items():
            if value is None:
                continue
            if key in _VERBATIM_KEYS:
                merged[key].update(value)
            else:
                merged[key] = value
        data = merged
    return _build(PlanAssumptions, data, ctx)


def _overrides(raw: Any, ctx: str) -> list[AssumptionOverride]:
    return [
        _build(AssumptionOverride, _ensure_dict(entry, f"{ctx}[{i}]"), f"{ctx}[{i}]")
        for i, entry in enumerate(_ensure_list(raw, ctx))
    ]


def _scenario(raw: Any, ctx: str, plan_assumptions: PlanAssumptions) -> Scenario:
    data = _ensure_dict(raw, ctx)
    nested = {}
    if data.get("assumptions") is not None:
        nested["assumptions"] = _assumptions(
            data["assumptions"], f"{ctx}.assumptions", base=plan_assumptions
        )
    if data.get("overrides") is not None:
        nested["overrides"] = _overrides(data["overrides"], f"{ctx}.overrides")
    return _build(Scenario, data, ctx, **nested)


def plan_from_dict(data: dict[str, Any], *, label: str = "<mapping>") -> FinancialPlan:
    """Normalize a raw plan mapping into a ``FinancialPlan``."""
    if not isinstance(data, dict):
        raise PlanLoadError(f"{label}: plan root must be a mapping")
    plan = _snake_keys(data)

    def entries(key: str) -> list[tuple[Any, str]]:
        ctx = f"{label}::{key}"
        return [(e, f"{ctx}[{i}]") for i, e in enumerate(_ensure_list(plan.get(key), ctx))]

    if plan.get("assumptions") is not None:
        assumptions = _assumptions(plan["assumptions"], f"{label}::assumptions")
    else:
        assumptions = PlanAssumptions()

    nested = {
        "assumptions": assumptions,
        "people": [_build(Person, _ensure_dict(e, c), c) for e, c in entries("people")],
        "assets": [_asset(e, c) for e, c in entries("assets")],
        "income": [_build(Income, _ensure_dict(e, c), c) for e, c in entries("income")],
        "commitments": [
            _build(Commitment, _ensure_dict(e, c), c) for e, c in entries("commitments")
        ],
        "events": [_build(Event, _ensure_dict(e, c), c) for e, c in entries("events")],
        "overrides": _overrides(plan.get("overrides"), f"{label}::overrides"),
        "scenarios": [_scenario(e, c, assumptions) for e, c in entries("scenarios")],
    }
    return _build(FinancialPlan, plan, label, **nested)


def _plain(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def plan_to_dict(plan: FinancialPlan) -> dict[str, Any]:
    """Snake_case mapping of a plan that ``load_plan`` reads back."""
    return _plain(dataclasses.asdict(plan))
