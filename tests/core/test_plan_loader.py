from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest
import yaml

from finplanlab.core.engine import calculate_projections
from finplanlab.core.entities import FinancialPlan
from finplanlab.core.errors import PlanLoadError
from finplanlab.core.kinds import K
from finplanlab.core.plan_loader import load_plan, plan_from_dict, plan_to_dict


def _camel_plan() -> dict:
    return {
        "id": "household",
        "name": "Household",
        "createdAt": "2024-01-01T00:00:00Z",
        "people": [{"id": "alex", "name": "Alex", "dateOfBirth": "1985-04-12", "sex": "F"}],
        "assets": [
            {
                "id": "isa",
                "name": "Stocks ISA",
                "type": "ISA",
                "currentValue": 50000,
                "ownerIds": ["alex"],
                "growthRate": 5,
                "valueOverrides": [{"year": 2026, "value": 60000, "reason": "Statement"}],
            },
            {
                "id": "home",
                "name": "Home",
                "type": "Property",
                "currentValue": 350000,
                "loans": [
                    {
                        "id": "mortgage",
                        "name": "Mortgage",
                        "principal": 200000,
                        "interestRate": 4,
                        "termYears": 25,
                        "startDate": "2020-06-01",
                    }
                ],
            },
        ],
        "income": [
            {
                "id": "salary",
                "name": "Salary",
                "amount": 5000,
                "frequency": "Monthly",
                "startYear": 2024,
                "destination": "asset",
                "destinationAssetId": "isa",
            }
        ],
        "commitments": [
            {
                "id": "rent",
                "name": "Rent",
                "amount": 1500,
                "frequency": "monthly",
                "startYear": 2024,
                "endYear": None,
            }
        ],
        "events": [
            {"id": "car", "name": "Car", "year": 2027, "amount": -25000, "isRecurring": False}
        ],
        "assumptions": {
            "inflationRate": 2.0,
            "assetGrowthRates": {"ISA": 6.5, "Premium Bonds": 1.5},
        },
        "overrides": [
            {
                "entityType": "category",
                "category": "Property",
                "overrideType": "growth",
                "value": 1.0,
                "startYear": 2025,
            }
        ],
        "scenarios": [
            {"id": "base", "name": "Base", "isBase": True},
            {"id": "stress", "name": "Stress", "assumptions": {"inflationRate": 6.0}},
        ],
    }


def test_load_camel_case_mapping() -> None:
    plan = load_plan(_camel_plan())

    assert plan.people[0].date_of_birth == date(1985, 4, 12)
    isa, home = plan.assets
    assert isa.kind == K.ASSET
    assert isa.owner_ids == ["alex"]
    assert isa.value_overrides[0].value == 60000
    assert home.loans[0].amount == 200000
    assert home.loans[0].start_year == 2020
    assert plan.income[0].frequency == "monthly"
    assert plan.income[0].linked_asset_id == "isa"
    assert plan.commitments[0].end_year is None
    assert plan.assumptions.asset_growth_rates == {"ISA": 6.5, "Premium Bonds": 1.5}
    assert plan.assumptions.income_growth_rate == 3.0
    assert plan.overrides[0].entity_type == "category"


def test_scenarios_keep_inheritance() -> None:
    plan = load_plan(_camel_plan())
    base, stress = plan.scenarios

    assert base.is_base
    assert base.assumptions is None and base.overrides is None
    assert stress.assumptions.inflation_rate == 6.0


def test_load_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "plan.yaml"
    path.write_text(yaml.safe_dump(_camel_plan()), encoding="utf-8")

    plan = load_plan(path)
    assert isinstance(plan, FinancialPlan)
    assert [a.id for a in plan.assets] == ["isa", "home"]


def test_load_yaml_native_dates(tmp_path: Path) -> None:
    path = tmp_path / "plan.yml"
    path.write_text(
        "id: p\nname: P\npeople:\n  - id: sam\n    name: Sam\n    date_of_birth: 1990-01-31\n",
        encoding="utf-8",
    )
    assert load_plan(path).people[0].date_of_birth == date(1990, 1, 31)


def test_load_yaml_loan_dates(tmp_path: Path) -> None:
    path = tmp_path / "plan.yaml"
    path.write_text(
        "id: p\nname: P\nassets:\n"
        "  - id: home\n    name: Home\n    type: Property\n    currentValue: 300000\n"
        "    loans:\n"
        "      - {id: m1, name: First, amount: 1000, interestRate: 0, termYears: 2, startDate: 2020-06-01}\n"
        "      - {id: m2, name: Second, amount: 1000, interestRate: 0, termYears: 2, startYear: 2021-01-01}\n",
        encoding="utf-8",
    )
    plan = load_plan(path)
    first, second = plan.assets[0].loans

    assert first.start_year == 2020
    assert second.start_year == 2021
    summary = calculate_projections(plan, None, 2021, 2022)
    assert summary.snapshot(2021).total_loans == 1500


def test_scenario_assumptions_overlay_plan() -> None:
    data = _camel_plan()
    data["assumptions"]["incomeGrowthRate"] = 0.0
    data["scenarios"][1]["assumptions"] = {
        "inflationRate": 5.0,
        "assetGrowthRates": {"Crypto": 20.0},
    }
    plan = load_plan(data)
    assumptions, _, _ = plan.effective_inputs(plan.get_scenario("stress"))

    assert assumptions.inflation_rate == 5.0
    assert assumptions.income_growth_rate == 0.0
    assert assumptions.asset_growth_rates == {"ISA": 6.5, "Premium Bonds": 1.5, "Crypto": 20.0}
    assert plan.assumptions.inflation_rate == 2.0
    assert "Crypto" not in plan.assumptions.asset_growth_rates


def test_scenario_overlay_without_plan_assumptions() -> None:
    data = _camel_plan()
    del data["assumptions"]
    plan = load_plan(data)

    stress = plan.get_scenario("stress").assumptions
    assert stress.inflation_rate == 6.0
    assert stress.income_growth_rate == 3.0


def test_load_json_file(tmp_path: Path) -> None:
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(_camel_plan()), encoding="utf-8")

    assert load_plan(path).events[0].amount == -25000


def test_explicit_format(tmp_path: Path) -> None:
    path = tmp_path / "plan.txt"
    path.write_text(json.dumps(_camel_plan()), encoding="utf-8")

    with pytest.raises(PlanLoadError, match="Unsupported plan format"):
        load_plan(path)
    assert load_plan(path, format="json").id == "household"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_plan(tmp_path / "nope.yaml")


def test_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "plan.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PlanLoadError, match="could not parse"):
        load_plan(path)


def test_root_must_be_mapping(tmp_path: Path) -> None:
    path = tmp_path / "plan.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(PlanLoadError, match="must be a mapping"):
        load_plan(path)


def test_missing_required_field() -> None:
    data = _camel_plan()
    del data["assets"][0]["currentValue"]
    with pytest.raises(PlanLoadError, match="current_value"):
        plan_from_dict(data, label="test")


def test_unknown_frequency() -> None:
    data = _camel_plan()
    data["income"][0]["frequency"] = "fortnightly"
    with pytest.raises(PlanLoadError, match="Unknown frequency"):
        plan_from_dict(data)


def test_list_fields_must_be_lists() -> None:
    data = _camel_plan()
    data["assets"] = {"id": "isa"}
    with pytest.raises(PlanLoadError, match="expected a list"):
        plan_from_dict(data)


def test_plan_to_dict_reloads_to_same_projection() -> None:
    plan = load_plan(_camel_plan())
    reloaded = load_plan(plan_to_dict(plan))

    assert plan_to_dict(plan)["people"][0]["date_of_birth"] == "1985-04-12"
    first = calculate_projections(plan, None, 2024, 2030).to_dict()
    second = calculate_projections(reloaded, None, 2024, 2030).to_dict()
    assert first == second
