"""Tests for input value objects and boundary validation."""

import dataclasses

import pytest
from furusato_sim_jp import DetailedSimulatorInput, SimulatorInput
from furusato_sim_jp.params import (
    DISABILITY_SPECIAL_LIVING_TOGETHER,
    PREFECTURES,
    man_to_yen,
    validate_detailed_input,
    validate_simulator_input,
)


class TestManToYen:
    def test_conversion(self):
        assert man_to_yen(500) == 5_000_000
        assert man_to_yen(0) == 0


class TestPrefectures:
    def test_count(self):
        assert len(PREFECTURES) == 47
        assert len(set(PREFECTURES)) == 47


class TestSimulatorInput:
    def test_valid(self):
        inp = SimulatorInput(annual_income=500, has_spouse=True, dependents_count=2, prefecture="埼玉県")
        assert inp.annual_income == 500

    def test_frozen(self):
        inp = SimulatorInput(annual_income=500, has_spouse=False, dependents_count=0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            inp.annual_income = 600

    def test_income_below_minimum(self):
        with pytest.raises(ValueError, match="年収は100万円以上"):
            SimulatorInput(annual_income=99, has_spouse=False, dependents_count=0)

    def test_income_above_maximum(self):
        with pytest.raises(ValueError, match="年収は3,000万円以下"):
            SimulatorInput(annual_income=3001, has_spouse=False, dependents_count=0)

    def test_income_must_be_int(self):
        with pytest.raises(ValueError, match="年収は整数"):
            SimulatorInput(annual_income=500.5, has_spouse=False, dependents_count=0)

    def test_bool_is_not_int(self):
        with pytest.raises(ValueError, match="扶養家族の人数は整数"):
            SimulatorInput(annual_income=500, has_spouse=False, dependents_count=True)

    def test_dependents_above_maximum(self):
        with pytest.raises(ValueError, match="扶養家族の人数は10人以下"):
            SimulatorInput(annual_income=500, has_spouse=False, dependents_count=11)

    def test_unknown_prefecture(self):
        with pytest.raises(ValueError, match="都道府県"):
            SimulatorInput(annual_income=500, has_spouse=False, dependents_count=0, prefecture="江戸")


class TestValidateSimulatorInput:
    def test_valid_returns_empty(self):
        data = {"annual_income": 500, "has_spouse": False, "dependents_count": 0}
        assert validate_simulator_input(data) == []

    def test_collects_all_errors(self):
        data = {"annual_income": 50, "has_spouse": "yes", "dependents_count": -1}
        errors = validate_simulator_input(data)
        assert len(errors) == 3

    def test_missing_required(self):
        errors = validate_simulator_input({})
        assert "年収は整数で入力してください" in errors
        assert "配偶者の有無を選択してください" in errors


class TestDetailedSimulatorInput:
    def test_defaults(self):
        inp = DetailedSimulatorInput(annual_income=500, has_spouse=False)
        assert inp.spouse_income is None
        assert inp.social_insurance_deduction is None
        assert inp.general_dependents_count == 0
        assert inp.is_widow is False

    def test_spouse_income_range(self):
        DetailedSimulatorInput(annual_income=500, has_spouse=True, spouse_income=201)
        with pytest.raises(ValueError, match="配偶者の年収は201万円以下"):
            DetailedSimulatorInput(annual_income=500, has_spouse=True, spouse_income=202)

    def test_life_insurance_cap(self):
        with pytest.raises(ValueError, match="生命保険料控除額は120,000円以下"):
            DetailedSimulatorInput(annual_income=500, has_spouse=False, life_insurance_deduction=120_001)

    def test_housing_loan_cap(self):
        with pytest.raises(ValueError, match="住宅ローン控除額は500,000円以下"):
            DetailedSimulatorInput(annual_income=500, has_spouse=False, housing_loan_deduction=500_001)

    def test_negative_deduction(self):
        with pytest.raises(ValueError, match="医療費控除額は0円以上"):
            DetailedSimulatorInput(annual_income=500, has_spouse=False, medical_expense_deduction=-1)

    def test_self_cannot_be_special_living_together(self):
        with pytest.raises(ValueError, match="本人"):
            DetailedSimulatorInput(
                annual_income=500, has_spouse=False,
                self_disability=DISABILITY_SPECIAL_LIVING_TOGETHER,
            )

    def test_spouse_can_be_special_living_together(self):
        inp = DetailedSimulatorInput(
            annual_income=500, has_spouse=True,
            spouse_disability=DISABILITY_SPECIAL_LIVING_TOGETHER,
        )
        assert inp.spouse_disability == DISABILITY_SPECIAL_LIVING_TOGETHER

    def test_dependent_count_range(self):
        with pytest.raises(ValueError, match="特定扶養親族の人数は10人以下"):
            DetailedSimulatorInput(annual_income=500, has_spouse=False, specific_dependents_count=11)


class TestValidateDetailedInput:
    def test_optional_fields_may_be_omitted(self):
        assert validate_detailed_input({"annual_income": 500, "has_spouse": False}) == []

    def test_multiple_errors(self):
        errors = validate_detailed_input({
            "annual_income": 500,
            "has_spouse": False,
            "earthquake_insurance_deduction": 60_000,
            "is_widow": "no",
        })
        assert len(errors) == 2
