"""Furusato nozei deduction-limit estimation (simple and detailed modes).

Both entry points take incomes in 万円 and convert to 円 exactly once, at
the top of the breakdown function. Everything below works in 円.
"""

from dataclasses import asdict

from furusato_sim_jp.params import (
    DetailedSimulatorInput,
    SimulatorInput,
    SimulatorResult,
    man_to_yen,
)
from furusato_sim_jp.tax import (
    ADJUSTMENT_DEDUCTION,
    MIN_LIMIT,
    calc_employment_income,
    calc_employment_income_deduction,
    calc_furusato_limit,
    calc_income_tax,
    calc_reconstruction_tax,
    calc_resident_tax_levy,
    estimate_social_insurance_deduction,
    get_basic_deduction,
    get_dependents_deduction,
    get_disability_deduction,
    get_income_tax_rate,
    get_other_personal_deductions,
    get_spouse_deduction,
    get_spouse_special_deduction,
)

SAFE_LIMIT_RATIO = 0.8  # 安全ライン = 推定上限額 × 80%

SIMULATION_TYPES = ("simple", "detailed")

_ASSUMPTION_SALARY_ONLY = "給与収入のみを想定しています"
_ASSUMPTION_TAX_YEAR = "基礎控除・給与所得控除は令和2年以降の税制を適用しています"
_ASSUMPTION_SOCIAL_ESTIMATED = "社会保険料控除は給与収入の14.4%で推定しています"
_ASSUMPTION_SOCIAL_INPUT = "社会保険料控除は入力された金額を使用しています"
_ASSUMPTION_SPOUSE_EXEMPT = "配偶者は配偶者控除の対象（年収103万円以下）と仮定しています"
_ASSUMPTION_GENERAL_DEPENDENTS = "扶養家族はすべて一般の扶養親族（38万円）として計算しています"

_WARNING_ROUGH = "この金額はあくまで目安です"
_WARNING_OTHER_DEDUCTIONS = "住宅ローン控除や医療費控除など、他の控除がある場合は実際の上限額が変動します"
_WARNING_CHECK_DOCUMENTS = "正確な金額は、源泉徴収票や確定申告書類をもとに計算してください"
_WARNING_HOUSING_LOAN = "住宅ローン控除により、ふるさと納税の控除上限額が下がっている可能性があります"


def _zero_tax_fields() -> dict:
    return {
        "income_tax_rate": 0.0,
        "resident_tax": 0,
        "limit": MIN_LIMIT,
    }


def calc_simple_breakdown(inp: SimulatorInput) -> dict:
    """Simple-mode calculation with every intermediate amount (円).

    Social insurance is always estimated, all dependents count as 一般の
    扶養親族 and the spouse is assumed to be under the exemption line.
    Only the bracket rate is used; the bracket deduction and 調整控除 are not.
    """
    gross = man_to_yen(inp.annual_income)
    employment_deduction = calc_employment_income_deduction(gross)
    net_income = gross - employment_deduction
    social_insurance = estimate_social_insurance_deduction(gross)
    basic = get_basic_deduction(net_income)
    spouse = get_spouse_deduction(net_income) if inp.has_spouse else 0
    dependents = get_dependents_deduction(inp.dependents_count)
    total_deductions = basic + spouse + dependents + social_insurance
    taxable_income = max(0, net_income - total_deductions)

    result = {
        "gross_income": gross,
        "employment_deduction": employment_deduction,
        "net_income": net_income,
        "social_insurance": social_insurance,
        "basic_deduction": basic,
        "spouse_deduction": spouse,
        "dependents_deduction": dependents,
        "total_deductions": total_deductions,
        "taxable_income": taxable_income,
    }
    if taxable_income == 0:
        result.update(_zero_tax_fields())
        return result

    rate, _ = get_income_tax_rate(taxable_income)
    resident_tax = calc_resident_tax_levy(taxable_income)
    result.update({
        "income_tax_rate": rate,
        "resident_tax": resident_tax,
        "limit": calc_furusato_limit(resident_tax, rate),
    })
    return result


def estimate_limit_yen(inp: SimulatorInput) -> int:
    """Estimate the furusato nozei limit (円) in simple mode."""
    return calc_simple_breakdown(inp)["limit"]


def _social_insurance_supplied(inp: DetailedSimulatorInput) -> bool:
    return bool(inp.social_insurance_deduction)


def _spouse_income_supplied(inp: DetailedSimulatorInput) -> bool:
    return bool(inp.spouse_income)


def calc_detailed_breakdown(inp: DetailedSimulatorInput) -> dict:
    """Detailed-mode calculation with every intermediate amount (円).

    Steps:
    1. 給与所得控除 → 給与所得
    2. 所得控除の合計（基礎・配偶者・扶養・障害者・人的・社会保険料・その他）
    3. 課税所得 = max(0, 給与所得 - 所得控除合計)。0なら上限額は2,000円
    4. 所得税 = floor(課税所得 × 税率 - 速算控除額) - 住宅ローン控除（下限0）
    5. 復興特別所得税 = floor(所得税 × 2.1%)
    6. 住民税 = floor(課税所得 × 10%) - 調整控除 - 所得税から控除しきれない住宅ローン控除
    7. 上限額 = floor(住民税 × 20% / (0.9 - 税率 × 1.021)) + 2,000円
    """
    gross = man_to_yen(inp.annual_income)
    employment_deduction = calc_employment_income_deduction(gross)
    net_income = gross - employment_deduction

    if _social_insurance_supplied(inp):
        social_insurance = inp.social_insurance_deduction
    else:
        social_insurance = estimate_social_insurance_deduction(gross)

    basic = get_basic_deduction(net_income)

    spouse = 0
    if inp.has_spouse:
        if _spouse_income_supplied(inp):
            spouse_net_income = calc_employment_income(man_to_yen(inp.spouse_income))
            spouse = get_spouse_special_deduction(net_income, spouse_net_income)
        else:
            spouse = get_spouse_deduction(net_income)

    dependents = get_dependents_deduction(
        inp.general_dependents_count,
        inp.specific_dependents_count,
        inp.elderly_dependents_count,
        inp.elderly_living_together_dependents_count,
    )
    disability = get_disability_deduction(
        inp.self_disability,
        inp.spouse_disability,
        inp.dependent_ordinary_disability_count,
        inp.dependent_special_disability_count,
        inp.dependent_special_living_together_disability_count,
    )
    other_personal = get_other_personal_deductions(
        inp.is_widow, inp.is_single_parent, inp.is_working_student,
    )
    other_deductions = sum(
        v or 0 for v in (
            inp.small_scale_enterprise_mutual_aid_deduction,
            inp.life_insurance_deduction,
            inp.earthquake_insurance_deduction,
            inp.medical_expense_deduction,
            inp.donation_deduction,
        )
    )

    total_deductions = (
        basic + spouse + dependents + disability + other_personal
        + social_insurance + other_deductions
    )
    taxable_income = max(0, net_income - total_deductions)

    result = {
        "gross_income": gross,
        "employment_deduction": employment_deduction,
        "net_income": net_income,
        "social_insurance": social_insurance,
        "basic_deduction": basic,
        "spouse_deduction": spouse,
        "dependents_deduction": dependents,
        "disability_deduction": disability,
        "other_personal_deductions": other_personal,
        "other_deductions": other_deductions,
        "total_deductions": total_deductions,
        "taxable_income": taxable_income,
    }
    if taxable_income == 0:
        result.update(_zero_tax_fields())
        result.update({"income_tax": 0, "reconstruction_tax": 0})
        return result

    rate, _ = get_income_tax_rate(taxable_income)
    housing_loan = inp.housing_loan_deduction or 0
    income_tax = max(0, calc_income_tax(taxable_income) - housing_loan)
    reconstruction_tax = calc_reconstruction_tax(income_tax)
    total_income_tax = income_tax + reconstruction_tax

    resident_tax = max(0, calc_resident_tax_levy(taxable_income) - ADJUSTMENT_DEDUCTION)
    remaining_housing_loan = max(0, housing_loan - total_income_tax)
    resident_tax = max(0, resident_tax - remaining_housing_loan)

    result.update({
        "income_tax_rate": rate,
        "income_tax": income_tax,
        "reconstruction_tax": reconstruction_tax,
        "resident_tax": resident_tax,
        "limit": calc_furusato_limit(resident_tax, rate),
    })
    return result


def estimate_detailed_limit_yen(inp: DetailedSimulatorInput) -> int:
    """Estimate the furusato nozei limit (円) in detailed mode."""
    return calc_detailed_breakdown(inp)["limit"]


def calc_safe_limit(estimated_limit: int) -> int:
    """安全ライン: 推定上限額の80%（四捨五入）."""
    return round(estimated_limit * SAFE_LIMIT_RATIO)


def simulate_limit(inp: SimulatorInput) -> SimulatorResult:
    estimated_limit = estimate_limit_yen(inp)

    assumptions = [
        _ASSUMPTION_SALARY_ONLY,
        _ASSUMPTION_TAX_YEAR,
        _ASSUMPTION_SOCIAL_ESTIMATED,
    ]
    if inp.dependents_count > 0:
        assumptions.append(_ASSUMPTION_GENERAL_DEPENDENTS)
    if inp.has_spouse:
        assumptions.append(_ASSUMPTION_SPOUSE_EXEMPT)

    warnings = [
        _WARNING_ROUGH,
        _WARNING_OTHER_DEDUCTIONS,
        _WARNING_CHECK_DOCUMENTS,
    ]
    return SimulatorResult(
        estimated_limit=estimated_limit,
        safe_limit=calc_safe_limit(estimated_limit),
        assumptions=tuple(assumptions),
        warnings=tuple(warnings),
    )


def simulate_detailed_limit(inp: DetailedSimulatorInput) -> SimulatorResult:
    estimated_limit = estimate_detailed_limit_yen(inp)

    assumptions = [_ASSUMPTION_SALARY_ONLY, _ASSUMPTION_TAX_YEAR]
    if _social_insurance_supplied(inp):
        assumptions.append(_ASSUMPTION_SOCIAL_INPUT)
    else:
        assumptions.append(_ASSUMPTION_SOCIAL_ESTIMATED)
    if inp.has_spouse and not _spouse_income_supplied(inp):
        assumptions.append(_ASSUMPTION_SPOUSE_EXEMPT)

    warnings = [_WARNING_ROUGH, _WARNING_CHECK_DOCUMENTS]
    if (inp.housing_loan_deduction or 0) > 0:
        warnings.append(_WARNING_HOUSING_LOAN)

    return SimulatorResult(
        estimated_limit=estimated_limit,
        safe_limit=calc_safe_limit(estimated_limit),
        assumptions=tuple(assumptions),
        warnings=tuple(warnings),
    )


def build_history_record(
    simulation_type: str,
    inp: SimulatorInput | DetailedSimulatorInput,
    result: SimulatorResult,
) -> dict:
    """Plain dict of one simulation, tagged with its mode, for the caller to store."""
    if simulation_type not in SIMULATION_TYPES:
        raise ValueError(f"不明なシミュレーション種別: {simulation_type}（simple / detailed）")
    result_data = asdict(result)
    result_data["assumptions"] = list(result.assumptions)
    result_data["warnings"] = list(result.warnings)
    return {
        "simulation_type": simulation_type,
        "input_data": asdict(inp),
        "result_data": result_data,
    }
