"""Income tax, resident tax and deduction rules (令和2年分以降).

All amounts are in 円. Every truncation is ``math.floor``.
"""

import math

from furusato_sim_jp.params import (
    DISABILITY_ORDINARY,
    DISABILITY_SPECIAL,
    DISABILITY_SPECIAL_LIVING_TOGETHER,
)

# 給与所得控除: (上限給与収入, 率, 加算額) → floor(収入 × 率 + 加算額)
_EMPLOYMENT_INCOME_DEDUCTION: tuple[tuple[float, float, int], ...] = (
    (1_625_000, 0.0, 550_000),
    (1_800_000, 0.4, -100_000),
    (3_600_000, 0.3, 80_000),
    (6_600_000, 0.2, 440_000),
    (8_500_000, 0.1, 1_100_000),
    (float("inf"), 0.0, 1_950_000),  # 上限
)

SOCIAL_INSURANCE_RATE = 0.144  # 社会保険料 ≈ 給与収入 × 14.4%

# 基礎控除: (上限合計所得, 控除額)
_BASIC_DEDUCTION: tuple[tuple[float, int], ...] = (
    (24_000_000, 480_000),
    (24_500_000, 320_000),
    (25_000_000, 160_000),
    (float("inf"), 0),
)

# 配偶者控除（配偶者の所得48万円以下）: (納税者の上限所得, 控除額)
_SPOUSE_DEDUCTION: tuple[tuple[float, int], ...] = (
    (9_000_000, 380_000),
    (9_500_000, 260_000),
    (10_000_000, 130_000),
    (float("inf"), 0),
)

SPOUSE_DEDUCTION_INCOME_LIMIT = 480_000  # 配偶者控除の対象となる配偶者の所得上限
SPOUSE_SPECIAL_INCOME_LIMIT = 1_330_000  # 配偶者特別控除の対象となる配偶者の所得上限

# 配偶者特別控除: 配偶者の所得の区分上限
_SPOUSE_SPECIAL_BANDS: tuple[int, ...] = (
    950_000, 1_000_000, 1_050_000, 1_100_000, 1_150_000,
    1_200_000, 1_250_000, 1_300_000, 1_330_000,
)
# (納税者の上限所得, 配偶者所得区分ごとの控除額)
_SPOUSE_SPECIAL_DEDUCTION: tuple[tuple[int, tuple[int, ...]], ...] = (
    (9_000_000, (380_000, 360_000, 310_000, 260_000, 210_000, 160_000, 110_000, 60_000, 30_000)),
    (9_500_000, (260_000, 240_000, 210_000, 180_000, 140_000, 110_000, 80_000, 40_000, 20_000)),
    (10_000_000, (130_000, 120_000, 110_000, 90_000, 70_000, 60_000, 40_000, 20_000, 10_000)),
)

# 扶養控除（1人あたり）
GENERAL_DEPENDENT_DEDUCTION = 380_000                  # 一般の扶養親族
SPECIFIC_DEPENDENT_DEDUCTION = 630_000                 # 特定扶養親族（19-22歳）
ELDERLY_DEPENDENT_DEDUCTION = 480_000                  # 老人扶養親族（別居）
ELDERLY_LIVING_TOGETHER_DEPENDENT_DEDUCTION = 580_000  # 老人扶養親族（同居）

# 障害者控除
_DISABILITY_DEDUCTION: dict[str, int] = {
    DISABILITY_ORDINARY: 270_000,
    DISABILITY_SPECIAL: 400_000,
    DISABILITY_SPECIAL_LIVING_TOGETHER: 750_000,
}

SINGLE_PARENT_DEDUCTION = 350_000   # ひとり親控除（寡婦控除より優先）
WIDOW_DEDUCTION = 270_000           # 寡婦控除
WORKING_STUDENT_DEDUCTION = 270_000  # 勤労学生控除

# 所得税の速算表: (上限課税所得, 税率, 控除額)
_INCOME_TAX_BRACKETS: tuple[tuple[float, float, int], ...] = (
    (1_950_000, 0.05, 0),
    (3_300_000, 0.10, 97_500),
    (6_950_000, 0.20, 427_500),
    (9_000_000, 0.23, 636_000),
    (18_000_000, 0.33, 1_536_000),
    (40_000_000, 0.40, 2_796_000),
    (float("inf"), 0.45, 4_796_000),
)

RECONSTRUCTION_TAX_RATE = 0.021  # 復興特別所得税（所得税額の2.1%）
RECONSTRUCTION_MULTIPLIER = 1.021  # 所得税率 × (1 + 復興特別所得税率)
RESIDENT_TAX_RATE = 0.10         # 住民税所得割（一律10%）
# 住民税の調整控除。本来は人的控除差の合計と課税所得200万円の境界で決まるが、一律2,500円で近似
ADJUSTMENT_DEDUCTION = 2_500

# ふるさと納税: 特例控除の上限は住民税所得割の20%、自己負担2,000円
SPECIAL_DEDUCTION_CAP_RATIO = 0.2
SELF_PAY_AMOUNT = 2_000
MIN_LIMIT = SELF_PAY_AMOUNT
MAX_LIMIT = 10_000_000


def clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def calc_employment_income_deduction(income: int) -> int:
    """給与所得控除額 for gross salary ``income`` (円)."""
    for upper, rate, offset in _EMPLOYMENT_INCOME_DEDUCTION:
        if income <= upper:
            return math.floor(income * rate + offset)
    return _EMPLOYMENT_INCOME_DEDUCTION[-1][2]  # pragma: no cover


def calc_employment_income(income: int) -> int:
    """給与所得 = 給与収入 - 給与所得控除."""
    return income - calc_employment_income_deduction(income)


def estimate_social_insurance_deduction(income: int) -> int:
    return math.floor(income * SOCIAL_INSURANCE_RATE)


def get_basic_deduction(net_income: int) -> int:
    for upper, amount in _BASIC_DEDUCTION:
        if net_income <= upper:
            return amount
    return _BASIC_DEDUCTION[-1][1]  # pragma: no cover


def get_spouse_deduction(net_income: int) -> int:
    """配偶者控除額, keyed on the taxpayer's 合計所得."""
    for upper, amount in _SPOUSE_DEDUCTION:
        if net_income <= upper:
            return amount
    return _SPOUSE_DEDUCTION[-1][1]  # pragma: no cover


def get_spouse_special_deduction(net_income: int, spouse_net_income: int) -> int:
    """配偶者控除 or 配偶者特別控除, depending on the spouse's 合計所得.

    - 配偶者の所得 48万円以下: 配偶者控除
    - 48万円超 133万円以下: 配偶者特別控除（納税者の所得 × 配偶者の所得の2軸テーブル）
    - 133万円超: 0
    """
    if spouse_net_income <= SPOUSE_DEDUCTION_INCOME_LIMIT:
        return get_spouse_deduction(net_income)
    if spouse_net_income > SPOUSE_SPECIAL_INCOME_LIMIT:
        return 0
    for taxpayer_upper, amounts in _SPOUSE_SPECIAL_DEDUCTION:
        if net_income <= taxpayer_upper:
            for band_upper, amount in zip(_SPOUSE_SPECIAL_BANDS, amounts):
                if spouse_net_income <= band_upper:
                    return amount
    return 0


def get_dependents_deduction(
    general: int,
    specific: int = 0,
    elderly: int = 0,
    elderly_living_together: int = 0,
) -> int:
    return (
        general * GENERAL_DEPENDENT_DEDUCTION
        + specific * SPECIFIC_DEPENDENT_DEDUCTION
        + elderly * ELDERLY_DEPENDENT_DEDUCTION
        + elderly_living_together * ELDERLY_LIVING_TOGETHER_DEPENDENT_DEDUCTION
    )


def get_disability_deduction(
    self_disability: str,
    spouse_disability: str,
    ordinary_count: int,
    special_count: int,
    special_living_together_count: int,
) -> int:
    """障害者控除の合計.

    本人は同居特別障害者の区分を持たないため、その値は無視する。
    """
    total = 0
    if self_disability != DISABILITY_SPECIAL_LIVING_TOGETHER:
        total += _DISABILITY_DEDUCTION.get(self_disability, 0)
    total += _DISABILITY_DEDUCTION.get(spouse_disability, 0)
    total += ordinary_count * _DISABILITY_DEDUCTION[DISABILITY_ORDINARY]
    total += special_count * _DISABILITY_DEDUCTION[DISABILITY_SPECIAL]
    total += special_living_together_count * _DISABILITY_DEDUCTION[DISABILITY_SPECIAL_LIVING_TOGETHER]
    return total


def get_other_personal_deductions(
    is_widow: bool, is_single_parent: bool, is_working_student: bool
) -> int:
    """ひとり親・寡婦・勤労学生控除. ひとり親と寡婦は重複しない."""
    total = 0
    if is_single_parent:
        total += SINGLE_PARENT_DEDUCTION
    elif is_widow:
        total += WIDOW_DEDUCTION
    if is_working_student:
        total += WORKING_STUDENT_DEDUCTION
    return total


def get_income_tax_rate(taxable_income: int) -> tuple[float, int]:
    """Return (税率, 控除額) from the 所得税 quick-calculation table."""
    for upper, rate, deduction in _INCOME_TAX_BRACKETS:
        if taxable_income <= upper:
            return rate, deduction
    return _INCOME_TAX_BRACKETS[-1][1], _INCOME_TAX_BRACKETS[-1][2]  # pragma: no cover


def calc_income_tax(taxable_income: int) -> int:
    """所得税額（復興特別所得税を含まない）."""
    rate, deduction = get_income_tax_rate(taxable_income)
    return math.floor(taxable_income * rate - deduction)


def calc_reconstruction_tax(income_tax: int) -> int:
    return math.floor(income_tax * RECONSTRUCTION_TAX_RATE)


def calc_resident_tax_levy(taxable_income: int) -> int:
    """住民税所得割額（課税所得 × 10%）."""
    return math.floor(taxable_income * RESIDENT_TAX_RATE)


def calc_furusato_limit(resident_tax: int, income_tax_rate: float) -> int:
    """ふるさと納税の控除上限額, clipped to [MIN_LIMIT, MAX_LIMIT].

    上限額 = 住民税所得割額 × 20% / (100% - 住民税10% - 所得税率 × 1.021) + 2,000円
    """
    denominator = 0.9 - income_tax_rate * RECONSTRUCTION_MULTIPLIER
    limit = math.floor(resident_tax * SPECIAL_DEDUCTION_CAP_RATIO / denominator) + SELF_PAY_AMOUNT
    return clamp(limit, MIN_LIMIT, MAX_LIMIT)
