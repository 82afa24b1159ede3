"""Simulator input/result value objects and boundary validation."""

from dataclasses import MISSING, dataclass, field, fields
from typing import Mapping

MAN_YEN = 10_000  # 1万円

MIN_ANNUAL_INCOME = 100   # 万円
MAX_ANNUAL_INCOME = 3000  # 万円
MAX_SPOUSE_INCOME = 201   # 万円（201万円超は配偶者特別控除の対象外）
MAX_PERSON_COUNT = 10

# 障害者区分
DISABILITY_NONE = "none"
DISABILITY_ORDINARY = "ordinary"                                # 普通障害者（27万円）
DISABILITY_SPECIAL = "special"                                  # 特別障害者（40万円）
DISABILITY_SPECIAL_LIVING_TOGETHER = "special_living_together"  # 同居特別障害者（75万円）

SELF_DISABILITY_TYPES = (DISABILITY_NONE, DISABILITY_ORDINARY, DISABILITY_SPECIAL)
SPOUSE_DISABILITY_TYPES = SELF_DISABILITY_TYPES + (DISABILITY_SPECIAL_LIVING_TOGETHER,)

PREFECTURES: tuple[str, ...] = (
    "北海道", "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県",
    "静岡県", "愛知県", "三重県", "滋賀県", "京都府", "大阪府", "兵庫県",
    "奈良県", "和歌山県", "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県", "福岡県", "佐賀県", "長崎県",
    "熊本県", "大分県", "宮崎県", "鹿児島県", "沖縄県",
)

# 円単位の控除額入力: (フィールド名, ラベル, 上限円)
_YEN_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("social_insurance_deduction", "社会保険料控除額", 10_000_000),
    ("small_scale_enterprise_mutual_aid_deduction", "小規模企業共済等掛金控除額", 5_000_000),
    ("life_insurance_deduction", "生命保険料控除額", 120_000),
    ("earthquake_insurance_deduction", "地震保険料控除額", 50_000),
    ("medical_expense_deduction", "医療費控除額", 10_000_000),
    ("donation_deduction", "寄付金控除額", 10_000_000),
    ("housing_loan_deduction", "住宅ローン控除額", 500_000),
)

_DEPENDENT_FIELDS: tuple[tuple[str, str], ...] = (
    ("general_dependents_count", "一般の扶養親族"),
    ("specific_dependents_count", "特定扶養親族"),
    ("elderly_dependents_count", "老人扶養親族"),
    ("elderly_living_together_dependents_count", "同居老人扶養親族"),
    ("dependent_ordinary_disability_count", "障害者（扶養親族）"),
    ("dependent_special_disability_count", "特別障害者（扶養親族）"),
    ("dependent_special_living_together_disability_count", "同居特別障害者（扶養親族）"),
)


def man_to_yen(amount_man: int) -> int:
    """Convert 万円 to 円."""
    return amount_man * MAN_YEN


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _check_range(errors: list[str], value, label: str, low: int, high: int, unit: str):
    if not _is_int(value):
        errors.append(f"{label}は整数で入力してください")
    elif value < low:
        errors.append(f"{label}は{low:,}{unit}以上で入力してください")
    elif value > high:
        errors.append(f"{label}は{high:,}{unit}以下で入力してください")


def _check_income(errors: list[str], annual_income, has_spouse, prefecture):
    _check_range(errors, annual_income, "年収", MIN_ANNUAL_INCOME, MAX_ANNUAL_INCOME, "万円")
    if not isinstance(has_spouse, bool):
        errors.append("配偶者の有無を選択してください")
    if prefecture is not None and prefecture not in PREFECTURES:
        errors.append(f"都道府県が不正です: {prefecture}")


def validate_simulator_input(data: Mapping) -> list[str]:
    """Return field-level error messages for simple-mode form data (empty if valid)."""
    errors: list[str] = []
    _check_income(errors, data.get("annual_income"), data.get("has_spouse"), data.get("prefecture"))
    _check_range(errors, data.get("dependents_count"), "扶養家族の人数", 0, MAX_PERSON_COUNT, "人")
    return errors


def validate_detailed_input(data: Mapping) -> list[str]:
    """Return field-level error messages for detailed-mode form data (empty if valid).

    Omitted optional fields take the DetailedSimulatorInput defaults.
    """
    values = {**_DETAILED_OPTIONAL_DEFAULTS, **data}
    errors: list[str] = []
    _check_income(errors, values.get("annual_income"), values.get("has_spouse"), values["prefecture"])
    if values["spouse_income"] is not None:
        _check_range(errors, values["spouse_income"], "配偶者の年収", 0, MAX_SPOUSE_INCOME, "万円")
    for name, label in _DEPENDENT_FIELDS:
        _check_range(errors, values[name], f"{label}の人数", 0, MAX_PERSON_COUNT, "人")
    for name, label, upper in _YEN_FIELDS:
        value = values[name]
        if value is not None:
            _check_range(errors, value, label, 0, upper, "円")
    if values["self_disability"] not in SELF_DISABILITY_TYPES:
        errors.append(f"障害者控除（本人）の区分が不正です: {values['self_disability']}")
    if values["spouse_disability"] not in SPOUSE_DISABILITY_TYPES:
        errors.append(f"障害者控除（配偶者）の区分が不正です: {values['spouse_disability']}")
    for name in ("is_widow", "is_single_parent", "is_working_student"):
        if not isinstance(values[name], bool):
            errors.append(f"{name} は真偽値で指定してください")
    return errors


@dataclass(frozen=True)
class SimulatorInput:
    """Simple-mode input. Incomes are in 万円."""

    annual_income: int
    has_spouse: bool
    dependents_count: int
    prefecture: str | None = None  # 現状は計算に影響しない

    def __post_init__(self):
        errors = validate_simulator_input(vars(self))
        if errors:
            raise ValueError("\n".join(errors))


@dataclass(frozen=True)
class DetailedSimulatorInput:
    """Detailed-mode input.

    ``annual_income`` and ``spouse_income`` are in 万円; every deduction
    amount is in 円. ``None`` deductions are treated as 0, except
    ``social_insurance_deduction`` which falls back to the 14.4% estimate.
    """

    annual_income: int
    has_spouse: bool
    spouse_income: int | None = None

    # 扶養親族（年齢区分別）
    general_dependents_count: int = 0
    specific_dependents_count: int = 0                  # 19歳以上23歳未満
    elderly_dependents_count: int = 0                   # 70歳以上・別居
    elderly_living_together_dependents_count: int = 0   # 70歳以上・同居

    # 所得控除（円）
    social_insurance_deduction: int | None = None
    small_scale_enterprise_mutual_aid_deduction: int | None = None  # iDeCo等
    life_insurance_deduction: int | None = None
    earthquake_insurance_deduction: int | None = None
    medical_expense_deduction: int | None = None
    donation_deduction: int | None = None  # ふるさと納税以外の寄付
    # 税額控除（円）: 課税所得の計算後に所得税→住民税の順で差し引く
    housing_loan_deduction: int | None = None

    # 障害者控除
    self_disability: str = DISABILITY_NONE
    spouse_disability: str = DISABILITY_NONE
    dependent_ordinary_disability_count: int = 0
    dependent_special_disability_count: int = 0
    dependent_special_living_together_disability_count: int = 0

    # その他の人的控除
    is_widow: bool = False
    is_single_parent: bool = False
    is_working_student: bool = False

    prefecture: str | None = None

    def __post_init__(self):
        errors = validate_detailed_input(vars(self))
        if errors:
            raise ValueError("\n".join(errors))


@dataclass(frozen=True)
class SimulatorResult:
    estimated_limit: int  # 推定上限額（円）
    safe_limit: int       # 安全ライン（円）: 推定上限額の80%
    assumptions: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)


_DETAILED_OPTIONAL_DEFAULTS = {
    f.name: f.default for f in fields(DetailedSimulatorInput) if f.default is not MISSING
}
