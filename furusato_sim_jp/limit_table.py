"""Limit lookup table (早見表): income × family pattern grid."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from furusato_sim_jp.params import DISABILITY_NONE, DetailedSimulatorInput
from furusato_sim_jp.simulation import estimate_detailed_limit_yen

DEFAULT_START_INCOME = 300  # 万円
DEFAULT_END_INCOME = 2500   # 万円
DEFAULT_STEP = 25           # 万円


@dataclass(frozen=True)
class FamilyPattern:
    label: str
    description: str
    config: Mapping[str, object]


@dataclass(frozen=True)
class LimitTableRow:
    annual_income: int          # 万円
    limits: tuple[int, ...]     # FAMILY_PATTERNS と同じ順の控除上限額（円）


def _pattern(label: str, description: str, **config) -> FamilyPattern:
    return FamilyPattern(label, description, MappingProxyType(config))


# 高校生(16-18歳)=一般の扶養親族, 大学生(19-22歳)=特定扶養親族。中学生以下は扶養控除の対象外
FAMILY_PATTERNS: tuple[FamilyPattern, ...] = (
    _pattern("独身または共働き", "扶養家族なし", has_spouse=False),
    _pattern("夫婦", "配偶者に収入なし", has_spouse=True, spouse_income=0),
    _pattern("共働き+子1人", "高校生", has_spouse=False, general_dependents_count=1),
    _pattern("共働き+子1人", "大学生", has_spouse=False, specific_dependents_count=1),
    _pattern("夫婦+子1人", "高校生", has_spouse=True, spouse_income=0, general_dependents_count=1),
    _pattern(
        "共働き+子2人", "大学生と高校生",
        has_spouse=False, general_dependents_count=1, specific_dependents_count=1,
    ),
    _pattern(
        "夫婦+子2人", "大学生と高校生",
        has_spouse=True, spouse_income=0, general_dependents_count=1, specific_dependents_count=1,
    ),
    _pattern("夫婦+子2人", "大学生2人", has_spouse=True, spouse_income=0, specific_dependents_count=2),
)

# 早見表の共通前提: 社会保険料は自動推定、その他の控除・障害者・人的控除なし
BASE_INPUT: Mapping[str, object] = MappingProxyType({
    "has_spouse": False,
    "spouse_income": None,
    "general_dependents_count": 0,
    "specific_dependents_count": 0,
    "elderly_dependents_count": 0,
    "elderly_living_together_dependents_count": 0,
    "social_insurance_deduction": None,
    "small_scale_enterprise_mutual_aid_deduction": 0,
    "life_insurance_deduction": 0,
    "earthquake_insurance_deduction": 0,
    "medical_expense_deduction": 0,
    "donation_deduction": 0,
    "housing_loan_deduction": 0,
    "self_disability": DISABILITY_NONE,
    "spouse_disability": DISABILITY_NONE,
    "dependent_ordinary_disability_count": 0,
    "dependent_special_disability_count": 0,
    "dependent_special_living_together_disability_count": 0,
    "is_widow": False,
    "is_single_parent": False,
    "is_working_student": False,
    "prefecture": None,
})

TABLE_NOTES: tuple[str, ...] = (
    "この早見表は、社会保険料を年収の14.4%と仮定して計算しています",
    "「高校生」は16〜18歳、「大学生」は19〜22歳を指します",
    "中学生以下の子どもは扶養控除の対象外のため、控除額に影響しません",
    "住宅ローン控除や医療費控除などがある場合、控除上限額は変動します",
    "あくまで目安です。正確な金額はシミュレーターで計算してください",
)


def build_pattern_input(annual_income: int, pattern: FamilyPattern) -> DetailedSimulatorInput:
    """Merge BASE_INPUT, the pattern overrides and the income (万円)."""
    return DetailedSimulatorInput(annual_income=annual_income, **{**BASE_INPUT, **pattern.config})


def generate_limit_table(
    start_income: int = DEFAULT_START_INCOME,
    end_income: int = DEFAULT_END_INCOME,
    step: int = DEFAULT_STEP,
) -> list[LimitTableRow]:
    """Tabulate detailed-mode limits for incomes start..end (inclusive, 万円)."""
    if step <= 0:
        raise ValueError(f"刻み幅は1万円以上で指定してください: {step}")
    if start_income > end_income:
        raise ValueError(f"開始年収{start_income}万円が終了年収{end_income}万円を超えています")

    rows = []
    for income in range(start_income, end_income + 1, step):
        limits = tuple(
            estimate_detailed_limit_yen(build_pattern_input(income, pattern))
            for pattern in FAMILY_PATTERNS
        )
        rows.append(LimitTableRow(annual_income=income, limits=limits))
    return rows


def format_limit(limit_yen: int) -> str:
    """28000 → "28,000円"."""
    return f"{limit_yen:,}円"


def render_limit_table_markdown(rows: list[LimitTableRow]) -> str:
    """Render the table as a Markdown document (header, grid, notes)."""
    header = ["年収"] + [f"{p.label}<br>（{p.description}）" for p in FAMILY_PATTERNS]
    lines = [
        "# ふるさと納税 控除上限額の早見表",
        "",
        "年収と家族構成から、ふるさと納税の控除上限額の目安を確認できます。",
        "",
        "| " + " | ".join(header) + " |",
        "|" + "|".join(["---:"] * len(header)) + "|",
    ]
    for row in rows:
        cells = [f"{row.annual_income:,}万円"] + [format_limit(v) for v in row.limits]
        lines.append("| " + " | ".join(cells) + " |")
    lines += ["", "## 注意事項", ""]
    lines += [f"- {note}" for note in TABLE_NOTES]
    return "\n".join(lines) + "\n"
