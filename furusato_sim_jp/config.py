"""TOML config loader with CLI > config > default resolution."""

import argparse
import sys
import tomllib
from pathlib import Path

from furusato_sim_jp.params import (
    DISABILITY_NONE,
    SELF_DISABILITY_TYPES,
    SPOUSE_DISABILITY_TYPES,
    DetailedSimulatorInput,
    SimulatorInput,
)
from furusato_sim_jp.limit_table import DEFAULT_END_INCOME, DEFAULT_START_INCOME, DEFAULT_STEP

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "mode": "simple",
    "annual_income": 500,
    "has_spouse": False,
    "spouse_income": None,
    "dependents_count": 0,
    "general_dependents_count": 0,
    "specific_dependents_count": 0,
    "elderly_dependents_count": 0,
    "elderly_living_together_dependents_count": 0,
    "social_insurance_deduction": None,
    "small_scale_enterprise_mutual_aid_deduction": None,
    "life_insurance_deduction": None,
    "earthquake_insurance_deduction": None,
    "medical_expense_deduction": None,
    "donation_deduction": None,
    "housing_loan_deduction": None,
    "self_disability": DISABILITY_NONE,
    "spouse_disability": DISABILITY_NONE,
    "dependent_ordinary_disability_count": 0,
    "dependent_special_disability_count": 0,
    "dependent_special_living_together_disability_count": 0,
    "is_widow": False,
    "is_single_parent": False,
    "is_working_student": False,
    "prefecture": None,
}

TABLE_DEFAULTS = {
    "start_income": DEFAULT_START_INCOME,
    "end_income": DEFAULT_END_INCOME,
    "step": DEFAULT_STEP,
}

_SIMPLE_KEYS = ("annual_income", "has_spouse", "dependents_count", "prefecture")
_DETAILED_KEYS = tuple(
    k for k in DEFAULTS if k not in ("mode", "dependents_count")
)


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Flatten section tables: [household] / [deductions] / [table] → top-level keys
    for section in [k for k, v in raw.items() if isinstance(v, dict)]:
        for key, value in raw.pop(section).items():
            raw.setdefault(key, value)
    # Normalize prefecture: "" → unset
    if raw.get("prefecture") == "":
        raw["prefecture"] = None
    # Legacy key: dependents → dependents_count
    if "dependents" in raw and "dependents_count" not in raw:
        raw["dependents_count"] = raw.pop("dependents")
    elif "dependents" in raw:
        raw.pop("dependents")
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with simple/detailed simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--income", dest="annual_income", type=int, default=None, help=f"年収（給与収入・万円, 100-3000）(default: {d['annual_income']})")
    parser.add_argument("--spouse", dest="has_spouse", action="store_true", default=None, help="配偶者あり")
    parser.add_argument("--spouse-income", dest="spouse_income", type=int, default=None, help="配偶者の年収（万円, 0-201）。未指定なら配偶者控除の対象と仮定")
    parser.add_argument("--prefecture", type=str, default=None, help="都道府県（現状は計算に影響しない）")
    parser.add_argument("--mode", choices=("simple", "detailed"), default=None, help=f"計算モード (default: {d['mode']})")
    parser.add_argument("--dependents", dest="dependents_count", type=int, default=None, help="扶養家族の人数（簡易モード）")
    parser.add_argument("--general-dependents", dest="general_dependents_count", type=int, default=None, help="一般の扶養親族（16-18歳、23-69歳）")
    parser.add_argument("--specific-dependents", dest="specific_dependents_count", type=int, default=None, help="特定扶養親族（19-22歳）")
    parser.add_argument("--elderly-dependents", dest="elderly_dependents_count", type=int, default=None, help="老人扶養親族（70歳以上・別居）")
    parser.add_argument("--elderly-living-together-dependents", dest="elderly_living_together_dependents_count", type=int, default=None, help="老人扶養親族（70歳以上・同居）")
    parser.add_argument("--social-insurance", dest="social_insurance_deduction", type=int, default=None, help="社会保険料控除額（円）。未指定なら年収の14.4%%で推定")
    parser.add_argument("--ideco", dest="small_scale_enterprise_mutual_aid_deduction", type=int, default=None, help="小規模企業共済等掛金控除額（iDeCo等・円）")
    parser.add_argument("--life-insurance", dest="life_insurance_deduction", type=int, default=None, help="生命保険料控除額（円, 最大12万）")
    parser.add_argument("--earthquake-insurance", dest="earthquake_insurance_deduction", type=int, default=None, help="地震保険料控除額（円, 最大5万）")
    parser.add_argument("--medical-expense", dest="medical_expense_deduction", type=int, default=None, help="医療費控除額（円）")
    parser.add_argument("--donation", dest="donation_deduction", type=int, default=None, help="寄付金控除額（ふるさと納税以外・円）")
    parser.add_argument("--housing-loan", dest="housing_loan_deduction", type=int, default=None, help="住宅ローン控除額（税額控除・円, 最大50万）")
    parser.add_argument("--self-disability", dest="self_disability", choices=SELF_DISABILITY_TYPES, default=None, help="本人の障害者区分")
    parser.add_argument("--spouse-disability", dest="spouse_disability", choices=SPOUSE_DISABILITY_TYPES, default=None, help="配偶者の障害者区分")
    parser.add_argument("--dependent-ordinary-disability", dest="dependent_ordinary_disability_count", type=int, default=None, help="障害者（扶養親族）の人数")
    parser.add_argument("--dependent-special-disability", dest="dependent_special_disability_count", type=int, default=None, help="特別障害者（扶養親族）の人数")
    parser.add_argument("--dependent-special-living-together-disability", dest="dependent_special_living_together_disability_count", type=int, default=None, help="同居特別障害者（扶養親族）の人数")
    parser.add_argument("--widow", dest="is_widow", action="store_true", default=None, help="寡婦控除")
    parser.add_argument("--single-parent", dest="is_single_parent", action="store_true", default=None, help="ひとり親控除（寡婦控除より優先）")
    parser.add_argument("--working-student", dest="is_working_student", action="store_true", default=None, help="勤労学生控除")
    return parser


def create_table_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser for limit-table generation."""
    d = TABLE_DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--start-income", type=int, default=None, help=f"開始年収（万円）(default: {d['start_income']})")
    parser.add_argument("--end-income", type=int, default=None, help=f"終了年収（万円）(default: {d['end_income']})")
    parser.add_argument("--step", type=int, default=None, help=f"刻み幅（万円）(default: {d['step']})")
    return parser


def resolve(args: argparse.Namespace, config: dict, defaults: dict | None = None) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    if defaults is None:
        defaults = DEFAULTS
    resolved = {}
    for key, default in defaults.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_simulator_input(r: dict) -> SimulatorInput:
    """Build SimulatorInput from resolved config dict. Raises ValueError on invalid values."""
    return SimulatorInput(**{k: r[k] for k in _SIMPLE_KEYS})


def build_detailed_input(r: dict) -> DetailedSimulatorInput:
    """Build DetailedSimulatorInput from resolved config dict. Raises ValueError on invalid values."""
    return DetailedSimulatorInput(**{k: r[k] for k in _DETAILED_KEYS})


def parse_args(
    description: str, argv: list[str] | None = None,
) -> tuple[dict, argparse.ArgumentParser, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, parser, namespace). The parser is returned so
    callers can report input errors through ``parser.error``.
    """
    parser = create_parser(description)
    parser.add_argument("--json", action="store_true", help="保存用レコード（JSON）を出力")
    parser.add_argument("--breakdown", action="store_true", help="計算過程（各控除額・税額）を表示")
    args = parser.parse_args(argv)
    config = load_config(args.config)
    return resolve(args, config), parser, args
