"""CLI entry point for a single furusato nozei limit simulation."""

import json
import sys

from furusato_sim_jp.config import build_detailed_input, build_simulator_input, parse_args
from furusato_sim_jp.limit_table import format_limit
from furusato_sim_jp.params import SimulatorResult
from furusato_sim_jp.simulation import (
    build_history_record,
    calc_detailed_breakdown,
    calc_simple_breakdown,
    simulate_detailed_limit,
    simulate_limit,
)

_BREAKDOWN_LABELS = [
    ("gross_income", "給与収入"),
    ("employment_deduction", "給与所得控除"),
    ("net_income", "給与所得"),
    ("social_insurance", "社会保険料控除"),
    ("basic_deduction", "基礎控除"),
    ("spouse_deduction", "配偶者（特別）控除"),
    ("dependents_deduction", "扶養控除"),
    ("disability_deduction", "障害者控除"),
    ("other_personal_deductions", "ひとり親・寡婦・勤労学生控除"),
    ("other_deductions", "その他の所得控除"),
    ("total_deductions", "所得控除合計"),
    ("taxable_income", "課税所得"),
    ("income_tax", "所得税（住宅ローン控除後）"),
    ("reconstruction_tax", "復興特別所得税"),
    ("resident_tax", "住民税所得割（調整控除後）"),
]


def _print_result(mode: str, annual_income: int, result: SimulatorResult):
    label = "簡易" if mode == "simple" else "詳細"
    print("=" * 60)
    print(f"ふるさと納税 控除上限額シミュレーション（{label}モード・年収{annual_income:,}万円）")
    print("=" * 60)
    print(f"  推定上限額: {format_limit(result.estimated_limit):>14}")
    print(f"  安全ライン: {format_limit(result.safe_limit):>14}（推定上限額の80%）")
    print()
    print("【前提条件】")
    for a in result.assumptions:
        print(f"  ・{a}")
    print("【注意事項】")
    for w in result.warnings:
        print(f"  ・{w}")


def _print_breakdown(breakdown: dict):
    print("【計算過程】")
    print("-" * 60)
    for key, label in _BREAKDOWN_LABELS:
        if key in breakdown:
            print(f"  {label:<24} {breakdown[key]:>14,}円")
    print(f"  {'所得税率':<24} {breakdown['income_tax_rate'] * 100:>13.0f}%")
    print("-" * 60)


def main(argv: list[str] | None = None):
    r, parser, args = parse_args("ふるさと納税 控除上限額シミュレーション", argv)
    mode = r["mode"]
    if mode not in ("simple", "detailed"):
        parser.error(f"mode は simple / detailed のいずれかです: {mode}")

    try:
        if mode == "simple":
            inp = build_simulator_input(r)
        else:
            inp = build_detailed_input(r)
    except (TypeError, ValueError) as e:
        parser.error(f"入力値が不正です:\n{e}")

    if mode == "simple":
        result = simulate_limit(inp)
        breakdown = calc_simple_breakdown(inp) if args.breakdown else None
    else:
        result = simulate_detailed_limit(inp)
        breakdown = calc_detailed_breakdown(inp) if args.breakdown else None

    if args.json:
        record = build_history_record(mode, inp, result)
        if breakdown is not None:
            record["breakdown"] = breakdown
        json.dump(record, sys.stdout, ensure_ascii=False, indent=2)
        print()
        return

    _print_result(mode, inp.annual_income, result)
    if breakdown is not None:
        print()
        _print_breakdown(breakdown)


if __name__ == "__main__":
    main()
