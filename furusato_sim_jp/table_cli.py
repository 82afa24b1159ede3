"""CLI entry point for limit lookup table (早見表) generation."""

import sys
from pathlib import Path

from furusato_sim_jp.config import TABLE_DEFAULTS, create_table_parser, load_config, resolve
from furusato_sim_jp.limit_table import (
    FAMILY_PATTERNS,
    format_limit,
    generate_limit_table,
    render_limit_table_markdown,
)


def print_table(rows):
    """Print the table as fixed-width text."""
    print("=" * 120)
    print("【ふるさと納税 控除上限額の早見表】")
    print("=" * 120)
    for i, p in enumerate(FAMILY_PATTERNS, start=1):
        print(f"  ({i}) {p.label}（{p.description}）")
    print("-" * 120)
    print(f"{'年収':>8} " + " ".join(f"{f'({i})':>12}" for i in range(1, len(FAMILY_PATTERNS) + 1)))
    print("-" * 120)
    for row in rows:
        cells = " ".join(f"{format_limit(v):>12}" for v in row.limits)
        print(f"{row.annual_income:>6,}万円 {cells}")
    print("-" * 120)


def main(argv: list[str] | None = None):
    parser = create_table_parser("ふるさと納税 控除上限額の早見表を生成")
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Markdown出力先（未指定なら標準出力にテキスト表示）",
    )
    args = parser.parse_args(argv)
    config = load_config(args.config)
    r = resolve(args, config, TABLE_DEFAULTS)

    try:
        rows = generate_limit_table(r["start_income"], r["end_income"], r["step"])
    except ValueError as e:
        parser.error(str(e))

    if args.output is None:
        print_table(rows)
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(render_limit_table_markdown(rows), encoding="utf-8")
    print(f"早見表: {len(rows)}行 × {len(FAMILY_PATTERNS)}パターン → {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
