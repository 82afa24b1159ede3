"""Tests for the limit lookup table (早見表)."""

import pytest
from furusato_sim_jp import (
    FAMILY_PATTERNS,
    estimate_detailed_limit_yen,
    format_limit,
    generate_limit_table,
    render_limit_table_markdown,
)
from furusato_sim_jp.limit_table import BASE_INPUT, build_pattern_input


class TestFamilyPatterns:
    def test_eight_patterns(self):
        assert len(FAMILY_PATTERNS) == 8

    def test_first_pattern_is_single(self):
        assert FAMILY_PATTERNS[0].label == "独身または共働き"
        assert FAMILY_PATTERNS[0].config["has_spouse"] is False

    def test_patterns_are_read_only(self):
        with pytest.raises(TypeError):
            FAMILY_PATTERNS[0].config["has_spouse"] = True
        with pytest.raises(TypeError):
            BASE_INPUT["life_insurance_deduction"] = 1

    def test_pattern_input_merges_baseline(self):
        inp = build_pattern_input(600, FAMILY_PATTERNS[6])
        assert inp.annual_income == 600
        assert inp.has_spouse is True
        assert inp.general_dependents_count == 1
        assert inp.specific_dependents_count == 1
        assert inp.social_insurance_deduction is None
        assert inp.housing_loan_deduction == 0


class TestGenerateLimitTable:
    def test_row_order(self):
        """300〜350万、25万刻み → 3行"""
        rows = generate_limit_table(300, 350, 25)
        assert [r.annual_income for r in rows] == [300, 325, 350]
        assert all(len(r.limits) == len(FAMILY_PATTERNS) for r in rows)

    def test_limits_follow_pattern_order(self):
        rows = generate_limit_table(300, 350, 25)
        for row in rows:
            expected = tuple(
                estimate_detailed_limit_yen(build_pattern_input(row.annual_income, p))
                for p in FAMILY_PATTERNS
            )
            assert row.limits == expected

    def test_snapshot_500(self):
        """年収500万: 独身60,528円 / 夫婦51,003円"""
        row = generate_limit_table(500, 500, 25)[0]
        assert row.limits[0] == 60_528
        assert row.limits[1] == 51_003

    def test_more_dependents_lower_limit(self):
        row = generate_limit_table(800, 800, 25)[0]
        single, couple = row.limits[0], row.limits[1]
        couple_two_children = row.limits[6]
        assert single > couple > couple_two_children

    def test_default_range(self):
        rows = generate_limit_table()
        assert rows[0].annual_income == 300
        assert rows[-1].annual_income == 2500
        assert len(rows) == 89

    def test_end_not_on_step(self):
        rows = generate_limit_table(300, 360, 25)
        assert [r.annual_income for r in rows] == [300, 325, 350]

    def test_invalid_step(self):
        with pytest.raises(ValueError, match="刻み幅"):
            generate_limit_table(300, 400, 0)

    def test_inverted_range(self):
        with pytest.raises(ValueError, match="開始年収"):
            generate_limit_table(500, 300, 25)


class TestFormatLimit:
    def test_grouping(self):
        assert format_limit(28_000) == "28,000円"
        assert format_limit(2000) == "2,000円"
        assert format_limit(10_000_000) == "10,000,000円"


class TestRenderMarkdown:
    def test_contents(self):
        md = render_limit_table_markdown(generate_limit_table(300, 325, 25))
        assert md.startswith("# ふるさと納税 控除上限額の早見表")
        assert "独身または共働き<br>（扶養家族なし）" in md
        assert "| 300万円 |" in md
        assert "| 325万円 |" in md
        assert "## 注意事項" in md

    def test_column_count(self):
        md = render_limit_table_markdown(generate_limit_table(300, 300, 25))
        row = next(line for line in md.splitlines() if line.startswith("| 300万円"))
        assert row.count("|") == len(FAMILY_PATTERNS) + 2
