"""Tests for the simulation and table CLIs."""

import json

import pytest
from furusato_sim_jp import cli, table_cli


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    """Run each CLI test where no config.toml exists."""
    monkeypatch.chdir(tmp_path)


class TestSimulationCli:
    def test_simple_output(self, capsys):
        cli.main(["--income", "500"])
        out = capsys.readouterr().out
        assert "簡易モード" in out
        assert "61,155円" in out
        assert "48,924円" in out
        assert "【前提条件】" in out

    def test_detailed_json_record(self, capsys):
        cli.main(["--mode", "detailed", "--income", "500", "--housing-loan", "200000", "--json"])
        record = json.loads(capsys.readouterr().out)
        assert record["simulation_type"] == "detailed"
        assert record["result_data"]["estimated_limit"] == 10_397
        assert record["input_data"]["housing_loan_deduction"] == 200_000

    def test_breakdown(self, capsys):
        cli.main(["--mode", "detailed", "--income", "500", "--breakdown"])
        out = capsys.readouterr().out
        assert "【計算過程】" in out
        assert "2,360,000円" in out

    def test_config_file(self, tmp_path, capsys):
        (tmp_path / "config.toml").write_text(
            'mode = "detailed"\nannual_income = 500\nhas_spouse = true\n', encoding="utf-8"
        )
        cli.main(["--json"])
        record = json.loads(capsys.readouterr().out)
        assert record["result_data"]["estimated_limit"] == 51_003

    def test_invalid_input_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--income", "50"])
        assert exc.value.code == 2
        assert "年収は100万円以上" in capsys.readouterr().err

    def test_invalid_mode_in_config(self, tmp_path):
        (tmp_path / "config.toml").write_text('mode = "quick"\n', encoding="utf-8")
        with pytest.raises(SystemExit):
            cli.main([])


class TestTableCli:
    def test_text_output(self, capsys):
        table_cli.main(["--start-income", "300", "--end-income", "350"])
        out = capsys.readouterr().out
        assert "300万円" in out
        assert "350万円" in out
        assert "(8)" in out

    def test_markdown_output(self, tmp_path, capsys):
        out_path = tmp_path / "reports" / "table.md"
        table_cli.main(["--start-income", "500", "--end-income", "550", "--step", "50", "--output", str(out_path)])
        md = out_path.read_text(encoding="utf-8")
        assert "| 500万円 | 60,528円 | 51,003円 |" in md
        assert "2行" in capsys.readouterr().err

    def test_invalid_step(self):
        with pytest.raises(SystemExit):
            table_cli.main(["--step", "0"])
