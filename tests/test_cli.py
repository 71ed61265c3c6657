from __future__ import annotations

from openpyxl import load_workbook

from merchant_summary.cli import main


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_merchants_command(scenario_workbook, capsys):
    assert main(["merchants", str(scenario_workbook)]) == 0
    out = capsys.readouterr().out
    assert "MERCHANTS (2) in 2 records:" in out
    assert "A" in out and "B" in out


def test_summarize_command(scenario_workbook, tmp_path, capsys):
    output = tmp_path / "result.xlsx"
    code = main([
        "summarize", str(scenario_workbook),
        "-m", "A", "-m", "B",
        "--rate", "5", "--start", "2023-03-01", "--end", "2023-03-31",
        "--output", str(output),
    ])
    assert code == 0
    out = capsys.readouterr().out
    assert "5% Amount" in out
    assert "TOTAL" in out
    assert "150.00" in out
    assert f"Saved: {output}" in out
    assert load_workbook(output).sheetnames == ["Transactions", "Summary"]


def test_summarize_reports_errors(scenario_workbook, capsys):
    code = main([
        "summarize", str(scenario_workbook),
        "-m", "Nobody", "--rate", "5", "--start", "2023-03-01", "--end", "2023-03-31",
    ])
    assert code == 1
    assert "ERROR NO_MATCHING_DATA" in capsys.readouterr().err


def test_unreadable_file_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "export.txt"
    path.write_text("nope")
    assert main(["merchants", str(path)]) == 1
    assert "ERROR INVALID_EXCEL" in capsys.readouterr().err
