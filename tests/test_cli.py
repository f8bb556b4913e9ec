from __future__ import annotations

import pytest

from layofflens import cli
from layofflens.data.store import LayoffStore


def _write_csv(path):
    path.write_text(
        "Company,Location HQ,# Laid Off,Date,Industry,Source\n"
        "Acme,SF Bay Area,\"1,200\",2024-01-15,Tech,\n"
        ",Seattle,50,2024-01-20,Retail,\n",
        encoding="utf-8",
    )
    return path


def test_import_then_stats(tmp_path, capsys):
    db = tmp_path / "cli.db"
    csv_path = _write_csv(tmp_path / "layoffs.csv")

    cli.main(["--db", str(db), "import", str(csv_path), "--delay", "0"])
    out = capsys.readouterr().out
    assert "Import completed!" in out
    assert "Row 2: Missing company name" in out
    assert LayoffStore(db).count() == 1

    cli.main(["--db", str(db), "stats", "--sector", "Tech"])
    out = capsys.readouterr().out
    assert "Employees affected:     1,200" in out


def test_import_unreadable_csv_exits_non_zero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--db", str(tmp_path / "cli.db"), "import", str(tmp_path / "missing.csv")])
    assert exc.value.code == 1


def test_geo_and_export(tmp_path, capsys):
    db = tmp_path / "cli.db"
    cli.main(["--db", str(db), "import", str(_write_csv(tmp_path / "layoffs.csv")), "--delay", "0"])
    capsys.readouterr()

    cli.main(["--db", str(db), "geo"])
    out = capsys.readouterr().out
    assert "United States" in out

    output = tmp_path / "dash.xlsx"
    cli.main(["--db", str(db), "export", "--output", str(output)])
    assert output.exists()
