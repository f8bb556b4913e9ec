from __future__ import annotations

from openpyxl import load_workbook

from layofflens.data.schemas import RecordFilter
from layofflens.reports.dashboard_report import generate_excel, generate_json


def _seed(store, make_record):
    store.insert_records([
        make_record(company="Acme", date="2024-03-01", count=1200, sector="Tech", location="SF Bay Area"),
        make_record(company="Globex", date="2024-02-10", count=300, sector="Retail", location="London"),
        make_record(company="Initech", date="2023-12-05", count=None, sector="Tech", location="Atlantis"),
    ])


def test_generate_json_bundles_dashboard_and_map(store, make_record, now):
    _seed(store, make_record)
    data = generate_json(store, now=now)
    assert data["filter_label"] == "All Records"
    assert data["generated_at"] == "2024-03-15T12:00:00Z"
    assert data["stats"]["totalEmployeesAffected"] == 1500
    assert data["stats"]["recentTrend"] == "increasing"
    assert data["geographic"]["totalLocations"] == 2
    assert data["time_series"][-1] == {"date": "Mar 24", "month": "2024-03", "value": 1200}


def test_generate_json_with_filter(store, make_record, now):
    _seed(store, make_record)
    data = generate_json(store, RecordFilter(sector="Retail"), now=now)
    assert data["filter_label"] == "Retail"
    assert data["stats"]["totalLayoffs"] == 1
    assert data["industries"] == [{"name": "Retail", "value": 100, "color": data["industries"][0]["color"]}]


def test_generate_excel_writes_all_sheets(store, make_record, now, tmp_path):
    _seed(store, make_record)
    path = generate_excel(store, tmp_path / "out" / "dashboard.xlsx", now=now)
    assert path.exists()

    wb = load_workbook(path)
    assert wb.sheetnames == ["Summary", "Industries", "Monthly", "Locations", "Countries"]
    assert wb["Summary"]["A1"].value == "LAYOFFLENS"
    assert wb["Industries"]["A1"].value == "Industry"
    assert wb["Industries"]["A2"].value == "Tech"
    assert wb["Countries"]["A2"].value == "United States"
    assert wb["Countries"]["B2"].value == 1200


def test_generate_excel_on_empty_store(store, tmp_path, now):
    path = generate_excel(store, tmp_path / "empty.xlsx", now=now)
    wb = load_workbook(path)
    assert wb["Summary"]["A1"].value == "LAYOFFLENS"
    assert wb["Monthly"].max_row == 14
