"""Export documents: CSV, XLSX, PDF, JSON and the dataset dumps."""

import io
import json
from datetime import datetime

import openpyxl
import pandas as pd
import pytest

from phase2_analytics.schema import FilterOptions
from phase4_exports.dataset_export import (
    build_complete_dataset, build_gender_distribution, performance_category, salary_category,
)
from phase4_exports.kpi_exports import (
    ExportError, export_filename, headcount_to_frame, kpis_to_csv, kpis_to_excel,
    kpis_to_json, kpis_to_pdf, write_export,
)

FILTERS = FilterOptions(period="quarter", compare_with="previous")


@pytest.fixture(scope="module")
def kpis(analytics):
    return analytics.get_all_kpis(FILTERS)


@pytest.fixture(scope="module")
def headcount(analytics):
    return analytics.get_extended_headcount(FILTERS)


class TestKpiExports:

    def test_csv(self, kpis):
        df = pd.read_csv(io.StringIO(kpis_to_csv(kpis)))
        assert len(df) == 10
        assert list(df["Identifiant"])[:3] == ["absenteeism", "turnover", "headcount"]

    def test_excel_sheets(self, kpis, headcount):
        content = kpis_to_excel(kpis, headcount)
        assert content[:2] == b"PK"
        workbook = openpyxl.load_workbook(io.BytesIO(content))
        assert workbook.sheetnames == ["KPIs", "Effectif"]
        assert workbook["KPIs"].max_row == 11

    def test_headcount_frame_total_row(self, headcount):
        df = headcount_to_frame(headcount)
        assert df.iloc[-1]["Département"] == "Total"
        assert df.iloc[-1]["Effectif"] == headcount.total_headcount
        assert df["Effectif"].iloc[:-1].sum() == headcount.total_headcount

    def test_headcount_frame_without_data(self):
        assert headcount_to_frame(None).empty

    def test_pdf(self, analytics, kpis):
        content = kpis_to_pdf(kpis, "Vue d'ensemble", analytics.generate_global_insight(kpis))
        assert content.startswith(b"%PDF")

    def test_json(self, kpis, headcount):
        document = json.loads(kpis_to_json(kpis, FILTERS, headcount))
        assert document["filters"]["period"] == "quarter"
        assert len(document["kpis"]) == 10
        assert document["headcount"]["total_headcount"] == headcount.total_headcount

    def test_json_without_filters(self, kpis):
        document = json.loads(kpis_to_json(kpis))
        assert document["filters"] is None
        assert "headcount" not in document

    def test_filename(self):
        assert export_filename("kpis-rh", "csv", datetime(2024, 5, 1)) == "kpis-rh-2024-05-01.csv"


class TestWriteExport:

    def test_writes_text_and_bytes(self, tmp_path):
        text = write_export("a,b\n", "out.csv", tmp_path / "exports")
        binary = write_export(b"%PDF-1.4", "out.pdf", tmp_path / "exports")
        assert text.read_text(encoding="utf-8") == "a,b\n"
        assert binary.read_bytes() == b"%PDF-1.4"

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ExportError):
            write_export("x", "out.csv", blocker)


class TestDatasetExports:

    @pytest.mark.parametrize("salary, expected", [
        (39_999, "junior"), (40_000, "intermediate"), (69_999, "intermediate"), (70_000, "senior"),
    ])
    def test_salary_category(self, salary, expected):
        assert salary_category(salary) == expected

    @pytest.mark.parametrize("score, expected", [
        (5, "excellent"), (4, "excellent"), (3, "good"), (1, "needs_improvement"),
    ])
    def test_performance_category(self, score, expected):
        assert performance_category(score) == expected

    def test_complete_dataset(self, hr_data):
        document = build_complete_dataset(hr_data, generated_at=datetime(2024, 6, 28, 9, 0))
        assert document["metadata"]["total_employees"] == len(hr_data.employees)
        assert document["metadata"]["total_expenses"] == len(hr_data.expenses)
        stats = document["analytics"]["department_stats"]
        assert sum(d["count"] for d in stats.values()) == len(hr_data.employees)
        distribution = document["analytics"]["performance_stats"]["distribution"]
        assert sum(distribution.values()) == len(hr_data.employees)
        json.dumps(document, ensure_ascii=False)

    def test_gender_distribution(self, small_analytics):
        document = build_gender_distribution(small_analytics, FilterOptions(period="month"))
        assert document["total"] == 3
        by_gender = {row["genre"]: row for row in document["data"]}
        assert by_gender["Femme"]["effectif"] == 2
        assert by_gender["Homme"]["pourcentage"] == 33.3

    def test_gender_distribution_empty(self, small_analytics):
        document = build_gender_distribution(small_analytics, FilterOptions(department="Finance"))
        assert document["total"] == 0
        assert all(row["pourcentage"] == 0.0 for row in document["data"])
