"""Tests for exporting scored prospects."""

import csv
import io
import json
from datetime import date, timedelta

import pytest

from leadgen.api import score_prospects
from leadgen.export import (
    BREAKDOWN_COLUMNS,
    CSV_COLUMNS,
    export_csv_string,
    export_prospects,
    export_to_csv,
    export_to_json,
)
from leadgen.models import Prospect

TODAY = date(2024, 6, 1)


@pytest.fixture
def run():
    return score_prospects([
        Prospect(
            "Pierce Regional Medical Center",
            address="Lakewood, WA",
            last_test_date=TODAY - timedelta(days=400),
            distance_miles=3,
            estimated_value=5000,
            contact_email="facilities@pierceregional.org",
            contact_phone="(253) 555-0123",
        ),
        Prospect("Acme Holdings", distance_miles=25, estimated_value=500),
    ], today=TODAY)


class TestCsvExport:
    """Test CSV file export."""

    def test_writes_rows(self, run, tmp_path):
        path = export_to_csv(run.prospects, str(tmp_path / "out" / "leads.csv"))

        with open(path, newline="") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 2
        assert list(rows[0].keys()) == CSV_COLUMNS + BREAKDOWN_COLUMNS
        assert rows[0]["business_name"] == "Pierce Regional Medical Center"
        assert rows[0]["score"] == "99"
        assert rows[0]["temperature"] == "hot"
        assert rows[0]["last_test_date"] == (TODAY - timedelta(days=400)).isoformat()
        assert rows[1]["contact_email"] == ""
        assert rows[1]["compliance_points"] == "25"

    def test_without_breakdown(self, run, tmp_path):
        path = export_to_csv(run.prospects, str(tmp_path / "leads.csv"), include_breakdown=False)

        with open(path, newline="") as f:
            header = next(csv.reader(f))

        assert header == CSV_COLUMNS


class TestJsonExport:
    """Test JSON file export."""

    def test_writes_document(self, run, tmp_path):
        path = export_to_json(run.prospects, str(tmp_path / "leads.json"), metrics=run.metrics)

        with open(path) as f:
            data = json.load(f)

        assert data["total_prospects"] == 2
        assert data["metrics"]["hot_leads"] == 1
        assert data["prospects"][0]["breakdown"]["score"] == 99
        assert "exported_at" in data

    def test_without_metrics(self, run, tmp_path):
        path = export_to_json(run.prospects, str(tmp_path / "leads.json"), pretty=False)

        with open(path) as f:
            data = json.load(f)

        assert "metrics" not in data


class TestExportProspects:
    """Test format dispatch."""

    def test_json(self, run, tmp_path):
        path = export_prospects(run.prospects, str(tmp_path / "leads.json"), format="JSON")
        with open(path) as f:
            assert json.load(f)["total_prospects"] == 2

    def test_csv_default(self, run, tmp_path):
        path = export_prospects(run.prospects, str(tmp_path / "leads.csv"))
        with open(path) as f:
            assert f.readline().startswith("id,business_name")

    def test_tsv(self, run, tmp_path):
        path = export_prospects(run.prospects, str(tmp_path / "leads.tsv"), format="tsv")
        with open(path, newline="") as f:
            rows = list(csv.DictReader(f, delimiter="\t"))

        assert [r["temperature"] for r in rows] == ["hot", "cold"]

    def test_jsonl(self, run, tmp_path):
        path = export_prospects(run.prospects, str(tmp_path / "leads.jsonl"), format="jsonl")
        with open(path) as f:
            lines = f.read().splitlines()

        assert [json.loads(line)["score"] for line in lines] == [99, 30]


class TestCsvString:
    """Test CSV string output."""

    def test_headers(self, run):
        output = export_csv_string(run.prospects)
        rows = list(csv.DictReader(io.StringIO(output)))

        assert len(rows) == 2
        assert rows[1]["temperature"] == "cold"

    def test_no_headers(self, run):
        output = export_csv_string(run.prospects, headers=False)
        assert not output.startswith("id,")
        assert len(output.strip().splitlines()) == 2

    def test_tab_delimiter(self, run):
        output = export_csv_string(run.prospects, delimiter="\t")
        assert output.splitlines()[0].split("\t")[:2] == ["id", "business_name"]

    def test_empty(self):
        assert export_csv_string([]).strip() == ",".join(CSV_COLUMNS)
