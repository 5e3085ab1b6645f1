"""Unit tests for CSV import and export."""

import io
import logging

import pandas as pd
import pytest

from lm32_calc.io_csv import parse_exams, read_csv_upload, records_to_dataframe, validate_exams_csv
from lm32_calc.models import ExamRecord


def _upload(text: str) -> io.StringIO:
    return io.StringIO(text)


class TestReadAndValidate:
    """Tests for reading uploads and checking columns."""

    def test_aliases_are_normalised(self) -> None:
        """Test CFU, Lode and Convalida headers map to canonical names."""
        df = read_csv_upload(_upload("Name,Grade,CFU,Lode,Convalida\nAlgebra,30,9,yes,no\n"))
        assert set(df.columns) == {"name", "grade", "credits", "with_honors", "is_recognition"}

    def test_missing_columns(self) -> None:
        """Test missing required columns are reported."""
        df = read_csv_upload(_upload("Name,Grade\nAlgebra,30\n"))
        with pytest.raises(ValueError, match="Missing columns"):
            validate_exams_csv(df)

    def test_flags_default_to_false(self) -> None:
        """Test optional flag columns are filled in."""
        df = validate_exams_csv(read_csv_upload(_upload("name,grade,credits\nAlgebra,25,6\n")))
        assert df["with_honors"].tolist() == [False]
        assert df["is_recognition"].tolist() == [False]


class TestParseExams:
    """Tests for turning validated rows into records."""

    def test_valid_rows(self) -> None:
        """Test graded, honors and recognition rows all parse."""
        csv = (
            "name,grade,credits,lode,convalida\n"
            "Algebra,30,9,yes,\n"
            "Physics,24,6,,\n"
            "English B2,,3,,1\n"
        )
        records = parse_exams(validate_exams_csv(read_csv_upload(_upload(csv))))

        assert [record.name for record in records] == ["Algebra", "Physics", "English B2"]
        assert records[0].with_honors is True
        assert records[0].grade == 30
        assert records[1].with_honors is False
        assert records[2].is_recognition is True
        assert records[2].grade is None

    def test_invalid_rows_skipped(self, caplog) -> None:
        """Test bad rows are logged and skipped."""
        csv = "name,grade,credits\nGood,25,6\nLow,12,6\n,28,6\nNoCredits,28,\n"
        with caplog.at_level(logging.WARNING, logger="lm32_calc.io_csv"):
            records = parse_exams(validate_exams_csv(read_csv_upload(_upload(csv))))

        assert [record.name for record in records] == ["Good"]
        assert caplog.text.count("Skipping CSV row") == 3


class TestExport:
    """Tests for the export table."""

    def test_records_to_dataframe(self) -> None:
        """Test one row per record with the stored fields."""
        records = [
            ExamRecord(name="Algebra", credits=9, grade=30, with_honors=True),
            ExamRecord(name="English", credits=3, is_recognition=True),
        ]
        df = records_to_dataframe(records)

        assert list(df.columns) == ["id", "name", "grade", "credits", "with_honors", "is_recognition"]
        assert df["name"].tolist() == ["Algebra", "English"]
        assert df["credits"].sum() == 12

    def test_empty_export(self) -> None:
        """Test an empty list exports the header only."""
        df = records_to_dataframe([])
        assert isinstance(df, pd.DataFrame)
        assert df.empty
        assert "name" in df.columns
