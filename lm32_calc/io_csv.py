import logging
from typing import List, Sequence

import pandas as pd

from lm32_calc.models import ExamRecord
from lm32_calc.validation import create_exam_record

logger = logging.getLogger(__name__)

# ------------------------
# CSV helpers (UI-side)
# ------------------------
COLUMN_ALIASES = {
    "credit": "credits",
    "cfu": "credits",
    "lode": "with_honors",
    "honors": "with_honors",
    "convalida": "is_recognition",
    "recognition": "is_recognition",
}
REQUIRED_COLUMNS = {"name", "grade", "credits"}
FLAG_COLUMNS = ("with_honors", "is_recognition")
TRUE_STRINGS = {"1", "true", "yes", "y", "x"}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {
        alias: target
        for alias, target in COLUMN_ALIASES.items()
        if alias in df.columns and target not in df.columns
    }
    return df.rename(columns=renames)


def _as_flag(value) -> bool:
    if pd.isna(value):
        return False
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_exams_csv(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Name, Grade, Credits.")
    out = df[["name", "grade", "credits"]].copy()
    for col in FLAG_COLUMNS:
        out[col] = df[col].map(_as_flag) if col in df.columns else False
    return out


def parse_exams(df: pd.DataFrame) -> List[ExamRecord]:
    """
    Rows that fail validation are skipped (and logged) rather than aborting
    the whole upload.
    """
    records = []
    for idx, row in df.iterrows():
        name = row.get("name")
        grade = row.get("grade")
        try:
            record = create_exam_record(
                name=None if pd.isna(name) else name,
                grade=None if pd.isna(grade) else grade,
                credits=row.get("credits"),
                with_honors=bool(row.get("with_honors", False)),
                is_recognition=bool(row.get("is_recognition", False)),
            )
        except ValueError as e:
            logger.warning("Skipping CSV row %s: %s", idx, e)
            continue
        records.append(record)
    return records


def records_to_dataframe(records: Sequence[ExamRecord]) -> pd.DataFrame:
    columns = ["id", "name", "grade", "credits", "with_honors", "is_recognition"]
    return pd.DataFrame([record.model_dump(by_alias=True) for record in records], columns=columns)
