"""Input rules applied before an exam record is created."""
import math
from typing import Optional

from lm32_calc.models import (
    CREDITS_MAX,
    CREDITS_MIN,
    GRADE_MAX,
    GRADE_MIN,
    HONORS_GRADE,
    NAME_MAX_LENGTH,
    ExamRecord,
)


def parse_int(value) -> Optional[int]:
    """
    Parse form input into an int, or None when it is missing or not a number.

    Floats and decimal strings are truncated ("24.7" -> 24), matching what a
    number field hands back.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if math.isfinite(number) else None


def sanitize_name(name) -> str:
    return str(name or "").strip()[:NAME_MAX_LENGTH]


def create_exam_record(
    name,
    grade,
    credits,
    with_honors: bool = False,
    is_recognition: bool = False,
) -> ExamRecord:
    """
    Build an ExamRecord from raw form values.

    Raises ValueError with a user-facing message when any field is invalid.
    Nothing is silently corrected apart from trimming and truncating the name.
    """
    clean_name = sanitize_name(name)
    if not clean_name:
        raise ValueError("Please enter the exam name.")

    credits_num = parse_int(credits)
    if credits_num is None:
        raise ValueError("Credits must be a whole number.")
    if not CREDITS_MIN <= credits_num <= CREDITS_MAX:
        raise ValueError(f"Credits must be between {CREDITS_MIN} and {CREDITS_MAX}.")

    if is_recognition:
        if with_honors:
            raise ValueError("A recognised exam cannot be awarded honors.")
        return ExamRecord(name=clean_name, credits=credits_num, is_recognition=True)

    grade_num = parse_int(grade)
    if grade_num is None:
        raise ValueError("Grade must be a whole number.")
    if not GRADE_MIN <= grade_num <= GRADE_MAX:
        raise ValueError(f"Grade must be between {GRADE_MIN} and {GRADE_MAX}.")
    if with_honors and grade_num != HONORS_GRADE:
        raise ValueError(f"Honors can only be awarded with a grade of {HONORS_GRADE}.")

    return ExamRecord(
        name=clean_name,
        credits=credits_num,
        grade=grade_num,
        with_honors=bool(with_honors),
    )
