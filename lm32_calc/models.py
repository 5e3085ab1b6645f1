import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ------------------------
# Record bounds
# ------------------------
GRADE_MIN = 18
GRADE_MAX = 30
HONORS_GRADE = 30
CREDITS_MIN = 1
CREDITS_MAX = 50
NAME_MAX_LENGTH = 100


def new_identifier() -> str:
    return uuid.uuid4().hex


class ExamRecord(BaseModel):
    """
    One exam on the student's transcript.

    Recognition ("convalida") records carry no grade: they count towards the
    total credits but never towards an average. Honors ("lode") is only valid
    alongside a graded 30.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    identifier: str = Field(default_factory=new_identifier, alias="id", min_length=1)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    grade: Optional[int] = Field(None, ge=GRADE_MIN, le=GRADE_MAX)
    credits: int = Field(..., ge=CREDITS_MIN, le=CREDITS_MAX)
    with_honors: bool = False
    is_recognition: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Exam name cannot be blank.")
        return value

    @model_validator(mode="before")
    @classmethod
    def drop_recognition_grade(cls, data: Any) -> Any:
        # recognitions never carry a grade
        if isinstance(data, dict) and data.get("is_recognition") is True:
            data = {**data, "grade": None}
        return data

    @model_validator(mode="after")
    def check_honors(self) -> "ExamRecord":
        if self.is_recognition:
            if self.with_honors:
                raise ValueError("A recognised exam cannot be awarded honors.")
            return self
        if self.grade is None:
            raise ValueError("A graded exam needs a grade.")
        if self.with_honors and self.grade != HONORS_GRADE:
            raise ValueError(f"Honors can only be awarded with a grade of {HONORS_GRADE}.")
        return self
