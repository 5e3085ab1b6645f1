from lm32_calc.engine import (
    compute_final_score,
    compute_simulated_stats,
    compute_stats,
    degree_progress,
)
from lm32_calc.models import ExamRecord
from lm32_calc.store import RecordStore
from lm32_calc.validation import create_exam_record

__all__ = [
    "ExamRecord",
    "RecordStore",
    "compute_final_score",
    "compute_simulated_stats",
    "compute_stats",
    "create_exam_record",
    "degree_progress",
]
