from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from lm32_calc.models import HONORS_GRADE, ExamRecord
from lm32_calc.validation import parse_int

# ------------------------
# LM-32 regulation
# ------------------------
DISCOUNT_CREDITS = 6
HONORS_STEP = 0.5
HONORS_BONUS_CAP = 3.0
# 30-point average -> 110-point base, applied as (average * 11) / 3
GRADUATION_NUMERATOR = 11
GRADUATION_DENOMINATOR = 3
HONORS_THRESHOLD = 102
DISTINCTION_THRESHOLD = 108
ERASMUS_POINTS = 1
IN_COURSE_POINTS = 2
DEGREE_CREDITS = 120

SIMULATION_NAME = "Simulation"


# ------------------------
# Core logic
# ------------------------
def round_half_up(x: float) -> int:
    return int(Decimal(str(x)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def weighted_mean(grades: np.ndarray, weights: np.ndarray) -> float:
    """
    grades, weights: 1-D arrays of the same length
    returns: weighted mean grade, or 0.0 when the weights sum to zero
    """
    total_weight = float(weights.sum())
    if total_weight == 0:
        return 0.0
    return float(np.dot(grades, weights) / total_weight)


def find_discount_index(gradable: Sequence[ExamRecord]) -> Optional[int]:
    """
    Index of the exam that loses DISCOUNT_CREDITS, or None if there is none.

    Lowest grade wins; among equal lowest grades the exam with more credits
    wins, and on equal credits the first one seen is kept.
    """
    lowest_index = None
    for i, exam in enumerate(gradable):
        if lowest_index is None:
            lowest_index = i
            continue
        current = gradable[lowest_index]
        if exam.grade < current.grade:
            lowest_index = i
        elif exam.grade == current.grade and exam.credits > current.credits:
            lowest_index = i
    return lowest_index


def honors_bonus(honors_count: int) -> float:
    return min(HONORS_BONUS_CAP, honors_count * HONORS_STEP)


def eligibility(initial_base: float) -> Dict[str, bool]:
    return {
        "honors_eligible": initial_base >= HONORS_THRESHOLD,
        "distinction_eligible": initial_base >= DISTINCTION_THRESHOLD,
    }


def compute_stats(records: Sequence[ExamRecord]) -> Dict[str, Any]:
    """
    Full LM-32 report for a list of exams.

    Recognised exams only contribute to total_credits. An empty list (or one
    made only of recognitions) gives an all-zero report.
    """
    gradable = [exam for exam in records if not exam.is_recognition]
    discount_index = find_discount_index(gradable)

    grades = np.array([exam.grade for exam in gradable], dtype=float)
    credits = np.array([exam.credits for exam in gradable], dtype=float)

    effective_credits = credits.copy()
    if discount_index is not None:
        effective_credits[discount_index] = max(0.0, credits[discount_index] - DISCOUNT_CREDITS)

    weighted_discounted = weighted_mean(grades, effective_credits)
    weighted_standard = weighted_mean(grades, credits)
    arithmetic = float(grades.mean()) if grades.size > 0 else 0.0

    honors_count = sum(1 for exam in gradable if exam.with_honors)
    bonus = honors_bonus(honors_count)

    graduation_base = weighted_discounted * GRADUATION_NUMERATOR / GRADUATION_DENOMINATOR
    initial_base = graduation_base + bonus

    report = {
        "weighted_average_discounted": weighted_discounted,
        "weighted_average_standard": weighted_standard,
        "arithmetic_average": arithmetic,
        "graduation_base": graduation_base,
        "total_credits": sum(exam.credits for exam in records),
        "honors_count": honors_count,
        "honors_bonus": bonus,
        "initial_base": initial_base,
        "discounted_record": (
            gradable[discount_index].identifier if discount_index is not None else None
        ),
    }
    report.update(eligibility(initial_base))
    return report


def compute_final_score(
    report: Dict[str, Any],
    thesis_points: float,
    erasmus_bonus: bool = False,
    in_course_bonus: bool = False,
) -> int:
    """
    Final graduation score out of 110 (before any laude).

    thesis_points is expected in [0, 11] in steps of 0.5; the caller enforces it.
    """
    extra_points = (ERASMUS_POINTS if erasmus_bonus else 0) + (
        IN_COURSE_POINTS if in_course_bonus else 0
    )
    return round_half_up(report["initial_base"] + thesis_points + extra_points)


def compute_simulated_stats(
    records: Sequence[ExamRecord],
    hypothetical_grade,
    hypothetical_credits,
    with_honors: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Report as it would look after one more exam.

    Returns None, not an empty report, when the hypothetical grade or credits
    are missing, non-numeric, or outside the allowed range.
    """
    grade = parse_int(hypothetical_grade)
    credits = parse_int(hypothetical_credits)
    if grade is None or credits is None:
        return None

    try:
        simulated = ExamRecord(
            name=SIMULATION_NAME,
            credits=credits,
            grade=grade,
            with_honors=bool(with_honors) and grade == HONORS_GRADE,
        )
    except ValueError:
        return None

    all_exams: List[ExamRecord] = list(records) + [simulated]
    return compute_stats(all_exams)


def degree_progress(total_credits: float, required_credits: float = DEGREE_CREDITS) -> float:
    if required_credits <= 0:
        return 1.0
    return min(total_credits / required_credits, 1.0)
