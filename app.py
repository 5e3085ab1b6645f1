import logging

import streamlit as st

from lm32_calc.engine import (
    DEGREE_CREDITS,
    compute_final_score,
    compute_simulated_stats,
    compute_stats,
    degree_progress,
)
from lm32_calc.io_csv import parse_exams, read_csv_upload, records_to_dataframe, validate_exams_csv
from lm32_calc.models import CREDITS_MAX, CREDITS_MIN, GRADE_MAX, GRADE_MIN
from lm32_calc.store import RecordStore
from lm32_calc.validation import create_exam_record

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="LM-32 Graduation Score Calculator",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 LM-32 Graduation Score Calculator")
st.write(
    "Weighted average with the 6 CFU discount on the lowest grade, honors bonus, "
    "thesis points and extra bonuses, on the 110-point graduation scale."
)

store = RecordStore(st.session_state)
exams = store.load()

# ------------------------
# Add exam form
# ------------------------

with st.form("add_exam_form", clear_on_submit=True):
    st.subheader("1. Add an exam")

    name = st.text_input("Exam name", max_chars=100)
    col_grade, col_credits = st.columns(2)
    with col_grade:
        grade = st.text_input(f"Grade ({GRADE_MIN}-{GRADE_MAX})")
    with col_credits:
        credits = st.text_input(f"CFU ({CREDITS_MIN}-{CREDITS_MAX})")

    col_rec, col_lode = st.columns(2)
    with col_rec:
        is_recognition = st.checkbox("Recognised exam (convalida, no grade)")
    with col_lode:
        with_honors = st.checkbox("With honors (lode)")

    submitted = st.form_submit_button("Add exam", type="primary")

if submitted:
    try:
        record = create_exam_record(name, grade, credits, with_honors, is_recognition)
    except ValueError as e:
        st.error(str(e))
    else:
        exams = store.add(record)

exams_csv = st.file_uploader("Optionally import exams from CSV (Name, Grade, Credits)", type=["csv"])
if exams_csv is not None and st.button("Import CSV"):
    try:
        imported = parse_exams(validate_exams_csv(read_csv_upload(exams_csv)))
    except ValueError as e:
        st.error(f"CSV error: {e}")
    else:
        if not imported:
            st.warning("No valid exams found in the CSV.")
        exams = exams + imported
        store.save(exams)

# ------------------------
# Exam list
# ------------------------

stats = compute_stats(exams)

st.markdown("---")
st.subheader(f"2. Your exams ({stats['total_credits']} / {DEGREE_CREDITS} CFU)")
st.progress(degree_progress(stats["total_credits"]))

if not exams:
    st.info("No exams yet. Add one above to get started.")
else:
    for exam in exams:
        c1, c2, c3, c4 = st.columns([6, 2, 2, 1])
        with c1:
            st.write(exam.name)
        with c2:
            if exam.is_recognition:
                st.write("Convalida")
            else:
                st.write(f"{exam.grade}{' e lode' if exam.with_honors else ''}")
        with c3:
            st.write(f"{exam.credits} CFU")
        with c4:
            if st.button("🗑", key=f"delete_{exam.identifier}"):
                store.remove(exam.identifier)
                st.rerun()

    st.download_button(
        "Export CSV",
        records_to_dataframe(exams).to_csv(index=False),
        file_name="exams.csv",
        mime="text/csv",
    )

# ------------------------
# Report
# ------------------------

st.markdown("---")
st.subheader("3. Graduation score")

col_thesis, col_bonus = st.columns(2)
with col_thesis:
    thesis_points = st.slider("Thesis points", min_value=0.0, max_value=11.0, step=0.5, value=0.0)
with col_bonus:
    erasmus_bonus = st.checkbox("Erasmus (+1)")
    in_course_bonus = st.checkbox("Graduating in course (+2)")

final_score = compute_final_score(stats, thesis_points, erasmus_bonus, in_course_bonus)

m1, m2, m3, m4 = st.columns(4)
with m1:
    st.metric("LM-32 weighted average", f"{stats['weighted_average_discounted']:.2f}")
with m2:
    st.metric("Standard weighted average", f"{stats['weighted_average_standard']:.2f}")
with m3:
    st.metric("Arithmetic average", f"{stats['arithmetic_average']:.2f}")
with m4:
    st.metric("Final score", f"{final_score} / 110")

st.write(
    f"Graduation base {stats['graduation_base']:.2f} + honors bonus {stats['honors_bonus']:.1f} "
    f"= initial base **{stats['initial_base']:.2f}**"
)
if stats["distinction_eligible"]:
    st.success("Eligible for honors (lode) and distinction (menzione).")
elif stats["honors_eligible"]:
    st.success("Eligible for honors (lode).")
else:
    st.info("Not yet eligible for honors: the initial base must reach 102.")

# ------------------------
# Simulation
# ------------------------

st.markdown("---")
st.subheader("4. Simulate a future exam")

s1, s2, s3 = st.columns(3)
with s1:
    sim_grade = st.text_input("Hypothetical grade", key="sim_grade")
with s2:
    sim_credits = st.text_input("Hypothetical CFU", key="sim_credits")
with s3:
    sim_honors = st.checkbox("With honors", key="sim_honors")

simulated = compute_simulated_stats(exams, sim_grade, sim_credits, sim_honors)
if simulated is None:
    st.caption(
        f"Enter a grade ({GRADE_MIN}-{GRADE_MAX}) and CFU ({CREDITS_MIN}-{CREDITS_MAX}) "
        "to see how your average would change. Values outside these ranges are ignored."
    )
else:
    delta = simulated["weighted_average_discounted"] - stats["weighted_average_discounted"]
    st.metric(
        "Simulated LM-32 weighted average",
        f"{simulated['weighted_average_discounted']:.2f}",
        delta=f"{delta:+.2f}",
    )
    st.write(f"Simulated initial base: **{simulated['initial_base']:.2f}**")
