"""Streamlit demo UI for task-insights."""

from __future__ import annotations

import tempfile
from datetime import datetime, time, timezone
from pathlib import Path
from typing import Any

from task_insights.adapters import csv_adapter, json_adapter
from task_insights.advanced_metrics import get_advanced_metrics
from task_insights.analytics import export_analytics, get_analytics
from task_insights.prediction import get_predictive_insights
from task_insights.priority import intelligent_priority_score, rank_by_priority
from task_insights.recommendations import (
    focus_improvement_tips,
    get_personalized_insights,
    time_management_advice,
    workload_optimization_tips,
)
from task_insights.schema import PriorityContext

DEMO_DATASET = "examples/sample_tasks.json"


def _parse_tasks_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_tasks_from_path(temp_path)


def run_engine(tasks: list, now: datetime, period: str, context: PriorityContext) -> dict[str, Any]:
    """Run all engine steps and return a UI-friendly result payload."""

    analytics = get_analytics(tasks, now, period)
    ranked = rank_by_priority(tasks, now, context)

    return {
        "analytics": analytics,
        "export": export_analytics(analytics, now),
        "advanced": get_advanced_metrics(tasks, now),
        "predictive": get_predictive_insights(tasks, now),
        "personalized": get_personalized_insights(tasks, now),
        "ranked": [
            {
                "id": task.id,
                "title": task.title,
                "priority": task.priority,
                "score": intelligent_priority_score(task, tasks, now, context),
            }
            for task in ranked
        ],
        "tips": workload_optimization_tips(tasks, now)
        + focus_improvement_tips(tasks, now)
        + time_management_advice(tasks, now),
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Task Insights Demo", layout="wide")
    st.title("Task Insights - Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload task export", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        period = st.selectbox("Period", options=["week", "month", "year"], index=0)
        ref_date = st.date_input("Reference date", value=datetime(2025, 3, 14).date())
        ref_hour = st.slider("Reference hour", min_value=0, max_value=23, value=18)
        focus_mode = st.checkbox("Focus mode", value=False)
        location = st.text_input("Location tag", value="")
        device_state = st.selectbox("Device", options=["desktop", "mobile"], index=0)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tasks = json_adapter.parse(DEMO_DATASET)
            data_source = f"demo dataset ({DEMO_DATASET})"
        elif uploaded is not None:
            tasks = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        if not tasks:
            st.error("No tasks were found in the selected input.")
            return

        now = datetime.combine(ref_date, time(hour=ref_hour), tzinfo=timezone.utc)
        context = PriorityContext(
            focus_mode=focus_mode,
            location=location or None,
            device_state=device_state,
        )
        result = run_engine(tasks, now, period, context)

        st.success(f"Loaded {len(tasks)} tasks from {data_source}.")

        st.subheader("A) Overview")
        overview = result["analytics"].overview
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total tasks", overview.total_tasks)
        c2.metric("Completed", overview.completed_tasks)
        c3.metric("Completion rate", f"{overview.completion_rate}%")
        c4.metric("Tasks / day", overview.average_tasks_per_day)
        st.table([category.to_dict() for category in result["analytics"].categories])
        if result["analytics"].time_data:
            st.bar_chart({point.date: point.tasks for point in result["analytics"].time_data})

        st.subheader("B) Advanced Metrics")
        advanced = result["advanced"]
        a1, a2, a3, a4 = st.columns(4)
        a1.metric("Velocity", advanced.task_velocity)
        a2.metric("Focus score", advanced.focus_score)
        a3.metric("Efficiency", advanced.efficiency_trend)
        a4.metric("Burnout risk", advanced.burnout_risk.upper())
        st.write("Peak hours:", ", ".join(advanced.peak_productivity_hours) or "n/a")

        st.subheader("C) Predictions")
        st.table([result["predictive"].to_dict()])

        st.subheader("D) Recommendations")
        personalized = result["personalized"]
        for rec in personalized.recommendations:
            st.write(f"**{rec.title}** (impact {rec.impact}): {rec.description}")
        r1, r2, r3 = st.columns(3)
        r1.write("**Top insights**")
        r1.write(personalized.top_insights)
        r2.write("**Improvement areas**")
        r2.write(personalized.improvement_areas)
        r3.write("**Strengths**")
        r3.write(personalized.strengths)
        if result["tips"]:
            st.write("**Tips**")
            st.write(result["tips"])

        st.subheader("E) Ranked Tasks")
        st.table(result["ranked"])

        st.download_button("Download analytics export", result["export"], file_name="analytics.json")

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
