import streamlit as st

# Priority colours follow the task client: Low green, Medium amber, High orange, Urgent red.
PRIORITY_COLORS = {
    "low": "#10b981",
    "medium": "#f59e0b",
    "high": "#f97316",
    "urgent": "#ef4444",
}


def build_calendar_css() -> str:
    dots = "\n".join(
        f".cal-{name} {{ background: {color}; }}" for name, color in PRIORITY_COLORS.items()
    )
    return (
        """
<style>
.section-title {
    font-size: 22px;
    font-weight: 600;
    margin: 4px 0 10px 0;
}

.calendar-section-title {
    font-size: 15px;
    font-weight: 600;
    margin: 6px 0;
}

.calendar-month {
    border: 1px solid #e3dcea;
    border-radius: 14px;
    padding: 10px;
    margin: 8px 0 12px 0;
}

.calendar-table {
    width: 100%;
    border-collapse: separate;
    border-spacing: 6px;
}

.calendar-table th {
    text-align: center;
    color: #7a6f8a;
    font-size: 12px;
    font-weight: 600;
}

.calendar-cell {
    height: 74px;
    vertical-align: top;
    border: 1px solid #e3dcea;
    border-radius: 10px;
    padding: 6px;
}

.calendar-cell.outside {
    opacity: 0.45;
    border-style: dashed;
}

.calendar-cell.selected {
    border-color: #8FB6D9;
    box-shadow: inset 0 0 0 1px rgba(143, 182, 217, 0.45);
}

.calendar-cell.today {
    border-color: #3772A6;
    box-shadow: inset 0 0 0 1px #3772A6;
}

.calendar-day {
    font-size: 13px;
    font-weight: 700;
    margin-bottom: 6px;
}

.calendar-badges {
    display: flex;
    gap: 4px;
    flex-wrap: wrap;
    align-items: center;
}

.cal-dot {
    width: 100%;
    height: 4px;
    border-radius: 999px;
}

.cal-more {
    font-size: 9px;
    color: #7a6f8a;
}
"""
        + dots
        + "\n</style>\n"
    )


def inject_calendar_css():
    st.markdown(build_calendar_css(), unsafe_allow_html=True)
