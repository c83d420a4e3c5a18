"""
Inventory Classification Dashboard

A Streamlit dashboard over one uploaded stock workbook.
Run with: streamlit run app.py
"""

import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

import streamlit as st
import plotly.graph_objects as go

from adapters.pipeline import run_pipeline
from adapters.workbook import map_sheet_kinds, read_workbook
from invcore.parsers import format_money
from invcore.records import records_frame
from invcore.settings import LOG_LEVEL

# Logger configuration
logger = logging.getLogger("invcore_app")
root = logging.getLogger()
if not root.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL)

# Page config
st.set_page_config(
    page_title="Inventory Classification Dashboard",
    page_icon="📦",
    layout="wide",
)

st.title("📦 Inventory Classification Dashboard")

uploaded = st.sidebar.file_uploader("Upload stock workbook (.xlsx)", type="xlsx")
if not uploaded:
    st.info("Upload a workbook with a Grafana sheet to start.")
    st.stop()


@st.cache_data
def load_data(content: bytes, name: str):
    """Read and process the workbook (cached per upload)."""
    from io import BytesIO

    buffer = BytesIO(content)
    buffer.name = name
    sheets = map_sheet_kinds(read_workbook(buffer))
    return run_pipeline(sheets)


try:
    with st.spinner("Processing workbook..."):
        result = load_data(uploaded.getvalue(), uploaded.name)
except ValueError as e:
    logger.error("Workbook rejected: %s", e)
    st.error(f"❌ {e}")
    st.stop()

summary = result.summary()

# --- Key Metrics Row ---
st.header("Key Metrics")
col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric("SKUs", f"{summary.sku_count:,}", delta=f"{len(result.flat_rows):,} rows")
with col2:
    st.metric("Sales Value", format_money(summary.total_sales_value))
with col3:
    st.metric("Stock Value", format_money(summary.total_stock_value))
with col4:
    anomalies = sum(r.is_anomaly for r in result.records.values())
    st.metric("Anomalies", f"{anomalies}", delta="last day outliers", delta_color="inverse")

if result.quality.missing_columns:
    st.caption("Columns not found (defaults used): " + ", ".join(result.quality.missing_columns))

st.divider()

# --- Matrix and class counts ---
left_col, right_col = st.columns([2, 1])

with left_col:
    st.subheader("🩺 Stock Value by ABC Class and Health")
    frame = result.classification.matrix_frame()
    fig_matrix = go.Figure(
        data=[
            go.Heatmap(
                z=frame.values,
                x=list(frame.columns),
                y=list(frame.index),
                colorscale="Blues",
                text=[[format_money(v) for v in row] for row in frame.values],
                texttemplate="%{text}",
            )
        ]
    )
    fig_matrix.update_layout(height=300, margin=dict(t=20, b=20, l=20, r=20))
    st.plotly_chart(fig_matrix, use_container_width=True)

with right_col:
    st.subheader("📊 ABC/XYZ Classes")
    counts = dict(sorted(summary.counts.items()))
    fig_counts = go.Figure(
        data=[go.Bar(x=list(counts), y=list(counts.values()), marker_color="#3498db")]
    )
    fig_counts.update_layout(height=300, margin=dict(t=20, b=20, l=20, r=20))
    st.plotly_chart(fig_counts, use_container_width=True)

st.divider()

# --- SKU table ---
st.subheader("📋 SKUs")
sku_df = records_frame(result.classification.records)
if len(sku_df) > 0:
    display_cols = [
        "sku", "description", "brand", "abc_xyz", "health", "stability",
        "vtar_total", "forecast", "stock_grafana", "days_of_stock", "unit_cost",
    ]
    st.dataframe(sku_df[display_cols], use_container_width=True, hide_index=True)

with st.expander("Detail by depot"):
    st.dataframe(
        [row.to_dict() for row in result.flat_rows],
        use_container_width=True,
        hide_index=True,
    )
