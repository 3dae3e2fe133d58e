import json
import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from tender_report import build_report, report_filename
from tender_report.config import PLOTLY_CONFIG
from tender_report.errors import TenderReportError
from tender_report.formatting import format_currency, format_date
from tender_report.layout import render_section_picker, render_style_picker
from tender_report.logging_utils import setup_logging
from tender_report.metrics import derive_kpis, ranked_counts
from tender_report.payload import ReportInput
from tender_report.preview import series_bars, win_loss_donut
from tender_report.report_presets import get_theme

setup_logging(logging.INFO)
logger = logging.getLogger("tender_report.app")

st.set_page_config(page_title="Tender Report Builder", layout="wide")

# =========================================================
# STYLE
# =========================================================
st.markdown(
    """
<style>
:root{
  --bg: #071627;
  --panel: rgba(255,255,255,0.06);
  --panel2: rgba(255,255,255,0.04);
  --border: rgba(255,255,255,0.10);
  --text: rgba(255,255,255,0.92);
  --muted: rgba(255,255,255,0.70);
  --accent: #3b82f6;
}

html, body, [data-testid="stAppViewContainer"]{
  background: radial-gradient(1200px 600px at 20% 15%, rgba(59,130,246,0.16), transparent 60%),
              var(--bg) !important;
  color: var(--text) !important;
}

[data-testid="stHeader"]{ background: transparent !important; }
.block-container{ padding-top: 2.2rem; }

.card{
  background: linear-gradient(180deg, var(--panel), var(--panel2));
  border: 1px solid var(--border);
  border-radius: 18px;
  padding: 16px 16px 14px 16px;
  box-shadow: 0 10px 25px rgba(0,0,0,0.20);
}

.kpi-title{ color: var(--muted); font-size: 0.85rem; margin-bottom: 8px; }
.kpi-value{ font-size: 2.0rem; font-weight: 700; line-height: 1.15; color: var(--text); }
.kpi-sub{ color: var(--muted); font-size: 0.9rem; margin-top: 6px; }

.big-title{ font-size: 2.6rem; font-weight: 800; letter-spacing: -0.02em; margin: 0.1rem 0 0.2rem 0; }
.subtitle{ font-size: 1.1rem; color: var(--muted); margin-bottom: 1rem; }
</style>
""",
    unsafe_allow_html=True,
)


def kpi_card(title: str, value: str, sub: str = ""):
    st.markdown(
        f"""
<div class="card">
  <div class="kpi-title">{title}</div>
  <div class="kpi-value">{value}</div>
  <div class="kpi-sub">{sub}</div>
</div>
""",
        unsafe_allow_html=True,
    )


@st.cache_data(show_spinner=False)
def parse_payload(raw: bytes) -> dict:
    return json.loads(raw.decode("utf-8"))


# =========================================================
# APP HEADER
# =========================================================
st.markdown('<div class="big-title">Tender Report Builder</div>', unsafe_allow_html=True)
st.markdown(
    '<div class="subtitle">Upload a seller analytics payload, pick the sections, and download the PDF report.</div>',
    unsafe_allow_html=True,
)

uploaded = st.file_uploader("Analytics payload (JSON)", type=["json"])
if uploaded is None:
    st.info("Upload a payload to begin.")
    st.stop()

try:
    payload = ReportInput.from_dict(parse_payload(uploaded.getvalue()))
except (ValueError, TenderReportError) as exc:
    st.error(f"Could not read payload: {exc}")
    st.stop()

# =========================================================
# SIDEBAR
# =========================================================
with st.sidebar:
    st.header("Report options")
    theme_name, template_name = render_style_picker()

theme = get_theme(theme_name)
kpis = derive_kpis(payload.data.missed_but_winnable, payload.meta.params_used.days)

# =========================================================
# PREVIEW
# =========================================================
st.subheader(payload.seller_name or "Unnamed seller")
st.caption(f"Generated {format_date(payload.meta.report_generated_at)}")

k1, k2, k3, k4 = st.columns(4)
with k1:
    kpi_card("Win Rate", f"{kpis.win_rate:.1f}%")
with k2:
    kpi_card("Total Bids", f"{kpis.total_bids:,}")
with k3:
    kpi_card("Successful Wins", f"{kpis.wins:,}", f"Losses: {kpis.losses:,}")
with k4:
    kpi_card("Total Value", format_currency(kpis.total_value), f"Avg {format_currency(kpis.avg_value)}")

c1, c2 = st.columns(2)
with c1:
    st.markdown("**Win/Loss Distribution**")
    st.plotly_chart(win_loss_donut(kpis, theme), use_container_width=True, config=PLOTLY_CONFIG)
with c2:
    st.markdown("**Category Distribution**")
    categories = ranked_counts(payload.data.category_listing, "category", "count", 10)
    if categories:
        st.plotly_chart(
            series_bars(categories, theme.color("bright_blue")), use_container_width=True, config=PLOTLY_CONFIG
        )
    else:
        st.info("No category data in this payload.")

wins = payload.data.missed_but_winnable.recent_wins
if wins:
    st.markdown("**Recent wins**")
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "Bid Number": w.bid_number,
                    "Organization": w.org,
                    "Department": w.dept,
                    "Value": format_currency(w.total_price),
                    "Date": format_date(w.date),
                }
                for w in wins
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )

# =========================================================
# BUILD
# =========================================================
st.markdown("---")
selection = render_section_picker()

if st.button("Generate PDF", type="primary"):
    with st.spinner("Rendering report..."):
        try:
            report = build_report(payload, selection=selection, theme=theme_name, template=template_name)
        except TenderReportError as exc:
            logger.exception("Report generation failed")
            st.error(f"Report generation failed: {exc}")
            st.stop()
    st.success(f"Report ready: {report.page_count} pages, {len(report.rendered_sections)} sections.")
    st.download_button(
        label="Download PDF",
        data=report.to_bytes(),
        file_name=report_filename(payload.seller_name, datetime.now()),
        mime="application/pdf",
    )
