import os
from pathlib import Path

# Environment overrides for output location and default look.
ENV_REPORT_DIR = "TENDER_REPORT_DIR"
ENV_THEME = "TENDER_REPORT_THEME"
ENV_TEMPLATE = "TENDER_REPORT_TEMPLATE"

# Output location for generated PDFs and their metadata sidecars.
DEFAULT_REPORT_DIR = Path(
    os.getenv(ENV_REPORT_DIR, "") or Path(__file__).resolve().parent.parent / "reports"
)
DEFAULT_THEME = os.getenv(ENV_THEME, "corporate")
DEFAULT_TEMPLATE = os.getenv(ENV_TEMPLATE, "standard")

# A4 portrait in millimetres.
PAGE_FORMAT = "A4"
PAGE_UNIT = "mm"

REPORT_TITLE = "Government Tender Analysis Report"
COVER_KICKER = "GOVERNMENT TENDER PERFORMANCE"
COVER_TITLE = "COMPREHENSIVE ANALYSIS REPORT"
CONFIDENTIAL_MARK = "Confidential"

DISCLAIMER_TITLE = "Important Disclaimer"
DISCLAIMER_TEXT = (
    "This report is generated based on available public data and AI analysis. "
    "While we strive for accuracy, we cannot guarantee the completeness or correctness "
    "of all information. Bid decisions should be made based on thorough due diligence "
    "and official tender documents. Past performance does not guarantee future results."
)
COPYRIGHT_LINE = "(c) 2025 Government Tender Analysis Platform. All rights reserved."
SUPPORT_LINE = "For support: support@tenderanalysis.com"

# Row caps applied before layout so tables and charts stay predictable.
MAX_WIN_ROWS = 10
MAX_OPPORTUNITY_ROWS = 15
MAX_AFFINITY_ROWS = 8
MAX_CHART_ROWS = 10
MAX_RECOMMENDATIONS = 6
MAX_LIKELY_WINS = 5
MAX_EVIDENCE_ROWS = 5
MAX_RIVAL_ROWS = 10

# Fixed section enumeration accepted from callers, with UI labels.
FILTER_SECTIONS = {
    "bidsSummary": "Summary of Bids Participated (Department-wise)",
    "marketOverview": "Overall Market Overview",
    "topPerformer": "Top Performer Department",
    "missedTenders": "Missed-but-Winnable Tenders",
    "buyerInsights": "Buyer/Department Insights",
    "rivalryScore": "Rivalry Scorecard",
    "lowCompetition": "Single-Bidder/Low-Competition Opportunities",
    "categoryAnalysis": "Category Distribution Analysis",
    "statesAnalysis": "Top Performing States/Geographies",
    "departmentsAnalysis": "Top Departments by Tender Volume",
}

# Shared Plotly defaults so the preview charts look consistent.
PLOTLY_CONFIG = {
    "displaylogo": False,
    "modeBarButtonsToRemove": [
        "lasso2d",
        "select2d",
        "autoScale2d",
        "resetScale2d",
        "toImage",
    ],
}
