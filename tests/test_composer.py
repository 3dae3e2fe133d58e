import dataclasses
from datetime import datetime, timezone

import pytest

from tender_report import sections
from tender_report.composer import build_report
from tender_report.config import FILTER_SECTIONS
from tender_report.errors import ReportInputError, ReportRenderError, UnknownPresetError

NOW = datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)


def test_full_report_renders_every_section(payload):
    report = build_report(payload, now=NOW)
    assert report.page_count >= 3
    assert report.to_bytes().startswith(b"%PDF")
    for sid in ("cover", "performanceOverview", "aiInsights", "recommendations", "disclaimer"):
        assert sid in report.rendered_sections
    for sid in FILTER_SECTIONS:
        assert sid in report.rendered_sections


def test_kpi_text_reaches_the_page(payload):
    report = build_report(payload, now=NOW)
    text = report.text()
    assert "75.0%" in text
    assert "Win Rate" in text
    assert "Successful Wins" in text
    assert "Wins: 3 (75.0%)" in text
    assert "Losses: 1 (25.0%)" in text
    assert "Rs 40.00 L" in text
    assert "Acme Supplies Pvt Ltd" in report.page_text(1)


def test_ai_insights_always_start_a_new_page(payload):
    report = build_report(payload, now=NOW)
    ai_page = next(
        n for n in range(1, report.page_count + 1) if "AI-Powered Strategic Insights" in report.page_text(n)
    )
    assert ai_page > 1
    assert "Performance Overview" not in report.page_text(ai_page)


def test_filter_selection_excludes_unselected_sections(payload):
    report = build_report(payload, selection=["bidsSummary"], now=NOW)
    assert "bidsSummary" in report.rendered_sections
    assert "lowCompetition" not in report.rendered_sections
    assert "rivalryScore" not in report.rendered_sections
    text = report.text()
    assert "Recent Successful Bids" in text
    assert "Low Competition Opportunities" not in text
    # Unconditional sections ignore the selection.
    assert "Strategic Recommendations" in text
    assert "Important Disclaimer" in text


def test_empty_selection_keeps_only_core_sections(payload):
    report = build_report(payload, selection=[], now=NOW)
    assert report.rendered_sections == [
        "cover",
        "performanceOverview",
        "aiInsights",
        "orgAffinity",
        "deptAffinity",
        "recommendations",
        "disclaimer",
    ]


def test_empty_data_uses_messages_and_skips(empty_payload):
    report = build_report(empty_payload, now=NOW)
    text = report.text()
    assert "bidsSummary" not in report.rendered_sections
    assert "statesAnalysis" not in report.rendered_sections
    assert "departmentsAnalysis" not in report.rendered_sections
    assert "recommendations" not in report.rendered_sections
    assert "marketOverview" in report.rendered_sections
    assert "No market pricing data available." in text
    assert "No low-competition opportunities found." in text
    assert "No AI strategy summary was produced for this report." in text
    assert "No data" in text
    assert "0.0%" in text


def test_opportunity_status_uses_clock(payload):
    report = build_report(payload, selection=["lowCompetition"], now=NOW)
    text = report.text()
    assert "Open" in text
    assert "Closed" in text


def test_themes_and_templates(payload):
    compact = build_report(payload, theme="compact", template="executive", now=NOW)
    assert compact.rendered_sections.index("missedTenders") < compact.rendered_sections.index("bidsSummary")
    with pytest.raises(UnknownPresetError):
        build_report(payload, theme="neon")
    with pytest.raises(UnknownPresetError):
        build_report(payload, template="alphabetical")


def test_bad_payload_is_rejected():
    with pytest.raises(ReportInputError):
        build_report(["not", "an", "object"])


def test_section_failure_names_the_section(payload, monkeypatch):
    def boom(ctx, data):
        raise RuntimeError("kaboom")

    broken = dataclasses.replace(sections.SECTIONS_BY_ID["rivalryScore"], renderer=boom)
    monkeypatch.setitem(sections.SECTIONS_BY_ID, "rivalryScore", broken)
    with pytest.raises(ReportRenderError) as excinfo:
        build_report(payload, now=NOW)
    assert excinfo.value.section_id == "rivalryScore"
    assert isinstance(excinfo.value.cause, RuntimeError)


def test_long_tables_paginate_inside_a_report(payload):
    wins = payload["data"]["missedButWinnable"]["recentWins"]
    payload["data"]["lowCompetitionBids"]["results"] = [
        {"bid_number": f"GEM/2025/B/{i:04d}", "organisation": "Army HQ", "quantity": i, "seller_count": "1"}
        for i in range(40)
    ]
    payload["data"]["missedButWinnable"]["recentWins"] = wins * 4
    report = build_report(payload, now=NOW)
    # Row caps apply before layout.
    assert "GEM/2025/B/0014" in report.text()
    assert "GEM/2025/B/0015" not in report.text()


def test_bids_summary_only_report_shows_kpis_and_hides_rivalry():
    win = {"org": "Army HQ", "dept": "Defence", "total_price": 100000, "ended_at": "2025-02-10"}
    raw = {
        "meta": {"params_used": {"sellerName": "Acme", "days": 30}},
        "data": {
            "missedButWinnable": {
                "recentWins": [dict(win, bid_number=f"GEM/2025/B/090{i}") for i in range(3)],
                "marketWins": [{"seller_name": "Rival Corp", "total_price": 50000}],
            }
        },
    }
    report = build_report(raw, selection=["bidsSummary"], now=NOW)
    drawn = report.text().split("\n")
    assert "Total Bids" in drawn
    assert "4" in drawn
    assert "Rs 3.00 L" in drawn
    assert "Recent Successful Bids" in drawn
    assert "Rivalry Scorecard" not in report.text()


def test_unlabelled_category_rows_show_the_empty_message(payload):
    payload["data"]["categoryListing"] = [{"count": 5}, {"count": 3}]
    report = build_report(payload, selection=["categoryAnalysis"], now=NOW)
    assert "categoryAnalysis" in report.rendered_sections
    assert "No category data available." in report.text()


def test_unlabelled_state_and_department_rows_skip_their_sections(payload):
    payload["data"]["topPerformingStates"] = [{"total_tenders": 12}]
    payload["data"]["allDepartments"] = [{"department": "", "total_tenders": 7}]
    report = build_report(payload, selection=["statesAnalysis", "departmentsAnalysis"], now=NOW)
    assert "statesAnalysis" not in report.rendered_sections
    assert "departmentsAnalysis" not in report.rendered_sections
    assert "Top Performing States" not in report.text()
    assert "Top Departments by Tender Volume" not in report.text()
