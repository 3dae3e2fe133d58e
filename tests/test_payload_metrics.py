import logging

import pytest

from tender_report.context import FilterSelection
from tender_report.errors import ReportInputError
from tender_report.metrics import (
    department_summary,
    derive_kpis,
    org_affinity_series,
    ranked_counts,
    rivalry_scorecard,
)
from tender_report.payload import ReportInput, load_report_input


def test_payload_parsing_unwraps_results(payload):
    report = ReportInput.from_dict(payload)
    assert report.seller_name == "Acme Supplies Pvt Ltd"
    assert [s["state_name"] for s in report.data.top_states] == ["Delhi", "Maharashtra"]
    assert len(report.data.low_competition) == 2
    assert report.data.price_band.highest == 2500000
    assert report.meta.params_used.days == 30


def test_missing_blocks_default_to_empty(empty_payload):
    report = ReportInput.from_dict(empty_payload)
    assert report.data.price_band is None
    assert report.data.missed_but_winnable.recent_wins == []
    assert report.data.missed_but_winnable.ai.signals.org_affinity == []


def test_non_object_payload_is_rejected(tmp_path):
    with pytest.raises(ReportInputError):
        load_report_input([1, 2, 3])
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ReportInputError):
        load_report_input(bad)


def test_kpis_are_recomputed_from_win_lists(payload):
    mbw = ReportInput.from_dict(payload).data.missed_but_winnable
    kpis = derive_kpis(mbw, 30)
    assert kpis.total_bids == 4
    assert kpis.wins == 3
    assert kpis.losses == 1
    assert kpis.win_rate == pytest.approx(75.0)
    assert kpis.loss_rate == pytest.approx(25.0)
    assert kpis.total_value == pytest.approx(4_000_000)
    assert kpis.avg_value == 1_333_333
    assert kpis.avg_bids_per_day == pytest.approx(4 / 30)


def test_kpis_with_no_bids_and_no_days(empty_payload):
    mbw = ReportInput.from_dict(empty_payload).data.missed_but_winnable
    kpis = derive_kpis(mbw, 0)
    assert kpis.total_bids == 0
    assert kpis.win_rate == 0.0
    assert kpis.avg_value == 0.0
    assert kpis.avg_bids_per_day == 0.0


def test_non_numeric_prices_count_as_zero():
    raw = {"data": {"missedButWinnable": {"recentWins": [{"total_price": "TBD"}, {"total_price": 100}]}}}
    kpis = derive_kpis(ReportInput.from_dict(raw).data.missed_but_winnable, 10)
    assert kpis.total_value == 100
    assert kpis.avg_value == 50


def test_affinity_and_rivalry_series(payload):
    mbw = ReportInput.from_dict(payload).data.missed_but_winnable
    points = org_affinity_series(mbw.ai.signals.org_affinity, mbw.recent_wins, 4, 8)
    assert points[0].label == "Army HQ"
    assert points[0].value == 2
    assert points[0].percentage == pytest.approx(50.0)

    rivals = rivalry_scorecard(mbw.market_wins, 10)
    assert [(r.seller, r.wins) for r in rivals] == [("Rival Corp", 1)]
    assert rivals[0].share == pytest.approx(100.0)

    summary = department_summary(mbw.recent_wins)
    assert summary[0]["dept"] == "Department of Military Affairs"
    assert summary[0]["wins"] == 2


def test_ranked_counts_shares():
    points = ranked_counts([{"c": "A", "n": 3}, {"c": "B", "n": "1"}, {"c": "", "n": 9}], "c", "n", 10)
    assert [p.label for p in points] == ["A", "B"]
    assert points[0].percentage == pytest.approx(75.0)


def test_filter_selection_drops_unknown_ids(caplog):
    with caplog.at_level(logging.WARNING):
        selection = FilterSelection.of(["bidsSummary", "bogus", " "])
    assert selection.sections == frozenset({"bidsSummary"})
    assert "bogus" in caplog.text
    assert "lowCompetition" in FilterSelection.all()
