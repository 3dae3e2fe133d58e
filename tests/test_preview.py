from tender_report.metrics import PerformanceKpis, SeriesPoint
from tender_report.preview import series_bars, win_loss_donut
from tender_report.report_presets import get_theme


def test_donut_preview_matches_kpis():
    kpis = PerformanceKpis(4, 3, 1, 75.0, 25.0, 4_000_000, 1_333_333, 0.13)
    fig = win_loss_donut(kpis, get_theme("corporate"))
    pie = fig.data[0]
    assert list(pie.values) == [3, 1]
    assert fig.layout.annotations[0].text == "75.0%"


def test_bar_preview_puts_largest_on_top():
    points = [SeriesPoint("Furniture", 40, 80.0), SeriesPoint("Stationery", 10, 20.0)]
    fig = series_bars(points, (59, 130, 246))
    bar = fig.data[0]
    assert list(bar.y) == ["Stationery", "Furniture"]
    assert list(bar.text) == ["20.0%", "80.0%"]
    assert fig.layout.height == 160
