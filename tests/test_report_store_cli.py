import json
from datetime import date, datetime

from tender_report.cli import main
from tender_report.composer import build_report
from tender_report.report_store import report_filename, save_report_pdf


def test_report_filename_replaces_whitespace():
    assert report_filename("Acme  Supplies Pvt Ltd", date(2025, 3, 5)) == "Acme_Supplies_Pvt_Ltd_Report_2025-03-05.pdf"
    assert report_filename("", date(2025, 3, 5)) == "Seller_Report_2025-03-05.pdf"


def test_save_writes_pdf_and_sidecar(payload, tmp_path):
    report = build_report(payload, selection=["bidsSummary"])
    path = save_report_pdf(report, tmp_path, when=datetime(2025, 3, 5))

    assert path.name == "Acme_Supplies_Pvt_Ltd_Report_2025-03-05.pdf"
    assert path.read_bytes().startswith(b"%PDF")
    meta = json.loads(path.with_suffix(".json").read_text(encoding="utf-8"))
    assert meta["selection"] == ["bidsSummary"]
    assert meta["pages"] == report.page_count
    assert "bidsSummary" in meta["sections"]
    assert meta["theme"] == "corporate"


def test_cli_renders_payload_file(payload, tmp_path, capsys):
    source = tmp_path / "payload.json"
    source.write_text(json.dumps(payload), encoding="utf-8")
    out_dir = tmp_path / "out"

    code = main([str(source), "--output-dir", str(out_dir), "--sections", "bidsSummary,rivalryScore"])

    assert code == 0
    written = list(out_dir.glob("*.pdf"))
    assert len(written) == 1
    assert str(written[0]) in capsys.readouterr().out


def test_cli_reports_failures_with_exit_code(tmp_path):
    bad = tmp_path / "payload.json"
    bad.write_text("[]", encoding="utf-8")
    assert main([str(bad), "--output-dir", str(tmp_path)]) == 1
    assert main([str(tmp_path / "missing.json"), "--output-dir", str(tmp_path)]) == 1
