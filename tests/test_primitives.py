from tender_report.primitives import bullets


def test_bullets_wrap_with_their_own_font(layout):
    item = "Quote within ten percent of the L1 price on repeat Army HQ tenders this quarter"
    layout.y = 40
    # A large bold font left over from a previous block must not drive wrapping.
    layout.pdf.use_font(24, "B")
    bullets(layout, [item], size=9)
    assert item in layout.pdf.page_text(1)
    assert "-" in layout.pdf.page_text(1)


def test_bullets_continue_on_a_new_page(layout):
    layout.y = layout.safe_bottom - 2
    bullets(layout, ["Track competitor pricing weekly"], size=9)
    assert layout.page_no == 2
    assert "Track competitor pricing weekly" in layout.pdf.page_text(2)
