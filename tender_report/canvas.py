"""
Canvas/Page Model and Page-Break Controller.

``ReportPDF`` owns the fpdf2 document and stamps the page decorations;
``LayoutContext`` carries the write cursor and is threaded through every
drawing primitive so the order of side effects stays explicit.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from fpdf import FPDF

from .config import CONFIDENTIAL_MARK, PAGE_FORMAT, PAGE_UNIT, REPORT_TITLE
from .formatting import clean_text
from .report_presets import RGB, Theme

logger = logging.getLogger(__name__)


class ReportPDF(FPDF):
    """
    A4 document with a tinted header band and a dark footer strip on every
    page except the cover. fpdf2 calls ``footer()`` when a page is closed and
    ``header()`` when the next one opens, so a page break stamps both.
    """

    def __init__(self, theme: Theme, seller_name: str, generated_label: str):
        super().__init__(orientation="P", unit=PAGE_UNIT, format=PAGE_FORMAT)
        self.theme = theme
        self.seller_name = clean_text(seller_name)
        self.generated_label = clean_text(generated_label)
        self._page_text: Dict[int, List[str]] = {}
        self.set_auto_page_break(False)
        self.set_margins(theme.margin, theme.header_band, theme.margin)
        self.set_title(REPORT_TITLE)
        self.set_author(self.seller_name or "Tender Analysis")

    # ---- text placement
    def text(self, x, y, text="", *args, **kwargs):
        self._page_text.setdefault(self.page_no(), []).append(text)
        return super().text(x, y, text, *args, **kwargs)

    def place_text(self, x: float, y: float, text: str, align: str = "L") -> str:
        """Draw sanitized text on a baseline; ``align`` anchors x at L, C or R."""
        safe = clean_text(text)
        if not safe:
            return ""
        width = self.get_string_width(safe)
        if align == "C":
            x -= width / 2
        elif align == "R":
            x -= width
        self.text(x, y, safe)
        return safe

    def page_text(self, page: int) -> List[str]:
        return list(self._page_text.get(page, []))

    # ---- styling helpers
    def use_font(self, size: float, style: str = "", color: Optional[RGB] = None) -> None:
        self.set_font(self.theme.font, style, size)
        if color is not None:
            self.set_text_color(*color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, radius: float = 0.0) -> None:
        self.set_fill_color(*color)
        if radius > 0:
            self.rect(x, y, w, h, style="F", round_corners=True, corner_radius=radius)
        else:
            self.rect(x, y, w, h, style="F")

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: RGB, radius: float = 0.0, width: float = 0.3) -> None:
        self.set_draw_color(*color)
        self.set_line_width(width)
        if radius > 0:
            self.rect(x, y, w, h, style="D", round_corners=True, corner_radius=radius)
        else:
            self.rect(x, y, w, h, style="D")

    def fill_circle(self, cx: float, cy: float, r: float, color: RGB) -> None:
        self.set_fill_color(*color)
        self.ellipse(cx - r, cy - r, 2 * r, 2 * r, style="F")

    def fill_triangle(self, points: Sequence[Sequence[float]], color: RGB) -> None:
        self.set_fill_color(*color)
        self.polygon([(p[0], p[1]) for p in points], style="F")

    # ---- page decorations
    def header(self):
        if self.page_no() == 1:
            return
        t = self.theme
        self.fill_rect(0, 0, self.w, t.header_band, t.color("lightest_gray"))
        self.use_font(9, "B", t.color("deep_blue"))
        self.place_text(self.w / 2, t.header_band / 2, REPORT_TITLE, align="C")
        self.use_font(7, "", t.color("medium_gray"))
        self.place_text(self.w - t.margin, t.header_band / 2, self.generated_label, align="R")
        self.set_draw_color(*t.color("border_gray"))
        self.set_line_width(0.3)
        self.line(0, t.header_band, self.w, t.header_band)

    def footer(self):
        if self.page_no() == 1:
            return
        t = self.theme
        top = self.h - t.footer_band
        self.fill_rect(0, top, self.w, t.footer_band, t.color("deep_blue"))
        self.use_font(7, "", t.color("white"))
        baseline = self.h - t.footer_band / 2 + 1
        self.place_text(t.margin, baseline, self.seller_name)
        self.place_text(self.w / 2, baseline, f"Page {self.page_no()}", align="C")
        self.place_text(self.w - t.margin, baseline, CONFIDENTIAL_MARK, align="R")


@dataclass
class LayoutContext:
    """
    Ephemeral layout state for one invocation: the document, its theme,
    the vertical write cursor and where the last table ended.
    """

    pdf: ReportPDF
    theme: Theme
    y: float = 0.0
    last_table_y: Optional[float] = None

    @property
    def page_width(self) -> float:
        return self.pdf.w

    @property
    def page_height(self) -> float:
        return self.pdf.h

    @property
    def margin(self) -> float:
        return self.theme.margin

    @property
    def content_width(self) -> float:
        return self.pdf.w - 2 * self.theme.margin

    @property
    def top_offset(self) -> float:
        return self.theme.header_band + self.theme.top_pad

    @property
    def safe_bottom(self) -> float:
        return self.pdf.h - self.theme.footer_band - self.theme.safety_pad

    @property
    def page_no(self) -> int:
        return self.pdf.page_no()

    def color(self, name: str) -> RGB:
        return self.theme.color(name)

    def open_cover(self) -> None:
        """Open page 1. The cover draws its own full-bleed treatment from y=0."""
        self.pdf.add_page()
        self.y = 0.0

    def start_new_page(self) -> None:
        self.pdf.add_page()
        self.y = self.top_offset
        logger.debug("Opened page %d", self.pdf.page_no())

    def ensure_space(self, required: float) -> bool:
        """
        Break to a new page when a block of ``required`` height would cross
        the safe bottom boundary. Returns True when a break happened.
        """
        if self.y + required > self.safe_bottom:
            self.start_new_page()
            return True
        return False

    def advance(self, dy: float) -> float:
        self.y += dy
        return self.y
