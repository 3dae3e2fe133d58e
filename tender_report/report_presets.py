from dataclasses import dataclass, field
from typing import Dict, Tuple

from .errors import UnknownPresetError

RGB = Tuple[int, int, int]

CORPORATE_PALETTE: Dict[str, RGB] = {
    "deep_blue": (30, 64, 175),
    "deep_blue_dark": (30, 58, 138),
    "bright_blue": (59, 130, 246),
    "light_blue": (239, 246, 255),
    "success_green": (16, 185, 129),
    "warning_orange": (245, 158, 11),
    "error_red": (239, 68, 68),
    "dark_gray": (31, 41, 55),
    "medium_gray": (107, 114, 128),
    "light_gray": (156, 163, 175),
    "white": (255, 255, 255),
    "lightest_gray": (249, 250, 251),
    "border_gray": (229, 231, 235),
    "shadow": (220, 220, 220),
    "purple": (168, 85, 247),
    "amber": (251, 191, 36),
    "tint_green": (240, 253, 244),
    "tint_purple": (243, 232, 255),
    "tint_amber": (254, 243, 199),
    "tint_red": (254, 242, 242),
}


@dataclass(frozen=True)
class Theme:
    """
    Visual parameters for one report look. The layout engine reads every
    colour and spacing constant from here, so variants differ only in data.
    """

    label: str
    palette: Dict[str, RGB] = field(default_factory=lambda: dict(CORPORATE_PALETTE))
    margin: float = 20.0
    header_band: float = 20.0
    footer_band: float = 15.0
    safety_pad: float = 10.0
    top_pad: float = 6.0
    card_radius: float = 4.0
    section_gap: float = 12.0
    kpi_card_height: float = 28.0
    font: str = "Helvetica"

    def color(self, name: str) -> RGB:
        return self.palette[name]


THEMES: Dict[str, Theme] = {
    "corporate": Theme(label="Modern Corporate"),
    "classic": Theme(
        label="Classic Navy",
        palette={
            **CORPORATE_PALETTE,
            "deep_blue": (16, 35, 58),
            "deep_blue_dark": (11, 26, 43),
            "bright_blue": (30, 144, 255),
            "light_blue": (230, 238, 246),
            "success_green": (0, 160, 130),
            "purple": (76, 120, 168),
        },
        card_radius=0.0,
    ),
    "compact": Theme(
        label="Compact",
        margin=14.0,
        header_band=16.0,
        footer_band=12.0,
        safety_pad=6.0,
        card_radius=2.0,
        section_gap=8.0,
        kpi_card_height=24.0,
    ),
}


@dataclass(frozen=True)
class SectionTemplate:
    label: str
    order: Tuple[str, ...]


STANDARD_ORDER: Tuple[str, ...] = (
    "cover",
    "performanceOverview",
    "aiInsights",
    "orgAffinity",
    "deptAffinity",
    "bidsSummary",
    "marketOverview",
    "topPerformer",
    "missedTenders",
    "buyerInsights",
    "rivalryScore",
    "recommendations",
    "lowCompetition",
    "categoryAnalysis",
    "statesAnalysis",
    "departmentsAnalysis",
    "disclaimer",
)

SECTION_TEMPLATES: Dict[str, SectionTemplate] = {
    "standard": SectionTemplate(label="Standard", order=STANDARD_ORDER),
    "executive": SectionTemplate(
        label="Executive Brief",
        order=(
            "cover",
            "performanceOverview",
            "aiInsights",
            "missedTenders",
            "recommendations",
            "rivalryScore",
            "bidsSummary",
            "marketOverview",
            "topPerformer",
            "buyerInsights",
            "orgAffinity",
            "deptAffinity",
            "lowCompetition",
            "categoryAnalysis",
            "statesAnalysis",
            "departmentsAnalysis",
            "disclaimer",
        ),
    ),
}


def get_theme(name: str) -> Theme:
    theme = THEMES.get(name)
    if theme is None:
        raise UnknownPresetError(f"Unknown theme '{name}'. Choose from: {', '.join(THEMES)}")
    return theme


def get_template(name: str) -> SectionTemplate:
    template = SECTION_TEMPLATES.get(name)
    if template is None:
        raise UnknownPresetError(
            f"Unknown section template '{name}'. Choose from: {', '.join(SECTION_TEMPLATES)}"
        )
    return template
