class TenderReportError(Exception):
    """Base class for report engine failures surfaced to callers."""


class ReportInputError(TenderReportError, ValueError):
    """The payload is not shaped like a report at all (e.g. not a JSON object)."""


class UnknownPresetError(TenderReportError, KeyError):
    """A theme or section template name that is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class ReportRenderError(TenderReportError):
    """A section failed while drawing. Carries the section id for the caller."""

    def __init__(self, section_id: str, cause: Exception):
        super().__init__(f"Section '{section_id}' failed to render: {cause}")
        self.section_id = section_id
        self.cause = cause
