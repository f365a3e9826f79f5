"""Report assembly, HTML rendering and viewing."""

from tagdelta.report.builder import ReportBuilder
from tagdelta.report.renderer import ReportRenderer
from tagdelta.report.viewer import ReportViewer

__all__ = ["ReportBuilder", "ReportRenderer", "ReportViewer"]
