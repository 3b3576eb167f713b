"""HTML strategy report rendering."""

import re
from dataclasses import dataclass

import pendulum

from strategysuite.project import FRAMEWORKS, ProjectState
from strategysuite.templating import render_template

__all__ = ["REPORT_MEDIA_TYPE", "ExportedReport", "render_report", "report_filename"]

REPORT_MEDIA_TYPE = "text/html"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class ExportedReport:
    """A rendered report ready to be written or downloaded.

    Attributes:
        filename: Suggested download name.
        content: Complete HTML document.
    """

    filename: str
    content: str

    media_type: str = REPORT_MEDIA_TYPE


@dataclass(frozen=True, slots=True)
class _Card:
    title: str
    color: str
    ideas: tuple[str, ...]
    justification: str


@dataclass(frozen=True, slots=True)
class _Section:
    key: str
    cards: tuple[_Card, ...]


def report_filename(name: str, day: pendulum.Date) -> str:
    """Build ``Strategy_Report_<name>_<YYYY-MM-DD>.html``.

    Runs of whitespace in the name become a single underscore.
    """
    slug = _WHITESPACE_RE.sub("_", name)
    return f"Strategy_Report_{slug}_{day.to_date_string()}.html"


def _sections(project: ProjectState) -> tuple[_Section, ...]:
    return tuple(
        _Section(
            key=framework.key.value,
            cards=tuple(
                _Card(
                    title=item.title,
                    color=item.color,
                    ideas=tuple(
                        idea.text
                        for idea in project.selected_ideas(framework.key, item.id)
                    ),
                    justification=item.justification,
                )
                for item in project.framework(framework.key)
            ),
        )
        for framework in FRAMEWORKS.values()
    )


def render_report(
    project: ProjectState, *, today: pendulum.Date | None = None
) -> ExportedReport:
    """Render a project's selected ideas into a standalone HTML report.

    Frameworks and categories appear in catalog order and ideas in display
    order. All project text is HTML-escaped.

    Args:
        project: The project to export.
        today: Date used in the filename. Defaults to the current UTC date.

    Returns:
        The filename and HTML content.
    """
    day = today if today is not None else pendulum.now("UTC").date()
    content = render_template(
        "report.html.j2", project=project, sections=_sections(project)
    )
    return ExportedReport(filename=report_filename(project.name, day), content=content)
