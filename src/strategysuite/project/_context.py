"""Business context passed to the suggestion backend."""

from strategysuite.project._models import ProjectState

__all__ = ["build_business_context"]


def build_business_context(project: ProjectState) -> str:
    """Summarize a project's description and uploaded documents.

    Returns:
        ``"Business Context: <details>. Additional files: <contents>"`` with
        the file contents joined by single spaces.
    """
    contents = " ".join(f.content for f in project.business_files)
    return f"Business Context: {project.business_details}. Additional files: {contents}"
