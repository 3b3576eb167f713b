"""Cyclopts App definition for project commands."""

from cyclopts import App

app = App(
    name="projects",
    help="Manage a user's stored projects",
    help_on_error=True,
)
