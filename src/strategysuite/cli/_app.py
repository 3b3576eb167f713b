"""The command-line interface for StrategySuite."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from strategysuite import __version__
from strategysuite.config import Settings
from strategysuite.exceptions import ConfigLoadError
from strategysuite.utils import create_cli_logger

from ._commands import CLIContext, ExitCode, exit_with_error, register_commands

_HELP = "Strategic analysis workspace: projects, AI suggestions and reports."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="strategysuite",
        help=_HELP,
        version=__version__,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Launch the StrategySuite CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with debug logging.
            config: Explicit path to config file.
        """
        try:
            settings = Settings.load(config)
        except ConfigLoadError as e:
            exit_with_error(str(e), ExitCode.LOAD_ERROR, console=error_console)

        cli_logger = create_cli_logger(
            level="debug" if verbose else settings.logging.level.value,
            log_format=settings.logging.format.value,
            log_file=settings.logging.file,
        )

        CLIContext.set_current(
            CLIContext(
                settings=settings,
                verbose=verbose,
                config_path=config,
                logger=cli_logger,
            )
        )

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `strategysuite` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
