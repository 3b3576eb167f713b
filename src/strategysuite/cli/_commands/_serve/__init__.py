# pyright: reportUnusedCallResult=false
"""StrategySuite API server command."""

import os
from typing import Annotated, Literal

from cyclopts import App, Parameter

from strategysuite.config import CONFIG_PATH_ENV_VAR

from .._context import CLIContext

app = App(name="serve", help="Run the StrategySuite API server", help_on_error=True)

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


@app.default
def serve(
    *,
    host: Annotated[
        str | None,
        Parameter(help="Bind socket to this host. Defaults to server.host."),
    ] = None,
    port: Annotated[
        int | None,
        Parameter(help="Bind socket to this port. Defaults to server.port."),
    ] = None,
    reload: Annotated[
        bool | None,
        Parameter(help="Enable auto-reload. Defaults to server.reload."),
    ] = None,
    log_level: Annotated[
        LogLevel,
        Parameter(help="Uvicorn log level."),
    ] = "info",
) -> None:
    """Run the StrategySuite API server using uvicorn.

    The application is built by ``strategysuite.server:create_app`` in the
    server process, so an explicit ``--config`` path is handed over through
    the environment.
    """
    import uvicorn

    ctx = CLIContext.get_current()
    server = ctx.settings.server

    if ctx.config_path is not None:
        os.environ[CONFIG_PATH_ENV_VAR] = str(ctx.config_path.resolve())

    effective_host = host if host is not None else server.host
    effective_port = port if port is not None else server.port

    print(f"Starting StrategySuite API server on {effective_host}:{effective_port}")
    uvicorn.run(
        "strategysuite.server:create_app",
        factory=True,
        host=effective_host,
        port=effective_port,
        reload=reload if reload is not None else server.reload,
        log_level=log_level,
    )
