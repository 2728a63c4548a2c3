"""Server commands."""

import click

from roster_service.core.settings import get_app_settings


@click.command(name="serve")
@click.option("--host", default=None, help="Bind host (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Bind port (default: APP_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_app_settings()
    uvicorn.run(
        "roster_service.app.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )
