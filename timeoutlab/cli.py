"""
timeoutlab CLI.

    timeoutlab run [--base-url URL] [--local]
    timeoutlab serve [--host HOST] [--port PORT]
"""

import asyncio

import typer

from timeoutlab.config import default_configs, settings
from timeoutlab.main import configure_logging, run

app = typer.Typer(
    name="timeoutlab",
    help="Run five HTTP timeout strategies side by side.",
    no_args_is_help=True,
)


@app.command("run")
def run_command(
    base_url: str | None = typer.Option(None, "--base-url", help="Delay service base URL"),
    local: bool = typer.Option(False, "--local", help="Start an embedded delay server and target it"),
) -> None:
    """Run every strategy concurrently and log each outcome."""
    configure_logging()
    if local:
        from timeoutlab.server import serve_in_thread

        with serve_in_thread(settings.SERVER_HOST, 0) as url:
            asyncio.run(run(default_configs(base_url=url)))
    else:
        asyncio.run(run(default_configs(base_url=base_url)))


@app.command("serve")
def serve_command(
    host: str = typer.Option(settings.SERVER_HOST, "--host", "-h", help="Bind address"),
    port: int = typer.Option(settings.SERVER_PORT, "--port", "-p", help="Bind port"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Serve the delay endpoint: GET /{status}?sleep={ms}."""
    import uvicorn

    configure_logging()
    typer.echo(f"Starting delay server on {host}:{port}")
    uvicorn.run("timeoutlab.server:app", host=host, port=port, log_level=log_level)


def main() -> None:
    app()
