"""Speedy proxy CLI.

Usage:
    speedy-proxy serve               Start the proxy (uvicorn)
    speedy-proxy config show         Print the effective configuration
"""

import json
import logging
from typing import Optional

import typer
from rich.console import Console

from speedy_proxy.config import load_settings
from speedy_proxy.utils.redaction import redact_for_logging

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="speedy-proxy",
    help="Credential-injecting proxy for the Speedy shipping API",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")

console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to speedy-proxy.yaml config file"
    ),
):
    """Start the proxy server."""
    import os

    import uvicorn

    try:
        settings = load_settings(config_path=config)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    # The app factory reloads settings in the uvicorn process; point it at
    # the same file.
    if config:
        os.environ["SPEEDY_PROXY_CONFIG_PATH"] = config

    final_host = host or settings.server.host
    final_port = port or settings.server.port
    console.print(f"[bold]Server running on {final_host}:{final_port}[/bold]")
    _log.info("Starting uvicorn on %s:%d", final_host, final_port)

    uvicorn.run(
        "speedy_proxy.api.main:create_app",
        factory=True,
        host=final_host,
        port=final_port,
        log_level=settings.server.log_level,
    )


@config_app.command("show")
def config_show(
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to speedy-proxy.yaml config file"
    ),
):
    """Print the effective configuration with secrets redacted."""
    try:
        settings = load_settings(config_path=config)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    data = redact_for_logging(settings.model_dump(mode="json"))
    console.print_json(json.dumps(data))


if __name__ == "__main__":
    app()
