"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings, load_settings
from ..logs import LOG_LEVELS, configure_logging
from ..proxy import CHAT_ROUTE
from .providers import get_llm, get_proxy_client

# Create Typer app
app = typer.Typer(
    name="ullama",
    help="Chat with local Ollama models from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

logger = logging.getLogger(__name__)


def _settings() -> Settings:
    try:
        return load_settings()
    except ValueError as e:
        console.print(f"[red]Error: invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


def _check_level(level: str) -> str:
    if level.lower() not in LOG_LEVELS:
        console.print(
            f"[red]Error: unknown log level '{level}'. "
            f"Use one of: {', '.join(LOG_LEVELS)}[/red]"
        )
        raise typer.Exit(code=1)
    return level.lower()


async def _serve_proxy(server) -> None:
    """Run an embedded uvicorn server until it is told to exit.

    uvicorn calls ``sys.exit`` when it cannot bind; here that only ends the
    task, and the caller sees ``server.started`` still false.
    """
    try:
        await server.serve()
    except SystemExit as e:
        logger.debug("Embedded proxy stopped during startup (exit code %s)", e.code)


@app.command()
def serve(
    host: str | None = typer.Option(
        None,
        "--host",
        help="Interface to bind (default: ULLAMA_PROXY_HOST or 127.0.0.1)"
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on (default: ULLAMA_PROXY_PORT or 3000)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, or error"
    ),
):
    """Run the inference proxy."""
    import uvicorn

    from ..proxy import create_app

    settings = _settings()
    level = _check_level(log_level or settings.log_level)
    configure_logging(level)

    bind_host = host or settings.proxy_host
    bind_port = port or settings.proxy_port
    console.print(f"[dim]Proxy listening on http://{bind_host}:{bind_port}{CHAT_ROUTE}[/dim]")
    console.print(f"[dim]Inference service: {settings.ollama_host or 'ollama default'}[/dim]")

    uvicorn.run(
        create_app(get_llm(settings)),
        host=bind_host,
        port=bind_port,
        log_config=None,
        log_level=level,
    )


@app.command(name="tui")
def tui_command(
    proxy_url: str | None = typer.Option(
        None,
        "--proxy-url",
        "-u",
        help="Use an already running proxy at this URL"
    ),
    serve_proxy: bool = typer.Option(
        True,
        "--serve/--no-serve",
        help="Run the proxy inside this process (ignored with --proxy-url)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model for the first conversation (default: ULLAMA_DEFAULT_MODEL)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat interface."""
    settings = _settings()
    if log_level is not None:
        log_level = _check_level(log_level)

    async def _tui():
        from ..ui import run_textual_tui

        # Records must not reach stderr while the terminal belongs to the UI
        logging.getLogger("ullama").addHandler(logging.NullHandler())
        logging.getLogger("uvicorn").addHandler(logging.NullHandler())

        server = None
        server_task = None
        if serve_proxy and proxy_url is None:
            import uvicorn

            from ..proxy import create_app

            config = uvicorn.Config(
                create_app(get_llm(settings)),
                host=settings.proxy_host,
                port=settings.proxy_port,
                log_config=None,
                access_log=False,
                log_level="warning",
            )
            server = uvicorn.Server(config)
            server_task = asyncio.create_task(_serve_proxy(server))
            while not server.started and not server_task.done():
                await asyncio.sleep(0.05)
            if not server.started:
                await server_task
                console.print(
                    f"[red]Error: cannot start proxy on "
                    f"{settings.proxy_host}:{settings.proxy_port}[/red]"
                )
                console.print(
                    "[dim]If a proxy is already running there, use --no-serve "
                    "or --proxy-url to connect to it.[/dim]"
                )
                raise typer.Exit(code=1)

        client = get_proxy_client(settings, proxy_url)
        try:
            await run_textual_tui(
                client,
                default_model=model or settings.default_model,
                log_level=log_level,
            )
        finally:
            await client.close()
            if server is not None:
                server.should_exit = True
                await server_task
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def health():
    """Check the inference service and list its installed models."""
    settings = _settings()

    async def _health():
        provider = get_llm(settings)
        try:
            models = await provider.list_models()
        except Exception as e:
            console.print(f"[red]x[/red] Ollama connection: FAILED ({e})")
            raise typer.Exit(code=1)
        finally:
            await provider.close()

        console.print("[green]+[/green] Ollama connection: OK")
        if not models:
            console.print("[yellow]![/yellow] No models installed")
            return

        table = Table(title="Installed models")
        table.add_column("Model", style="cyan")
        table.add_column("Default", justify="center")
        for name in models:
            table.add_row(name, "*" if name == settings.default_model else "")
        console.print(table)

        if settings.default_model not in models:
            console.print(
                f"[yellow]![/yellow] Default model {settings.default_model} is not installed"
            )

    asyncio.run(_health())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
