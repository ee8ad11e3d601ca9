"""Main entry point for the APT Search CLI.

This module provides the command-line interface using Click: one-shot
search and suggestion commands plus an interactive session that drives the
same controller a graphical front end would.
"""

import asyncio

import click

from aptsearch import __version__
from aptsearch.api import SearchAPIClient, SearchAPIError
from aptsearch.config import get_settings
from aptsearch.controller import SEARCH_REGION, PointerEvent, SearchSession
from aptsearch.logging import setup_logging
from aptsearch.ui.console import SearchConsole, get_console

QUIT_WORDS = {"q", "quit", "exit"}


def configure(verbose: bool, debug: bool, no_color: bool) -> SearchConsole:
    """Set up logging and return the console for a command."""
    settings = get_settings()
    if debug or settings.apt_debug_mode:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = settings.apt_log_level

    setup_logging(level=log_level, log_file=settings.apt_log_file)
    return get_console(no_color=no_color, verbose=verbose or debug, sanitize=settings.sanitize_snippets)


def parse_command(line: str) -> tuple[str, str | int | None]:
    """Classify one line typed in interactive mode.

    Args:
        line: Raw input line

    Returns:
        tuple: (action, argument) where action is one of "quit", "next",
        "previous", "suggest", "pick", "dismiss" or "search"
    """
    text = line.strip()
    lowered = text.lower()

    if not text:
        return "dismiss", None
    if lowered in QUIT_WORDS:
        return "quit", None
    if lowered == "n":
        return "next", None
    if lowered == "p":
        return "previous", None
    if text.startswith("?"):
        return "suggest", text[1:]
    if text.isdigit():
        return "pick", int(text) - 1
    return "search", text


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", "-d", is_flag=True, help="Enable debug mode (very detailed logging)")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, no_color: bool):
    """APT Search - search the APT engine from the terminal."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["no_color"] = no_color

    # If no subcommand, default to the interactive session
    if ctx.invoked_subcommand is None:
        ctx.invoke(interactive)


@cli.command()
@click.argument("query")
@click.option("--page", "-p", default=1, show_default=True, type=click.IntRange(min=1), help="Page to show")
@click.pass_context
def search(ctx: click.Context, query: str, page: int):
    """Run one search and print a page of results."""
    console = configure(**ctx.obj)
    ok = asyncio.run(run_search(console, query, page))
    if not ok:
        ctx.exit(1)


@cli.command()
@click.argument("text")
@click.pass_context
def suggest(ctx: click.Context, text: str):
    """Print autocomplete suggestions for TEXT."""
    console = configure(**ctx.obj)
    ok = asyncio.run(run_suggest(console, text))
    if not ok:
        ctx.exit(1)


@cli.command()
@click.pass_context
def interactive(ctx: click.Context):
    """Start an interactive search session (default command)."""
    console = configure(**ctx.obj)
    asyncio.run(run_interactive(console))


@cli.command()
@click.pass_context
def config(ctx: click.Context):
    """Show current configuration."""
    console = configure(**ctx.obj)
    console.show_config(get_settings().model_dump_safe())


@cli.command()
def version():
    """Show version information."""
    click.echo(f"APT Search version {__version__}")


async def run_search(console: SearchConsole, query: str, page: int = 1) -> bool:
    """Search and render the requested one-based page.

    Returns:
        bool: False if any request failed
    """
    settings = get_settings()
    async with SearchAPIClient(settings=settings) as client:
        async with SearchSession(client, settings=settings, view=console) as session:
            controller = session.controller
            with console.loading():
                submitted = await session.submit(query)
                jumped = (
                    not submitted
                    or page == 1
                    or controller.error is not None
                    or await controller.change_page(page - 1)
                )

            if not submitted:
                console.error("Search query must not be blank")
                return False
            if not jumped:
                console.warning(f"Page {page} is past the last page of results")
            console.render(controller)
            return controller.error is None


async def run_suggest(console: SearchConsole, text: str) -> bool:
    """Fetch suggestions directly, bypassing the debounce window.

    Returns:
        bool: False if the request failed
    """
    settings = get_settings()
    async with SearchAPIClient(settings=settings) as client:
        try:
            suggestions = await client.suggestions(text)
        except (SearchAPIError, ValueError) as e:
            console.error(str(e))
            return False

    if not suggestions:
        console.info(f"No suggestions for '{text}'")
    for suggestion in suggestions:
        console.print(suggestion, style="search.suggestion")
    return True


async def run_interactive(console: SearchConsole) -> None:
    """Run the interactive search loop until the user quits."""
    settings = get_settings()
    console.welcome()
    console.info(f"Search backend: {settings.api_base}\n")

    async with SearchAPIClient(settings=settings) as client:
        async with SearchSession(client, settings=settings, view=console) as session:
            while True:
                try:
                    line = await asyncio.to_thread(console.console.input, "[search.primary]search>[/search.primary] ")
                except (EOFError, KeyboardInterrupt):
                    console.print()
                    break

                action, argument = parse_command(line)

                if action == "quit":
                    break
                elif action == "dismiss":
                    session.hub.dispatch(PointerEvent(region="results"))
                elif action == "suggest":
                    session.hub.dispatch(PointerEvent(region=SEARCH_REGION))
                    session.type(argument)
                    await session.fetcher.wait_idle()
                    console.render_suggestions(session.fetcher)
                elif action == "pick":
                    with console.loading():
                        picked = await session.pick(argument)
                    if not picked:
                        console.warning("No suggestion with that number")
                        continue
                    console.render(session.controller)
                elif action in ("next", "previous"):
                    delta = 1 if action == "next" else -1
                    with console.loading("Loading page..."):
                        moved = await session.controller.change_page(delta)
                    if not moved:
                        console.warning("No more pages in that direction")
                        continue
                    console.render(session.controller)
                else:
                    with console.loading():
                        await session.submit(argument)
                    console.render(session.controller)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
