"""Main entry point for the delicli application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines one CLI command per Delicious API operation, and delegates execution to the
CommandHandler.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

from delicli.core.command_handler import CommandHandler
from delicli.core.services.bookmark_service import DeliciousClient
from delicli.infrastructure.cli.display import ConsoleDisplay
from delicli.infrastructure.config.settings import (
    DEFAULT_CONFIG_FILE,
    get_config,
    load_client_settings,
    load_configuration,
)
from delicli.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging

logger = logging.getLogger(__name__)


# --- Dependency Injection Container (Manual) ---

def create_dependencies(
    user: Optional[str] = None,
    password: Optional[str] = None,
    json_output: bool = False,
    log_level: Optional[str] = None,
    config_file: Path = DEFAULT_CONFIG_FILE,
) -> Dict[str, Any]:
    """Creates and wires up all dependencies for one CLI invocation.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {}

    # 1. Load Configuration First, then logging based on it
    load_configuration(config_file=config_file)
    level = resolve_log_level(log_level or get_config("logging.level"))
    setup_logging(
        log_level=level,
        log_file=get_config("logging.file"),
        log_format=get_config("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
    )
    logger.debug("Configuration and logging initialized.")

    # 2. Client, with command-line credentials taking precedence over config
    settings = load_client_settings()
    client = DeliciousClient(settings)
    if user is not None or password is not None:
        client.set_user_password(
            user if user is not None else settings.user,
            password if password is not None else settings.password,
        )
    dependencies["client"] = client

    # 3. UI and command handler
    dependencies["ui"] = ConsoleDisplay()
    if not client.settings.user:
        dependencies["ui"].display_warning(
            "No Delicious user configured. Set DELICIOUS_USER, add delicious.user "
            "to the config file or pass --user."
        )
    dependencies["command_handler"] = CommandHandler(
        service=client,
        ui=dependencies["ui"],
        json_output=json_output,
    )
    logger.debug("All dependencies initialized successfully.")
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="delicli",
    help="Command-line client for the Delicious bookmarking API.",
    add_completion=False,
    no_args_is_help=True,
)


def _run(ctx: typer.Context, operation: str, **params: Any) -> None:
    handler: CommandHandler = ctx.obj["command_handler"]
    raise typer.Exit(code=handler.handle(operation, **params))


# Shared options
TagsOption = Annotated[
    Optional[List[str]],
    typer.Option("--tag", "-t", help="Tag to filter by or assign. Repeat for several tags."),
]
TagOption = Annotated[Optional[str], typer.Option("--tag", "-t", help="Filter by this tag.")]
MetaOption = Annotated[
    Optional[bool],
    typer.Option("--meta/--no-meta", help="Include change detection signatures."),
]


@app.callback()
def main_callback(
    ctx: typer.Context,
    user: Annotated[Optional[str], typer.Option("--user", "-u", help="Delicious user (overrides config).")] = None,
    password: Annotated[Optional[str], typer.Option("--password", "-p", help="Delicious password (overrides config).")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the raw result envelope as JSON.")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level, e.g. DEBUG.")] = None,
    config_file: Annotated[Path, typer.Option("--config", help="YAML configuration file.")] = DEFAULT_CONFIG_FILE,
):
    """Wire up the client before any command runs."""
    ctx.obj = create_dependencies(
        user=user,
        password=password,
        json_output=json_output,
        log_level=log_level,
        config_file=config_file,
    )
    ctx.call_on_close(ctx.obj["client"].close)


# --- Posts ---

@app.command()
def update(ctx: typer.Context):
    """Show when the account last changed and how many inbox items are new."""
    _run(ctx, "update")


@app.command()
def add(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL of the bookmark.")],
    description: Annotated[str, typer.Argument(help="Title of the bookmark.")],
    extended: Annotated[Optional[str], typer.Option("--notes", "-n", help="Notes for the bookmark.")] = None,
    tags: TagsOption = None,
    dt: Annotated[Optional[str], typer.Option("--dt", help="Datestamp, CCYY-MM-DDThh:mm:ssZ.")] = None,
    replace: Annotated[Optional[bool], typer.Option("--replace/--no-replace", help="Replace an existing post for this URL.")] = None,
    shared: Annotated[Optional[bool], typer.Option("--shared/--private", help="Share the post or keep it private.")] = None,
):
    """Add a bookmark."""
    _run(ctx, "add", url=url, description=description, extended=extended,
         tags=tags, dt=dt, replace=replace, shared=shared)


@app.command()
def delete(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL of the bookmark to delete.")],
):
    """Delete a bookmark."""
    _run(ctx, "delete", url=url)


@app.command()
def get(
    ctx: typer.Context,
    tags: TagsOption = None,
    dt: Annotated[Optional[str], typer.Option("--dt", help="Day to fetch, CCYY-MM-DDThh:mm:ssZ.")] = None,
    url: Annotated[Optional[str], typer.Option("--url", help="Fetch the bookmark for this URL.")] = None,
    hashes: Annotated[Optional[List[str]], typer.Option("--hash", help="URL MD5 to fetch. Repeatable.")] = None,
    meta: MetaOption = None,
):
    """Get bookmarks for one day, one URL or a set of URL hashes."""
    _run(ctx, "get", tags=tags, dt=dt, url=url, hashes=hashes, meta=meta)


@app.command(name="by-user")
def by_user(
    ctx: typer.Context,
    user: Annotated[str, typer.Argument(help="User whose bookmarks to list.")],
    tags: TagsOption = None,
    private: Annotated[Optional[str], typer.Option("--private-key", help="Private feed key of that user.")] = None,
    count: Annotated[Optional[int], typer.Option("--count", "-c", help="Number of bookmarks (feed default 100).")] = None,
):
    """List any user's bookmarks from the public JSON feed."""
    _run(ctx, "get_by_user", user=user, tags=tags, private=private, count=count)


@app.command()
def recent(
    ctx: typer.Context,
    tag: TagOption = None,
    count: Annotated[Optional[int], typer.Option("--count", "-c", help="Number of posts (max 100).")] = None,
):
    """List the most recent bookmarks."""
    _run(ctx, "recent", tag=tag, count=count)


@app.command()
def dates(ctx: typer.Context, tag: TagOption = None):
    """List dates with the number of bookmarks posted on each."""
    _run(ctx, "dates", tag=tag)


@app.command(name="all")
def all_command(
    ctx: typer.Context,
    tag: TagOption = None,
    start: Annotated[Optional[int], typer.Option("--start", help="Index of the first result.")] = None,
    results: Annotated[Optional[int], typer.Option("--results", help="Maximum number of results.")] = None,
    fromdt: Annotated[Optional[str], typer.Option("--from", help="Posts on this date or later.")] = None,
    todt: Annotated[Optional[str], typer.Option("--to", help="Posts on this date or earlier.")] = None,
    meta: MetaOption = None,
):
    """Fetch all bookmarks. Run 'update' first to check whether anything changed."""
    _run(ctx, "all", tag=tag, start=start, results=results, fromdt=fromdt, todt=todt, meta=meta)


@app.command()
def hashes(ctx: typer.Context):
    """Fetch the change manifest (URL hash and signature of every bookmark)."""
    _run(ctx, "hashes")


@app.command()
def suggest(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL to get tag suggestions for.")],
):
    """Suggest tags for a URL."""
    _run(ctx, "suggest", url=url)


# --- Tags ---

@app.command()
def tags(ctx: typer.Context):
    """List tags and how often each is used."""
    _run(ctx, "get_tags")


@app.command(name="delete-tag")
def delete_tag(
    ctx: typer.Context,
    tag: Annotated[str, typer.Argument(help="Tag to remove from every bookmark.")],
):
    """Delete a tag from all bookmarks."""
    _run(ctx, "delete_tag", tag=tag)


@app.command(name="rename-tag")
def rename_tag(
    ctx: typer.Context,
    old: Annotated[str, typer.Argument(help="Current tag name.")],
    new: Annotated[str, typer.Argument(help="New tag name.")],
):
    """Rename a tag on all bookmarks."""
    _run(ctx, "rename_tag", old=old, new=new)


# --- Tag bundles ---

@app.command()
def bundles(
    ctx: typer.Context,
    bundle: Annotated[Optional[str], typer.Option("--bundle", "-b", help="Only this bundle.")] = None,
):
    """List tag bundles."""
    _run(ctx, "get_tag_bundles", bundle=bundle)


@app.command(name="set-bundle")
def set_bundle(
    ctx: typer.Context,
    bundle: Annotated[str, typer.Argument(help="Bundle name.")],
    tags: Annotated[List[str], typer.Argument(help="Tags the bundle should hold.")],
):
    """Assign tags to a bundle, replacing its previous tags."""
    _run(ctx, "set_tag_bundle", bundle=bundle, tags=tags)


@app.command(name="delete-bundle")
def delete_bundle(
    ctx: typer.Context,
    bundle: Annotated[str, typer.Argument(help="Bundle name.")],
):
    """Delete a tag bundle."""
    _run(ctx, "delete_tag_bundle", bundle=bundle)


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
