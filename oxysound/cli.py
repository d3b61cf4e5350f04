import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from pymonad.either import Either, Left, Right
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from toolz import pipe
from typer.core import TyperCommand

from .adapters.console_config_source import ConsoleConfigSource
from .adapters.env_config_source import API_KEY_VAR, EnvironmentConfigSource
from .adapters.json_playlist_store import JsonPlaylistStore
from .config import (
    DEFAULT_SAVE_DIRECTORY,
    ensure_config,
    get_config_path,
    prepare_save_directory,
    run_setup,
)
from .domain.errors import AppError, EmptyInputError, NotFoundError
from .domain.models import Config, Playlist
from .domain.ports import ConfigSource
from .i18n import get_default_lang, get_message, set_lang
from .logger_config import setup_logger
from .urls import compose_playlist_url, split_ids
from .youtube_api import fetch_metadata

# Initialization
console = Console()
logger = logging.getLogger(__name__)

# Create the Typer app object
app = typer.Typer(
    name="oxysound",
    help=get_message("app_help"),
    add_completion=False,
)

# Lets `--ids a b c` work: click only binds one value per option occurrence,
# the remaining values end up in ctx.args.
IDS_CONTEXT = {"allow_extra_args": True}
IDS_OPTIONS = ("--ids", "-i")
RAW_ARGS_KEY = "oxysound.raw_args"


class IdsCommand(TyperCommand):
    """Keeps the command line as typed, so the NAME position can be checked."""

    def parse_args(self, ctx, args):
        ctx.meta[RAW_ARGS_KEY] = list(args)
        return super().parse_args(ctx, args)


# --- State and Callbacks ---

state = {"lang": get_default_lang(), "config_path": None}
set_lang(state["lang"])


@app.callback()
def main_callback(
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        help=get_message("help_lang"),
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=get_message("help_verbose")
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        envvar="OXYSOUND_CONFIG",
        help=get_message("help_config"),
        dir_okay=False,
        show_default=False,
    ),
):
    """Compose YouTube playlist URLs and keep playlists on disk."""
    setup_logger(verbose)
    state["config_path"] = config
    if lang:
        set_lang(lang)
        state["lang"] = lang
        logger.info(f"Language explicitly set to: {lang}")


@dataclass(frozen=True)
class Session:
    """Configuration and playlist store shared by the management commands."""
    config: Config
    store: JsonPlaylistStore


# --- Helper Functions ---


def _handle_error(error: AppError) -> None:
    """Displays a formatted error message and exits the application."""
    console.print(
        f"[bold red]{get_message('error_prefix')}[/bold red] {escape(error.message)}",
        soft_wrap=True,
    )
    raise typer.Exit(code=1)


def _warn(message: str) -> None:
    console.print(
        f"[bold yellow]{get_message('warning_prefix')}[/bold yellow] {escape(message)}",
        soft_wrap=True,
    )


def _config_path() -> Path:
    return state["config_path"] or get_config_path()


def _config_source() -> ConfigSource:
    if os.environ.get(API_KEY_VAR):
        return EnvironmentConfigSource(default_save_directory=DEFAULT_SAVE_DIRECTORY)
    return ConsoleConfigSource(console, default_save_directory=DEFAULT_SAVE_DIRECTORY)


def _report_config_written(path: Path) -> None:
    console.print(
        f"[bold green]✓ {get_message('config_written', path=path)}[/bold green]",
        soft_wrap=True,
    )


def _open_session(config: Config) -> Either[AppError, Session]:
    return prepare_save_directory(config).map(
        lambda directory: Session(config=config, store=JsonPlaylistStore(directory))
    )


def _load_session() -> Either[AppError, Session]:
    """Loads the configuration (running first-run setup if needed)."""
    return ensure_config(
        _config_source(), _config_path(), _report_config_written
    ).bind(_open_session)


def _is_ids_option(arg: str) -> bool:
    return arg in IDS_OPTIONS or arg.startswith("--ids=") or (
        arg.startswith("-i") and not arg.startswith("--")
    )


def _check_name_first(ctx: typer.Context, name: str) -> None:
    """
    Fails when NAME was typed after --ids: click would have taken the last
    ID as the name.
    """
    raw_args = ctx.meta.get(RAW_ARGS_KEY, [])
    first_ids = next((i for i, arg in enumerate(raw_args) if _is_ids_option(arg)), None)
    if first_ids is not None and name not in raw_args[:first_ids]:
        _handle_error(AppError(get_message("name_after_ids", name=name)))


def _collect_ids(
    ctx: typer.Context, ids: Optional[List[str]], name: Optional[str] = None
) -> List[str]:
    if name is not None:
        _check_name_first(ctx, name)
    if ctx.args and not ids:
        _handle_error(
            AppError(get_message("unexpected_arguments", args=" ".join(ctx.args)))
        )
    return split_ids(list(ids or []) + list(ctx.args))


def _require_ids(ids: List[str]) -> Either[AppError, List[str]]:
    if not ids:
        return Left(EmptyInputError("At least one video ID is required."))
    return Right(ids)


def _enrich(playlist: Playlist, config: Config) -> Either[AppError, Playlist]:
    """Fetches metadata for the videos of the playlist that have none yet."""
    ids = playlist.unfetched_ids
    if not ids:
        return Right(playlist)

    console.print(f"📡 {get_message('fetching_metadata', count=len(ids))}")

    def apply(result) -> Playlist:
        for video_id in result.missing:
            _warn(get_message("video_not_found", video_id=video_id))
        return playlist.with_metadata(result.videos)

    return fetch_metadata(ids, config.api_key).map(apply)


def _show(playlist: Playlist) -> None:
    console.print(f"[bold]{escape(playlist.title)}[/bold]", soft_wrap=True)
    console.print("----------")
    console.print(get_message("playlist_length", count=playlist.num_items))

    if playlist.videos:
        table = Table(show_header=True, header_style="bold")
        table.add_column(get_message("column_title"))
        table.add_column(get_message("column_id"), no_wrap=True)
        table.add_column(get_message("column_published"), no_wrap=True)
        table.add_column(get_message("column_channel"))
        for video in playlist.videos:
            table.add_row(
                video.title or get_message("untitled_video"),
                video.id,
                video.published_date,
                video.channel,
            )
        console.print(table)

    console.print(get_message("playlist_url", url=playlist.url), soft_wrap=True)


def _save_and_show(session: Session, playlist: Playlist) -> Either[AppError, Path]:
    def on_saved(path: Path) -> Path:
        _show(playlist)
        console.print(
            f"[bold green]✓ {get_message('playlist_saved', name=playlist.title, path=path)}[/bold green]",
            soft_wrap=True,
        )
        return path

    return session.store.save(playlist).map(on_saved)


def _load_or_new(session: Session, name: str) -> Either[AppError, Playlist]:
    loaded = session.store.load(name)
    if loaded.is_left() and isinstance(loaded.monoid[0], NotFoundError):
        console.print(f"✨ {get_message('playlist_created_new', name=name)}")
        return session.store.path_for(name).map(lambda _: Playlist(title=name))
    return loaded


def _finish(result: Either[AppError, object]) -> None:
    result.either(_handle_error, lambda _: None)


# --- CLI Commands ---


@app.command(name="print", cls=IdsCommand, context_settings=IDS_CONTEXT)
def print_playlist(
    ctx: typer.Context,
    ids: Optional[List[str]] = typer.Option(
        None, "--ids", "-i", help=get_message("help_ids"), show_default=False
    ),
    playlist: Optional[str] = typer.Option(
        None, "--playlist", "-p", help=get_message("help_print_playlist"), show_default=False
    ),
):
    """Prints the playlist URL for video IDs or a saved playlist."""
    video_ids = _collect_ids(ctx, ids)
    logger.info(f"Command 'print' initiated with {len(video_ids)} ID(s).")

    if video_ids and playlist:
        _handle_error(AppError(get_message("ids_and_playlist_exclusive")))

    if playlist:
        result = pipe(
            _load_session(),
            lambda e: e.bind(lambda session: session.store.load(playlist)),
            lambda e: e.bind(lambda loaded: compose_playlist_url(loaded.ids)),
        )
    else:
        result = compose_playlist_url(video_ids)

    result.either(_handle_error, typer.echo)


@app.command(name="create", cls=IdsCommand, context_settings=IDS_CONTEXT)
def create_playlist(
    ctx: typer.Context,
    name: str = typer.Argument(..., help=get_message("help_playlist_name")),
    ids: Optional[List[str]] = typer.Option(
        None, "--ids", "-i", help=get_message("help_ids"), show_default=False
    ),
):
    """Creates a playlist, replacing any saved playlist with the same name."""
    video_ids = _collect_ids(ctx, ids, name)
    logger.info(f"Command 'create' initiated for playlist: {name}")

    def create_flow(session: Session) -> Either[AppError, Path]:
        if session.store.exists(name):
            _warn(get_message("playlist_overwrite", name=name))
        return pipe(
            session.store.path_for(name),
            lambda e: e.map(lambda _: Playlist(title=name).add_videos(video_ids)),
            lambda e: e.bind(lambda new: _enrich(new, session.config)),
            lambda e: e.bind(lambda enriched: _save_and_show(session, enriched)),
        )

    _finish(_load_session().bind(create_flow))


@app.command(name="add", cls=IdsCommand, context_settings=IDS_CONTEXT)
def add_videos(
    ctx: typer.Context,
    name: str = typer.Argument(..., help=get_message("help_playlist_name")),
    ids: Optional[List[str]] = typer.Option(
        None, "--ids", "-i", help=get_message("help_ids"), show_default=False
    ),
):
    """Adds videos to a playlist, creating it if needed."""
    video_ids = _collect_ids(ctx, ids, name)
    logger.info(f"Command 'add' initiated for playlist: {name}")

    def add_flow(session: Session) -> Either[AppError, Path]:
        return pipe(
            _load_or_new(session, name),
            lambda e: e.map(lambda current: current.add_videos(video_ids)),
            lambda e: e.bind(lambda updated: _enrich(updated, session.config)),
            lambda e: e.bind(lambda enriched: _save_and_show(session, enriched)),
        )

    _finish(_require_ids(video_ids).bind(lambda _: _load_session()).bind(add_flow))


@app.command(name="remove", cls=IdsCommand, context_settings=IDS_CONTEXT)
def remove_videos(
    ctx: typer.Context,
    name: str = typer.Argument(..., help=get_message("help_playlist_name")),
    ids: Optional[List[str]] = typer.Option(
        None, "--ids", "-i", help=get_message("help_ids"), show_default=False
    ),
):
    """Removes videos from a saved playlist."""
    video_ids = _collect_ids(ctx, ids, name)
    logger.info(f"Command 'remove' initiated for playlist: {name}")

    def remove_flow(session: Session) -> Either[AppError, Path]:
        return pipe(
            session.store.load(name),
            lambda e: e.map(lambda current: current.remove_videos(video_ids)),
            lambda e: e.bind(lambda updated: _save_and_show(session, updated)),
        )

    _finish(_require_ids(video_ids).bind(lambda _: _load_session()).bind(remove_flow))


@app.command(name="show")
def show_playlist(
    name: str = typer.Argument(..., help=get_message("help_playlist_name")),
):
    """Displays a saved playlist."""
    logger.info(f"Command 'show' initiated for playlist: {name}")
    pipe(
        _load_session(),
        lambda e: e.bind(lambda session: session.store.load(name)),
        lambda e: e.map(_show),
        _finish,
    )


@app.command(name="list")
def list_playlists():
    """Lists the saved playlists."""
    logger.info("Command 'list' initiated.")

    def list_flow(session: Session) -> Either[AppError, List[str]]:
        def on_listed(names: List[str]) -> List[str]:
            console.print(
                get_message("available_playlists", path=session.store.directory),
                soft_wrap=True,
            )
            if not names:
                console.print(f"  {get_message('no_playlists')}")
            for playlist_name in names:
                console.print(f"- {escape(playlist_name)}", soft_wrap=True)
            return names

        return session.store.list().map(on_listed)

    _finish(_load_session().bind(list_flow))


@app.command(name="setup")
def setup_config():
    """Asks again for the API key and the save directory."""
    logger.info("Command 'setup' initiated.")
    pipe(
        run_setup(_config_source(), _config_path(), _report_config_written),
        lambda e: e.bind(prepare_save_directory),
        _finish,
    )


if __name__ == "__main__":
    app()
