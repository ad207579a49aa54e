"""Main CLI entry point for Password Maker.

Derives site passwords and manages profiles from the command line.
"""

import sys

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from password_maker import __version__
from password_maker.config import configure_logging
from password_maker.context import AppContext
from password_maker.engine.leet import MAX_LEET_LEVEL, MIN_LEET_LEVEL, LeetMode
from password_maker.engine.validation_engine import ProfileValidator, ValidationResult
from password_maker.errors import SettingsError, SettingsErrorKind
from password_maker.hashing.backends import HashBackendRegistry
from password_maker.profiles.base import Profile, ProfileBuilder

console = Console()
err_console = Console(stderr=True)

_EDITABLE_FIELDS = list(Profile.model_fields)


@click.group()
@click.version_option(version=__version__, prog_name="pwm")
@click.option(
    "--settings",
    "-s",
    type=click.Path(dir_okay=False),
    envvar="PASSWORDMAKER_SETTINGS",
    help="Settings file (default: $XDG_CONFIG_HOME/passwordmaker.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, settings: str | None, verbose: bool) -> None:
    """Password Maker - derive site passwords from one master secret.

    Nothing is stored except profiles; the same master secret and URL always
    give the same password.
    """
    configure_logging(verbose)

    app = AppContext(settings_path=settings)
    app.load_settings()

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["app"] = app


@cli.command()
@click.argument("url")
@click.option("--master", "-m", prompt="Master password", hide_input=True, help="Master password")
@click.option("--profile", "-p", "profile_name", help="Profile to use instead of the active one")
@click.option("--show-used-text", is_flag=True, help="Also print the text that is hashed")
@click.pass_context
def generate(
    ctx: click.Context,
    url: str,
    master: str,
    profile_name: str | None,
    show_used_text: bool,
) -> None:
    """Generate the password for URL.

    URL is the site address, e.g. https://www.example.com/login.
    """
    app: AppContext = ctx.obj["app"]

    if profile_name is not None:
        _select_by_name(app, profile_name)

    if show_used_text:
        err_console.print(f"[dim]Used text:[/dim] {escape(app.used_text(url))}")

    result = app.generate(url, master)
    if not result.ok:
        console.print(f"[red]Error: {escape(result.text)}[/red]")
        sys.exit(1)

    click.echo(result.text)


@cli.command()
@click.option("--master", "-m", prompt="Master password", hide_input=True, help="Master password")
@click.pass_context
def verify(ctx: click.Context, master: str) -> None:
    """Print a short checksum of the master password.

    The checksum does not depend on any profile; compare it with the one
    you remember to catch typos.
    """
    app: AppContext = ctx.obj["app"]
    click.echo(app.verify(master))


@cli.command("used-text")
@click.argument("url")
@click.pass_context
def used_text(ctx: click.Context, url: str) -> None:
    """Show the text the active profile derives from URL."""
    app: AppContext = ctx.obj["app"]
    click.echo(app.used_text(url))


@cli.command()
def algorithms() -> None:
    """List hash algorithms and leet modes."""
    table = Table(title="Hash Algorithms")
    table.add_column("Name", style="cyan")
    table.add_column("Digest bytes", justify="right")
    table.add_column("Block bytes", justify="right")

    for backend in HashBackendRegistry():
        table.add_row(backend.name, str(backend.digest_size), str(backend.block_size))

    console.print(table)

    leet_table = Table(title="Leet Modes")
    leet_table.add_column("Mode", style="cyan")
    leet_table.add_column("Levels")
    for mode in LeetMode:
        levels = "-" if mode is LeetMode.NOT_AT_ALL else f"{MIN_LEET_LEVEL}-{MAX_LEET_LEVEL}"
        leet_table.add_row(mode.value, levels)

    console.print(leet_table)


@cli.group()
def profiles() -> None:
    """Manage profiles."""


@profiles.command("list")
@click.pass_context
def list_profiles(ctx: click.Context) -> None:
    """List profiles."""
    app: AppContext = ctx.obj["app"]
    store = app.snapshot()

    if not len(store):
        console.print("[yellow]No profiles defined[/yellow]")
        return

    table = Table(title="Profiles")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Algorithm", style="green")
    table.add_column("Length", justify="right")
    table.add_column("Leet")
    table.add_column("Active")

    for index, profile in enumerate(store):
        table.add_row(
            str(index),
            escape(profile.name),
            escape(profile.hash_algorithm),
            str(profile.password_length),
            profile.leet_mode if profile.leet_level is None else f"{profile.leet_mode} ({profile.leet_level})",
            "[green]*[/green]" if index == store.active_index else "",
        )

    console.print(table)


@profiles.command("show")
@click.pass_context
def show_profile(ctx: click.Context) -> None:
    """Show the active profile."""
    app: AppContext = ctx.obj["app"]
    index = app.get_active_index()
    profile = app.get_active_profile()

    lines = [f"[cyan]{field}:[/cyan] {escape(repr(value))}" for field, value in profile.model_dump(mode="json").items()]
    title = f"Profile {index}" if index is not None else "Default profile (no profile selected)"
    console.print(Panel.fit("\n".join(lines), title=title))


@profiles.command("add")
@click.argument("name")
@click.option("--algorithm", "-a", help="Hash algorithm")
@click.option("--length", "-l", type=int, help="Password length")
@click.option("--alphabet", help="Characters to use")
@click.option("--leet-mode", type=click.Choice(LeetMode.names(), case_sensitive=False), help="Leet mode")
@click.option("--leet-level", type=click.IntRange(MIN_LEET_LEVEL, MAX_LEET_LEVEL), help="Leet level")
@click.pass_context
def add_profile(
    ctx: click.Context,
    name: str,
    algorithm: str | None,
    length: int | None,
    alphabet: str | None,
    leet_mode: str | None,
    leet_level: int | None,
) -> None:
    """Add a profile named NAME and select it."""
    app: AppContext = ctx.obj["app"]

    builder = ProfileBuilder(name)
    if algorithm is not None:
        builder.hash_algorithm(algorithm)
    if length is not None:
        builder.length(length)
    if alphabet is not None:
        builder.alphabet(alphabet)
    if leet_mode is not None:
        builder.leet(LeetMode.from_name(leet_mode), leet_level)

    try:
        profile = builder.build()
    except ValidationError as e:
        console.print(f"[red]Invalid profile: {e.error_count()} error(s)[/red]")
        for error in e.errors():
            console.print(f"  {'.'.join(str(p) for p in error['loc'])}: {error['msg']}")
        sys.exit(1)

    app.add(name)
    app.set_active_profile(profile)
    _save(app)

    console.print(f"[green]Added profile {escape(repr(name))} at index {app.get_active_index()}[/green]")
    _print_validation_result(name, ProfileValidator().validate_profile(profile), quiet_when_valid=True)


@profiles.command("delete")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_profile(ctx: click.Context, yes: bool) -> None:
    """Delete the active profile."""
    app: AppContext = ctx.obj["app"]

    if app.get_active_index() is None:
        console.print("[yellow]No profile to delete[/yellow]")
        return

    name = app.get_active_profile().name
    if not yes:
        click.confirm(f"Delete profile {name!r}?", abort=True)

    app.delete()
    _save(app)
    console.print(f"[green]Deleted profile {escape(repr(name))}[/green]")


@profiles.command("select")
@click.argument("target")
@click.pass_context
def select_profile(ctx: click.Context, target: str) -> None:
    """Select a profile by index or name.

    Indexes past the end select the last profile.
    """
    app: AppContext = ctx.obj["app"]

    if target.lstrip("-").isdigit():
        app.set_active_index(int(target))
    else:
        _select_by_name(app, target)

    _save(app)
    index = app.get_active_index()
    if index is None:
        console.print("[yellow]No profiles defined[/yellow]")
    else:
        console.print(f"Active profile: [cyan]{escape(app.get_active_profile().name)}[/cyan] ({index})")


@profiles.command("set")
@click.argument("field", type=click.Choice(_EDITABLE_FIELDS))
@click.argument("value")
@click.pass_context
def set_field(ctx: click.Context, field: str, value: str) -> None:
    """Set FIELD of the active profile to VALUE.

    Booleans accept true/false, url_mode accepts components/all, and an
    empty leet_level clears it.
    """
    app: AppContext = ctx.obj["app"]

    if app.get_active_index() is None:
        error = SettingsError(SettingsErrorKind.NO_ACTIVE_PROFILE, "No profile is selected")
        console.print(f"[red]Error: {escape(error.message)}[/red]")
        sys.exit(1)

    data = app.get_active_profile().model_dump()
    data[field] = value
    try:
        profile = Profile.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {field}: {escape(e.errors()[0]['msg'])}[/red]")
        sys.exit(1)

    app.set_active_profile(profile)
    _save(app)
    console.print(f"[green]{field} = {escape(repr(getattr(profile, field)))}[/green]")


@profiles.command("check")
@click.pass_context
def check_profiles(ctx: click.Context) -> None:
    """Validate all profiles."""
    app: AppContext = ctx.obj["app"]
    store = app.snapshot()

    validator = ProfileValidator()
    failed = False
    for profile in store:
        result = validator.validate_profile(profile)
        _print_validation_result(profile.name, result)
        failed = failed or not result.valid

    names = store.list_names()
    for name in sorted({n for n in names if names.count(n) > 1}):
        console.print(f"[yellow]WARNING[/yellow]: Duplicate profile name: {name}")

    if failed:
        sys.exit(1)


def _select_by_name(app: AppContext, name: str) -> None:
    index = app.snapshot().find(name)
    if index is None:
        console.print(f"[red]Profile {escape(repr(name))} not found[/red]")
        sys.exit(1)
    app.set_active_index(index)


def _save(app: AppContext) -> None:
    error = app.save_settings()
    if error is not None:
        console.print(f"[yellow]Settings not saved: {escape(str(error))}[/yellow]")


def _print_validation_result(name: str, result: ValidationResult, quiet_when_valid: bool = False) -> None:
    """Print validation results."""
    if quiet_when_valid and not result.issues:
        return

    status = "[green]VALID[/green]" if result.valid else "[red]INVALID[/red]"
    console.print(f"\n{escape(name)}: {status}")

    for issue in result.issues:
        color = {
            "error": "red",
            "warning": "yellow",
            "info": "blue",
        }.get(issue.severity.value, "white")

        console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {escape(issue.message)}")
        if issue.path:
            console.print(f"    Path: {issue.path}")


if __name__ == "__main__":
    cli()
