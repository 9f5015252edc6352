from __future__ import annotations

import json
from typing import Optional

import typer
import uvicorn

from refollow.analysis.gate import resolve_creators
from refollow.config import Settings, get_settings
from refollow.errors import RefollowError, ValidationError
from refollow.logging import configure_logging
from refollow.service import RefollowService, parse_fid
from refollow.upstream.client import NeynarClient
from refollow.upstream.profiles import ProfileHydrator

app = typer.Typer(add_completion=False)


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except RefollowError as exc:
        typer.secho(f"Failed to load settings: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to PORT)."),
    reload: bool = typer.Option(False, "--reload/--no-reload", help="Restart on code changes."),
) -> None:
    """Run the Refollow HTTP API."""
    settings = load_settings_or_exit()
    configure_logging(settings.log_level)
    uvicorn.run(
        "refollow.api:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@app.command()
def report(
    fid: str = typer.Argument(..., help="Farcaster FID to analyse."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response payload."),
) -> None:
    """Fetch following/followers once and list accounts that do not follow back."""
    settings = load_settings_or_exit()
    configure_logging(settings.log_level)
    try:
        subject = parse_fid(fid)
    except ValidationError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=2)

    with NeynarClient(settings=settings) as client:
        service = RefollowService.from_client(client, settings=settings)
        try:
            result = service.build(subject)
        except RefollowError as exc:
            typer.secho(f"Report failed: {exc}", err=True, fg=typer.colors.RED)
            raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
        return

    typer.secho(
        f"FID {subject}: following {len(result.following)}, followers {len(result.followers)}",
        fg=typer.colors.GREEN,
    )
    if not result.not_following_back:
        typer.secho("Everyone you follow follows you back.", fg=typer.colors.BLUE)
        return

    typer.secho(f"{len(result.not_following_back)} accounts do not follow back:", fg=typer.colors.YELLOW)
    for profile in result.not_following_back:
        name = f"@{profile.username}" if profile.username else str(profile.fid)
        label = f" ({profile.display_name})" if profile.display_name else ""
        typer.echo(f"{name}{label}")


@app.command(name="resolve-creators")
def resolve_creators_command(
    handles: Optional[str] = typer.Option(None, help="Comma-separated handles (defaults to REQUIRED_CREATORS)."),
) -> None:
    """Resolve the creator handles the gate requires."""
    settings = load_settings_or_exit()
    configure_logging(settings.log_level)
    wanted = [h.strip().lstrip("@") for h in handles.split(",") if h.strip()] if handles else settings.required_creators

    with NeynarClient(settings=settings) as client:
        resolution = resolve_creators(ProfileHydrator(client), wanted)

    if not resolution.ok:
        typer.secho(f"Resolution failed: {resolution.error}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    for creator in resolution.requirement.creators:
        typer.echo(f"@{creator.handle} -> {creator.fid}")
    missing = set(wanted) - set(resolution.requirement.handles)
    if missing:
        typer.secho(f"Unresolved: {', '.join(sorted(missing))}", err=True, fg=typer.colors.YELLOW)


def main() -> None:
    app(prog_name="refollow")


if __name__ == "__main__":
    main()
