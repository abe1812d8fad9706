"""Click CLI: inspect, render and replay event files against the webhook."""

from __future__ import annotations

import json
from pathlib import Path

import click

from keyhook.config import ListenerConfig, get_settings, validate_settings_for_env
from keyhook.directory import InMemoryUserDirectory, UserLookup, no_lookup
from keyhook.errors import ConfigError, MalformedRepresentationError
from keyhook.events.describe import describe
from keyhook.events.models import RawAdminEvent, RawEvent
from keyhook.events.normalizer import normalize_admin_event, normalize_event, to_json
from keyhook.events.parsing import load_events
from keyhook.listener import WebhookEventListenerFactory
from keyhook.logging import configure_logging

_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _read_events(path: Path) -> list[RawEvent | RawAdminEvent]:
    try:
        return load_events(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path}: invalid JSON ({exc})") from exc


def _lookup(users: Path | None) -> UserLookup:
    if users is None:
        return no_lookup
    try:
        return InMemoryUserDirectory.from_json(users.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{users}: invalid JSON ({exc})") from exc


@click.group()
def cli() -> None:
    """Keyhook event webhook bridge CLI."""


@cli.command("describe")
@click.argument("events_file", type=_FILE)
def describe_cmd(events_file: Path) -> None:
    """Print the diagnostic line for each event in EVENTS_FILE."""
    for event in _read_events(events_file):
        click.echo(describe(event))


@cli.command()
@click.argument("events_file", type=_FILE)
@click.option("--users", type=_FILE, default=None, help="JSON file of user profiles.")
def render(events_file: Path, users: Path | None) -> None:
    """Print the webhook document for each event in EVENTS_FILE."""
    config = ListenerConfig.from_settings(get_settings())
    lookup = _lookup(users)
    for event in _read_events(events_file):
        if isinstance(event, RawAdminEvent):
            try:
                document = normalize_admin_event(event)
            except MalformedRepresentationError as exc:
                click.echo(f"error: {exc}", err=True)
                continue
        else:
            document = normalize_event(
                event,
                lookup,
                show_groups=config.show_groups,
                show_attributes=config.show_attributes,
            )
        click.echo(to_json(document))


@cli.command()
@click.argument("events_file", type=_FILE)
@click.option("--users", type=_FILE, default=None, help="JSON file of user profiles.")
def send(events_file: Path, users: Path | None) -> None:
    """Dispatch every event in EVENTS_FILE through the configured listener."""
    settings = get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)
    factory = WebhookEventListenerFactory()
    try:
        factory.init(settings)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    listener = factory.create(_lookup(users))
    delivered = dropped = 0
    try:
        for event in _read_events(events_file):
            if isinstance(event, RawAdminEvent):
                ok = listener.on_admin_event(event)
            else:
                ok = listener.on_event(event)
            if ok:
                delivered += 1
            else:
                dropped += 1
    finally:
        listener.close()
    click.echo(f"delivered: {delivered}")
    click.echo(f"dropped: {dropped}")


@cli.command("check-config")
def check_config() -> None:
    """Validate environment settings and print the effective configuration."""
    settings = get_settings()
    try:
        validate_settings_for_env(settings)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    config = ListenerConfig.from_settings(settings)
    allow = sorted(config.allow_list) if config.allow_list is not None else "(all)"
    click.echo(f"base url: {config.base_url or '(unset)'}")
    click.echo(f"api key: {'set' if config.api_key else '(empty)'}")
    click.echo(f"api key header: {config.api_key_header}")
    click.echo(f"allow-list: {allow}")
    click.echo(f"show groups: {config.show_groups}")
    click.echo(f"show attributes: {config.show_attributes}")


if __name__ == "__main__":
    cli()
