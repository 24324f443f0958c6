"""Click CLI for running the webhook server and checking CRC tokens."""

from __future__ import annotations

import json
import logging

import click
import uvicorn
from pydantic import ValidationError

from responder.config import Settings
from responder.webhook.crc import sign_challenge


def _load_settings(env_file: str | None) -> Settings:
    try:
        return Settings.from_env(env_file=env_file)
    except ValidationError as exc:
        fields = ", ".join(str(e["loc"][0]) for e in exc.errors() if e["loc"])
        raise click.ClickException(f"Invalid configuration: {fields}") from exc


@click.group()
@click.option("--env-file", default=None, help="Path to a .env file to load.")
@click.pass_context
def cli(ctx: click.Context, env_file: str | None) -> None:
    """Mention responder webhook service."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind.")
@click.option("--port", type=int, default=None, help="Port to listen on (default: $PORT).")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int | None) -> None:
    """Run the webhook server."""
    from responder.server.app import create_app

    settings = _load_settings(ctx.obj["env_file"])
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host,
        port=port or settings.port,
        timeout_keep_alive=int(settings.http_timeout),
        log_level=settings.log_level.lower(),
    )


@cli.command("crc-token")
@click.argument("challenge")
@click.pass_context
def crc_token(ctx: click.Context, challenge: str) -> None:
    """Print the handshake response for CHALLENGE."""
    settings = _load_settings(ctx.obj["env_file"])
    token = sign_challenge(challenge, settings.crc_secret)
    click.echo(json.dumps({"response_token": token}))
