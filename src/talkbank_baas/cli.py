"""tbbaas CLI - sign and send partner API requests."""

import asyncio
import json
import sys
from collections.abc import Callable, Coroutine
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, ParamSpec, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from talkbank_baas.client import BaasClient
from talkbank_baas.common.errors import BaasError, ConfigurationError, RequestFailed
from talkbank_baas.common.logging import setup_logging
from talkbank_baas.common.settings import Settings

console = Console()

P = ParamSpec("P")
R = TypeVar("R")


def async_command(f: Callable[P, Coroutine[Any, Any, R]]) -> Callable[P, R]:
    """Decorator to run async commands."""

    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def _parse_query(items: tuple[str, ...]) -> dict[str, str]:
    query: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint="--query")
        query[key] = value
    return query


def _parse_body(raw: str | None) -> dict[str, Any] | None:
    if not raw:
        return None
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--json") from e
    if not isinstance(body, dict):
        raise click.BadParameter("body must be a JSON object", param_hint="--json")
    return body


def _parse_date(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return parsedate_to_datetime(raw)
    except (TypeError, ValueError) as e:
        raise click.BadParameter(f"not an RFC 7231 date: {raw!r}", param_hint="--date") from e


def _print_raw(text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _print_result(result: Any) -> None:
    if isinstance(result, (dict, list)):
        console.print_json(data=result)
    elif isinstance(result, bytes):
        console.print(f"<{len(result)} bytes>", markup=False)
    else:
        _print_raw(str(result))


def _client(ctx: click.Context) -> BaasClient:
    try:
        return BaasClient.from_settings(ctx.obj["settings"])
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)


async def _execute(client: BaasClient, call: Callable[[], Coroutine[Any, Any, Any]]) -> None:
    async with client:
        try:
            result = await call()
        except RequestFailed as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            if e.status_code is not None:
                console.print(f"  status: {e.status_code}")
            if e.body:
                _print_raw(e.body)
            sys.exit(1)
        except BaasError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            sys.exit(1)
    _print_result(result)


@click.group()
@click.option("--base-url", default=None, help="API base URL (TBBAAS_BASE_URL)")
@click.option("--partner-id", default=None, help="Partner id (TBBAAS_PARTNER_ID)")
@click.option("--token", default=None, help="Shared secret (TBBAAS_TOKEN)")
@click.option("--insecure", is_flag=True, help="Disable TLS verification (testing only)")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: str | None,
    partner_id: str | None,
    token: str | None,
    insecure: bool,
    verbose: bool,
) -> None:
    """tbbaas - signed partner API client."""
    overrides: dict[str, Any] = {}
    if base_url:
        overrides["base_url"] = base_url
    if partner_id:
        overrides["partner_id"] = partner_id
    if token:
        overrides["token"] = token
    if insecure:
        overrides["tls_insecure"] = True
    if verbose:
        overrides["log_level"] = "DEBUG"

    settings = Settings(**overrides)
    setup_logging(settings.log_level, json_output=settings.log_json)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command("sign")
@click.argument("method")
@click.argument("path")
@click.option("--query", "-q", multiple=True, help="Query parameter as key=value")
@click.option("--json", "body", help="JSON object body")
@click.option("--date", help="Sign at this RFC 7231 date instead of now")
@click.pass_context
def sign_cmd(
    ctx: click.Context,
    method: str,
    path: str,
    query: tuple[str, ...],
    body: str | None,
    date: str | None,
) -> None:
    """Print the canonical string and headers for a request, without sending it."""
    client = _client(ctx)
    signed = client.sign(method, path, _parse_query(query), _parse_body(body), _parse_date(date))

    console.print("[bold]Canonical string[/bold]")
    _print_raw(signed.canonical.to_string())
    console.print()
    console.print("[bold]Headers[/bold]")
    for name, value in signed.headers.items():
        _print_raw(f"{name}: {value}")
    console.print()
    console.print(f"[bold]URL[/bold] {escape(signed.url)}", highlight=False, soft_wrap=True)


@cli.command("call")
@click.argument("method")
@click.argument("path")
@click.option("--query", "-q", multiple=True, help="Query parameter as key=value")
@click.option("--json", "body", help="JSON object body")
@click.pass_context
@async_command
async def call_cmd(
    ctx: click.Context,
    method: str,
    path: str,
    query: tuple[str, ...],
    body: str | None,
) -> None:
    """Send a signed request and print the decoded response."""
    client = _client(ctx)
    params = _parse_query(query)
    payload = _parse_body(body)
    await _execute(client, lambda: client.request(method, path, params, payload))


@cli.command("balance")
@click.pass_context
@async_command
async def balance_cmd(ctx: click.Context) -> None:
    """Show account balance."""
    client = _client(ctx)
    await _execute(client, client.account_balance)


def main() -> None:
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
