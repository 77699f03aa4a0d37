#!/usr/bin/env python3
"""
rest-do CLI

Inspect an endpoint map and call its endpoints from the command line.

Usage:
    rest-do endpoints MAP_FILE            - List the endpoints of a map
    rest-do call MAP_FILE ENDPOINT [ARGS] - Call one endpoint and print the response
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from .client import ApiClient, create_client
from .config import configure_from_env
from .errors import ApiError
from .loader import load_endpoint_map


# Color codes for terminal output
class Colors:
    RESET = "\x1b[0m"
    BRIGHT = "\x1b[1m"
    DIM = "\x1b[2m"
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    CYAN = "\x1b[36m"


def print_error(message: str, error: Exception | None = None) -> None:
    """Print error message."""
    click.echo(f"{Colors.RED}Error:{Colors.RESET} {message}", err=True)
    if error and str(error):
        click.echo(str(error), err=True)


def run_async(coro: Any) -> Any:
    """Run an async function synchronously."""
    return asyncio.run(coro)


def parse_value(raw: str) -> Any:
    """Parse a command-line value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_param(raw: str) -> tuple[str, Any]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected name=value, got {raw!r}", param_hint="--param")
    return name, parse_value(value)


@click.group()
@click.option("--debug", is_flag=True, help="Show debug information")
def cli(debug: bool) -> None:
    """
    rest-do CLI - Call HTTP API endpoints described by an endpoint map.

    Endpoint maps are JSON or YAML files mapping each endpoint path to its
    methods, argument names and required fields.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    configure_from_env()


@cli.command()
@click.argument("map_file", type=click.Path(exists=True, dir_okay=False))
def endpoints(map_file: str) -> None:
    """List the endpoints of MAP_FILE."""
    try:
        registry = create_client(load_endpoint_map(map_file)).registry
    except ApiError as e:
        print_error("Could not load endpoint map", e)
        sys.exit(1)

    for path in registry.paths():
        config = registry.get(path)
        if config is None:
            continue
        methods = ",".join(sorted(config.methods)) or "ANY"
        args = ", ".join(config.arg_names)
        line = f"{Colors.BRIGHT}{path}{Colors.RESET} [{methods}]"
        if args:
            line += f" {Colors.DIM}({args}){Colors.RESET}"
        click.echo(line)


@cli.command()
@click.argument("map_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("endpoint")
@click.argument("args", nargs=-1)
@click.option("-p", "--param", "params", multiple=True, help="Named parameter as name=value")
@click.option("--base-url", help="Base URL endpoint paths are resolved against")
@click.option("--api-key", help="API key sent as a bearer token")
@click.option("--timeout", type=float, help="Request timeout in seconds")
def call(
    map_file: str,
    endpoint: str,
    args: tuple[str, ...],
    params: tuple[str, ...],
    base_url: str | None,
    api_key: str | None,
    timeout: float | None,
) -> None:
    """Call ENDPOINT from MAP_FILE with positional ARGS and/or --param values."""
    positional = tuple(parse_value(arg) for arg in args)
    named = dict(parse_param(param) for param in params)
    try:
        client = create_client(
            load_endpoint_map(map_file),
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
        )
    except ApiError as e:
        print_error("Could not load endpoint map", e)
        sys.exit(1)

    exit_code = run_async(call_command(client, endpoint, positional, named))
    if exit_code:
        sys.exit(exit_code)


async def call_command(
    client: ApiClient,
    endpoint: str,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> int:
    """Call command - dispatch one endpoint call and print the body."""
    async with client:
        try:
            response = await client.call(endpoint, *args, **kwargs)
        except ApiError as e:
            print_error(f"Call to {endpoint} failed", e)
            return 1

    try:
        body = response.json()
    except ValueError:
        click.echo(response.text)
    else:
        click.echo(json.dumps(body, indent=2))
    return 0


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
