# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""sharedcsrf CLI — secret generation and cross-implementation conformance checks."""

from __future__ import annotations

import sys

import click
from rich.table import Table

from sharedcsrf import __version__
from sharedcsrf.cli.console import console
from sharedcsrf.security.checksum import compute_checksum, verify_checksum
from sharedcsrf.security.cookies import (
    CHECKSUM_COOKIE_NAME,
    CSRF_FORM_FIELD,
    CSRF_HEADER_NAME,
    TOKEN_COOKIE_NAME,
)
from sharedcsrf.security.secret import SharedSecretKey, generate_secret_hex

_secret_option = click.option(
    "--secret",
    envvar="SHAREDCSRF_CSRF_SECRET",
    required=True,
    help="Shared secret text, used as the HMAC key exactly as given.",
)


@click.group()
@click.version_option(package_name="sharedcsrf")
def cli() -> None:
    """sharedcsrf — shared-secret CSRF protocol tooling."""


@cli.command("secret")
def secret_command() -> None:
    """Print a new 64-character hex shared secret."""
    click.echo(generate_secret_hex())


@cli.command("checksum")
@click.argument("token")
@_secret_option
def checksum_command(token: str, secret: str) -> None:
    """Print the checksum of TOKEN under the shared secret."""
    click.echo(compute_checksum(token, SharedSecretKey.from_text(secret)))


@cli.command("verify")
@click.argument("token")
@click.argument("checksum")
@_secret_option
def verify_command(token: str, checksum: str, secret: str) -> None:
    """Exit 0 if CHECKSUM matches TOKEN under the shared secret, 1 otherwise."""
    if verify_checksum(token, checksum, SharedSecretKey.from_text(secret)):
        console.print("[success]valid[/success]")
        return
    console.print("[error]invalid[/error]")
    sys.exit(1)


@cli.command("info")
def info_command() -> None:
    """Display the protocol constants every cooperating backend must share."""
    console.print(f"\n[info]sharedcsrf[/info] [dim]v{__version__}[/dim]\n")

    table = Table(title="Protocol", show_header=False, border_style="dim")
    table.add_column("Key", style="info")
    table.add_column("Value")
    table.add_row("Token cookie", TOKEN_COOKIE_NAME)
    table.add_row("Checksum cookie", CHECKSUM_COOKIE_NAME)
    table.add_row("Header", CSRF_HEADER_NAME)
    table.add_row("Form field", CSRF_FORM_FIELD)
    table.add_row("Checksum", "base64url(HMAC-SHA256(secret text, token string)), unpadded")
    table.add_row("Key convention", "UTF-8 bytes of the secret as delivered (not hex-decoded)")
    console.print(table)
