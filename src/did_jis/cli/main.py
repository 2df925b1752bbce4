"""CLI entry point for did-jis.

Invoked as::

    did-jis [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m did_jis.cli.main

Commands
--------
version           Show version information
keygen            Generate a new identity secret
key               Show the public key of an identity
create            Build did:jis:<ID>
from-key          Derive the key-based DID of an identity
parse             Split a DID into method and id
validate          Check whether a string is a valid did:jis DID
document          Create a signed DID document
sign              Sign a message
verify            Verify a message signature
verify-document   Verify a DID document's proof
demo              Walk through every engine operation

Key-bound commands read the secret from ``--secret`` or the
``DID_JIS_SECRET_KEY`` environment variable.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from did_jis.config import get_settings

console = Console()
logger = logging.getLogger(__name__)

_secret_option = click.option(
    "--secret",
    envvar="DID_JIS_SECRET_KEY",
    default=None,
    help="64-character hex secret key (env: DID_JIS_SECRET_KEY).",
)


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="did-jis")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (env: DID_JIS_LOG_LEVEL).",
)
def cli(log_level: str | None) -> None:
    """did:jis decentralized identifiers: keys, DIDs, documents, signatures"""
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("did_jis").setLevel(level)


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from did_jis.bindings import did_version

    console.print(f"[bold]did-jis[/bold] v{did_version()}")


# ------------------------------------------------------------------
# Keys
# ------------------------------------------------------------------


@cli.command(name="keygen")
def keygen_command() -> None:
    """Generate a fresh identity and print its secret key.

    Store the secret safely; it is the identity.
    """
    from did_jis.engine import DidEngine

    with DidEngine() as engine:
        click.echo(f"secret:     {engine.export_secret()}")
        click.echo(f"public:     {engine.public_key_hex()}")
        click.echo(f"multibase:  {engine.public_key_multibase()}")
        click.echo(f"did:        {engine.create_from_key()}")


@cli.command(name="key")
@_secret_option
def key_command(secret: str | None) -> None:
    """Show the public key encodings of an identity."""
    with _load_engine(secret) as engine:
        click.echo(f"public:     {engine.public_key_hex()}")
        click.echo(f"multibase:  {engine.public_key_multibase()}")
        click.echo(f"did:        {engine.create_from_key()}")


# ------------------------------------------------------------------
# DIDs
# ------------------------------------------------------------------


@cli.command(name="create")
@click.argument("identifier")
def create_command(identifier: str) -> None:
    """Build the DID did:jis:IDENTIFIER."""
    from did_jis.did.grammar import create_did
    from did_jis.errors import EmptyIdentifierError

    try:
        click.echo(create_did(identifier))
    except EmptyIdentifierError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


@cli.command(name="from-key")
@_secret_option
def from_key_command(secret: str | None) -> None:
    """Derive the key-based DID of an identity."""
    with _load_engine(secret) as engine:
        click.echo(engine.create_from_key())


@cli.command(name="parse")
@click.argument("did")
def parse_command(did: str) -> None:
    """Split DID into its method and id."""
    from did_jis.did.grammar import parse_did
    from did_jis.errors import MalformedDidError

    try:
        parsed = parse_did(did)
    except MalformedDidError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    click.echo(f"method:  {parsed.method}")
    click.echo(f"id:      {parsed.id}")


@cli.command(name="validate")
@click.argument("did")
def validate_command(did: str) -> None:
    """Check whether DID is a valid did:jis identifier."""
    from did_jis.did.grammar import is_valid_did

    if is_valid_did(did):
        console.print(f"[green]VALID[/green]    {did}")
    else:
        console.print(f"[red]INVALID[/red]  {did}")
        sys.exit(1)


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------


@cli.command(name="document")
@click.argument("did")
@_secret_option
@click.option(
    "--output",
    type=click.Path(),
    default=None,
    help="Write the document JSON to this file path.",
)
def document_command(did: str, secret: str | None, output: str | None) -> None:
    """Create a signed DID document for DID."""
    from did_jis.errors import InvalidInputError

    with _load_engine(secret) as engine:
        try:
            document_json = engine.create_document(did)
        except InvalidInputError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            sys.exit(1)

    if output:
        Path(output).write_text(document_json, encoding="utf-8")
        console.print(f"[green]Document written to[/green] {output}")
    else:
        click.echo(document_json)


@cli.command(name="verify-document")
@click.argument("document_file", type=click.Path(exists=True))
def verify_document_command(document_file: str) -> None:
    """Verify the proof of the DID document in DOCUMENT_FILE."""
    from did_jis.did.verification import DocumentVerifier

    result = DocumentVerifier().verify(Path(document_file).read_text(encoding="utf-8"))

    for item in result.checks_passed:
        console.print(f"  [green]PASS[/green]  {item}")
    for item in result.checks_failed:
        console.print(f"  [red]FAIL[/red]  {item}")

    if not result.valid:
        sys.exit(1)
    console.print(f"\n[green]Document {result.details.get('did')} verified successfully.[/green]")


# ------------------------------------------------------------------
# Signing
# ------------------------------------------------------------------


@cli.command(name="sign")
@click.argument("message")
@_secret_option
def sign_command(message: str, secret: str | None) -> None:
    """Sign MESSAGE and print the hex signature."""
    with _load_engine(secret) as engine:
        click.echo(engine.sign(message))


@cli.command(name="verify")
@click.argument("message")
@click.argument("signature")
@click.option(
    "--public-key",
    default=None,
    help="64-character hex public key of the signer.",
)
@_secret_option
def verify_command(
    message: str,
    signature: str,
    public_key: str | None,
    secret: str | None,
) -> None:
    """Verify SIGNATURE over MESSAGE.

    Checks against --public-key when given, otherwise against the identity
    selected by --secret.
    """
    from did_jis.crypto.signer import verify_with_key

    if public_key is not None:
        valid = verify_with_key(message, signature, public_key)
    elif secret is not None:
        with _load_engine(secret) as engine:
            valid = engine.verify(message, signature)
    else:
        console.print("[red]Error:[/red] provide --public-key or --secret.")
        sys.exit(1)

    if valid:
        console.print("[green]Signature valid.[/green]")
    else:
        console.print("[red]Signature invalid.[/red]")
        sys.exit(1)


# ------------------------------------------------------------------
# demo
# ------------------------------------------------------------------


@cli.command(name="demo")
@_secret_option
@click.option(
    "--identifier",
    default="device:6G:001",
    show_default=True,
    help="Identifier used for the demo DID.",
)
def demo_command(secret: str | None, identifier: str) -> None:
    """Run every engine operation once and report the results."""
    from did_jis.bindings import did_version
    from did_jis.errors import EmptyIdentifierError

    message = "Hello from 6G device!"
    with _load_engine(secret) as engine:
        try:
            did = engine.create(identifier)
        except EmptyIdentifierError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            sys.exit(1)
        key_did = engine.create_from_key()
        parsed = engine.parse(did)
        document = engine.build_document(did)
        signature = engine.sign(message)

        table = Table(title=f"did-jis v{did_version()}", show_header=True)
        table.add_column("Operation", style="cyan")
        table.add_column("Result", overflow="fold")
        table.add_row("Public key", engine.public_key_hex())
        table.add_row("Public key (multibase)", engine.public_key_multibase())
        table.add_row("DID", did)
        table.add_row("DID from key", key_did)
        table.add_row(did, "VALID" if engine.is_valid(did) else "INVALID")
        table.add_row(
            "did:web:example", "VALID" if engine.is_valid("did:web:example") else "INVALID"
        )
        table.add_row("Parsed method", parsed.method)
        table.add_row("Parsed id", parsed.id)
        table.add_row("Document", "VERIFIED" if engine.verify_document(document) else "FAILED")
        table.add_row("Signature", signature)
        table.add_row(
            "Verification", "PASSED" if engine.verify(message, signature) else "FAILED"
        )
        console.print(table)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _load_engine(secret: str | None):  # type: ignore[no-untyped-def]
    """Return an engine for *secret*, or an ephemeral one when it is unset."""
    from did_jis.engine import DidEngine
    from did_jis.errors import InvalidKeyEncodingError

    if secret is None:
        logger.warning("No secret key configured; using an ephemeral identity.")
        return DidEngine()
    try:
        return DidEngine.from_secret(secret)
    except InvalidKeyEncodingError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
