"""CLI for Transaction Vault."""
import json
import os
import sys
from typing import NoReturn

import click

from txvault.domain.envelope.aead import KEY_BYTES
from txvault.domain.envelope.codec import encode_hex
from txvault.domain.envelope.constructor import encrypt_transaction
from txvault.domain.envelope.errors import EnvelopeError
from txvault.domain.envelope.opener import decrypt_transaction
from txvault.domain.envelope.validator import validate_record_shape

EXIT_STRUCTURAL = 1
EXIT_AUTHENTICATION = 2

master_key_option = click.option(
    "--master-key-hex",
    envvar="MASTER_KEY_HEX",
    required=True,
    help="32-byte master key as 64 hex chars (default: $MASTER_KEY_HEX)",
)


def _fail(error: EnvelopeError) -> NoReturn:
    click.echo(f"Error: {error.message}", err=True)
    sys.exit(EXIT_STRUCTURAL if error.is_structural else EXIT_AUTHENTICATION)


def _load_record(source) -> dict:
    try:
        return json.load(source)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"record is not valid JSON: {e}")


@click.group()
def cli():
    """Transaction Vault CLI."""
    pass


@cli.command()
def genkey():
    """Print a fresh random master key."""
    click.echo(encode_hex(os.urandom(KEY_BYTES)))


@cli.command()
@click.option("--party-id", required=True, help="Owning party identifier")
@click.option("--payload", required=True, help="Payload as JSON text")
@master_key_option
def encrypt(party_id: str, payload: str, master_key_hex: str):
    """Encrypt a JSON payload and print the secure record."""
    try:
        value = json.loads(payload)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"payload is not valid JSON: {e}", param_hint="--payload")

    try:
        record = encrypt_transaction(party_id, value, master_key_hex)
    except EnvelopeError as e:
        _fail(e)

    click.echo(json.dumps(record.to_dict(), indent=2))


@cli.command()
@click.argument("record_file", type=click.File("r"))
@master_key_option
def decrypt(record_file, master_key_hex: str):
    """Decrypt a record file ('-' for stdin) and print the payload."""
    record = _load_record(record_file)
    try:
        payload = decrypt_transaction(record, master_key_hex)
    except EnvelopeError as e:
        _fail(e)

    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("record_file", type=click.File("r"))
def validate(record_file):
    """Check a record's structure without touching any key."""
    record = _load_record(record_file)
    try:
        rec = validate_record_shape(record)
    except EnvelopeError as e:
        _fail(e)

    click.echo(f"✓ Record '{rec.id}' is well-formed")


@cli.command()
@click.option("--host", default=None, help="Bind address (default: $HOST)")
@click.option("--port", default=None, type=int, help="Bind port (default: $PORT)")
def serve(host, port):
    """Run the HTTP API under uvicorn."""
    import uvicorn
    from txvault.settings import settings

    uvicorn.run(
        "txvault.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    cli()
