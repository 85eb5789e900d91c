"""merkle-crypto command line interface"""
import sys
from typing import Optional

import click
import structlog
from pydantic import ValidationError

from .config import configure_logging, get_settings, log_error
from .errors import MultiProofError
from .hashing import HASHER_NAMES, get_builder
from .merkle import Verifier
from .models import MultiProofRequest, SingleProofRequest

logger = structlog.get_logger()

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_MALFORMED = 2


def _load(model, path: str):
    with open(path, "rb") as f:
        content = f.read()
    try:
        return model.model_validate_json(content)
    except ValidationError as e:
        log_error(logger, e, {"file": path})
        click.echo(f"Error: malformed proof file {path}", err=True)
        click.echo(str(e), err=True)
        sys.exit(EXIT_MALFORMED)


def _report(valid: bool) -> None:
    if valid:
        click.echo("✓ Proof is valid")
        sys.exit(EXIT_VALID)
    click.echo("✗ Proof does not match root")
    sys.exit(EXIT_INVALID)


@click.group()
@click.option("--hasher", type=click.Choice(HASHER_NAMES), default=None,
              help="Hash function used to build the tree")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level")
@click.pass_context
def cli(ctx, hasher: Optional[str], log_level: Optional[str]):
    """Verify Merkle proofs against a trusted root"""
    settings = get_settings()
    configure_logging(log_level.upper() if log_level else settings.LOG_LEVEL)
    ctx.obj = Verifier(get_builder(hasher or settings.DEFAULT_HASHER))


@cli.command()
@click.argument("proof_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def verify(verifier: Verifier, proof_file: str):
    """Verify a single-leaf proof file"""
    request = _load(SingleProofRequest, proof_file)
    _report(verifier.verify(request.proof_digests(), request.root_digest(),
                            request.leaf_digest()))


@cli.command("verify-multi")
@click.argument("proof_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def verify_multi(verifier: Verifier, proof_file: str):
    """Verify a multiproof file"""
    request = _load(MultiProofRequest, proof_file)
    multi_proof = request.multi_proof()
    try:
        valid = verifier.verify_multi_proof(multi_proof.proof, multi_proof.flags,
                                            request.root_digest(), request.leaf_digests())
    except MultiProofError as e:
        logger.warning("malformed_multiproof", file=proof_file,
                       reason=type(e).__name__, detail=str(e))
        click.echo(f"Error: malformed multiproof: {e}", err=True)
        sys.exit(EXIT_MALFORMED)
    _report(valid)


def main():
    cli()


if __name__ == "__main__":
    main()
