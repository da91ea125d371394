import logging
from pathlib import Path

import click
import uvicorn
from pydantic import ValidationError

import abioci
from abioci.oci import ARTIFACT_KINDS, GIT_SUBMODULES, BuildError, Descriptor, Strategy
from abioci.oci.defaults import MANIFEST_MEDIA_TYPE
from abioci.server.logs import logging_config

STRATEGIES = [s.value for s in Strategy]
BASE_STRATEGIES = [s.value for s in Strategy if s is not Strategy.SUBJECT]


def subject_descriptor(
    digest: str | None, size: int | None, media_type: str = MANIFEST_MEDIA_TYPE
) -> Descriptor | None:
    """Create the subject descriptor from its CLI options, if given"""
    if digest is None and size is None:
        return None
    if digest is None or size is None:
        raise click.UsageError("--subject-digest and --subject-size go together")
    try:
        return Descriptor(mediaType=media_type, digest=digest, size=size)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--subject-digest/--subject-size")


@click.group()
@click.option("-d", "--debug", help="Debug output", is_flag=True)
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    ctx.ensure_object(dict)["debug"] = debug
    if debug:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.argument("strategy", type=click.Choice(STRATEGIES, case_sensitive=False))
@click.option(
    "-s",
    "--source",
    help="Directory with the files to package",
    default="contracts",
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option(
    "-o",
    "--output",
    help="Output directory",
    default="output",
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option("--suffix", help="Only package files ending with", default=".abi")
@click.option(
    "--kind",
    help="Kind of artifact",
    default="abi",
    type=click.Choice(list(ARTIFACT_KINDS)),
)
@click.option("--artifact-type", help="Override the artifact type", default=None)
@click.option(
    "--base",
    help="Strategy to attach the subject to (D only)",
    default=Strategy.SINGLE_LAYER.value,
    type=click.Choice(BASE_STRATEGIES, case_sensitive=False),
)
@click.option("--subject-digest", help="Digest of the subject manifest (D only)")
@click.option("--subject-size", help="Size of the subject manifest (D only)", type=int)
@click.option(
    "--subject-media-type",
    help="Media type of the subject manifest (D only)",
    default=MANIFEST_MEDIA_TYPE,
)
@click.option("--workers", help="Digest layers in parallel (C only)", type=int)
def build(
    strategy: str,
    source: Path,
    output: Path,
    suffix: str,
    kind: str,
    artifact_type: str | None,
    base: str,
    subject_digest: str | None,
    subject_size: int | None,
    subject_media_type: str,
    workers: int | None,
):
    """Build an artifact manifest from the files in a directory.

    \b
    Strategies:
      A - Minimal artifact (empty config + single layer)
      B - Everything in config (no layers)
      C - Multiple layers (one per file)
      D - Same as A|B|C, but with a 'subject' referencing another manifest
    """
    try:
        files = abioci.sources.list_files(source, suffix=suffix)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    if not files:
        raise click.ClickException(f"No {suffix} files found in '{source}' directory.")
    click.echo(
        f"Found {len(files)} files:" + "".join(f"\n  {path}" for _, path in files)
    )

    subject = subject_descriptor(subject_digest, subject_size, subject_media_type)
    try:
        manifest = abioci.oci.build(
            strategy,
            abioci.sources.read_payloads(files),
            media_types=ARTIFACT_KINDS[kind],
            artifact_type=artifact_type,
            subject=subject,
            base=base,
            max_workers=workers,
        )
    except BuildError as e:
        raise click.ClickException(str(e))

    manifest_path = manifest.dump(output)
    click.echo(f"\nWrote manifest to: {manifest_path}\n")
    click.echo(manifest.json())


@cli.command()
@click.option(
    "--repo",
    help="Git repository containing the submodules",
    default=".",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
)
@click.option(
    "-o",
    "--output",
    help="Output directory",
    default="output",
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option("--workers", help="Digest layers in parallel", type=int)
def submodules(repo: Path, output: Path, workers: int | None):
    """Build an artifact manifest with one layer per git submodule."""
    found = abioci.submodules.discover(repo)
    if not found:
        raise click.ClickException(f"No submodules found in '{repo}'.")
    manifest = abioci.oci.build(
        Strategy.PER_ITEM,
        [submodule.payload() for submodule in found],
        media_types=GIT_SUBMODULES,
        max_workers=workers,
    )
    manifest_path = manifest.dump(output)
    click.echo(f"Wrote manifest to {manifest_path}.")
    click.echo("\nManifest layers:")
    for layer in manifest.layers:
        click.echo(
            f"  - {layer.annotations[abioci.oci.defaults.ANNOTATION_TITLE]}"
            f" => {layer.digest} (size: {layer.size})"
        )


@cli.command("extract-abi")
@click.option(
    "-s",
    "--source",
    help="Source directory containing Forge output",
    default="out",
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option(
    "-o",
    "--output",
    help="Output directory for ABI files",
    default="abi",
    type=click.Path(path_type=Path, file_okay=False),
)
def extract_abi(source: Path, output: Path):
    """Extract the ABI from every contract in a Forge output directory."""
    try:
        summary = abioci.sources.extract_abis(source, output)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    click.echo("Extraction Summary:")
    click.echo("===================")
    click.echo(str(summary))
    click.echo(f"\nABI files have been saved to: {output}")
    if summary.failed:
        raise SystemExit(1)


@cli.command()
@click.option("--host", help="Interface to bind to", default="127.0.0.1")
@click.option("-p", "--port", type=int, default=8080)
@click.option("--reload", help="Watch for changes", is_flag=True)
@click.pass_context
def server(ctx: click.Context, host: str, port: int, reload: bool):
    """Serve the manifest builder over HTTP."""
    level = "DEBUG" if ctx.obj.get("debug") else "INFO"
    uvicorn.run(
        "abioci.server:app",
        host=host,
        port=port,
        log_level=level.lower(),
        log_config=logging_config(level),
        reload=reload,
    )


def main():
    cli(auto_envvar_prefix="ABIOCI")


if __name__ == "__main__":
    main()
