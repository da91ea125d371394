import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from abioci.oci import Payload

logger = logging.getLogger(__name__)

ABI_SUFFIX = ".abi"
EXTRACTED_SUFFIX = ".abi.json"
BUILD_INFO = "build-info"


def list_files(directory: Path, suffix: str = ABI_SUFFIX) -> list[tuple[str, Path]]:
    """List the files in `directory` ending with `suffix`, sorted by name"""
    if not directory.is_dir():
        raise FileNotFoundError(f"No directory found at: {directory}")
    return [
        (path.name, path.absolute())
        for path in sorted(directory.iterdir())
        if path.is_file() and path.name.endswith(suffix)
    ]


def read_payloads(files: Iterable[tuple[str, Path]]) -> list[Payload]:
    return [Payload(name=name, data=path.read_bytes()) for name, path in files]


@dataclass(slots=True)
class ExtractionSummary:
    total: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0

    def __str__(self):
        return (
            f"Total contracts found: {self.total}\n"
            f"Successfully extracted: {self.succeeded}\n"
            f"Skipped without ABI: {self.skipped}\n"
            f"Failed extractions: {self.failed}"
        )


def extract_abi(contract_file: Path, output: Path) -> Path | None:
    """Write the ABI of a Forge contract artifact to `output`

    Forge writes one artifact per contract to `out/<Source>.sol/<Contract>.json`,
    the ABI is named after the contract.
    Returns None when the artifact has no ABI.
    """
    artifact = json.loads(contract_file.read_text(encoding="utf-8"))
    if not isinstance(artifact, dict):
        raise ValueError(f"Expected a JSON object, got {type(artifact).__name__}")
    if "abi" not in artifact:
        return None
    output_file = output / f"{contract_file.stem}{EXTRACTED_SUFFIX}"
    output_file.write_text(json.dumps(artifact["abi"], indent=2), encoding="utf-8")
    return output_file


def extract_abis(source: Path, output: Path) -> ExtractionSummary:
    """Extract the ABI of every Forge contract artifact under `source`

    Compiler build info in `build-info/` is not a contract artifact and is ignored.
    """
    if not source.is_dir():
        raise FileNotFoundError(f"Source directory '{source}' not found")
    output.mkdir(parents=True, exist_ok=True)

    logger.info("Scanning %s for contract artifacts", source)
    summary = ExtractionSummary()
    for contract_file in sorted(source.rglob("*.json")):
        if not contract_file.is_file():
            continue
        if BUILD_INFO in contract_file.relative_to(source).parts:
            continue
        summary.total += 1
        try:
            output_file = extract_abi(contract_file, output)
        except (OSError, ValueError) as e:
            logger.error("Failed to extract ABI from %s: %r", contract_file, e)
            summary.failed += 1
        else:
            if output_file is None:
                logger.info("No ABI in %s, skipping", contract_file)
                summary.skipped += 1
                continue
            logger.debug(
                "Created %s (%d bytes)", output_file, output_file.stat().st_size
            )
            summary.succeeded += 1
    return summary
