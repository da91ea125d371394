"""OCI artifact manifests for Python

This module builds OCI image manifests describing a set of named payloads,
with every blob addressed by its sha256 digest and size.
"""
from .bundle import Bundler, Payload, tar_gzip_bundle
from .config import EmptyConfig
from .defaults import ARTIFACT_KINDS, GIT_SUBMODULES, SOLIDITY_ABI, MediaTypes
from .descriptor import DigestMismatchError, Descriptor, address_of
from .layer import Layer
from .manifest import Manifest
from .strategy import (
    BuildError,
    EmptyInputError,
    InvalidStrategyError,
    MissingSubjectError,
    Strategy,
    build,
    with_subject,
)

__all__ = [
    "ARTIFACT_KINDS",
    "GIT_SUBMODULES",
    "SOLIDITY_ABI",
    "BuildError",
    "Bundler",
    "Descriptor",
    "DigestMismatchError",
    "EmptyConfig",
    "EmptyInputError",
    "InvalidStrategyError",
    "Layer",
    "Manifest",
    "MediaTypes",
    "MissingSubjectError",
    "Payload",
    "Strategy",
    "address_of",
    "build",
    "tar_gzip_bundle",
    "with_subject",
]
