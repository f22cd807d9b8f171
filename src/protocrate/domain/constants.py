from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the fixed names and text fragments shared by the tree builder,
the renderer, the manifest writer and the CLI.
"""

from typing import List

APP_NAME = "protocrate"
APP_VERSION = "0.1.0"

# -----------------------------------------------------------------------------
# GENERATED CRATE LAYOUT
# -----------------------------------------------------------------------------
SRC_SUBDIR = "src"
AGGREGATION_FILE_NAME = "lib.rs"
MANIFEST_FILE_NAME = "Cargo.toml"
PROTO_EXTENSION = ".proto"

INTERNAL_UNIT_SUFFIX = "_internal"
UNIT_NAME_JOINER = "_"

# Lint suppression emitted once at the top of the aggregation file
AGGREGATION_PREAMBLE: List[str] = [
    "#![allow(clippy::wrong_self_convention)]",
    "#![allow(clippy::large_enum_variant)]",
    "#![allow(clippy::unreadable_literal)]",
]

# -----------------------------------------------------------------------------
# EXTERNAL TOOLCHAIN DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_PROTOC = "protoc"
DEFAULT_PLUGINS: List[str] = ["prost"]
RUSTFMT_BINARY = "rustfmt"
RUSTFMT_EDITION = "2018"

# -----------------------------------------------------------------------------
# MANIFEST TEMPLATE
# -----------------------------------------------------------------------------
DEFAULT_PKG_VERSION = "0.1.0"

PLACEHOLDER_NAME = "_PKG_NAME_"
PLACEHOLDER_AUTHORS = "_PKG_AUTHORS_"
PLACEHOLDER_VERSION = "_PKG_VERSION_"

DEFAULT_CARGO_TEMPLATE = """\
[package]
name = _PKG_NAME_
version = _PKG_VERSION_
authors = [_PKG_AUTHORS_]
edition = "2018"

[dependencies]
bytes = "0.5"
prost = "0.6"
prost-types = "0.6"
tonic = "0.3"
"""
