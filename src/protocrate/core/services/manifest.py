from __future__ import annotations

"""
Crate Manifest Writer.

Fills the Cargo.toml template placeholders with the package metadata and
persists the result next to the generated sources.
"""

import logging
from typing import Optional, Sequence

from protocrate.domain.constants import (
    DEFAULT_CARGO_TEMPLATE,
    PLACEHOLDER_AUTHORS,
    PLACEHOLDER_NAME,
    PLACEHOLDER_VERSION,
)
from protocrate.infra.fs import read_text_file, write_text_file

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_cargo_toml(
        template: str,
        pkg_name: str,
        pkg_authors: Sequence[str],
        pkg_version: str,
) -> str:
    """
    Replace the manifest placeholders with quoted package metadata.

    Args:
        template: Manifest text containing _PKG_NAME_, _PKG_AUTHORS_ and
            _PKG_VERSION_ markers.
        pkg_name: Crate name.
        pkg_authors: Author strings, joined with commas.
        pkg_version: Crate version.

    Returns:
        str: Rendered manifest.
    """
    authors = ",".join(_quote(a) for a in pkg_authors)
    return (
        template
        .replace(PLACEHOLDER_NAME, _quote(pkg_name))
        .replace(PLACEHOLDER_AUTHORS, authors)
        .replace(PLACEHOLDER_VERSION, _quote(pkg_version))
    )


def write_cargo_toml(
        template_path: Optional[str],
        output_path: str,
        pkg_name: str,
        pkg_authors: Sequence[str],
        pkg_version: str,
) -> str:
    """
    Render the manifest from a template file (or the built-in one) and save it.

    Returns:
        str: Path of the written manifest.

    Raises:
        FileSystemError: If the template cannot be read or the output written.
    """
    if template_path:
        logger.debug(f"Using manifest template: {template_path}")
        template = read_text_file(template_path)
    else:
        template = DEFAULT_CARGO_TEMPLATE

    content = render_cargo_toml(template, pkg_name, pkg_authors, pkg_version)
    write_text_file(output_path, content)
    logger.info(f"Manifest written: {output_path}")
    return output_path

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _quote(value: str) -> str:
    return f'"{value}"'
