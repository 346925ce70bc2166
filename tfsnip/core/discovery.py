"""
Discovery — Source units of one provider

Terraform keeps each provider under builtin/providers/<name>/ with one
file per resource (resource_*.go) and per data source (data_source_*.go).
"""

from pathlib import Path
from typing import List

from .assembler import KIND_PREFIXES
from .errors import DiscoveryError


DEFAULT_PROVIDERS_DIR = "builtin/providers"
SOURCE_EXTENSION = ".go"


def provider_path(source_root, provider: str, providers_dir: str = DEFAULT_PROVIDERS_DIR) -> Path:
    """<source>/builtin/providers/<provider>"""
    return Path(source_root) / providers_dir / provider


def unit_pattern(kind: str = "resource") -> str:
    """Glob pattern for the files of one kind: resource_*.go"""
    if kind not in KIND_PREFIXES:
        raise DiscoveryError(
            f"Unknown kind '{kind}'. Valid: {', '.join(KIND_PREFIXES)}"
        )
    return f"{KIND_PREFIXES[kind]}*{SOURCE_EXTENSION}"


def find_source_units(provider_dir: Path, kind: str = "resource") -> List[Path]:
    """
    List the source units of one kind in a provider directory.

    Returns paths sorted by name; test files (_test.go) are left out.

    Raises:
        DiscoveryError: If the directory does not exist
    """
    provider_dir = Path(provider_dir)
    if not provider_dir.is_dir():
        raise DiscoveryError(f"Provider directory not found: {provider_dir}")

    pattern = unit_pattern(kind)
    return sorted(
        p for p in provider_dir.glob(pattern)
        if p.is_file() and not p.name.endswith(f"_test{SOURCE_EXTENSION}")
    )
