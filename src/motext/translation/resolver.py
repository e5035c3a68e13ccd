"""Catalog file lookup by locale and domain.

Catalogs live at ``<base_path>/<locale>/<domain>.mo`` (compiled) or
``<base_path>/<locale>/<domain>.po`` (source). A readable ``.mo`` always
wins over a ``.po`` of the same name.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from motext.errors import CatalogNotFoundError

MO_SUFFIX = ".mo"
PO_SUFFIX = ".po"


def _is_readable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def catalog_candidates(base_path: Union[str, Path], locale: str, domain: str) -> tuple[Path, Path]:
    """Return the ``.mo`` and ``.po`` paths for *locale*/*domain*."""
    folder = Path(base_path) / locale
    return folder / f"{domain}{MO_SUFFIX}", folder / f"{domain}{PO_SUFFIX}"


def resolve_catalog(base_path: Union[str, Path], locale: str, domain: str) -> Path:
    """Return the catalog file to load for *locale*/*domain*.

    Raises:
        CatalogNotFoundError: neither candidate exists and is readable.
    """
    mo_path, po_path = catalog_candidates(base_path, locale, domain)
    if _is_readable(mo_path):
        return mo_path
    if _is_readable(po_path):
        return po_path
    raise CatalogNotFoundError(
        f"Can't access dictionary file {domain} for locale {locale}!",
        locale=locale,
        domain=domain,
    )


def available_locales(base_path: Union[str, Path], domain: str) -> list[str]:
    """Return locale codes under *base_path* that have a *domain* catalog."""
    root = Path(base_path)
    if not root.is_dir():
        return []
    codes: list[str] = []
    for entry in sorted(root.iterdir()):
        if not entry.is_dir():
            continue
        if any(_is_readable(p) for p in catalog_candidates(root, entry.name, domain)):
            codes.append(entry.name)
    return codes
