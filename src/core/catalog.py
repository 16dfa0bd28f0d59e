"""Catalog loading: raw boss records (JSON) -> immutable CatalogEntry tuple."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from .errors import InvalidCatalog
from .evaluator import normalize
from .models import CatalogEntry

logger = logging.getLogger(__name__)

# Source files spell the boolean attribute and the short name several ways
TRAIT_FIELDS = ("has_special_trait", "hasSpecialTrait", "Remembrance", "remembrance")
ALIAS_FIELDS = ("alias", "short", "short_name")
TRUE_STRINGS = ("1", "true", "t", "yes", "y", "on")


def _first(record: Dict[str, Any], fields: Iterable[str]) -> Optional[Any]:
    for f in fields:
        if f in record and record[f] is not None:
            return record[f]
    return None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def entry_from_record(record: Dict[str, Any]) -> CatalogEntry:
    name = str(record.get("name") or "").strip()
    if not name:
        raise ValueError("catalog record has no name")
    alias = _first(record, ALIAS_FIELDS)
    return CatalogEntry(
        name=name,
        region=str(record.get("region") or ""),
        type=str(record.get("type") or ""),
        damage=str(record.get("damage") or ""),
        has_special_trait=_to_bool(_first(record, TRAIT_FIELDS)),
        alias=str(alias).strip() if alias else None,
    )


def build_catalog(records: Iterable[Any]) -> Tuple[CatalogEntry, ...]:
    """
    Build the catalog, preserving source order.
    Records without a name and later duplicates of a normalized name are skipped.
    """
    entries = []
    seen = set()
    for i, record in enumerate(records):
        if isinstance(record, CatalogEntry):
            entry = record
        else:
            try:
                entry = entry_from_record(record)
            except (ValueError, AttributeError, TypeError):
                logger.warning("build_catalog: skipping malformed record #%s: %r", i, record)
                continue
        key = normalize(entry.name)
        if key in seen:
            logger.warning("build_catalog: skipping duplicate boss %r (record #%s)", entry.name, i)
            continue
        seen.add(key)
        entries.append(entry)
    logger.info("build_catalog: %s bosses loaded", len(entries))
    return tuple(entries)


def load_catalog_file(path: Path | str) -> Tuple[CatalogEntry, ...]:
    """Read a JSON array of boss records. An empty result is fatal."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise InvalidCatalog(f"Catalog file {path} must hold a JSON array.")
    catalog = build_catalog(data)
    if not catalog:
        raise InvalidCatalog(f"Catalog file {path} holds no usable bosses.")
    return catalog
