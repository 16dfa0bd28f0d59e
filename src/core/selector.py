from __future__ import annotations

import logging
from typing import Sequence

from .errors import InvalidCatalog
from .models import CatalogEntry

logger = logging.getLogger(__name__)

MASK32 = 0xFFFFFFFF


def mix32(value: int) -> int:
    """
    Fixed 32-bit integer avalanche hash (xorshift-multiply).
    Integer-only so every runtime picks the same daily boss.
    """
    x = value & MASK32
    x ^= x >> 16
    x = (x * 0x7FEB352D) & MASK32
    x ^= x >> 15
    x = (x * 0x846CA68B) & MASK32
    x ^= x >> 16
    return x


def target_index(day_index: int, catalog_size: int) -> int:
    # day_index + 1 so day 0 doesn't hash the zero seed
    return mix32(day_index + 1) % catalog_size


def select_target(day_index: int, catalog: Sequence[CatalogEntry]) -> CatalogEntry:
    if not catalog:
        raise InvalidCatalog()
    idx = target_index(day_index, len(catalog))
    logger.debug("select_target: day_index=%s -> catalog[%s] of %s", day_index, idx, len(catalog))
    return catalog[idx]
