# app/domain/classify.py
from __future__ import annotations

import re

from .types import OwnershipType, PropertyType

# Exact (case-insensitive) provider values.
PROPERTY_TYPE_SYNONYMS: dict[str, PropertyType] = {
    "single family residence": PropertyType.single_family,
    "single family": PropertyType.single_family,
    "residential": PropertyType.single_family,
    "sfr": PropertyType.single_family,
    "timesh": PropertyType.condo,
    "condominium": PropertyType.condo,
    "condo": PropertyType.condo,
    "townhouse": PropertyType.townhouse,
    "town house": PropertyType.townhouse,
    "multi-family": PropertyType.multi_family,
    "multifamily": PropertyType.multi_family,
    "duplex": PropertyType.multi_family,
    "triplex": PropertyType.multi_family,
    "fourplex": PropertyType.multi_family,
    "apartment": PropertyType.apartment,
    "mobile home": PropertyType.manufactured,
    "manufactured": PropertyType.manufactured,
    "land": PropertyType.land,
    "vacant land": PropertyType.land,
}

# Substring fallbacks, checked in order. "SFR / Townhouse" must land on Single Family.
_PROPERTY_TYPE_FALLBACKS: list[tuple[tuple[str, ...], PropertyType]] = [
    (("FAMILY", "SFR", "RESIDENTIAL"), PropertyType.single_family),
    (("CONDO",), PropertyType.condo),
    (("TOWNHOUSE",), PropertyType.townhouse),
    (("MULTI",), PropertyType.multi_family),
    (("LAND",), PropertyType.land),
]

_LLC_MARKERS = ("LLC", "L.L.C.", "LIMITED LIABILITY")
_TRUST_MARKERS = ("TRUST", "TRUSTEE")
_TRUST_TOKEN = re.compile(r"\bTR\b")
_CORPORATION_MARKERS = ("INC", "INCORPORATED", "CORP", "CORPORATION", " CO.", " CO,")
_PARTNERSHIP_MARKERS = ("LP", "L.P.", "LIMITED PARTNERSHIP", "LLP", "L.L.P.", "PARTNERSHIP")


def classify_property_type(raw_type: str | None) -> PropertyType:
    """
    Map a free-text provider property type onto PropertyType.
    Never fails: empty or unrecognized input is Single Family.
    """
    if not raw_type:
        return PropertyType.single_family

    s = raw_type.strip()
    exact = PROPERTY_TYPE_SYNONYMS.get(s.lower())
    if exact is not None:
        return exact

    upper = s.upper()
    for markers, category in _PROPERTY_TYPE_FALLBACKS:
        if any(m in upper for m in markers):
            return category

    return PropertyType.single_family


def classify_ownership(owner_names: str | None) -> OwnershipType:
    """
    Infer the ownership structure from the owner-name line of a property record.
    First match wins: LLC, Trust, Corporation, Partnership, else Personal.
    """
    upper = (owner_names or "").upper()

    if any(m in upper for m in _LLC_MARKERS):
        return OwnershipType.llc
    if any(m in upper for m in _TRUST_MARKERS) or _TRUST_TOKEN.search(upper):
        return OwnershipType.trust
    if any(m in upper for m in _CORPORATION_MARKERS):
        return OwnershipType.corporation
    if any(m in upper for m in _PARTNERSHIP_MARKERS):
        return OwnershipType.partnership

    return OwnershipType.personal
