"""
Address component parsing shared by the geocoding providers.

Providers disagree on how much structure they return, and in areas without
formal street addressing some of them return a Plus Code (e.g. "7JVW+2H")
in place of a street. Everything here reconciles those payloads into
display strings with a fixed precedence order.
"""

import re
from typing import Any, Iterable

from .models import AddressComponents

PLUS_CODE_PATTERN = re.compile(r"([A-Z0-9]{2,}\+[A-Z0-9]{2,})", re.IGNORECASE)
POSTAL_CODE_PATTERN = re.compile(r"\b\d{6}\b")
SIX_DIGITS = re.compile(r"^\d{6}$")

# Provider type tag -> slot. A component carrying several tags lands in the
# slot of the first tag listed here.
COMPONENT_TYPE_SLOTS = (
    ("street_number", "street_number"),
    ("route", "route"),
    ("sublocality_level_2", "sublocality_level_2"),
    ("sublocality_level_1", "sublocality_level_1"),
    ("sublocality", "sublocality"),
    ("neighborhood", "sublocality"),
    ("locality", "locality"),
    ("administrative_area_level_2", "administrative_area_level_2"),
    ("administrative_area_level_1", "administrative_area_level_1"),
    ("postal_code", "postal_code"),
)


def is_plus_code(text: str) -> bool:
    """True when text contains a Plus Code token"""
    return bool(text) and PLUS_CODE_PATTERN.search(text) is not None


def extract_plus_code(text: str) -> str | None:
    """Return the first Plus Code in text, if any"""
    if not text:
        return None
    match = PLUS_CODE_PATTERN.search(text)
    return match.group(1) if match else None


def component_slot(types: Iterable[str]) -> str | None:
    """Map a component's type tags to the single slot it fills"""
    types = set(types or ())
    for type_tag, slot in COMPONENT_TYPE_SLOTS:
        if type_tag in types:
            return slot
    return None


def extract_components(raw_components: list[dict[str, Any]] | None) -> AddressComponents:
    """
    Fill address slots from a Google-style component list.

    Each component is {"long_name": ..., "types": [...]}. The first component
    to claim a slot keeps it.
    """
    slots: dict[str, str] = {}
    for component in raw_components or []:
        if not isinstance(component, dict):
            continue
        slot = component_slot(component.get("types") or [])
        if slot is None or slot in slots:
            continue
        name = component.get("long_name")
        if isinstance(name, str):
            slots[slot] = name
    return AddressComponents(**slots)


def street_line(components: AddressComponents) -> str:
    if components.street_number and components.route:
        return f"{components.street_number} {components.route}"
    return components.route or ""


def sublocality_name(components: AddressComponents) -> str:
    """Most specific sublocality: level 2, then level 1, then plain/neighborhood"""
    return (
        components.sublocality_level_2
        or components.sublocality_level_1
        or components.sublocality
        or ""
    )


def construct_address(components: AddressComponents) -> str:
    """
    Build a single-line address: street, area, city, state, postal code.

    Empty slots are skipped rather than leaving blank separators.
    """
    parts = [
        street_line(components),
        sublocality_name(components),
        components.locality or components.administrative_area_level_2 or "",
        components.administrative_area_level_1 or "",
        components.postal_code or "",
    ]
    return ", ".join(part for part in parts if part)


def resolve_city(components: AddressComponents) -> str:
    """City precedence: locality > admin L2 > sublocality L1 > sublocality L2 > sublocality"""
    return (
        components.locality
        or components.administrative_area_level_2
        or components.sublocality_level_1
        or components.sublocality_level_2
        or components.sublocality
        or ""
    )


def guess_city_from_address(address: str, strict: bool = False) -> str:
    """
    Pick a likely city out of a comma-separated address string.

    The first segment is assumed to be the street or house and is never
    chosen. The default scan looks at segments 1-2 and skips anything naming
    the country or a "State". The strict scan (used for free-text provider
    strings, which carry more trailing noise) looks at segments 1-3 and also
    skips bare six-digit postal codes and tahsil/district labels.
    """
    if not address:
        return ""

    parts = [part.strip() for part in address.split(",")]
    if strict:
        end = min(len(parts) - 2, 4)
    else:
        end = min(len(parts) - 1, 3)

    for part in parts[1:end]:
        if len(part) <= 2 or "India" in part:
            continue
        if strict:
            lowered = part.lower()
            if SIX_DIGITS.match(part) or "tahsil" in lowered or "district" in lowered:
                continue
        elif "State" in part:
            continue
        return part
    return ""


def find_postal_code(text: str) -> str:
    """First standalone six-digit postal code in text"""
    if not text:
        return ""
    match = POSTAL_CODE_PATTERN.search(text)
    return match.group(0) if match else ""


def compose_display_address(
    formatted_address: str,
    components: AddressComponents,
    city: str,
    state: str,
    postal_code: str,
) -> str:
    """
    Choose the address line shown to the user.

    A formatted address containing a Plus Code is replaced by one built from
    components; the code is appended in parentheses only when a city is known,
    so the result is never a bare code. Without a Plus Code the provider's own
    formatted address wins unless it is too short to be useful.
    """
    constructed = construct_address(components)
    plus_code = extract_plus_code(formatted_address)

    if plus_code:
        if constructed:
            if city:
                return f"{constructed} ({plus_code})"
            return constructed

        parts = [sublocality_name(components), city, state, postal_code]
        parts = [part for part in parts if part]
        if parts:
            return f"{', '.join(parts)} ({plus_code})"
        return formatted_address

    if formatted_address and len(formatted_address) > 10:
        return formatted_address
    if constructed:
        return constructed

    parts = [street_line(components), components.sublocality or "", city, state, postal_code]
    return ", ".join(part for part in parts if part) or formatted_address
