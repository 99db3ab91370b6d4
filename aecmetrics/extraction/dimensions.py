"""Dimension parsing from display names and type names.

Revit names carry sizes in many spellings: ``36" x 80"``, ``3' x 6'8"``,
``36x80``, ``5 1/2" x 5 1/2"``, ``LVL 1-3/4x11-7/8``.  These helpers turn
them into feet or into a normalized label.
"""

from __future__ import annotations

import re

# Openings: quoted inches, quoted feet (optional inches), bare numbers
_OPENING_INCHES_RE = re.compile(r"(\d+(?:\.\d+)?)\s*[\"”]\s*[xX×]\s*(\d+(?:\.\d+)?)\s*[\"”]")
_OPENING_FEET_RE = re.compile(
    r"(\d+(?:\.\d+)?)\s*['’]\s*(?:-?\s*(\d+(?:\.\d+)?)\s*[\"”])?\s*[xX×]\s*"
    r"(\d+(?:\.\d+)?)\s*['’]\s*(?:-?\s*(\d+(?:\.\d+)?)\s*[\"”])?"
)
_OPENING_INCHES_RE_LOOSE = re.compile(
    r"(\d+(?:\.\d+)?)\s*[\"”'’]\s*[xX×]\s*(\d+(?:\.\d+)?)\s*[\"”'’]"
)
_OPENING_BARE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*[xX×]\s*(\d+(?:\.\d+)?)")

# Apostrophe-marked sizes at or above this are inches written with the wrong mark
_APOSTROPHE_INCHES_MIN = 20.0

# Bare numbers below this are read as inches
_BARE_INCHES_LIMIT = 100.0

# Column sections: "12 x 12", '5 1/2" x 5 1/2"', "5-1/2in x 7-1/4in"
_SECTION_RE = re.compile(r"(\d[\d\s/.\-]*)\s*(?:in|\"|”)?\s*[xX×]\s*(\d[\d\s/.\-]*)")

# Lumber sizes: "4x6", "1-3/4x11-7/8"
_LUMBER_RE = re.compile(r"(\d+(?:-\d+/\d+)?)\s*[xX×]\s*(\d+(?:-\d+/\d+)?)")


def parse_inch_token(text: str) -> float | None:
    """Parse ``5 1/2``, ``5-1/2`` or ``5.5`` (quotes ignored) into inches."""
    cleaned = re.sub(r"[\"'”’]", "", text or "").strip()
    if not cleaned:
        return None
    total = 0.0
    for part in cleaned.replace("-", " ").split():
        if "/" in part:
            numerator, _, denominator = part.partition("/")
            try:
                num, den = float(numerator), float(denominator)
            except ValueError:
                continue
            if den:
                total += num / den
        else:
            try:
                total += float(part)
            except ValueError:
                continue
    return total or None


def parse_section_size(text: str | None) -> tuple[float, float] | None:
    """Return ``(width_ft, depth_ft)`` from a ``W x D`` size in inches."""
    if not text:
        return None
    match = _SECTION_RE.search(text)
    if not match:
        return None
    width_in = parse_inch_token(match.group(1))
    depth_in = parse_inch_token(match.group(2))
    if width_in and depth_in:
        return width_in / 12, depth_in / 12
    return None


def _feet(whole: str, inches: str | None) -> float:
    return float(whole) + (float(inches) / 12 if inches else 0.0)


def parse_opening_size(name: str | None) -> tuple[float, float] | None:
    """Return ``(width_ft, height_ft)`` parsed from a door or window name."""
    if not name:
        return None

    match = _OPENING_INCHES_RE.search(name)
    if match:
        return float(match.group(1)) / 12, float(match.group(2)) / 12

    match = _OPENING_INCHES_RE_LOOSE.search(name)
    if match:
        width, height = float(match.group(1)), float(match.group(2))
        if width >= _APOSTROPHE_INCHES_MIN and height >= _APOSTROPHE_INCHES_MIN:
            return width / 12, height / 12

    match = _OPENING_FEET_RE.search(name)
    if match:
        return _feet(match.group(1), match.group(2)), _feet(match.group(3), match.group(4))

    match = _OPENING_BARE_RE.search(name)
    if match:
        width, height = float(match.group(1)), float(match.group(2))
        if width < _BARE_INCHES_LIMIT and height < _BARE_INCHES_LIMIT:
            return width / 12, height / 12
        return width, height
    return None


def parse_lumber_label(type_name: str | None) -> str | None:
    """Normalize a framing type name to ``4x6`` / ``LVL 1-3/4x11-7/8``.

    Falls back to the type name itself when it carries no size.
    """
    if not type_name:
        return None
    match = _LUMBER_RE.search(type_name)
    if not match:
        return type_name.strip() or None
    label = f"{match.group(1)}x{match.group(2)}"
    if "lvl" in type_name.lower():
        label = f"LVL {label}"
    return label


def parenthesize(label: str) -> str:
    label = label.strip()
    if label.startswith("("):
        return label
    return f"({label})"
