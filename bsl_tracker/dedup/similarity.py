"""String similarity and location normalization."""
from __future__ import annotations

import re
from typing import Dict

from rapidfuzz.distance import Levenshtein

_RE_WS = re.compile(r"\s+")
_RE_PUNCT = re.compile(r"[^\w\s]")
_RE_TYPE_WORDS = re.compile(r"\b(city|county|town|township|village|borough|parish)\b")

# Applied after lowercasing and punctuation removal, word by word
MUNICIPALITY_ABBREVIATIONS: Dict[str, str] = {
    "st": "saint",
    "ste": "sainte",
    "ft": "fort",
    "mt": "mount",
}

US_STATES: Dict[str, str] = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT", "delaware": "DE",
    "florida": "FL", "georgia": "GA", "hawaii": "HI", "idaho": "ID",
    "illinois": "IL", "indiana": "IN", "iowa": "IA", "kansas": "KS",
    "kentucky": "KY", "louisiana": "LA", "maine": "ME", "maryland": "MD",
    "massachusetts": "MA", "michigan": "MI", "minnesota": "MN", "mississippi": "MS",
    "missouri": "MO", "montana": "MT", "nebraska": "NE", "nevada": "NV",
    "new hampshire": "NH", "new jersey": "NJ", "new mexico": "NM", "new york": "NY",
    "north carolina": "NC", "north dakota": "ND", "ohio": "OH", "oklahoma": "OK",
    "oregon": "OR", "pennsylvania": "PA", "rhode island": "RI", "south carolina": "SC",
    "south dakota": "SD", "tennessee": "TN", "texas": "TX", "utah": "UT",
    "vermont": "VT", "virginia": "VA", "washington": "WA", "west virginia": "WV",
    "wisconsin": "WI", "wyoming": "WY", "district of columbia": "DC",
}


def string_similarity(a: str, b: str) -> float:
    """Normalized edit-distance similarity in ``[0, 1]``.

    Comparison is case-insensitive after trimming; identical strings (and two
    empty strings) score 1.0, anything against an empty string scores 0.0.
    """
    s1 = (a or "").strip().lower()
    s2 = (b or "").strip().lower()

    if s1 == s2:
        return 1.0

    longest = max(len(s1), len(s2))
    distance = Levenshtein.distance(s1, s2)
    return 1.0 - distance / longest


def normalize_municipality_name(name: str) -> str:
    """Reduce a municipality name to its distinctive words.

    ``"St. Louis City"`` and ``"Saint Louis"`` both become ``"saint louis"``.
    """
    if not name:
        return ""
    t = _RE_PUNCT.sub("", name.lower())
    words = [MUNICIPALITY_ABBREVIATIONS.get(w, w) for w in t.split()]
    t = _RE_TYPE_WORDS.sub(" ", " ".join(words))
    return _RE_WS.sub(" ", t).strip()


def normalize_state(state: str) -> str:
    """Map a full US state name to its USPS code; codes are upper-cased."""
    if not state:
        return ""
    key = _RE_WS.sub(" ", state.strip().lower())
    return US_STATES.get(key, key.upper())


def same_municipality(a: str, b: str) -> bool:
    """Exact, case- and surrounding-whitespace-insensitive name equality."""
    return (a or "").strip().lower() == (b or "").strip().lower()
