"""Hierarchical Code Generator — pure candidate derivation for park, area, species and tree codes.

Invariants:
    - Names are normalized (accents stripped, uppercased, leading stopwords removed)
      before any letter is taken from them
    - Candidate sequences are deterministic for a given input and never repeat a value
    - The first candidate is always the "natural" code; later ones are collision fallbacks
    - Tree codes end in a zero-padded sequence: <area>-<species>-NNNN or <park>-XX-<species>-NNNN
    - Raises CodeGenerationError when a name has fewer than 2 usable letters

Design Decisions:
    - Generators instead of lists: the DB probe in services/code_service.py consumes
      candidates lazily and stops at its attempt cap
    - No IO here: collision checks belong to the service layer (ADR: functional core)
"""

import re
import unicodedata
from itertools import count
from typing import Iterable, Iterator, Protocol, Sequence

from parks_backoffice.core.errors import CodeGenerationError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
PARK_STOPWORDS = frozenset({"EL", "LA", "LOS", "LAS", "PARQUE"})
AREA_STOPWORDS = frozenset({"ZONA", "AREA", "SECTOR", "SECCION"})
PARK_LEVEL_AREA_MARKER = "XX"

_NON_LETTERS = re.compile(r"[^A-Z]")
_TRAILING_SEQUENCE = re.compile(r"-(\d+)$")


# ─── Normalization ───────────────────────────────────────────────

def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def normalize_name(text: str, stopwords: Iterable[str] = ()) -> str:
    """Uppercase, accent-free, single-spaced name with leading stopwords removed.

    Stopwords are removed repeatedly ("Parque La Estrella" -> "ESTRELLA"), but a name
    made only of stopwords is kept whole so it still yields letters.
    """
    words = strip_accents(text or "").upper().split()
    stop = set(stopwords)
    stripped = list(words)
    while stripped and stripped[0] in stop:
        stripped.pop(0)
    return " ".join(stripped or words)


def _letter_words(normalized: str) -> list[str]:
    words = (_NON_LETTERS.sub("", w) for w in normalized.split())
    return [w for w in words if w]


def _unique(candidates: Iterable[str]) -> Iterator[str]:
    seen: set[str] = set()
    for candidate in candidates:
        if candidate not in seen:
            seen.add(candidate)
            yield candidate


def _letter_then_alphabet(first: str, letters: str) -> Iterator[str]:
    """first + each later letter of the name, then first + A..Z."""
    for ch in letters[1:]:
        yield first + ch
    for ch in ALPHABET:
        yield first + ch


# ─── Park Prefixes ───────────────────────────────────────────────

def park_prefix_candidates(name: str) -> Iterator[str]:
    """Two-letter park prefixes, most natural first: "Parque Los Colomos" -> CO, CL, CM, ..."""
    letters = "".join(_letter_words(normalize_name(name, PARK_STOPWORDS)))
    if len(letters) < 2:
        raise CodeGenerationError(
            f"Park name '{name}' must contain at least 2 letters",
        )
    base = letters[:2]

    def _all():
        yield base
        yield from _letter_then_alphabet(base[0], letters)

    return _unique(_all())


# ─── Area Codes ──────────────────────────────────────────────────

def area_letters(name: str) -> tuple[str, str]:
    """Return (two-letter base, letters-only name) for an area name.

    Two or more words use their initials ("Zona de Juegos Infantiles" -> DJ);
    a single word uses its first two letters.
    """
    words = _letter_words(normalize_name(name, AREA_STOPWORDS))
    letters = "".join(words)
    if len(letters) < 2:
        raise CodeGenerationError(
            f"Area name '{name}' must contain at least 2 letters",
        )
    base = words[0][0] + words[1][0] if len(words) >= 2 else letters[:2]
    return base, letters


def area_code_candidates(name: str, park_prefix: str) -> Iterator[str]:
    base, letters = area_letters(name)

    def _all():
        yield base
        yield from _letter_then_alphabet(base[0], letters)

    return (f"{park_prefix}-{suffix}" for suffix in _unique(_all()))


def area_code_preview(name: str | None, park_prefix: str | None) -> str:
    """Code the area would get if nothing collided. Used by the UI while typing."""
    if not name or not park_prefix:
        return ""
    try:
        return next(area_code_candidates(name, park_prefix))
    except CodeGenerationError:
        return f"{park_prefix}-??"


# ─── Species Codes ───────────────────────────────────────────────

def species_code_candidates(
    common_name: str | None, scientific_name: str | None = None,
) -> Iterator[str]:
    """Species codes: initials of up to 3 words, else 2 letters; then 3 letters, then numbering.

    "Jacaranda" -> JA, JAC, JC, JR, ..., JA1, JA2, ...
    "Palma Washingtoniana" -> PW, PAL, PA, PL, ..., PW1, ...
    """
    source = (common_name or "").strip() or (scientific_name or "").strip()
    words = _letter_words(normalize_name(source))
    letters = "".join(words)
    if len(letters) < 2:
        raise CodeGenerationError(
            "Species name must contain at least 2 letters",
        )
    base = (
        "".join(w[0] for w in words[:3]) if len(words) >= 2 else letters[:2]
    )

    def _all():
        yield base
        if len(base) == 2 and len(letters) >= 3:
            yield letters[:3]
        for ch in letters[1:]:
            yield base[0] + ch
        for n in count(1):
            yield f"{base}{n}"

    return _unique(_all())


# ─── Tree Codes ──────────────────────────────────────────────────

def tree_code_prefix(
    species_code: str,
    area_code: str | None = None,
    park_prefix: str | None = None,
) -> str:
    """Everything before the sequence number, including the trailing dash."""
    if not species_code:
        raise CodeGenerationError("Species has no species code")
    if area_code:
        return f"{area_code}-{species_code}-"
    if park_prefix:
        return f"{park_prefix}-{PARK_LEVEL_AREA_MARKER}-{species_code}-"
    raise CodeGenerationError(
        "A tree code needs either an area or a park with a code prefix",
    )


def next_tree_sequence(existing_codes: Iterable[str | None]) -> int:
    """Highest trailing -NNNN among existing codes, plus one. Unparseable codes are ignored."""
    highest = 0
    for code in existing_codes:
        match = _TRAILING_SEQUENCE.search(code or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


def format_tree_code(prefix: str, sequence: int, width: int = 4) -> str:
    return f"{prefix}{sequence:0{width}d}"


# ─── Prefix Matching ─────────────────────────────────────────────

class CodedArea(Protocol):
    id: int
    code: str | None


def match_area_by_prefix(tree_code: str | None, areas: Sequence[CodedArea]):
    """Area whose code (plus '-') prefixes the tree code. Longest code wins."""
    if not tree_code:
        return None
    matches = [
        a for a in areas if a.code and tree_code.startswith(f"{a.code}-")
    ]
    if not matches:
        return None
    return max(matches, key=lambda a: len(a.code))
