"""Pure naming helpers shared by the resolvers and the stub renderer.

Contains the Suffix Enforcer (:func:`ensure_suffix`), the Duplication Guard
(:func:`strip_overlap`) and the case-conversion helpers used to build
class names, namespaces and placeholder spellings.  Nothing in here touches
the filesystem or the configuration.
"""

from __future__ import annotations

import re


_SEPARATORS = re.compile(r"[\\/]+")
_WORD_BREAK = re.compile(r"[-_\s]+")


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


def split_segments(value: str) -> list[str]:
    """Split a path or namespace on ``/`` and ``\\`` into non-empty segments.

    Examples::

        split_segments("Infrastructure/Casts")   -> ["Infrastructure", "Casts"]
        split_segments("\\App\\Events\\Foo")     -> ["App", "Events", "Foo"]
        split_segments("")                       -> []
    """
    return [part.strip() for part in _SEPARATORS.split(value.strip()) if part.strip()]


def join_namespace(segments: list[str], separator: str = "\\") -> str:
    """Join namespace segments, skipping empty ones."""
    return separator.join(s for s in segments if s)


def class_basename(name: str) -> str:
    """Return the last segment of a class reference (``App\\Models\\Post`` -> ``Post``)."""
    segments = split_segments(name)
    return segments[-1] if segments else ""


def starts_with_segments(segments: list[str], prefix: list[str]) -> bool:
    """Segment-wise prefix test; ``["Events", "Foo"]`` does not start with ``["Event"]``."""
    return bool(prefix) and segments[: len(prefix)] == prefix


# ---------------------------------------------------------------------------
# Duplication Guard
# ---------------------------------------------------------------------------


def strip_overlap(anchor: list[str], segments: list[str], min_length: int = 1) -> list[str]:
    """Drop the leading part of *segments* that repeats the tail of *anchor*.

    Finds the longest ``k`` such that ``anchor[-k:] == segments[:k]`` and
    returns ``segments[k:]``.  Overlaps shorter than *min_length* are left
    alone so that a single coincidental folder name is not collapsed.
    Comparison is per segment, never by substring.

    Examples::

        strip_overlap(["App", "Blog"], ["Blog", "Models"])                -> ["Models"]
        strip_overlap(["Blog", "Infra", "Casts"], ["Infra", "Casts", "X"]) -> ["X"]
        strip_overlap(["Events"], ["EventsArchive"])                      -> ["EventsArchive"]
    """
    floor = max(min_length, 1)
    for k in range(min(len(anchor), len(segments)), floor - 1, -1):
        if anchor[-k:] == segments[:k]:
            return segments[k:]
    return list(segments)


# ---------------------------------------------------------------------------
# Suffix Enforcer
# ---------------------------------------------------------------------------


def ensure_suffix(name: str, suffix: str, enabled: bool = True) -> str:
    """Append *suffix* to *name* unless it already ends with it.

    Case-sensitive exact tail match.  Returns *name* unchanged when
    enforcement is disabled or the suffix is empty, so the function is
    idempotent for every input.
    """
    if not enabled or not suffix:
        return name
    if name.endswith(suffix):
        return name
    return name + suffix


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def studly(value: str) -> str:
    """Convert ``some-thing`` / ``some_thing`` / ``someThing`` to ``SomeThing``.

    Existing inner capitals are kept (``JsonCast`` stays ``JsonCast``).
    """
    return "".join(word[:1].upper() + word[1:] for word in _WORD_BREAK.split(value) if word)


def camel(value: str) -> str:
    """Convert to ``someThing``."""
    pascal = studly(value)
    return pascal[:1].lower() + pascal[1:] if pascal else ""


def snake(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def pluralize(word: str) -> str:
    """Naive English plural used for table names (``category`` -> ``categories``)."""
    if not word:
        return word
    lower = word.lower()
    if lower.endswith("y") and lower[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    return word + "s"


def key_variants(key: str) -> list[str]:
    """Return the spellings a placeholder key may take inside a stub.

    The key itself first, then its upper, lower, Studly, camel and snake
    forms, without duplicates.
    """
    variants: list[str] = []
    for candidate in (key, key.upper(), key.lower(), studly(key), camel(key), snake(key)):
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants
