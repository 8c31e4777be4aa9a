"""
Text helpers: post slugs and request value parsing.
"""
import json
import re
from dataclasses import dataclass

_NON_WORD = re.compile(r"[^\w ]+", re.ASCII)
_SPACES = re.compile(r" +")


def slugify_title(title):
    """
    Derive a post slug from its title.

    Lower-cases, drops everything that is not a word character or a space,
    then turns each run of spaces into a single hyphen. Leading and trailing
    spaces are kept as hyphens, so "  a b " becomes "-a-b-".
    """
    text = _NON_WORD.sub("", (title or "").lower())
    return _SPACES.sub("-", text)


@dataclass(frozen=True)
class ParsedTags:
    tags: tuple


@dataclass(frozen=True)
class ParseError:
    message: str


def _dedupe(items):
    return tuple(dict.fromkeys(items))


def _split_csv(raw):
    return _dedupe(part.strip() for part in raw.split(",") if part.strip())


def parse_tags(raw):
    """
    Parse a tags value from a request.

    Accepts a list of strings, a JSON array string, or a comma-separated
    string. Returns ``ParsedTags`` or ``ParseError``.
    """
    if raw is None or raw == "":
        return ParsedTags(tags=())

    if isinstance(raw, (list, tuple)):
        if not all(isinstance(item, str) for item in raw):
            return ParseError("Tags must be strings")
        return ParsedTags(tags=_dedupe(item.strip() for item in raw if item.strip()))

    if not isinstance(raw, str):
        return ParseError("Tags must be a list or a comma-separated string")

    try:
        decoded = json.loads(raw)
    except ValueError:
        return ParsedTags(tags=_split_csv(raw))

    if isinstance(decoded, list):
        return parse_tags(decoded)
    # Valid JSON but not an array ("5", "null"): read it as plain text
    return ParsedTags(tags=_split_csv(raw))


def parse_bool(value):
    """Form values arrive as "true"/"false" strings; JSON gives real booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"
