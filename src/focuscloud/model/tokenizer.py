"""Splitting raw cloud text into words and normalising their casing."""
from __future__ import annotations

from enum import StrEnum


class Casing(StrEnum):
    AS_IS = "as-is"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    TITLE_CASE = "title-case"


# Kept lowercase inside multi-word phrases unless first or last.
SMALL_WORDS: frozenset[str] = frozenset({
    "a", "an", "and", "as", "at", "but", "by", "for",
    "in", "of", "on", "or", "the", "to", "with",
})

_SEPARATOR_NAMES = {
    ",": "comma",
    ".": "period",
    " ": "space",
}


def _capitalize_first(token: str) -> str:
    return token[:1].upper() + token[1:]


def title_case(text: str) -> str:
    """
    Title-case a single word or a phrase.

    A single word only gets its first character upper-cased. In a phrase every
    token is capitalised except the small words, which stay lowercase unless
    they open or close the phrase.
    """
    tokens = text.lower().split(" ")
    if len(tokens) == 1:
        return text[:1].upper() + text[1:].lower()

    last = len(tokens) - 1
    return " ".join(
        _capitalize_first(token) if i in (0, last) or token not in SMALL_WORDS else token
        for i, token in enumerate(tokens)
    )


def apply_casing(text: str, casing: Casing | str) -> str:
    match Casing(casing):
        case Casing.UPPERCASE:
            return text.upper()
        case Casing.LOWERCASE:
            return text.lower()
        case Casing.TITLE_CASE:
            return title_case(text)
        case _:
            return text


def split_words(raw_text: str, separator: str = ",") -> list[str]:
    """Split on `separator`, trim every piece and drop the empty ones."""
    separator = separator or ","
    return [w.strip() for w in raw_text.split(separator) if w.strip()]


def parse_words(raw_text: str, separator: str = ",", casing: Casing | str = Casing.AS_IS) -> list[str]:
    return [apply_casing(w, casing) for w in split_words(raw_text, separator)]


def separator_name(separator: str) -> str:
    """Human readable name of a separator, e.g. 'comma' or '";"'."""
    return _SEPARATOR_NAMES.get(separator, f'"{separator}"')
