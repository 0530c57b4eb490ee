"""Letter-case checks used by the *-case rules.

Mirrors the commitlint notion of "is already in case X": the text is
converted to the target case and compared with itself. Quoted and
back-ticked fragments are ignored.
"""

import re

_QUOTED = re.compile(r"`.*?`|\".*?\"|'.*?'")
_WORDS = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]|\b|\d)|[A-Z]?[a-z]+|[A-Z]+|\d+")


def _words(text: str) -> list[str]:
    return _WORDS.findall(text)


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _camel(text: str) -> str:
    words = [w.lower() for w in _words(text)]
    if not words:
        return ""
    return words[0] + "".join(_upper_first(w) for w in words[1:])


CASE_CONVERTERS = {
    "lower-case": str.lower,
    "lowercase": str.lower,
    "upper-case": str.upper,
    "uppercase": str.upper,
    "sentence-case": _upper_first,
    "sentencecase": _upper_first,
    "camel-case": _camel,
    "pascal-case": lambda text: _upper_first(_camel(text)),
    "kebab-case": lambda text: "-".join(w.lower() for w in _words(text)),
    "snake-case": lambda text: "_".join(w.lower() for w in _words(text)),
    "start-case": lambda text: " ".join(_upper_first(w.lower()) if not w.isupper() else w for w in _words(text)),
}


def to_case(text: str, case: str) -> str:
    converter = CASE_CONVERTERS.get(case)
    if converter is None:
        return text
    return converter(text)


def is_case(text: str, case: str) -> bool:
    """Check whether text already satisfies the given case.

    Unknown case names always match.
    """
    if case not in CASE_CONVERTERS:
        return True
    stripped = _QUOTED.sub("", text).strip()
    transformed = to_case(stripped, case)
    if transformed == "" or transformed[0].isdigit():
        return True
    return transformed == stripped
