"""Rule name canonicalization.

Rule names reach the registry from two places: the names passed when a
validator is registered, and the names of ``data-*`` attributes found on a
validatable. Both are reduced to one camel-cased key space here, so that
``"data-max-length"``, ``"Max-Length"`` and ``"maxLength"`` all end up as
``"maxLength"``.
"""

import re
from typing import List

# Any run of non-alphanumeric characters separates words.
_SEPARATORS = re.compile(r"[\W_]+")


def _split_case(chunk: str) -> List[str]:
    words: List[str] = []
    start = 0
    for i in range(1, len(chunk)):
        char, prev = chunk[i], chunk[i - 1]
        if not char.isupper():
            continue
        following = chunk[i + 1] if i + 1 < len(chunk) else ""
        # "maxLength" splits before "L"; "HTMLPattern" splits before "P".
        if not prev.isupper() or following.islower():
            words.append(chunk[start:i])
            start = i
    words.append(chunk[start:])
    return words


def split_words(name: str) -> List[str]:
    """Split a name into its words.

    Dashes, underscores, whitespace and other punctuation separate words,
    and so do camel-case boundaries. Runs of capitals are kept together as
    one word. Letters of any script are kept.

    Args:
        name: Name in any of the supported conventions

    Returns:
        The words in their original case

    Example:
        ```python
        split_words("data-max-length")
        # ['data', 'max', 'length']
        split_words("HTMLPattern")
        # ['HTML', 'Pattern']
        ```
    """
    words: List[str] = []
    for chunk in _SEPARATORS.split(name):
        if chunk:
            words.extend(_split_case(chunk))
    return words


def to_camel_case(name: str) -> str:
    """Convert a name to the canonical camel-cased registry key.

    Args:
        name: Name in dash, snake, camel or pascal case

    Returns:
        Camel-cased key, lower-case first word
    """
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])


def to_dash_case(name: str) -> str:
    """Convert a name to the dash-separated lower-case attribute form.

    Args:
        name: Name in dash, snake, camel or pascal case

    Returns:
        Dash-separated name, e.g. ``"max-length"`` for ``"maxLength"``
    """
    return "-".join(word.lower() for word in split_words(name))


def attribute_to_rule_name(attribute_name: str, prefix: str = "data-") -> str | None:
    """Derive the rule name declared by a prefixed attribute.

    Args:
        attribute_name: Attribute name, e.g. ``"data-max-length"``
        prefix: Declarative attribute prefix

    Returns:
        Canonical rule name, or None if the attribute does not carry the
        prefix or nothing is left after removing it
    """
    if not attribute_name.lower().startswith(prefix.lower()):
        return None
    return to_camel_case(attribute_name[len(prefix):]) or None


__all__ = [
    "split_words",
    "to_camel_case",
    "to_dash_case",
    "attribute_to_rule_name",
]
