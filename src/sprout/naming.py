"""Name checks and conversions applied to user supplied project names."""

from __future__ import annotations

import keyword
import re
import unicodedata
from typing import Iterable

__all__ = ["slugify", "package_name_for", "is_package_name", "unsafe_name_reason"]


_SEPARATORS = re.compile(r"[\s\-]+")
_ILLEGAL_PATH_CHARACTERS = frozenset('<>:"|?*')
_PATH_SEPARATORS = frozenset("/\\")
_MAX_NAME_BYTES = 255


def slugify(value: str | Iterable[str], *, separator: str = "-", allow_unicode: bool = False) -> str:
    """Create a filesystem and URL friendly slug from ``value``.

    Parameters
    ----------
    value:
        The text to normalise. When an iterable of strings is provided the values
        are joined with spaces before slugification.
    separator:
        The character used to join individual words.
    allow_unicode:
        When ``True`` unicode characters are preserved. Otherwise the result is
        restricted to ASCII.
    """

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        value = " ".join(str(part) for part in value)

    text = str(value)
    if not allow_unicode:
        text = unicodedata.normalize("NFKD", text)
        text = text.encode("ascii", "ignore").decode("ascii")
    else:
        text = unicodedata.normalize("NFKC", text)

    text = re.sub(r"[\s]+", " ", text)
    text = re.sub(r"[^\w\-. ]", "", text, flags=re.UNICODE)
    text = text.strip().lower()

    if not text:
        return ""

    collapsed = _SEPARATORS.sub(separator, text)
    collapsed = re.sub(rf"{re.escape(separator)}+", separator, collapsed)
    return collapsed.strip(separator + ".")


def package_name_for(name: str) -> str:
    """Return the import package name for ``name``: every ``-`` becomes ``_``."""

    return name.replace("-", "_")


def is_package_name(value: str) -> bool:
    """Return ``True`` when ``value`` can be used as an importable package."""

    return value.isidentifier() and value.isascii() and not keyword.iskeyword(value)


def unsafe_name_reason(name: str) -> str | None:
    """Explain why ``name`` cannot be used as a directory name, or return ``None``."""

    if name in {".", ".."}:
        return "it refers to a directory traversal segment"
    if any(char in _PATH_SEPARATORS for char in name):
        return "it contains a path separator"
    if any(unicodedata.category(char) == "Cc" for char in name):
        return "it contains control characters"
    illegal = sorted({char for char in name if char in _ILLEGAL_PATH_CHARACTERS})
    if illegal:
        return f"it contains characters not allowed in paths: {''.join(illegal)}"
    if name.startswith("-"):
        return "it starts with '-' and would be read as a command line option"
    if name != name.strip():
        return "it has leading or trailing whitespace"
    if len(name.encode("utf-8")) > _MAX_NAME_BYTES:
        return f"it is longer than {_MAX_NAME_BYTES} bytes"
    return None
