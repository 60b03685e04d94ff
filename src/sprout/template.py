"""Lightweight string templating with per-format escaping filters."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping

from .naming import slugify

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
    "find_placeholders",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")
_CONTROL_ESCAPES = {"\b": "\\b", "\t": "\\t", "\n": "\\n", "\f": "\\f", "\r": "\\r"}
_MARKDOWN_SPECIAL = re.compile(r"([\\`*\[\]{}<>])")


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot evaluate a placeholder."""


def find_placeholders(text: str) -> list[str]:
    """Return the expressions of every ``{{ ... }}`` placeholder in ``text``."""

    return [match.group("expression") for match in _PLACEHOLDER_PATTERN.finditer(text)]


def _escape_control(value: str) -> str:
    escaped = []
    for char in value:
        if char in _CONTROL_ESCAPES:
            escaped.append(_CONTROL_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\u{ord(char):04x}")
        else:
            escaped.append(char)
    return "".join(escaped)


def escape_toml(value: Any) -> str:
    """Escape ``value`` for use inside a TOML basic (double quoted) string."""

    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return _escape_control(text)


def escape_python(value: Any) -> str:
    """Escape ``value`` for use inside a double quoted Python string literal."""

    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return _escape_control(text)


def escape_env_value(value: Any) -> str:
    """Escape ``value`` for a ``KEY="value"`` line that a shell may source."""

    text = str(value)
    for char in ("\\", '"', "$", "`"):
        text = text.replace(char, "\\" + char)
    return text.replace("\n", " ").replace("\r", " ")


def escape_markdown(value: Any) -> str:
    return _MARKDOWN_SPECIAL.sub(r"\\\1", str(value))


def escape_json(value: Any) -> str:
    """Escape ``value`` for use inside a JSON string."""

    return json.dumps(str(value), ensure_ascii=False)[1:-1]


def toml_array(value: Any) -> str:
    items = value if isinstance(value, (list, tuple)) else [value]
    return "[" + ", ".join(f'"{escape_toml(item)}"' for item in items) + "]"


def _resolve_value(context: Mapping[str, Any], dotted_path: str) -> Any:
    value: Any = context
    for segment in dotted_path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                raise KeyError(segment)
            value = value[segment]
            continue
        if hasattr(value, segment):
            value = getattr(value, segment)
            if callable(value):
                value = value()
            continue
        raise KeyError(segment)
    return value


def _apply_filter(value: Any, filter_name: str, filters: Mapping[str, Callable[[Any], Any]]) -> Any:
    try:
        filter_func = filters[filter_name]
    except KeyError as exc:
        raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc

    return filter_func(value)


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ placeholder|filters }}`` expressions.

    Substituted values are never scanned again, so a value that itself looks
    like a placeholder is emitted literally. Values that end up in structured
    files should go through the matching escape filter (``toml``, ``py``,
    ``env``, ``md`` or ``json``).
    """

    filters: MutableMapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.filters:
            self.filters.update(
                {
                    "upper": lambda value: str(value).upper(),
                    "lower": lambda value: str(value).lower(),
                    "slug": lambda value: slugify(value),
                    "strip": lambda value: str(value).strip(),
                    "toml": escape_toml,
                    "toml_array": toml_array,
                    "py": escape_python,
                    "env": escape_env_value,
                    "md": escape_markdown,
                    "json": escape_json,
                }
            )

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str = "keep",
    ) -> str:
        """Render ``template`` using ``context``.

        Parameters
        ----------
        template:
            The template string to evaluate.
        context:
            Mapping providing values for placeholders.
        missing:
            Controls what happens when a placeholder cannot be resolved. The
            supported policies are ``"keep"`` (return the placeholder unchanged),
            ``"empty"`` (replace with an empty string) and ``"error"`` (raise
            :class:`TemplateRenderingError`).
        """

        if missing not in {"keep", "empty", "error"}:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

        def substitute(match: re.Match[str]) -> str:
            expression = match.group("expression")
            parts = [part.strip() for part in expression.split("|") if part.strip()]
            if not parts:
                return match.group(0)

            key, *filters = parts
            try:
                value = _resolve_value(context, key)
            except KeyError:
                if missing == "keep":
                    return match.group(0)
                if missing == "empty":
                    return ""
                raise TemplateRenderingError(f"missing value for '{key}'")

            for filter_name in filters:
                value = _apply_filter(value, filter_name, self.filters)

            return str(value)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)
