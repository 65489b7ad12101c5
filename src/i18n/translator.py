"""Locale resolution and message translation.

A translator is a plain function `t(key, *args) -> str` bound to one language's templates. It is
built fresh per request from the static tables; no global localization client is kept.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from src.i18n.resources import DEFAULT_LANGUAGE, LANGUAGE_STRINGS

Translator = Callable[..., str]

_LOCALE_SEPARATOR_RE = re.compile(r"[-_]")
_PLACEHOLDER_RE = re.compile(r"%s")


class TranslationError(ValueError):
    """Raised when a message cannot be rendered."""


class UnknownMessageKeyError(TranslationError):
    """Raised when a key exists neither in the requested nor in the default language."""


class TemplateArgumentError(TranslationError):
    """Raised when the argument count does not match the template placeholders."""


@dataclass(frozen=True)
class LanguageResolution:
    """Outcome of mapping a request locale onto an available message table.

    `fell_back` is set when the requested language has no table (or the locale is empty) and the
    default language was used instead.
    """

    locale: str | None
    requested: str | None
    language: str
    fell_back: bool


def language_from_locale(locale: str | None) -> str | None:
    """Return the language segment of a locale code (`"es-MX"` -> `"es"`)."""

    value = (locale or "").strip()
    if not value:
        return None
    language = _LOCALE_SEPARATOR_RE.split(value, maxsplit=1)[0].lower()
    return language or None


def resolve_language(
        locale: str | None,
        resources: Mapping[str, Mapping[str, str]] = LANGUAGE_STRINGS,
        default: str = DEFAULT_LANGUAGE,
) -> LanguageResolution:
    """Resolve a locale to a language that has a message table.

    Unknown or missing languages resolve to `default`; the returned record says so explicitly.
    """

    if default not in resources:
        raise TranslationError(f"default language {default!r} has no message table")

    requested = language_from_locale(locale)
    if requested is not None and requested in resources:
        return LanguageResolution(locale=locale, requested=requested, language=requested, fell_back=False)
    return LanguageResolution(locale=locale, requested=requested, language=default, fell_back=True)


def fill_template(template: str, args: tuple[object, ...]) -> str:
    """Substitute `args` into the `%s` placeholders of `template`, in order.

    Raises:
        TemplateArgumentError: If the number of args differs from the number of placeholders.
    """

    expected = len(_PLACEHOLDER_RE.findall(template))
    if expected != len(args):
        raise TemplateArgumentError(
            f"template expects {expected} argument(s), got {len(args)}"
        )

    values = iter(args)
    return _PLACEHOLDER_RE.sub(lambda _m: str(next(values)), template)


def resolve_translator(
        language: str,
        resources: Mapping[str, Mapping[str, str]] = LANGUAGE_STRINGS,
        default: str = DEFAULT_LANGUAGE,
) -> Translator:
    """Build a translator bound to `language`, falling back to `default` per key."""

    if default not in resources:
        raise TranslationError(f"default language {default!r} has no message table")

    primary = resources.get(language, resources[default])
    fallback = resources[default]

    def t(key: str, *args: object) -> str:
        template = primary.get(key)
        if template is None:
            template = fallback.get(key)
        if template is None:
            raise UnknownMessageKeyError(f"unknown message key {key!r} for language {language!r}")
        return fill_template(template, args)

    return t
