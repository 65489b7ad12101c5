"""Localized message templates.

Templates use positional `%s` placeholders and are filled by the translator in argument order.
The tables are read-only for the lifetime of the process.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

DEFAULT_LANGUAGE = "en"


class MessageKey(StrEnum):
    """Known message template keys."""

    WELCOME_MESSAGE = "WELCOME_MESSAGE"
    HELLO_MESSAGE = "HELLO_MESSAGE"
    HELP_MESSAGE = "HELP_MESSAGE"
    GOODBYE_MESSAGE = "GOODBYE_MESSAGE"
    REFLECTOR_MESSAGE = "REFLECTOR_MESSAGE"
    FALLBACK_MESSAGE = "FALLBACK_MESSAGE"
    ERROR_MESSAGE = "ERROR_MESSAGE"
    CONVERT_MESSAGE = "CONVERT_MESSAGE"


_EN: dict[str, str] = {
    MessageKey.WELCOME_MESSAGE: (
        "Welcome to the Unit Converter! You can ask to convert units. For example, you can say, "
        '"Convert 10 yards to feet." How can I help you?'
    ),
    MessageKey.HELLO_MESSAGE: "Hello World!",
    MessageKey.HELP_MESSAGE: (
        "You can ask me to convert units between yards, inches, and feet. How can I assist you?"
    ),
    MessageKey.GOODBYE_MESSAGE: "Goodbye from the Unit Converter!",
    MessageKey.REFLECTOR_MESSAGE: "You just triggered %s.",
    MessageKey.FALLBACK_MESSAGE: (
        "Sorry, I didn't understand that. Please make sure to use correct unit names and try again."
    ),
    MessageKey.ERROR_MESSAGE: "Sorry, there was an error. Please try again.",
    MessageKey.CONVERT_MESSAGE: "The conversion from %s %s to %s is %s %s.",
}

_ES: dict[str, str] = {
    MessageKey.WELCOME_MESSAGE: (
        "¡Bienvenido al Convertidor de Unidades! Puedes pedir convertir unidades. Por ejemplo, "
        'puedes decir, "Convierte 10 metros a centímetros." ¿Cómo te puedo ayudar?'
    ),
    MessageKey.HELLO_MESSAGE: "¡Hola Mundo!",
    MessageKey.HELP_MESSAGE: (
        "Puedes pedirme que convierta unidades entre centímetros, metros y kilómetros. "
        "¿Cómo te puedo asistir?"
    ),
    MessageKey.GOODBYE_MESSAGE: "¡Adiós desde el Convertidor de Unidades!",
    MessageKey.REFLECTOR_MESSAGE: "Acabas de activar %s.",
    MessageKey.FALLBACK_MESSAGE: (
        "Lo siento, no he entendido la solicitud. Por favor, asegúrate de usar nombres de "
        "unidades correctos e inténtalo de nuevo."
    ),
    MessageKey.ERROR_MESSAGE: "Lo siento, hubo un error. Por favor, inténtalo de nuevo.",
    MessageKey.CONVERT_MESSAGE: "La conversión de %s %s a %s es %s %s.",
}

LANGUAGE_STRINGS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "en": MappingProxyType(_EN),
        "es": MappingProxyType(_ES),
    }
)


def supported_languages() -> frozenset[str]:
    """Languages that have a message table."""

    return frozenset(LANGUAGE_STRINGS)
