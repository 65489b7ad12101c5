"""Unit conversion arithmetic.

Results are rounded to two decimals with round-half-away-from-zero, which is what a voice reply
of "30.00 feet" expects for positive amounts and stays symmetric for negative ones.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from fractions import Fraction

from src.conversion.rates import lookup_rate

MAX_AMOUNT_EXPONENT = 15
MAX_AMOUNT_DIGITS = 30

_AMOUNT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", flags=re.ASCII)


class ConversionError(ValueError):
    """Raised when a conversion request cannot be computed."""


class InvalidAmountError(ConversionError):
    """Raised when the amount is missing, not a number, or not finite."""


class UnknownConversionError(ConversionError):
    """Raised when the (language, source, target) triple has no rate."""


@dataclass(frozen=True)
class ConversionResult:
    """A computed conversion, ready to be spoken."""

    amount: Decimal
    source_unit: str
    target_unit: str
    rate: Fraction
    converted: Decimal

    @property
    def converted_text(self) -> str:
        """The converted amount with exactly two decimals."""

        return f"{self.converted:.2f}"


def normalize_unit(unit: str | None) -> str:
    """Case-fold a spoken unit name (`"Centímetros "` -> `"centímetros"`)."""

    return unicodedata.normalize("NFC", (unit or "").strip()).lower()


def parse_amount(value: str | None) -> Decimal:
    """Parse a slot value into a bounded, finite decimal amount.

    Only plain ASCII numerals are accepted (`"10"`, `"-2.5"`, `"1e3"`). Amounts whose magnitude
    or precision lies outside `MAX_AMOUNT_EXPONENT` / `MAX_AMOUNT_DIGITS` are rejected so the exact
    arithmetic below stays small.

    Raises:
        InvalidAmountError: If the value is empty, not a plain number, or out of bounds.
    """

    text = (value or "").strip()
    if not text:
        raise InvalidAmountError("amount is missing")
    if _AMOUNT_RE.fullmatch(text) is None:
        raise InvalidAmountError(f"amount is not a number: {text!r}")
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"amount is not a number: {text!r}") from exc

    if len(amount.as_tuple().digits) > MAX_AMOUNT_DIGITS:
        raise InvalidAmountError(f"amount has too many digits: {text!r}")
    if abs(amount.adjusted()) > MAX_AMOUNT_EXPONENT:
        raise InvalidAmountError(f"amount is out of range: {text!r}")
    return amount


def round_half_away_from_zero(value: Fraction, places: int = 2) -> Decimal:
    """Round an exact fraction to `places` decimals, ties away from zero."""

    scale = 10 ** places
    scaled = abs(value) * scale
    whole, remainder = divmod(scaled.numerator, scaled.denominator)
    if 2 * remainder >= scaled.denominator:
        whole += 1
    if value < 0:
        whole = -whole
    return Decimal(whole).scaleb(-places)


def convert(amount: Decimal, source_unit: str, target_unit: str, language: str) -> ConversionResult:
    """Convert `amount` from `source_unit` to `target_unit` using `language`'s table.

    Units are normalized before the lookup.

    Raises:
        UnknownConversionError: If the language, a unit, or the pair is not in the table.
    """

    source = normalize_unit(source_unit)
    target = normalize_unit(target_unit)
    rate = lookup_rate(language, source, target)
    if rate is None:
        raise UnknownConversionError(
            f"no conversion rate for language={language} source={source!r} target={target!r}"
        )

    converted = round_half_away_from_zero(Fraction(amount) * rate)
    return ConversionResult(
        amount=amount,
        source_unit=source,
        target_unit=target,
        rate=rate,
        converted=converted,
    )
