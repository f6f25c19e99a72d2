"""
Quantity merging for the shopping list.

Quantities are free text ("2", "1 1/2 cups", "a pinch"), so merging two of them
is a policy rather than arithmetic:

* when both start with a number and the text after it matches
  (case-insensitively), the numbers are added exactly and the shared text is
  kept: "1 1/2 cups" + "1/2 cups" -> "2 cups";
* otherwise both are kept, joined with " + ": "2" + "a pinch" -> "2 + a pinch".
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
import re

UNICODE_FRACTIONS: dict[str, Fraction] = {
    "\u00bd": Fraction(1, 2),  # ½
    "\u2153": Fraction(1, 3),  # ⅓
    "\u2154": Fraction(2, 3),  # ⅔
    "\u00bc": Fraction(1, 4),  # ¼
    "\u00be": Fraction(3, 4),  # ¾
    "\u2155": Fraction(1, 5),  # ⅕
    "\u2156": Fraction(2, 5),  # ⅖
    "\u2157": Fraction(3, 5),  # ⅗
    "\u2158": Fraction(4, 5),  # ⅘
    "\u2159": Fraction(1, 6),  # ⅙
    "\u215a": Fraction(5, 6),  # ⅚
    "\u215b": Fraction(1, 8),  # ⅛
    "\u215c": Fraction(3, 8),  # ⅜
    "\u215d": Fraction(5, 8),  # ⅝
    "\u215e": Fraction(7, 8),  # ⅞
}

QUANTITY_SEPARATOR = " + "
_RANGE_MARKERS = "-\u2013~/+"

_UNICODE_CLASS = "".join(UNICODE_FRACTIONS)
_LEADING_AMOUNT = re.compile(
    rf"""^\s*(?:
        (?P<mixed_whole>\d+)\s+(?P<mixed_num>\d+)\s*/\s*(?P<mixed_den>\d+)
      | (?P<num>\d+)\s*/\s*(?P<den>\d+)
      | (?P<uwhole>\d+)?\s*(?P<ufrac>[{_UNICODE_CLASS}])
      | (?P<decimal>\d+(?:[.,]\d+)?|[.,]\d+)
    )(?P<rest>.*)$""",
    re.VERBOSE | re.DOTALL,
)


@dataclass(frozen=True)
class ParsedQuantity:
    amount: Fraction
    remainder: str

    @property
    def remainder_key(self) -> str:
        return " ".join(self.remainder.lower().split())


def parse_quantity(text: str) -> ParsedQuantity | None:
    """Split a quantity into its leading number and the text after it.

    Returns None when the text does not start with a usable number.
    """
    match = _LEADING_AMOUNT.match(text or "")
    if not match:
        return None

    rest = match.group("rest")
    # "2x", "3rd" and ranges like "2-3" or "2 to 3" are not a single amount.
    if rest and not rest[0].isspace():
        return None
    remainder = rest.strip()
    if remainder and (remainder[0].isdigit() or remainder[0] in _RANGE_MARKERS or remainder.lower().startswith("to ")):
        return None

    try:
        if match.group("mixed_whole") is not None:
            amount = int(match.group("mixed_whole")) + Fraction(
                int(match.group("mixed_num")), int(match.group("mixed_den"))
            )
        elif match.group("num") is not None:
            amount = Fraction(int(match.group("num")), int(match.group("den")))
        elif match.group("ufrac") is not None:
            amount = UNICODE_FRACTIONS[match.group("ufrac")] + int(match.group("uwhole") or 0)
        else:
            amount = Fraction(match.group("decimal").replace(",", "."))
    except ZeroDivisionError:
        return None

    return ParsedQuantity(amount=amount, remainder=remainder)


def format_amount(amount: Fraction) -> str:
    """Write an amount so that parse_quantity reads it back unchanged.

    Whole numbers print as integers, amounts with at most two decimals as
    decimals, and anything else (thirds, eighths) as a fraction or mixed number.
    """
    if amount.denominator == 1:
        return str(amount.numerator)
    if (amount * 100).denominator == 1:
        return f"{float(amount):.2f}".rstrip("0").rstrip(".")
    whole, remainder = divmod(amount.numerator, amount.denominator)
    fraction = f"{remainder}/{amount.denominator}"
    return f"{whole} {fraction}" if whole else fraction


def combine_quantities(existing: str, incoming: str) -> str:
    existing = existing.strip()
    incoming = incoming.strip()
    if not existing:
        return incoming
    if not incoming:
        return existing

    left = parse_quantity(existing)
    right = parse_quantity(incoming)
    if left and right and left.remainder_key == right.remainder_key:
        total = format_amount(left.amount + right.amount)
        return f"{total} {left.remainder}".strip()

    return f"{existing}{QUANTITY_SEPARATOR}{incoming}"
