"""Rate extraction from x-rates.com calculator pages."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Callable

from xrates_bank.services.fx_conversion import to_decimal

from .base import FetchParseError, UnknownRateError

RateExtractor = Callable[[str], Decimal]

RESULT_PATTERN = re.compile(r"<span class=bld>(\d+\.?\d*) [A-Z]{3}</span>")
UNKNOWN_RATE_PATTERN = re.compile(r"Could not convert\.")
LEGACY_RESULT_PATTERN = re.compile(r'<span class="ccOutputRslt">(\d+\.?\d*)<')


def extract_rate(body: str) -> Decimal:
    """Extract the conversion rate from a calculator response body.

    Patterns are tried in order and the first match wins, so a page that
    carries both a result span and the "Could not convert." marker yields
    the rate.

    Raises:
        UnknownRateError: If the page states the pair cannot be converted.
        FetchParseError: If the page matches none of the known layouts.
    """

    match = RESULT_PATTERN.search(body)
    if match:
        return to_decimal(match.group(1))

    if UNKNOWN_RATE_PATTERN.search(body):
        raise UnknownRateError("x-rates reports no known conversion for the requested pair.")

    match = LEGACY_RESULT_PATTERN.search(body)
    if match:
        return to_decimal(match.group(1))

    raise FetchParseError("Unable to extract a rate from the x-rates response.")
