"""Shared building blocks for term derivation calculators."""

from __future__ import annotations

import functools
import logging
from decimal import Decimal, DecimalException
from typing import Any, Callable

from shariah_contracts.config import DEFAULT_CONFIG, EngineConfig, MinimumInvestmentPolicy, ReturnBand
from shariah_contracts.exceptions import InvalidNumericInputError, InvalidRatioError
from shariah_contracts.models.enums import ContractType, FailureReason, ReturnSource
from shariah_contracts.models.results import Derivation, DerivationFailure, InvestmentTerms
from shariah_contracts.numeric import (
    HUNDRED,
    numeric_error_detail,
    round_percent,
    round_whole,
    sums_to_hundred,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

DeriveFunc = Callable[[Any, "EngineConfig | None"], "Derivation | DerivationFailure"]


def failures_as_values(contract_type: ContractType) -> Callable[[Callable[..., Derivation]], DeriveFunc]:
    """Turn input errors raised by a derivation into ``DerivationFailure`` values."""

    def decorator(func: Callable[..., Derivation]) -> DeriveFunc:
        @functools.wraps(func)
        def wrapper(terms: Any, config: EngineConfig | None = None) -> Derivation | DerivationFailure:
            try:
                derivation = func(terms, config or DEFAULT_CONFIG)
            except InvalidRatioError as e:
                failure = DerivationFailure(FailureReason.INVALID_RATIO, str(e), contract_type)
            except (InvalidNumericInputError, DecimalException) as e:
                failure = DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), contract_type)
            else:
                logger.debug(
                    "Derived %s terms: %s-%s%% over %d months",
                    contract_type.value,
                    derivation.terms.return_min,
                    derivation.terms.return_max,
                    derivation.terms.term_months,
                )
                return derivation
            logger.info(
                "No derivable %s terms: %s",
                contract_type.value,
                failure.detail,
                extra={"extra": {"contract_type": contract_type.value, "reason": failure.reason.value}},
            )
            return failure

        return wrapper

    return decorator


def apply_band(expected_return: Decimal, band: ReturnBand) -> tuple[Decimal, Decimal]:
    """Return (min, max) around an expected return, both floored at zero."""
    return_min = max(ZERO, round_percent(expected_return - band.below))
    return_max = max(ZERO, round_percent(expected_return + band.above))
    return return_min, return_max


def minimum_investment(basis: Decimal, policy: MinimumInvestmentPolicy) -> Decimal:
    """Minimum ticket: ``rate`` of ``basis`` in whole units, never below the floor."""
    return max(round_whole(policy.floor), round_whole(basis * policy.rate))


def annualize(rate: Decimal, term_months: int) -> Decimal:
    """Spread a whole-term percentage over the term length in years."""
    return rate * 12 / Decimal(term_months)


def require_split(first: Decimal, second: Decimal, names: str, config: EngineConfig) -> None:
    """Raise ``InvalidRatioError`` unless two percentages sum to 100."""
    if not sums_to_hundred(first, second, config.ratio_tolerance):
        raise InvalidRatioError(f"{names} must sum to {HUNDRED}, got {first + second}")


def build_derivation(
    contract_type: ContractType,
    *,
    expected_return: Decimal,
    return_source: ReturnSource,
    source_rate: Decimal,
    term_months: int,
    minimum_basis: Decimal,
    band: ReturnBand,
    minimum: MinimumInvestmentPolicy,
    campaign_days: int,
) -> Derivation:
    """Assemble a ``Derivation`` from an expected annual return and policy."""
    expected = round_percent(expected_return)
    return_min, return_max = apply_band(expected, band)
    terms = InvestmentTerms(
        return_min=return_min,
        return_max=return_max,
        term_months=term_months,
        minimum_investment=minimum_investment(minimum_basis, minimum),
        campaign_days=campaign_days,
    )
    return Derivation(
        contract_type=contract_type,
        terms=terms,
        expected_return=expected,
        return_source=return_source,
        source_rate=round_percent(source_rate),
        minimum_basis=minimum_basis,
        minimum_rate_percent=minimum.rate_percent.normalize(),
    )


def terms_of(derivation: Derivation | DerivationFailure) -> InvestmentTerms | DerivationFailure:
    """Unwrap the investment terms of a derivation, passing failures through."""
    if isinstance(derivation, DerivationFailure):
        return derivation
    return derivation.terms
