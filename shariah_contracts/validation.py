"""Consistency checks on contract terms before they are published.

Unlike the calculators, which stop at the first unusable field, these
checks collect every problem so a contract can be corrected in one pass.
"""

from __future__ import annotations

import logging
from decimal import DecimalException
from typing import Any, Callable

from shariah_contracts.classifier import coerce_contract
from shariah_contracts.config import DEFAULT_CONFIG, EngineConfig
from shariah_contracts.distribution import validate_ratios
from shariah_contracts.exceptions import InvalidNumericInputError
from shariah_contracts.models.contracts import (
    IjarahTerms,
    MudarabahTerms,
    MurabahaTerms,
    MusharakahTerms,
    SalamTerms,
)
from shariah_contracts.models.results import DerivationFailure
from shariah_contracts.numeric import (
    HUNDRED,
    numeric_error_detail,
    require_months,
    require_non_negative,
    require_positive,
    round_percent,
    to_decimal,
    to_int,
)

logger = logging.getLogger(__name__)


def _guarded(problems: list[str], guard: Callable[..., Any], *args: Any) -> Any:
    """Run one input guard, recording its message instead of raising."""
    try:
        return guard(*args)
    except InvalidNumericInputError as e:
        problems.append(str(e))
        return None


def _at_least_one(value: Any, field_name: str) -> int:
    count = to_int(value, field_name)
    if count < 1:
        raise InvalidNumericInputError(field_name, f"must be at least 1, got {count}")
    return count


def _murabaha(terms: MurabahaTerms, config: EngineConfig, problems: list[str]) -> None:
    _guarded(problems, require_months, terms.duration)
    cost = _guarded(problems, require_positive, terms.cost_price, "cost_price")
    selling = _guarded(problems, require_positive, terms.selling_price, "selling_price")
    profit = _guarded(problems, require_non_negative, terms.profit_amount, "profit_amount")
    rate = _guarded(problems, require_non_negative, terms.profit_rate, "profit_rate")
    if terms.number_of_installments is not None:
        _guarded(problems, _at_least_one, terms.number_of_installments, "number_of_installments")

    if cost is not None and profit is not None:
        if selling is not None and selling != cost + profit:
            problems.append(f"selling_price {selling} must equal cost_price + profit_amount, got {cost + profit}")
        implied = profit / cost * HUNDRED
        if rate is not None and abs(rate - implied) > config.ratio_tolerance:
            problems.append(
                f"profit_rate {rate} must match profit_amount / cost_price, got {round_percent(implied)}"
            )


def _mudarabah(terms: MudarabahTerms, config: EngineConfig, problems: list[str]) -> None:
    _guarded(problems, require_months, terms.duration)
    _guarded(problems, require_positive, terms.capital_amount, "capital_amount")
    problems.extend(validate_ratios(terms, config))


def _musharakah(terms: MusharakahTerms, config: EngineConfig, problems: list[str]) -> None:
    _guarded(problems, require_months, terms.duration)
    problems.extend(validate_ratios(terms, config))


def _ijarah(terms: IjarahTerms, config: EngineConfig, problems: list[str]) -> None:
    _guarded(problems, require_months, terms.duration)
    _guarded(problems, require_positive, terms.asset_value, "asset_value")
    _guarded(problems, require_positive, terms.monthly_rental, "monthly_rental")
    if terms.purchase_option_included:
        residual = _guarded(problems, to_decimal, terms.residual_value, "residual_value")
        if residual is not None and residual <= 0:
            problems.append(f"residual_value: must be positive when a purchase option is included, got {residual}")


def _salam(terms: SalamTerms, config: EngineConfig, problems: list[str]) -> None:
    _guarded(problems, require_months, terms.duration)
    advance = _guarded(problems, require_positive, terms.advance_payment, "advance_payment")
    delivery = _guarded(problems, to_decimal, terms.delivery_value, "delivery_value")
    if advance is not None and delivery is not None and delivery <= advance:
        problems.append(f"delivery_value {delivery} must exceed advance_payment {advance}")
    if terms.quantity is not None:
        _guarded(problems, require_positive, terms.quantity, "quantity")


_VALIDATORS: dict[type, Callable[[Any, EngineConfig, list[str]], None]] = {
    MurabahaTerms: _murabaha,
    MudarabahTerms: _mudarabah,
    MusharakahTerms: _musharakah,
    IjarahTerms: _ijarah,
    SalamTerms: _salam,
}


def validate_contract(contract_terms: Any, config: EngineConfig | None = None) -> list[str]:
    """List every consistency problem in contract terms.

    Parameters
    ----------
    contract_terms : Any
        A contract dataclass or a stored contract mapping.
    config : EngineConfig | None
        Policy configuration; its ``ratio_tolerance`` bounds percentage
        comparisons.

    Returns
    -------
    list[str]
        One message per problem, empty when the terms are consistent.
        Input that is not a recognizable contract yields its single
        classification failure.
    """
    config = config or DEFAULT_CONFIG
    terms = coerce_contract(contract_terms)
    if isinstance(terms, DerivationFailure):
        return [terms.detail]

    problems: list[str] = []
    try:
        _VALIDATORS[type(terms)](terms, config, problems)
    except DecimalException as e:
        problems.append(numeric_error_detail(e))
    if problems:
        logger.debug("%s terms have %d problem(s)", terms.contract_type.value, len(problems))
    return problems
