"""Headline metrics per contract variant."""

from decimal import Decimal, DecimalException
from typing import Any

from shariah_contracts.calculators.ijarah import rental_yield
from shariah_contracts.classifier import coerce_contract
from shariah_contracts.distribution import capital_ratio
from shariah_contracts.exceptions import InvalidNumericInputError
from shariah_contracts.models.contracts import (
    IjarahTerms,
    MudarabahTerms,
    MurabahaTerms,
    MusharakahTerms,
    SalamTerms,
)
from shariah_contracts.models.enums import FailureReason
from shariah_contracts.models.reports import ContractMetrics
from shariah_contracts.models.results import DerivationFailure
from shariah_contracts.numeric import (
    HUNDRED,
    MONTHS_PER_YEAR,
    numeric_error_detail,
    require_months,
    require_non_negative,
    require_percentage,
    require_positive,
    round_money,
    round_percent,
)

ZERO = Decimal("0")


def _optional(value: Any, field_name: str) -> Decimal:
    return ZERO if value is None else require_non_negative(value, field_name)


def _murabaha(terms: MurabahaTerms) -> ContractMetrics:
    months = require_months(terms.duration)
    cost = require_positive(terms.cost_price, "cost_price")
    selling = require_positive(terms.selling_price, "selling_price")
    markup = selling - cost
    markup_rate = markup / cost * HUNDRED
    apr = markup_rate * MONTHS_PER_YEAR / months
    return ContractMetrics(
        contract_type=terms.contract_type,
        total_amount=selling,
        total_return=require_non_negative(terms.profit_amount, "profit_amount"),
        effective_rate=round_percent(apr),
        duration=months,
        extras={"markup": markup, "markup_rate": round_percent(markup_rate)},
    )


def _mudarabah(terms: MudarabahTerms) -> ContractMetrics:
    months = require_months(terms.duration)
    capital = require_positive(terms.capital_amount, "capital_amount")
    projected = _optional(terms.projected_profit, "projected_profit")
    investor = require_percentage(terms.investor_profit_share, "investor_profit_share")
    mudarib = require_percentage(terms.mudarib_profit_share, "mudarib_profit_share")
    stated, stated_field = terms.expected_annual_return, "expected_annual_return"
    if stated is None:
        stated, stated_field = terms.expected_return_rate, "expected_return_rate"
    return ContractMetrics(
        contract_type=terms.contract_type,
        total_amount=capital,
        total_return=projected,
        effective_rate=round_percent(_optional(stated, stated_field)),
        duration=months,
        extras={
            "investor_expected_return": round_money(projected * investor / HUNDRED),
            "mudarib_expected_return": round_money(projected * mudarib / HUNDRED),
        },
    )


def _musharakah(terms: MusharakahTerms) -> ContractMetrics:
    months = require_months(terms.duration)
    equity1, equity2 = capital_ratio(terms)
    projected = _optional(terms.projected_profit, "projected_profit")
    share1 = require_percentage(terms.party1_profit_share, "party1_profit_share")
    share2 = require_percentage(terms.party2_profit_share, "party2_profit_share")
    return ContractMetrics(
        contract_type=terms.contract_type,
        total_amount=terms.total_capital,
        total_return=projected,
        effective_rate=round_percent(_optional(terms.expected_annual_return, "expected_annual_return")),
        duration=months,
        extras={
            "party1_expected_return": round_money(projected * share1 / HUNDRED),
            "party2_expected_return": round_money(projected * share2 / HUNDRED),
            "party1_equity": round_percent(equity1),
            "party2_equity": round_percent(equity2),
        },
    )


def _ijarah(terms: IjarahTerms) -> ContractMetrics:
    months = require_months(terms.duration)
    asset_value = require_positive(terms.asset_value, "asset_value")
    rental = require_non_negative(terms.monthly_rental, "monthly_rental")
    income = (
        rental * months
        if terms.total_rental_payments is None
        else require_non_negative(terms.total_rental_payments, "total_rental_payments")
    )
    maintenance = _optional(terms.maintenance_cost, "maintenance_cost") * months
    residual = _optional(terms.residual_value, "residual_value")
    extras = {
        "total_rental_income": income,
        "asset_depreciation": asset_value - residual,
        "net_return": income - maintenance,
        "residual_value": residual,
        "monthly_return_rate": round_percent(rental / asset_value * HUNDRED),
    }
    if rental > 0:
        extras["payback_months"] = round_money(asset_value / rental)
    yield_ = round_percent(rental_yield(rental, asset_value))
    extras["rental_yield"] = yield_
    return ContractMetrics(
        contract_type=terms.contract_type,
        total_amount=asset_value,
        total_return=income - maintenance,
        effective_rate=yield_,
        duration=months,
        extras=extras,
    )


def _salam(terms: SalamTerms) -> ContractMetrics:
    months = require_months(terms.duration)
    advance = require_positive(terms.advance_payment, "advance_payment")
    delivery = require_positive(terms.delivery_value, "delivery_value")
    discount = delivery - advance
    annualized = discount / advance * HUNDRED * MONTHS_PER_YEAR / months
    return ContractMetrics(
        contract_type=terms.contract_type,
        total_amount=advance,
        total_return=discount,
        effective_rate=round_percent(annualized),
        duration=months,
        extras={
            "delivery_value": delivery,
            "discount": discount,
            "discount_rate": round_percent(discount / delivery * HUNDRED),
        },
    )


_METRICS = {
    MurabahaTerms: _murabaha,
    MudarabahTerms: _mudarabah,
    MusharakahTerms: _musharakah,
    IjarahTerms: _ijarah,
    SalamTerms: _salam,
}


def contract_metrics(contract_terms: Any) -> ContractMetrics | DerivationFailure:
    """Headline metrics for any contract variant."""
    terms = coerce_contract(contract_terms)
    if isinstance(terms, DerivationFailure):
        return terms
    try:
        return _METRICS[type(terms)](terms)
    except (InvalidNumericInputError, DecimalException) as e:
        return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), terms.contract_type)
