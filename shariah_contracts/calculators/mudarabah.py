"""Mudarabah (profit-sharing trust) term derivation."""

from decimal import Decimal

from shariah_contracts.calculators.base import build_derivation, failures_as_values, require_split
from shariah_contracts.config import EngineConfig
from shariah_contracts.models.contracts import MudarabahTerms
from shariah_contracts.models.enums import ContractType, ReturnSource
from shariah_contracts.models.results import Derivation
from shariah_contracts.numeric import (
    require_months,
    require_non_negative,
    require_percentage,
    require_positive,
)


@failures_as_values(ContractType.MUDARABAH)
def derive_mudarabah(terms: MudarabahTerms, config: EngineConfig) -> Derivation:
    """Derive investment terms from a Mudarabah contract.

    The expected return is the stated annual return, then the stated
    return rate, and otherwise the investor's profit share of an assumed
    baseline business return. The band is skewed upwards because actual
    returns depend on business performance.
    """
    policy = config.mudarabah
    term_months = require_months(terms.duration)
    capital = require_positive(terms.capital_amount, "capital_amount")
    investor_share = require_percentage(terms.investor_profit_share, "investor_profit_share")
    mudarib_share = require_percentage(terms.mudarib_profit_share, "mudarib_profit_share")
    require_split(investor_share, mudarib_share, "investor_profit_share + mudarib_profit_share", config)

    expected, source, source_rate = _expected_return(terms, investor_share, policy.baseline_business_return)

    return build_derivation(
        ContractType.MUDARABAH,
        expected_return=expected,
        return_source=source,
        source_rate=source_rate,
        term_months=term_months,
        minimum_basis=capital,
        band=policy.band,
        minimum=policy.minimum,
        campaign_days=policy.campaign.days_for(term_months),
    )


def _expected_return(
    terms: MudarabahTerms,
    investor_share: Decimal,
    baseline: Decimal,
) -> tuple[Decimal, ReturnSource, Decimal]:
    """Return (expected return, where it came from, the rate it started from)."""
    if terms.expected_annual_return is not None:
        stated = require_non_negative(terms.expected_annual_return, "expected_annual_return")
        return stated, ReturnSource.STATED_ANNUAL_RETURN, stated
    if terms.expected_return_rate is not None:
        stated = require_non_negative(terms.expected_return_rate, "expected_return_rate")
        return stated, ReturnSource.STATED_RETURN_RATE, stated
    return investor_share * baseline, ReturnSource.BASELINE_ESTIMATE, investor_share
