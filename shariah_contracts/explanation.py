"""Human-readable explanation of how investment terms were derived.

Explanations are built from the same ``Derivation`` the calculators
return, so every figure in the text is the figure that was published.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable

from shariah_contracts.config import DEFAULT_CONFIG, EngineConfig
from shariah_contracts.distribution import capital_ratio
from shariah_contracts.exceptions import UnsupportedContractError
from shariah_contracts.models.contracts import (
    ContractTerms,
    IjarahTerms,
    MudarabahTerms,
    MurabahaTerms,
    MusharakahTerms,
    SalamTerms,
)
from shariah_contracts.models.enums import ContractType, ReturnSource
from shariah_contracts.models.results import Derivation
from shariah_contracts.numeric import HUNDRED, round_percent, to_decimal


def _pct(value: Decimal) -> str:
    return f"{value:.2f}%"


def _amount(value: Decimal) -> str:
    if value == value.to_integral_value():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


def _murabaha(terms: MurabahaTerms, d: Derivation, config: EngineConfig) -> str:
    return (
        f"Returns calculated from {_pct(d.source_rate)} profit rate over {d.terms.term_months} months, "
        f"annualized to {_pct(d.expected_return)}."
    )


def _mudarabah(terms: MudarabahTerms, d: Derivation, config: EngineConfig) -> str:
    if d.return_source is ReturnSource.BASELINE_ESTIMATE:
        baseline = config.mudarabah.baseline_business_return * HUNDRED
        return (
            f"Expected returns estimated from {_pct(d.source_rate)} investor profit share of an assumed "
            f"{_pct(baseline)} business return, giving {_pct(d.expected_return)}."
        )
    label = "stated annual return" if d.return_source is ReturnSource.STATED_ANNUAL_RETURN else "stated return rate"
    return (
        f"Expected returns based on {_pct(d.expected_return)} {label} with a "
        f"{_pct(to_decimal(terms.investor_profit_share, 'investor_profit_share'))} investor profit share."
    )


def _musharakah(terms: MusharakahTerms, d: Derivation, config: EngineConfig) -> str:
    _, investor_capital = capital_ratio(terms)
    share = to_decimal(terms.party2_profit_share, "party2_profit_share")
    contribution = f"({_pct(round_percent(investor_capital))} capital contribution)"
    if d.return_source is ReturnSource.BASELINE_ESTIMATE:
        baseline = config.musharakah.baseline_business_return * HUNDRED
        return (
            f"Returns estimated from {_pct(share)} investor profit share {contribution} of an assumed "
            f"{_pct(baseline)} business return, giving {_pct(d.expected_return)}."
        )
    return (
        f"Returns based on {_pct(d.expected_return)} stated annual return with a {_pct(share)} "
        f"investor profit share {contribution}."
    )


def _ijarah(terms: IjarahTerms, d: Derivation, config: EngineConfig) -> str:
    return (
        f"Returns calculated from {_pct(d.expected_return)} rental yield "
        f"({_amount(to_decimal(terms.monthly_rental, 'monthly_rental'))}/month x 12 / "
        f"{_amount(d.minimum_basis)} asset value)."
    )


def _salam(terms: SalamTerms, d: Derivation, config: EngineConfig) -> str:
    profit = to_decimal(terms.delivery_value, "delivery_value") - d.minimum_basis
    return (
        f"Returns calculated from {_pct(d.source_rate)} profit margin over {d.terms.term_months} months "
        f"({_amount(profit)} profit on {_amount(d.minimum_basis)} advance), "
        f"annualized to {_pct(d.expected_return)}."
    )


_NARRATIVES: dict[ContractType, tuple[Callable[..., str], str]] = {
    ContractType.MURABAHA: (_murabaha, "asset cost"),
    ContractType.MUDARABAH: (_mudarabah, "capital"),
    ContractType.MUSHARAKAH: (_musharakah, "investor capital"),
    ContractType.IJARAH: (_ijarah, "asset value"),
    ContractType.SALAM: (_salam, "advance payment"),
}


def describe(terms: ContractTerms, derivation: Derivation, config: EngineConfig | None = None) -> str:
    """Render the explanation for an already computed derivation."""
    config = config or DEFAULT_CONFIG
    try:
        narrative, basis_label = _NARRATIVES[derivation.contract_type]
    except KeyError:
        raise UnsupportedContractError(f"no explanation for {derivation.contract_type!r}") from None

    t = derivation.terms
    return (
        f"{narrative(terms, derivation, config)} "
        f"Annual return range {_pct(t.return_min)} to {_pct(t.return_max)} over {t.term_months} months. "
        f"Min investment is {derivation.minimum_rate_percent:f}% of {_amount(derivation.minimum_basis)} "
        f"{basis_label}: {_amount(t.minimum_investment)}. "
        f"Campaign runs {t.campaign_days} days."
    )

