"""Ijarah (lease) term derivation from the asset's rental yield."""

from decimal import Decimal

from shariah_contracts.calculators.base import build_derivation, failures_as_values
from shariah_contracts.config import EngineConfig
from shariah_contracts.models.contracts import IjarahTerms
from shariah_contracts.models.enums import ContractType, ReturnSource
from shariah_contracts.models.results import Derivation
from shariah_contracts.numeric import (
    HUNDRED,
    MONTHS_PER_YEAR,
    require_months,
    require_non_negative,
    require_positive,
)


def rental_yield(monthly_rental: Decimal, asset_value: Decimal) -> Decimal:
    """Annual rental income as a percentage of asset value."""
    return monthly_rental * MONTHS_PER_YEAR / asset_value * HUNDRED


@failures_as_values(ContractType.IJARAH)
def derive_ijarah(terms: IjarahTerms, config: EngineConfig) -> Derivation:
    """Derive investment terms from an Ijarah contract."""
    policy = config.ijarah
    term_months = require_months(terms.duration)
    asset_value = require_positive(terms.asset_value, "asset_value")
    monthly_rental = require_non_negative(terms.monthly_rental, "monthly_rental")
    yield_ = rental_yield(monthly_rental, asset_value)

    return build_derivation(
        ContractType.IJARAH,
        expected_return=yield_,
        return_source=ReturnSource.RENTAL_YIELD,
        source_rate=yield_,
        term_months=term_months,
        minimum_basis=asset_value,
        band=policy.band,
        minimum=policy.minimum,
        campaign_days=policy.campaign.days_for(term_months),
    )
