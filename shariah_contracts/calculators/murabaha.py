"""Murabaha (cost-plus sale) term derivation.

The contract's profit rate is stated over the whole term, so it is
divided by the term length in years to get the annual return.
"""

from shariah_contracts.calculators.base import annualize, build_derivation, failures_as_values
from shariah_contracts.config import EngineConfig
from shariah_contracts.models.contracts import MurabahaTerms
from shariah_contracts.models.enums import ContractType, ReturnSource
from shariah_contracts.models.results import Derivation
from shariah_contracts.numeric import require_months, require_non_negative, require_positive


@failures_as_values(ContractType.MURABAHA)
def derive_murabaha(terms: MurabahaTerms, config: EngineConfig) -> Derivation:
    """Derive investment terms from a Murabaha contract."""
    policy = config.murabaha
    term_months = require_months(terms.duration)
    profit_rate = require_non_negative(terms.profit_rate, "profit_rate")
    asset_cost = require_positive(terms.asset_cost, "asset_cost")

    return build_derivation(
        ContractType.MURABAHA,
        expected_return=annualize(profit_rate, term_months),
        return_source=ReturnSource.PROFIT_RATE,
        source_rate=profit_rate,
        term_months=term_months,
        minimum_basis=asset_cost,
        band=policy.band,
        minimum=policy.minimum,
        campaign_days=policy.campaign.days_for(term_months),
    )
