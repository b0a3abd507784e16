"""Musharakah (joint-venture partnership) term derivation.

Party 2 is the investor side: the fallback return and the minimum ticket
are both taken from party 2's position.
"""

import logging

from shariah_contracts.calculators.base import build_derivation, failures_as_values, require_split
from shariah_contracts.config import EngineConfig
from shariah_contracts.distribution import find_loss_share_discrepancy
from shariah_contracts.models.contracts import MusharakahTerms
from shariah_contracts.models.enums import ContractType, ReturnSource
from shariah_contracts.models.results import Derivation
from shariah_contracts.numeric import (
    require_months,
    require_non_negative,
    require_percentage,
    require_positive,
)
from shariah_contracts.serialization import to_dict

logger = logging.getLogger(__name__)


@failures_as_values(ContractType.MUSHARAKAH)
def derive_musharakah(terms: MusharakahTerms, config: EngineConfig) -> Derivation:
    """Derive investment terms from a Musharakah contract."""
    policy = config.musharakah
    term_months = require_months(terms.duration)
    require_positive(terms.party1_capital, "party1_capital")
    party2_capital = require_positive(terms.party2_capital, "party2_capital")
    party1_share = require_percentage(terms.party1_profit_share, "party1_profit_share")
    party2_share = require_percentage(terms.party2_profit_share, "party2_profit_share")
    require_split(party1_share, party2_share, "party1_profit_share + party2_profit_share", config)

    discrepancy = find_loss_share_discrepancy(terms, config)
    if discrepancy is not None:
        logger.warning(
            "Stored loss shares %s/%s disagree with capital ratio %s/%s",
            discrepancy.stored_party1_loss_share,
            discrepancy.stored_party2_loss_share,
            discrepancy.capital_party1_percentage,
            discrepancy.capital_party2_percentage,
            extra={"extra": to_dict(discrepancy)},
        )

    if terms.expected_annual_return is not None:
        stated = require_non_negative(terms.expected_annual_return, "expected_annual_return")
        expected, source, source_rate = stated, ReturnSource.STATED_ANNUAL_RETURN, stated
    else:
        expected = party2_share * policy.baseline_business_return
        source, source_rate = ReturnSource.BASELINE_ESTIMATE, party2_share

    return build_derivation(
        ContractType.MUSHARAKAH,
        expected_return=expected,
        return_source=source,
        source_rate=source_rate,
        term_months=term_months,
        minimum_basis=party2_capital,
        band=policy.band,
        minimum=policy.minimum,
        campaign_days=policy.campaign.days_for(term_months),
    )
