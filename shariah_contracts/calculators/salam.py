"""Salam (forward commodity sale) term derivation.

The return is the margin between the advance paid and the value of the
goods delivered, annualized over the term.
"""

from decimal import Decimal

from shariah_contracts.calculators.base import annualize, build_derivation, failures_as_values
from shariah_contracts.config import EngineConfig
from shariah_contracts.exceptions import InvalidNumericInputError
from shariah_contracts.models.contracts import SalamTerms
from shariah_contracts.models.enums import ContractType, ReturnSource
from shariah_contracts.models.results import Derivation
from shariah_contracts.numeric import HUNDRED, require_months, require_non_negative, require_positive


def delivery_margin(delivery_value: Decimal, advance_payment: Decimal) -> Decimal:
    """Profit on delivery as a percentage of the advance."""
    return (delivery_value - advance_payment) / advance_payment * HUNDRED


@failures_as_values(ContractType.SALAM)
def derive_salam(terms: SalamTerms, config: EngineConfig) -> Derivation:
    """Derive investment terms from a Salam contract."""
    policy = config.salam
    term_months = require_months(terms.duration)
    advance = require_positive(terms.advance_payment, "advance_payment")
    delivery = require_non_negative(terms.delivery_value, "delivery_value")
    if delivery < advance:
        raise InvalidNumericInputError(
            "delivery_value",
            f"{delivery} is below advance_payment {advance}, giving a negative margin",
        )
    margin = delivery_margin(delivery, advance)

    return build_derivation(
        ContractType.SALAM,
        expected_return=annualize(margin, term_months),
        return_source=ReturnSource.DELIVERY_MARGIN,
        source_rate=margin,
        term_months=term_months,
        minimum_basis=advance,
        band=policy.band,
        minimum=policy.minimum,
        campaign_days=policy.campaign.days_for(term_months),
    )
