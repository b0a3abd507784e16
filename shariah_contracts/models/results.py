"""Result value objects returned by the engine."""

from dataclasses import dataclass
from decimal import Decimal

from shariah_contracts.models.enums import (
    ContractType,
    DistributionBasis,
    FailureReason,
    ReturnSource,
)


@dataclass(frozen=True)
class InvestmentTerms:
    """Publishable terms of an investment opportunity."""

    return_min: Decimal  # annual %, 2 places
    return_max: Decimal  # annual %, 2 places
    term_months: int
    minimum_investment: Decimal  # whole currency units
    campaign_days: int


@dataclass(frozen=True)
class DerivationFailure:
    """A contract that yields no derivable result.

    Failures are falsy, so ``if not result`` reads as "no derivable terms".
    """

    reason: FailureReason
    detail: str
    contract_type: ContractType | None = None

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Derivation:
    """Terms together with the intermediate figures used to derive them."""

    contract_type: ContractType
    terms: InvestmentTerms
    expected_return: Decimal  # annual %, 2 places, before the band
    return_source: ReturnSource
    source_rate: Decimal  # the contract rate the expected return started from, 2 places
    minimum_basis: Decimal  # amount the minimum investment rate applies to
    minimum_rate_percent: Decimal


@dataclass(frozen=True)
class DistributionResult:
    """Split of one amount between the two Musharakah partners."""

    total_amount: Decimal
    party1_share: Decimal
    party2_share: Decimal
    party1_percentage: Decimal
    party2_percentage: Decimal
    basis: DistributionBasis


@dataclass(frozen=True)
class LossShareDiscrepancy:
    """Stored loss shares that disagree with the capital ratio."""

    stored_party1_loss_share: Decimal | None  # None when missing or non-numeric
    stored_party2_loss_share: Decimal | None
    capital_party1_percentage: Decimal
    capital_party2_percentage: Decimal


@dataclass(frozen=True)
class PartyOutcome:
    """Net position of one partner for a reporting period."""

    capital: Decimal
    profit_share: Decimal
    loss_share: Decimal
    net_result: Decimal
    roi_percent: Decimal  # net_result / capital * 100
    capital_remaining: Decimal


@dataclass(frozen=True)
class MusharakahDistribution:
    """Profit and loss distribution for a Musharakah reporting period."""

    profit: DistributionResult | None
    loss: DistributionResult | None
    party1: PartyOutcome
    party2: PartyOutcome
    loss_share_discrepancy: LossShareDiscrepancy | None = None

    @property
    def has_discrepancy(self) -> bool:
        return self.loss_share_discrepancy is not None


@dataclass(frozen=True)
class MudarabahDistribution:
    """Profit split and loss allocation for a Mudarabah reporting period."""

    total_profit: Decimal
    investor_share: Decimal
    mudarib_share: Decimal
    total_loss: Decimal
    investor_loss: Decimal
    mudarib_loss: Decimal  # always zero; the mudarib loses effort only
    capital_remaining: Decimal
