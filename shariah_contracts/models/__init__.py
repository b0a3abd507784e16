"""Contract term models and result value objects."""

from shariah_contracts.models.contracts import (
    CONTRACT_CLASSES,
    ContractTerms,
    IjarahTerms,
    MudarabahTerms,
    MurabahaTerms,
    MusharakahTerms,
    SalamTerms,
)
from shariah_contracts.models.enums import (
    ContractType,
    DistributionBasis,
    FailureReason,
    InstallmentFrequency,
    LossDistribution,
    MaintenanceResponsibility,
    PaymentStructure,
    ReturnSource,
)
from shariah_contracts.models.parsing import parse_contract_terms
from shariah_contracts.models.reports import (
    ContractMetrics,
    EarlySettlement,
    PaymentScheduleEntry,
    RentalScheduleEntry,
)
from shariah_contracts.models.results import (
    Derivation,
    DerivationFailure,
    DistributionResult,
    InvestmentTerms,
    LossShareDiscrepancy,
    MudarabahDistribution,
    MusharakahDistribution,
    PartyOutcome,
)

__all__ = [
    "CONTRACT_CLASSES",
    "ContractMetrics",
    "ContractTerms",
    "ContractType",
    "Derivation",
    "DerivationFailure",
    "DistributionBasis",
    "DistributionResult",
    "EarlySettlement",
    "FailureReason",
    "IjarahTerms",
    "InstallmentFrequency",
    "InvestmentTerms",
    "LossDistribution",
    "LossShareDiscrepancy",
    "MaintenanceResponsibility",
    "MudarabahDistribution",
    "MudarabahTerms",
    "MurabahaTerms",
    "MusharakahDistribution",
    "MusharakahTerms",
    "PartyOutcome",
    "PaymentScheduleEntry",
    "PaymentStructure",
    "RentalScheduleEntry",
    "ReturnSource",
    "SalamTerms",
    "parse_contract_terms",
]
