"""Enumeration types for Islamic contract terms and results."""

from enum import Enum


class ContractType(str, Enum):
    MURABAHA = "murabaha"
    MUDARABAH = "mudarabah"
    MUSHARAKAH = "musharakah"
    IJARAH = "ijarah"
    SALAM = "salam"

    @property
    def display_name(self) -> str:
        return CONTRACT_TYPE_NAMES[self]

    @property
    def description(self) -> str:
        return CONTRACT_TYPE_DESCRIPTIONS[self]


CONTRACT_TYPE_NAMES = {
    ContractType.MURABAHA: "Murabaha (Cost-Plus Financing)",
    ContractType.MUDARABAH: "Mudarabah (Profit-Sharing Partnership)",
    ContractType.MUSHARAKAH: "Musharakah (Joint Venture Partnership)",
    ContractType.IJARAH: "Ijarah (Leasing)",
    ContractType.SALAM: "Salam (Forward Purchase)",
}

CONTRACT_TYPE_DESCRIPTIONS = {
    ContractType.MURABAHA: (
        "Asset purchase with disclosed markup. Suitable for asset acquisition "
        "with fixed repayment terms."
    ),
    ContractType.MUDARABAH: (
        "Capital provider and entrepreneur partnership. Profits shared per ratio, "
        "losses borne by capital provider."
    ),
    ContractType.MUSHARAKAH: (
        "Joint venture where both parties contribute capital. Profits shared per "
        "agreement, losses per capital ratio."
    ),
    ContractType.IJARAH: (
        "Asset leasing with option to purchase. Lessor retains ownership, lessee pays rental."
    ),
    ContractType.SALAM: (
        "Advance payment for future commodity delivery. Typically for agricultural "
        "products or standardized goods."
    ),
}


class InstallmentFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"

    @property
    def months(self) -> int:
        return {"monthly": 1, "quarterly": 3, "semi-annual": 6, "annual": 12}[self.value]


class PaymentStructure(str, Enum):
    INSTALLMENT = "installment"
    LUMP_SUM = "lump-sum"
    DEFERRED = "deferred"


class LossDistribution(str, Enum):
    CAPITAL_PROVIDER_ONLY = "capital-provider-only"


class MaintenanceResponsibility(str, Enum):
    LESSOR = "lessor"
    LESSEE = "lessee"
    SHARED = "shared"


class FailureReason(str, Enum):
    UNRECOGNIZED_CONTRACT = "unrecognized-contract"
    MISSING_FIELD = "missing-field"
    INVALID_NUMERIC_INPUT = "invalid-numeric-input"
    INVALID_RATIO = "invalid-ratio"
    INVALID_FIELD = "invalid-field"


class DistributionBasis(str, Enum):
    PROFIT_RATIO = "profit-ratio"
    CAPITAL_RATIO = "capital-ratio"


class ReturnSource(str, Enum):
    """Where the expected annual return of a derivation came from."""

    PROFIT_RATE = "profit-rate"
    STATED_ANNUAL_RETURN = "stated-annual-return"
    STATED_RETURN_RATE = "stated-return-rate"
    BASELINE_ESTIMATE = "baseline-estimate"
    RENTAL_YIELD = "rental-yield"
    DELIVERY_MARGIN = "delivery-margin"
