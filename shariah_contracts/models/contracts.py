"""Contract term models, one dataclass per Islamic contract variant.

Every variant shares the envelope fields ``amount`` (principal or capital)
and ``duration`` (term length in whole months). Numeric fields hold
``Decimal`` values; calculators still guard against absent or
non-positive values because terms arrive from stored data.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar, Union

from shariah_contracts.models.enums import (
    ContractType,
    InstallmentFrequency,
    LossDistribution,
    MaintenanceResponsibility,
    PaymentStructure,
)


@dataclass
class MurabahaTerms:
    """Cost-plus sale: an asset bought and resold at a disclosed markup."""

    contract_type: ClassVar[ContractType] = ContractType.MURABAHA

    amount: Decimal
    duration: int
    cost_price: Decimal
    selling_price: Decimal
    profit_amount: Decimal  # selling_price - cost_price
    profit_rate: Decimal  # percentage over the full term
    asset_cost: Decimal
    installment_frequency: InstallmentFrequency = InstallmentFrequency.MONTHLY
    payment_structure: PaymentStructure = PaymentStructure.INSTALLMENT
    number_of_installments: int | None = None
    deferment_period: int = 0  # grace period in months
    early_settlement_discount: Decimal = Decimal("0")  # percentage of remaining profit
    asset_description: str = ""


@dataclass
class MudarabahTerms:
    """Profit-sharing trust between a capital provider and a mudarib."""

    contract_type: ClassVar[ContractType] = ContractType.MUDARABAH

    amount: Decimal
    duration: int
    capital_amount: Decimal
    investor_profit_share: Decimal
    mudarib_profit_share: Decimal
    expected_annual_return: Decimal | None = None
    expected_return_rate: Decimal | None = None
    projected_profit: Decimal | None = None
    loss_distribution: LossDistribution = LossDistribution.CAPITAL_PROVIDER_ONLY
    capital_provider: str = ""
    mudarib: str = ""


@dataclass
class MusharakahTerms:
    """Joint-venture partnership. Party 2 is conventionally the investor side.

    ``party1_loss_share``/``party2_loss_share`` are stored display values;
    the loss split is always recomputed from capital.
    """

    contract_type: ClassVar[ContractType] = ContractType.MUSHARAKAH

    amount: Decimal
    duration: int
    party1_capital: Decimal
    party2_capital: Decimal
    party1_profit_share: Decimal
    party2_profit_share: Decimal
    party1_loss_share: Decimal
    party2_loss_share: Decimal
    expected_annual_return: Decimal | None = None
    projected_profit: Decimal | None = None
    party1_id: str = ""
    party2_id: str = ""
    party1_name: str = ""
    party2_name: str = ""

    @property
    def total_capital(self) -> Decimal:
        return self.party1_capital + self.party2_capital


@dataclass
class IjarahTerms:
    """Lease of an asset for a monthly rental."""

    contract_type: ClassVar[ContractType] = ContractType.IJARAH

    amount: Decimal
    duration: int
    asset_value: Decimal
    monthly_rental: Decimal
    purchase_option_included: bool = False
    maintenance_responsibility: MaintenanceResponsibility = MaintenanceResponsibility.LESSOR
    residual_value: Decimal = Decimal("0")
    maintenance_cost: Decimal = Decimal("0")  # per month
    total_rental_payments: Decimal | None = None
    asset_description: str = ""


@dataclass
class SalamTerms:
    """Forward sale: the price is paid up front for goods delivered later."""

    contract_type: ClassVar[ContractType] = ContractType.SALAM

    amount: Decimal
    duration: int
    advance_payment: Decimal
    delivery_value: Decimal
    spot_price: Decimal
    agreed_price: Decimal
    delivery_date: date | None = None
    quantity: Decimal | None = None
    commodity_type: str = ""
    unit: str = ""


ContractTerms = Union[MurabahaTerms, MudarabahTerms, MusharakahTerms, IjarahTerms, SalamTerms]

CONTRACT_CLASSES: dict[ContractType, type] = {
    ContractType.MURABAHA: MurabahaTerms,
    ContractType.MUDARABAH: MudarabahTerms,
    ContractType.MUSHARAKAH: MusharakahTerms,
    ContractType.IJARAH: IjarahTerms,
    ContractType.SALAM: SalamTerms,
}
