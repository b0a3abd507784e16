"""Payment schedule and contract metric models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from shariah_contracts.models.enums import ContractType


@dataclass(frozen=True)
class PaymentScheduleEntry:
    """One Murabaha repayment."""

    payment_number: int  # 1, 2, 3, ...
    due_date: date
    principal_amount: Decimal
    profit_amount: Decimal
    total_payment: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class RentalScheduleEntry:
    """One Ijarah rental period."""

    period: int
    due_date: date
    rental_amount: Decimal
    cumulative_amount: Decimal


@dataclass(frozen=True)
class EarlySettlement:
    """Amount due when a Murabaha is settled before maturity."""

    remaining_principal: Decimal
    remaining_profit: Decimal
    discount: Decimal  # applied to remaining profit only
    settlement_amount: Decimal


@dataclass(frozen=True)
class ContractMetrics:
    """Headline figures for a contract.

    ``extras`` carries variant-specific figures (markup, rental yield,
    party equity, ...) keyed by snake_case name.
    """

    contract_type: ContractType
    total_amount: Decimal
    total_return: Decimal
    effective_rate: Decimal  # annual %
    duration: int
    extras: dict[str, Decimal] = field(default_factory=dict)
