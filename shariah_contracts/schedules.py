"""Payment schedules for Murabaha and Ijarah contracts."""

import calendar
from datetime import date
from decimal import Decimal, DecimalException
from typing import Iterator

from shariah_contracts.exceptions import InvalidNumericInputError
from shariah_contracts.models.contracts import IjarahTerms, MurabahaTerms
from shariah_contracts.models.enums import (
    ContractType,
    FailureReason,
    InstallmentFrequency,
    PaymentStructure,
)
from shariah_contracts.models.reports import EarlySettlement, PaymentScheduleEntry, RentalScheduleEntry
from shariah_contracts.models.results import DerivationFailure
from shariah_contracts.numeric import (
    HUNDRED,
    numeric_error_detail,
    require_months,
    require_non_negative,
    require_percentage,
    require_positive,
    round_money,
    to_int,
)

ZERO = Decimal("0")


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _last_due_date(start: date, months: int, field_name: str = "duration") -> date:
    """Date ``months`` after ``start``, which must stay within the calendar."""
    try:
        return add_months(start, months)
    except ValueError:
        raise InvalidNumericInputError(
            field_name, f"runs past the last representable date, got {months} months"
        ) from None


def installment_count(terms: MurabahaTerms) -> int:
    """Number of Murabaha installments.

    Without a stored count, one installment per frequency period of the
    term, and at least one.
    """
    if terms.number_of_installments is not None:
        count = to_int(terms.number_of_installments, "number_of_installments")
        if count <= 0:
            raise InvalidNumericInputError("number_of_installments", f"must be positive, got {count}")
        return count
    months = require_months(terms.duration)
    frequency = InstallmentFrequency(terms.installment_frequency)
    return max(1, months // frequency.months)


def _even_split(total: Decimal, count: int) -> Iterator[Decimal]:
    """Split ``total`` into ``count`` rounded parts; the last absorbs rounding."""
    part = round_money(total / count)
    for i in range(1, count + 1):
        yield part if i < count else total - part * (count - 1)


def murabaha_payment_schedule(
    terms: MurabahaTerms,
    start_date: date,
) -> list[PaymentScheduleEntry] | DerivationFailure:
    """Build the repayment schedule of a Murabaha sale.

    Lump-sum contracts pay the selling price once at maturity. Otherwise
    equal installments start after the deferment period and follow the
    installment frequency.
    """
    try:
        months = require_months(terms.duration)
        selling = require_positive(terms.selling_price, "selling_price")
        cost = require_positive(terms.cost_price, "cost_price")
        profit = require_non_negative(terms.profit_amount, "profit_amount")
        deferment = to_int(terms.deferment_period or 0, "deferment_period")
        if deferment < 0:
            raise InvalidNumericInputError("deferment_period", f"must not be negative, got {deferment}")
        structure = PaymentStructure(terms.payment_structure)
        if structure is PaymentStructure.LUMP_SUM:
            return [
                PaymentScheduleEntry(
                    payment_number=1,
                    due_date=_last_due_date(start_date, months),
                    principal_amount=cost,
                    profit_amount=profit,
                    total_payment=selling,
                    remaining_balance=ZERO,
                )
            ]
        count = installment_count(terms)
        step = InstallmentFrequency(terms.installment_frequency).months
        _last_due_date(start_date, deferment + step * (count - 1), "deferment_period")
        parts = list(zip(_even_split(cost, count), _even_split(profit, count)))
    except (InvalidNumericInputError, DecimalException) as e:
        return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), ContractType.MURABAHA)
    except ValueError as e:
        return DerivationFailure(FailureReason.INVALID_FIELD, str(e), ContractType.MURABAHA)

    first_due = add_months(start_date, deferment)
    schedule = []
    remaining = selling
    for i, (principal_part, profit_part) in enumerate(parts, start=1):
        payment = principal_part + profit_part
        remaining -= payment
        schedule.append(
            PaymentScheduleEntry(
                payment_number=i,
                due_date=add_months(first_due, step * (i - 1)),
                principal_amount=principal_part,
                profit_amount=profit_part,
                total_payment=payment,
                remaining_balance=max(ZERO, remaining),
            )
        )
    return schedule


def murabaha_early_settlement(
    terms: MurabahaTerms,
    paid_installments: int,
) -> EarlySettlement | DerivationFailure:
    """Amount due to settle a Murabaha after ``paid_installments`` payments.

    The early settlement discount applies to the remaining profit only,
    never to principal.
    """
    try:
        cost = require_positive(terms.cost_price, "cost_price")
        profit = require_non_negative(terms.profit_amount, "profit_amount")
        discount_pct = require_percentage(terms.early_settlement_discount or 0, "early_settlement_discount")
        structure = PaymentStructure(terms.payment_structure)
        count = 1 if structure is PaymentStructure.LUMP_SUM else installment_count(terms)
        paid = to_int(paid_installments, "paid_installments")
        if not 0 <= paid <= count:
            raise InvalidNumericInputError("paid_installments", f"must be between 0 and {count}, got {paid}")
        remaining = count - paid
        remaining_principal = round_money(cost * remaining / count)
        remaining_profit = round_money(profit * remaining / count)
        discount = round_money(remaining_profit * discount_pct / HUNDRED)
    except (InvalidNumericInputError, DecimalException) as e:
        return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), ContractType.MURABAHA)
    except ValueError as e:
        return DerivationFailure(FailureReason.INVALID_FIELD, str(e), ContractType.MURABAHA)

    return EarlySettlement(
        remaining_principal=remaining_principal,
        remaining_profit=remaining_profit,
        discount=discount,
        settlement_amount=remaining_principal + remaining_profit - discount,
    )


def ijarah_rental_schedule(
    terms: IjarahTerms,
    start_date: date,
) -> list[RentalScheduleEntry] | DerivationFailure:
    """One rental per month of the lease, with the running total."""
    try:
        months = require_months(terms.duration)
        rental = require_non_negative(terms.monthly_rental, "monthly_rental")
        _last_due_date(start_date, months)
        totals = [rental * period for period in range(1, months + 1)]
    except (InvalidNumericInputError, DecimalException) as e:
        return DerivationFailure(FailureReason.INVALID_NUMERIC_INPUT, numeric_error_detail(e), ContractType.IJARAH)

    return [
        RentalScheduleEntry(
            period=period,
            due_date=add_months(start_date, period),
            rental_amount=rental,
            cumulative_amount=total,
        )
        for period, total in enumerate(totals, start=1)
    ]
