"""Synthetic Islamic contract generator."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from shariah_contracts.generators.base import BaseGenerator
from shariah_contracts.models.contracts import (
    ContractTerms,
    IjarahTerms,
    MudarabahTerms,
    MurabahaTerms,
    MusharakahTerms,
    SalamTerms,
)
from shariah_contracts.models.enums import (
    ContractType,
    InstallmentFrequency,
    MaintenanceResponsibility,
    PaymentStructure,
)
from shariah_contracts.numeric import HUNDRED, round_money, round_percent, round_whole
from shariah_contracts.serialization import to_dict


class ContractGenerator(BaseGenerator):
    """Generate valid contract terms for every contract variant."""

    CONTRACT_TYPES = list(ContractType)

    DURATIONS = {
        ContractType.MURABAHA: [3, 6, 12, 18, 24, 36, 60],
        ContractType.MUDARABAH: [6, 12, 18, 24, 36],
        ContractType.MUSHARAKAH: [12, 18, 24, 36, 48, 60],
        ContractType.IJARAH: [12, 24, 36, 48, 60, 120],
        ContractType.SALAM: [1, 3, 6, 9, 12, 18],
    }

    COMMODITIES = [("maize", "tonne"), ("rice", "tonne"), ("cocoa", "bag"), ("cashew", "tonne")]

    def generate(self, contract_type: ContractType | None = None) -> ContractTerms:
        """Generate one contract.

        Parameters
        ----------
        contract_type : ContractType | None
            Variant to generate; a random one when omitted.

        Returns
        -------
        ContractTerms
            Generated contract terms.
        """
        contract_type = contract_type or self.fake.random_element(self.CONTRACT_TYPES)
        builder = {
            ContractType.MURABAHA: self._murabaha,
            ContractType.MUDARABAH: self._mudarabah,
            ContractType.MUSHARAKAH: self._musharakah,
            ContractType.IJARAH: self._ijarah,
            ContractType.SALAM: self._salam,
        }[ContractType(contract_type)]
        return builder(self.fake.random_element(self.DURATIONS[ContractType(contract_type)]))

    def generate_batch(self, count: int, contract_type: ContractType | None = None) -> Iterator[ContractTerms]:
        """Generate multiple contracts.

        Yields
        ------
        ContractTerms
            Generated contracts.
        """
        for _ in range(count):
            yield self.generate(contract_type)

    def generate_stored(self, contract_type: ContractType | None = None) -> dict:
        """Generate one contract in its stored camelCase document form."""
        return to_dict(self.generate(contract_type), camel_case=True)

    def _murabaha(self, duration: int) -> MurabahaTerms:
        cost = self.amount(1_000_000, 50_000_000)
        rate = self.percent(0, 40)
        profit = round_whole(cost * rate / HUNDRED)
        return MurabahaTerms(
            amount=cost,
            duration=duration,
            cost_price=cost,
            selling_price=cost + profit,
            profit_amount=profit,
            profit_rate=rate,
            asset_cost=cost,
            installment_frequency=self.fake.random_element(list(InstallmentFrequency)),
            payment_structure=self.fake.random_element(
                [PaymentStructure.INSTALLMENT, PaymentStructure.LUMP_SUM]
            ),
            asset_description=self.fake.catch_phrase(),
        )

    def _mudarabah(self, duration: int) -> MudarabahTerms:
        capital = self.amount(1_000_000, 100_000_000)
        investor = Decimal(self.fake.random_int(10, 90))
        stated = self.percent(0, 30) if self.fake.boolean() else None
        return MudarabahTerms(
            amount=capital,
            duration=duration,
            capital_amount=capital,
            investor_profit_share=investor,
            mudarib_profit_share=HUNDRED - investor,
            expected_annual_return=stated,
            expected_return_rate=stated,
            projected_profit=round_whole(capital * self.percent(0, 30) / HUNDRED),
            capital_provider=self.fake.uuid4(),
            mudarib=self.fake.uuid4(),
        )

    def _musharakah(self, duration: int) -> MusharakahTerms:
        party1 = self.amount(1_000_000, 100_000_000)
        party2 = self.amount(1_000_000, 100_000_000)
        loss1 = round_percent(party1 * HUNDRED / (party1 + party2))
        profit1 = Decimal(self.fake.random_int(10, 90))
        return MusharakahTerms(
            amount=party1 + party2,
            duration=duration,
            party1_capital=party1,
            party2_capital=party2,
            party1_profit_share=profit1,
            party2_profit_share=HUNDRED - profit1,
            party1_loss_share=loss1,
            party2_loss_share=HUNDRED - loss1,
            expected_annual_return=self.percent(0, 30) if self.fake.boolean() else None,
            party1_id=self.fake.uuid4(),
            party2_id=self.fake.uuid4(),
            party1_name=self.fake.company(),
            party2_name=self.fake.company(),
        )

    def _ijarah(self, duration: int) -> IjarahTerms:
        asset_value = self.amount(1_000_000, 200_000_000)
        rental = round_whole(asset_value * self.fake.random_int(50, 250) / 10_000)
        return IjarahTerms(
            amount=asset_value,
            duration=duration,
            asset_value=asset_value,
            monthly_rental=rental,
            purchase_option_included=self.fake.boolean(),
            maintenance_responsibility=self.fake.random_element(list(MaintenanceResponsibility)),
            residual_value=round_whole(asset_value * self.percent(5, 50) / HUNDRED),
            asset_description=self.fake.catch_phrase(),
        )

    def _salam(self, duration: int) -> SalamTerms:
        advance = self.amount(500_000, 20_000_000)
        delivery = round_whole(advance * (1 + self.percent(1, 40) / HUNDRED))
        commodity, unit = self.fake.random_element(self.COMMODITIES)
        quantity = Decimal(self.fake.random_int(10, 1000))
        return SalamTerms(
            amount=advance,
            duration=duration,
            advance_payment=advance,
            delivery_value=delivery,
            spot_price=round_money(delivery / quantity),
            agreed_price=round_money(advance / quantity),
            delivery_date=self.fake.date_between(start_date="+30d", end_date="+2y"),
            quantity=quantity,
            commodity_type=commodity,
            unit=unit,
        )
