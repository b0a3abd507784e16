"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from shariah_contracts.models import (
    IjarahTerms,
    MudarabahTerms,
    MurabahaTerms,
    MusharakahTerms,
    SalamTerms,
)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def murabaha_terms() -> MurabahaTerms:
    """12-month Murabaha at a 12% profit rate."""
    return MurabahaTerms(
        amount=Decimal("5000000"),
        duration=12,
        cost_price=Decimal("5000000"),
        selling_price=Decimal("5600000"),
        profit_amount=Decimal("600000"),
        profit_rate=Decimal("12"),
        asset_cost=Decimal("5000000"),
        number_of_installments=12,
        asset_description="Commercial equipment",
    )


@pytest.fixture
def mudarabah_terms() -> MudarabahTerms:
    """18-month Mudarabah with a stated 15% expected return."""
    return MudarabahTerms(
        amount=Decimal("8000000"),
        duration=18,
        capital_amount=Decimal("8000000"),
        investor_profit_share=Decimal("30"),
        mudarib_profit_share=Decimal("70"),
        expected_annual_return=Decimal("15"),
        expected_return_rate=Decimal("15"),
        projected_profit=Decimal("1200000"),
        capital_provider="investor-123",
        mudarib="entrepreneur-456",
    )


@pytest.fixture
def musharakah_terms() -> MusharakahTerms:
    """24-month Musharakah, capital 10M/5M, profit 60/40."""
    return MusharakahTerms(
        amount=Decimal("15000000"),
        duration=24,
        party1_capital=Decimal("10000000"),
        party2_capital=Decimal("5000000"),
        party1_profit_share=Decimal("60"),
        party2_profit_share=Decimal("40"),
        party1_loss_share=Decimal("66.67"),
        party2_loss_share=Decimal("33.33"),
        expected_annual_return=Decimal("18"),
        projected_profit=Decimal("3600000"),
        party1_id="business-123",
        party2_id="investor-pool",
    )


@pytest.fixture
def ijarah_terms() -> IjarahTerms:
    """36-month lease of a 20M asset at 300k per month."""
    return IjarahTerms(
        amount=Decimal("20000000"),
        duration=36,
        asset_value=Decimal("20000000"),
        monthly_rental=Decimal("300000"),
        purchase_option_included=True,
        residual_value=Decimal("5000000"),
        maintenance_cost=Decimal("10000"),
    )


@pytest.fixture
def salam_terms() -> SalamTerms:
    """6-month Salam: 2M advance for 2.3M of goods."""
    return SalamTerms(
        amount=Decimal("2000000"),
        duration=6,
        advance_payment=Decimal("2000000"),
        delivery_value=Decimal("2300000"),
        spot_price=Decimal("23000"),
        agreed_price=Decimal("20000"),
        quantity=Decimal("100"),
        commodity_type="maize",
        unit="tonne",
    )


@pytest.fixture
def stored_musharakah() -> dict:
    """Musharakah as stored by the persistence layer (camelCase, floats)."""
    return {
        "contractType": "musharakah",
        "amount": 15000000,
        "duration": 24,
        "totalCapital": 15000000,
        "party1Capital": 10000000,
        "party2Capital": 5000000,
        "party1ProfitShare": 60,
        "party2ProfitShare": 40,
        "party1LossShare": 66.67,
        "party2LossShare": 33.33,
        "expectedAnnualReturn": 18,
        "partnershipType": "general",
    }
