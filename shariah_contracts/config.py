"""Policy configuration for shariah-contracts.

The figures here encode business policy rather than mathematical
necessity. Baseline business returns in particular are placeholder
assumptions awaiting confirmation from the Shariah and investment
committees; override them through ``EngineConfig`` rather than editing
calculator code.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal

from shariah_contracts.exceptions import ConfigurationError


@dataclass(frozen=True)
class ReturnBand:
    """Percentage points placed below and above an expected annual return."""

    below: Decimal
    above: Decimal


@dataclass(frozen=True)
class MinimumInvestmentPolicy:
    """Minimum ticket as a fraction of a basis amount, with an absolute floor."""

    rate: Decimal  # e.g. 0.15 for 15%
    floor: Decimal  # whole currency units

    @property
    def rate_percent(self) -> Decimal:
        """Rate expressed as a percentage."""
        return self.rate * 100


@dataclass(frozen=True)
class CampaignPolicy:
    """Fundraising campaign length in days.

    Terms of ``extended_from_months`` or longer get ``extended_days``;
    without an extension threshold the campaign length is fixed.
    """

    days: int
    extended_days: int | None = None
    extended_from_months: int | None = None

    def days_for(self, term_months: int) -> int:
        """Campaign length for a term of ``term_months``."""
        if (
            self.extended_days is not None
            and self.extended_from_months is not None
            and term_months >= self.extended_from_months
        ):
            return self.extended_days
        return self.days


@dataclass(frozen=True)
class MurabahaPolicy:
    """Cost-plus sale policy."""

    band: ReturnBand = field(default_factory=lambda: ReturnBand(Decimal("1"), Decimal("1")))
    minimum: MinimumInvestmentPolicy = field(
        default_factory=lambda: MinimumInvestmentPolicy(Decimal("0.15"), Decimal("100000"))
    )
    campaign: CampaignPolicy = field(
        default_factory=lambda: CampaignPolicy(days=21, extended_days=30, extended_from_months=13)
    )


@dataclass(frozen=True)
class MudarabahPolicy:
    """Profit-sharing trust policy.

    ``baseline_business_return`` is the assumed annual return of the
    underlying business when the contract states no expected return.
    """

    band: ReturnBand = field(default_factory=lambda: ReturnBand(Decimal("2"), Decimal("4")))
    minimum: MinimumInvestmentPolicy = field(
        default_factory=lambda: MinimumInvestmentPolicy(Decimal("0.12"), Decimal("250000"))
    )
    campaign: CampaignPolicy = field(default_factory=lambda: CampaignPolicy(days=30))
    baseline_business_return: Decimal = Decimal("0.18")


@dataclass(frozen=True)
class MusharakahPolicy:
    """Joint-venture partnership policy. Party 2 is the investor side."""

    band: ReturnBand = field(default_factory=lambda: ReturnBand(Decimal("2"), Decimal("3")))
    minimum: MinimumInvestmentPolicy = field(
        default_factory=lambda: MinimumInvestmentPolicy(Decimal("0.12"), Decimal("500000"))
    )
    campaign: CampaignPolicy = field(
        default_factory=lambda: CampaignPolicy(days=30, extended_days=45, extended_from_months=24)
    )
    baseline_business_return: Decimal = Decimal("0.20")


@dataclass(frozen=True)
class IjarahPolicy:
    """Lease policy."""

    band: ReturnBand = field(default_factory=lambda: ReturnBand(Decimal("1"), Decimal("1")))
    minimum: MinimumInvestmentPolicy = field(
        default_factory=lambda: MinimumInvestmentPolicy(Decimal("0.17"), Decimal("300000"))
    )
    campaign: CampaignPolicy = field(default_factory=lambda: CampaignPolicy(days=30))


@dataclass(frozen=True)
class SalamPolicy:
    """Forward commodity sale policy."""

    band: ReturnBand = field(default_factory=lambda: ReturnBand(Decimal("2"), Decimal("2")))
    minimum: MinimumInvestmentPolicy = field(
        default_factory=lambda: MinimumInvestmentPolicy(Decimal("0.11"), Decimal("150000"))
    )
    campaign: CampaignPolicy = field(
        default_factory=lambda: CampaignPolicy(days=45, extended_days=60, extended_from_months=12)
    )


@dataclass(frozen=True)
class EngineConfig:
    """Main configuration for shariah-contracts."""

    murabaha: MurabahaPolicy = field(default_factory=MurabahaPolicy)
    mudarabah: MudarabahPolicy = field(default_factory=MudarabahPolicy)
    musharakah: MusharakahPolicy = field(default_factory=MusharakahPolicy)
    ijarah: IjarahPolicy = field(default_factory=IjarahPolicy)
    salam: SalamPolicy = field(default_factory=SalamPolicy)
    ratio_tolerance: Decimal = Decimal("0.01")  # percentage points
    log_level: str = "INFO"

    def validate(self) -> "EngineConfig":
        """Check every policy and return self.

        Raises
        ------
        ConfigurationError
            If a band is negative, a minimum rate is outside (0, 1], a
            floor is negative or a campaign length is not positive.
        """
        policies = {
            "murabaha": self.murabaha,
            "mudarabah": self.mudarabah,
            "musharakah": self.musharakah,
            "ijarah": self.ijarah,
            "salam": self.salam,
        }
        for name, policy in policies.items():
            if policy.band.below < 0 or policy.band.above < 0:
                raise ConfigurationError(f"{name}: return band must not be negative")
            if not (0 < policy.minimum.rate <= 1):
                raise ConfigurationError(f"{name}: minimum investment rate must be in (0, 1]")
            if policy.minimum.floor < 0:
                raise ConfigurationError(f"{name}: minimum investment floor must not be negative")
            campaign = policy.campaign
            if campaign.days <= 0 or (campaign.extended_days is not None and campaign.extended_days <= 0):
                raise ConfigurationError(f"{name}: campaign days must be positive")

        for name, policy in (("mudarabah", self.mudarabah), ("musharakah", self.musharakah)):
            if policy.baseline_business_return < 0:
                raise ConfigurationError(f"{name}: baseline business return must not be negative")

        if self.ratio_tolerance < 0:
            raise ConfigurationError("ratio_tolerance must not be negative")
        return self

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        import os
        from decimal import InvalidOperation

        def _decimal(name: str, default: str) -> Decimal:
            raw = os.getenv(name, default)
            try:
                return Decimal(raw)
            except InvalidOperation as e:
                raise ConfigurationError(f"{name} is not a number: {raw!r}") from e

        mudarabah = replace(
            MudarabahPolicy(),
            baseline_business_return=_decimal("SHARIAH_MUDARABAH_BASELINE_RETURN", "0.18"),
        )
        musharakah = replace(
            MusharakahPolicy(),
            baseline_business_return=_decimal("SHARIAH_MUSHARAKAH_BASELINE_RETURN", "0.20"),
        )

        return cls(
            mudarabah=mudarabah,
            musharakah=musharakah,
            ratio_tolerance=_decimal("SHARIAH_RATIO_TOLERANCE", "0.01"),
            log_level=os.getenv("SHARIAH_LOG_LEVEL", "INFO"),
        ).validate()


DEFAULT_CONFIG = EngineConfig()
