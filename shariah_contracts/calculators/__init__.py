"""Term derivation calculators, one per contract variant."""

from shariah_contracts.calculators.base import terms_of
from shariah_contracts.calculators.ijarah import derive_ijarah
from shariah_contracts.calculators.mudarabah import derive_mudarabah
from shariah_contracts.calculators.murabaha import derive_murabaha
from shariah_contracts.calculators.musharakah import derive_musharakah
from shariah_contracts.calculators.salam import derive_salam
from shariah_contracts.models.enums import ContractType

DERIVERS = {
    ContractType.MURABAHA: derive_murabaha,
    ContractType.MUDARABAH: derive_mudarabah,
    ContractType.MUSHARAKAH: derive_musharakah,
    ContractType.IJARAH: derive_ijarah,
    ContractType.SALAM: derive_salam,
}

__all__ = [
    "DERIVERS",
    "derive_ijarah",
    "derive_mudarabah",
    "derive_murabaha",
    "derive_musharakah",
    "derive_salam",
    "terms_of",
]
