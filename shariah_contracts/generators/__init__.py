"""Synthetic contract generators."""

from shariah_contracts.generators.contracts import ContractGenerator

__all__ = ["ContractGenerator"]
