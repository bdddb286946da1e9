"""
Base abstract class for design code implementations.

This module provides the Strategy Pattern interface for beam section
analysis. Design codes register an instance in ``CODE_REGISTRY``.
"""

from abc import ABC, abstractmethod

from .models import BeamInput, BeamResults, RequiredSteelResult


class DesignCode(ABC):
    """Abstract base class for flexural design code checkers."""

    @property
    @abstractmethod
    def code_name(self) -> str:
        """Return code identifier (e.g., 'ACI 318-19')."""
        pass

    @property
    @abstractmethod
    def code_units(self) -> str:
        """Return primary unit system ('SI' or 'Imperial')."""
        pass

    @abstractmethod
    def analyze_beam(self, beam: BeamInput) -> BeamResults:
        """
        Analyze beam section flexural capacity.

        Returns:
            BeamResults with capacities, classification, checks and warnings
        """
        pass

    @abstractmethod
    def required_steel(self, **kwargs) -> RequiredSteelResult:
        """
        Solve for the tension steel required by a factored moment.

        Returns:
            RequiredSteelResult with 'As_required', 'is_valid', 'message'
        """
        pass
