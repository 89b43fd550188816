"""Abstract interface for equations of state."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EquationOfStateBase(ABC):
    """Converts between primitive and conserved variables in place."""

    @abstractmethod
    def primitive_to_conserved(self) -> None:
        """Fill the conserved block from the primitive block."""

    @abstractmethod
    def conserved_to_primitive(self) -> None:
        """Fill the primitive block from the conserved block."""
