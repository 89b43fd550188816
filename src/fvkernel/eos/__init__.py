"""Equations of state: primitive <-> conserved variable conversion."""

from fvkernel.eos.base import EquationOfStateBase
from fvkernel.eos.ideal_gas import EquationOfState

__all__ = ["EquationOfState", "EquationOfStateBase"]
