"""
kpi/base.py

Abstract base class for all KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kpi.types import CalculatedMetrics, Inputs


class BaseKPIFormula(ABC):
    """
    Contract for KPI formula implementations.

    Subclasses receive one immutable :class:`~kpi.types.Inputs` record and
    must return a fully populated :class:`~kpi.types.CalculatedMetrics`.

    No I/O and no side effects are permitted inside :meth:`calculate`.
    Implementations must be total: every input record, including one made
    entirely of zeros, produces a finite result without raising.
    """

    @abstractmethod
    def calculate(self, inputs: Inputs) -> CalculatedMetrics:
        """
        Compute every KPI from *inputs*.

        Parameters
        ----------
        inputs:
            One month of business activity.

        Returns
        -------
        CalculatedMetrics
            Computed metrics; see :data:`kpi.types.METRIC_UNITS` for units.
        """
