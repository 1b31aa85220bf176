from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PayrollAmounts:
    gross: float
    tax: int
    net: float


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, daily: float, md: float) -> PayrollAmounts:
        raise NotImplementedError
