from __future__ import annotations

import math

from ...common.formatting import as_number
from ...core.constants import WITHHOLDING_TAX_RATE
from .base import PayrollAmounts, PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross = daily * md, 3.3% withholding floored, net = gross - tax."""

    def __init__(self, tax_rate: float = WITHHOLDING_TAX_RATE):
        self._tax_rate = float(tax_rate)

    def calculate(self, daily: float, md: float) -> PayrollAmounts:
        gross = as_number((daily or 0) * (md or 0))
        tax = int(math.floor(gross * self._tax_rate))
        return PayrollAmounts(gross=gross, tax=tax, net=as_number(gross - tax))


def calc_payroll(daily: float, md: float) -> PayrollAmounts:
    return StandardPayrollCalculator().calculate(daily, md)
