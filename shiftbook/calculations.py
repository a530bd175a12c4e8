"""Per-shift earnings calculations."""

from .models import Shift


def fines_total(shift: Shift) -> float:
    """Sum of all fine amounts, in entry order."""
    total = 0.0
    for fine in shift.fines:
        total += fine.amount
    return total


def gross_earnings(shift: Shift) -> float:
    """Card plus cash earnings, the figure shown as "gross" in summaries."""
    return shift.card_earnings + shift.cash_earnings


def distance_km(shift: Shift) -> float:
    return shift.odometer_end - shift.odometer_start


def range_change(shift: Shift) -> float:
    return shift.range_start - shift.range_end


def compute_net(shift: Shift) -> float:
    """Net earnings of a single shift.

    Bonuses count towards gross income. Tips are added after expenses
    are subtracted, so they never enter the commission base.
    """
    gross = shift.card_earnings + shift.cash_earnings + shift.bonuses
    commissions = shift.yandex_commission + shift.park_commission
    rent = shift.rent_cost if shift.deduct_rent else 0.0
    expenses = shift.fuel_cost + commissions + fines_total(shift) + rent + shift.self_employed_tax
    return gross + shift.tips - expenses
