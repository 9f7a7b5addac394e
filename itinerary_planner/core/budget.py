"""Budget allocation for a trip.

The allocation is a pure function of the total budget and the trip length:
10 % is held back as a savings buffer, the rest is spread evenly over the
days, and each day is split across four fixed categories.
"""
from __future__ import annotations

from typing import Dict

from itinerary_planner.core.schemas import BudgetAllocation, DayBudget

SAVINGS_BUFFER_PERCENTAGE = 0.1

BUDGET_ALLOCATIONS: Dict[str, float] = {
    "accommodation": 0.4,
    "food": 0.2,
    "transportation": 0.2,
    "activities": 0.2,
}

DAYS_PER_WEEK = 7


def split_daily_budget(daily_budget: float) -> DayBudget:
    """Split one day's budget across the fixed category shares."""

    shares = {
        category: daily_budget * share
        for category, share in BUDGET_ALLOCATIONS.items()
    }
    return DayBudget(total=daily_budget, **shares)


def calculate_budgets(total_budget: float, duration: int) -> BudgetAllocation:
    """Compute the savings buffer, daily and weekly budgets for a trip.

    Args:
        total_budget: Total trip budget, must be positive
        duration: Trip length in days, must be positive

    Returns:
        BudgetAllocation with the per-day category breakdown

    Raises:
        ValueError: If either input is not positive
    """
    if total_budget <= 0:
        raise ValueError(f"total_budget must be positive, got {total_budget}")
    if duration <= 0:
        raise ValueError(f"duration must be positive, got {duration}")

    available_budget = total_budget - total_budget * SAVINGS_BUFFER_PERCENTAGE
    # Derived back from the available budget so buffer + available == total exactly.
    savings_buffer = total_budget - available_budget
    daily_budget = available_budget / duration

    return BudgetAllocation(
        savings_buffer=savings_buffer,
        available_budget=available_budget,
        daily_budget=daily_budget,
        weekly_budget=daily_budget * DAYS_PER_WEEK,
        daily_breakdown=split_daily_budget(daily_budget),
    )
