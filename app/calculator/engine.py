# ==============================================================================
# app/calculator/engine.py
# ------------------------------------------------------------------------------
# The target calculator: turns a branch's figures, the weekend weight and the
# remaining days of the month into a revenue target per weekday.
# ==============================================================================

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class BranchFigures:
    """Financial figures of one branch as read from the performance report."""
    branch_name: str
    revenue_rr: float
    plan_asr_services_revenue: float
    service_asist_revenue: float


@dataclass(frozen=True)
class CalculationResult:
    """
    Everything the branch view needs: the effective (override-resolved)
    figures, the remaining-days breakdown and the computed targets.
    Always derived, never stored.
    """
    branch_name: str
    revenue_rr: float
    plan_asr_services_revenue: float
    service_asist_revenue: float
    days_remaining: int
    weekdays_remaining: int
    weekends_remaining: int
    is_today_weekend: bool
    weekend_weight: float
    weighted_days: float
    remaining_gap: float
    target_total: float
    final_value: float
    percent_complete: float

    @property
    def weekend_day_target(self):
        return weekend_day_target(self.final_value, self.weekend_weight)


def compute_target(figures, weekend_weight, days_info):
    """
    Computes the per-weekday revenue target and the plan completion.

    The steps run in a fixed order so floating-point results are reproducible:
    weekday-equivalent days, full-month target, remaining gap, per-day value
    and completion percentage. A weekend day counts as `weekend_weight` of a
    weekday. Neither the per-day value nor the percentage is clamped; a
    negative gap (branch already over target) and percentages above 100 are
    valid results.

    Args:
        figures (BranchFigures): Effective figures, overrides already applied.
        weekend_weight (float): Weekend day value relative to a weekday, 0..1.
        days_info (RemainingDaysInfo): Output of compute_remaining_days_info.

    Returns:
        dict: final_value, target_total, percent_complete, weighted_days and
        remaining_gap.
    """
    weighted_days = days_info.weekdays + weekend_weight * days_info.weekends
    target_total = figures.revenue_rr * figures.plan_asr_services_revenue
    remaining_gap = target_total - figures.service_asist_revenue

    final_value = remaining_gap / weighted_days if weighted_days > 0 else 0
    percent_complete = (figures.service_asist_revenue / target_total) * 100 if target_total > 0 else 0

    return {
        'final_value': final_value,
        'target_total': target_total,
        'percent_complete': percent_complete,
        'weighted_days': weighted_days,
        'remaining_gap': remaining_gap,
    }


def weekend_day_target(final_value, weekend_weight):
    """Revenue required on a single weekend day."""
    return final_value * weekend_weight


def calculate_branch_result(figures, override_set, weekend_weight, days_info):
    """
    Resolves the branch's overrides and re-derives its targets from scratch.

    Args:
        figures (BranchFigures): Ingested figures, left untouched.
        override_set (OverrideSet | None): User edits layered over the figures.
        weekend_weight (float): Current weekend weight setting.
        days_info (RemainingDaysInfo): Remaining days of the month.

    Returns:
        CalculationResult: The full result for display.
    """
    effective = override_set.resolve(figures) if override_set is not None else figures
    target = compute_target(effective, weekend_weight, days_info)

    logging.info(
        f"Target for '{effective.branch_name}': RR={effective.revenue_rr}, "
        f"plan={effective.plan_asr_services_revenue}, achieved={effective.service_asist_revenue}, "
        f"weight={weekend_weight:.2f}, weighted days={target['weighted_days']:.2f} "
        f"-> {target['final_value']:,.2f} per weekday ({target['percent_complete']:.1f}% complete)"
    )

    return CalculationResult(
        branch_name=effective.branch_name,
        revenue_rr=effective.revenue_rr,
        plan_asr_services_revenue=effective.plan_asr_services_revenue,
        service_asist_revenue=effective.service_asist_revenue,
        days_remaining=days_info.total,
        weekdays_remaining=days_info.weekdays,
        weekends_remaining=days_info.weekends,
        is_today_weekend=days_info.is_today_weekend,
        weekend_weight=weekend_weight,
        weighted_days=target['weighted_days'],
        remaining_gap=target['remaining_gap'],
        target_total=target['target_total'],
        final_value=target['final_value'],
        percent_complete=target['percent_complete'],
    )
