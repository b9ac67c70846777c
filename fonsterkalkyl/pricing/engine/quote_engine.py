from __future__ import annotations

from typing import Iterable

from ..calculators.deduction import calc_tax_deduction, split_labour
from ..calculators.money import calc_vat
from ..price_table.table import PriceTable
from .context import JobOptions, QuoteBreakdown, Unit

# Material cost is not known yet when the work-description markup is taken
MATERIAL_COST_PLACEHOLDER = 0.0


def calc_extras_cost(job: JobOptions, table: PriceTable) -> float:
    """Glazing by area only. Muntins are already inside each unit price."""
    if not job.glazing_enabled:
        return 0.0
    return job.glazing_area_m2 * table.extras.glass_per_sqm


def job_work_description_multiplier(job: JobOptions, table: PriceTable) -> float:
    return table.work_description_multiplier(job.work_description)


def compute_quote(units: Iterable[Unit], job: JobOptions, table: PriceTable) -> QuoteBreakdown:
    """
    Aggregate priced units into the customer total. Strictly ordered, no rounding
    (display layers round). Units without a price count as 0.
    """
    units_subtotal = float(sum(u.price or 0 for u in units))
    extras_cost = calc_extras_cost(job, table)
    price_adjustment = job.adjustment_plus - job.adjustment_minus

    renovation_multiplier = table.renovation_multiplier(job.renovation_type)
    renovation_adjusted_total = (units_subtotal + extras_cost + price_adjustment) * renovation_multiplier

    if job.work_description is None:
        work_description_markup = 0.0
    else:
        work_description_markup = (
            renovation_adjusted_total - price_adjustment - MATERIAL_COST_PLACEHOLDER
        ) * (job_work_description_multiplier(job, table) - 1)

    vat = calc_vat(renovation_adjusted_total + work_description_markup, table.extras.vat_rate)

    labour = split_labour(vat.total_incl_vat, job.material_percentage)
    tax_deduction = calc_tax_deduction(
        labour.work_cost,
        table.extras.deduction_rate,
        job.has_tax_deduction,
        job.is_shared_deduction,
    )

    return QuoteBreakdown(
        units_subtotal=units_subtotal,
        extras_cost=extras_cost,
        price_adjustment=price_adjustment,
        renovation_multiplier=renovation_multiplier,
        renovation_adjusted_total=renovation_adjusted_total,
        work_description_markup=work_description_markup,
        subtotal_excl_vat=vat.subtotal_excl_vat,
        vat_amount=vat.vat_amount,
        total_incl_vat=vat.total_incl_vat,
        material_cost=labour.material_cost,
        work_cost=labour.work_cost,
        tax_deduction=tax_deduction,
        final_customer_price=vat.total_incl_vat - tax_deduction,
    )
