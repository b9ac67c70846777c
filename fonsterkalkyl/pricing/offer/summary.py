from __future__ import annotations

from typing import Any, Dict

from ..calculators.money import round_half_up
from ..engine.context import JobOptions, QuoteBreakdown


def offer_summary(breakdown: QuoteBreakdown, job: JobOptions) -> Dict[str, Any]:
    """Flat, display-rounded figures for the offer document and PDF."""
    rot_applicable = bool(job.has_tax_deduction and breakdown.tax_deduction > 0)
    return {
        "total_excl_vat": round_half_up(breakdown.subtotal_excl_vat),
        "vat_amount": round_half_up(breakdown.vat_amount),
        "total_incl_vat": round_half_up(breakdown.total_incl_vat),
        "rot_applicable": rot_applicable,
        "rot_deduction": round_half_up(breakdown.tax_deduction) if rot_applicable else 0,
        "customer_pays": round_half_up(breakdown.final_customer_price),
    }
