from __future__ import annotations

from dataclasses import dataclass

# ROT caps per job (kr)
ROT_CAP_SINGLE = 50000
ROT_CAP_SHARED = 100000


@dataclass(frozen=True)
class LabourSplit:
    material_cost: float
    work_cost: float


def split_labour(total_incl_vat: float, material_percentage: float) -> LabourSplit:
    """Material share only decides the deduction basis; it is not a price reduction."""
    material = total_incl_vat * (material_percentage / 100)
    return LabourSplit(material_cost=material, work_cost=total_incl_vat - material)


def rot_cap(is_shared: bool) -> int:
    return ROT_CAP_SHARED if is_shared else ROT_CAP_SINGLE


def calc_tax_deduction(
    work_cost: float,
    deduction_rate: float,
    has_tax_deduction: bool,
    is_shared: bool = False,
) -> float:
    if not has_tax_deduction:
        return 0.0
    return min(work_cost * deduction_rate, float(rot_cap(is_shared)))
