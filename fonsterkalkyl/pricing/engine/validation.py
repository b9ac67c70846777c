from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..errors import IncompleteJobError
from .context import MAX_EXTRA_SASH, SASH_COUNTS, JobOptions, Unit, UnitKind


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    path: str
    unit_id: Optional[int] = None

    def as_dict(self) -> Dict[str, object]:
        return {"code": self.code, "message": self.message, "path": self.path, "unit_id": self.unit_id}


def _unit_issue(unit: Unit, field: str, code: str, text: str) -> ValidationIssue:
    return ValidationIssue(
        code=code,
        message=f"Parti {unit.id}: {text}",
        path=f"units[{unit.id}].{field}",
        unit_id=unit.id,
    )


# =========================
# Per unit
# =========================


def _first_unit_issue(unit: Unit) -> Optional[ValidationIssue]:
    # Same order as the form: first problem wins
    if unit.kind is None:
        return _unit_issue(unit, "kind", "KIND_MISSING", "Du måste välja en partityp")

    if unit.kind is UnitKind.WINDOW:
        if unit.sash_count is None:
            return _unit_issue(
                unit, "sash_count", "SASH_COUNT_MISSING",
                "Du måste välja antal luftare för fönsterparti",
            )
        if unit.sash_count not in SASH_COUNTS:
            return _unit_issue(
                unit, "sash_count", "SASH_COUNT_INVALID",
                f"Antal luftare måste vara {SASH_COUNTS[0]}-{SASH_COUNTS[-1]}",
            )

    if unit.kind in (UnitKind.PANEL, UnitKind.BALCONY_DOUBLE_DOOR):
        name = "flak" if unit.kind is UnitKind.PANEL else "pardörr balkong/altan"
        if unit.extra_sash is None:
            return _unit_issue(
                unit, "extra_sash", "EXTRA_SASH_MISSING",
                f"Du måste välja antal extra luftare för {name}",
            )
        if not 0 <= unit.extra_sash <= MAX_EXTRA_SASH:
            return _unit_issue(
                unit, "extra_sash", "EXTRA_SASH_INVALID",
                f"Antal extra luftare måste vara 0-{MAX_EXTRA_SASH}",
            )

    if unit.work_scope is None:
        return _unit_issue(unit, "work_scope", "WORK_SCOPE_MISSING", "Du måste välja arbetsbeskrivning")

    if unit.opening is None:
        return _unit_issue(unit, "opening", "OPENING_MISSING", "Du måste välja öppningsriktning")

    if unit.window_type is None:
        what = "fönster" if unit.kind is UnitKind.WINDOW else "beslag/glas"
        return _unit_issue(unit, "window_type", "WINDOW_TYPE_MISSING", f"Du måste välja typ av {what}")

    if unit.sprig_count is not None and unit.sprig_count < 0:
        return _unit_issue(unit, "sprig_count", "SPRIG_COUNT_INVALID", "Antal spröjs kan inte vara negativt")

    return None


def validate_units(units: Iterable[Unit]) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for unit in units:
        issue = _first_unit_issue(unit)
        if issue is not None:
            issues.append(issue)
    return issues


# =========================
# Job level
# =========================


_JOB_AMOUNT_FIELDS = ("adjustment_plus", "adjustment_minus", "material_percentage", "glazing_area_m2")


def validate_job(job: JobOptions) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    # NaN compares False both ways, so it has to be caught before the range checks
    not_finite = [name for name in _JOB_AMOUNT_FIELDS if not math.isfinite(getattr(job, name))]
    for name in not_finite:
        issues.append(ValidationIssue(
            "NUMBER_INVALID",
            "Värdet måste vara ett tal",
            f"job.{name}",
        ))

    if "material_percentage" not in not_finite and not 0 <= job.material_percentage <= 100:
        issues.append(ValidationIssue(
            "MATERIAL_PERCENTAGE_INVALID",
            "Materialandel måste ligga mellan 0 och 100 %",
            "job.material_percentage",
        ))

    if "glazing_area_m2" not in not_finite and job.glazing_area_m2 < 0:
        issues.append(ValidationIssue(
            "GLAZING_AREA_INVALID",
            "Glasyta kan inte vara negativ",
            "job.glazing_area_m2",
        ))

    for name in ("adjustment_plus", "adjustment_minus"):
        if name not in not_finite and getattr(job, name) < 0:
            issues.append(ValidationIssue(
                "ADJUSTMENT_INVALID",
                "Prisjustering anges som ett positivt belopp",
                f"job.{name}",
            ))

    return issues


def ensure_valid(units: Sequence[Unit], job: Optional[JobOptions] = None) -> None:
    issues = validate_units(units)
    if job is not None:
        issues.extend(validate_job(job))
    if issues:
        raise IncompleteJobError(issues)
