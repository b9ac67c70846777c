from __future__ import annotations

from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .engine.validation import ValidationIssue


class PricingError(Exception):
    """Base class for everything the pricing package raises on purpose."""


class PriceListError(PricingError):
    pass


class PriceListFetchError(PriceListError):
    """Remote price list could not be fetched (transport, HTTP status, body or ok flag)."""


class PriceListSaveError(PriceListError):
    pass


class IncompleteJobError(PricingError):
    """A job was submitted for pricing while validation still reports issues."""

    def __init__(self, issues: Sequence["ValidationIssue"]):
        self.issues: List["ValidationIssue"] = list(issues)
        first = self.issues[0].message if self.issues else "incomplete job"
        extra = f" (+{len(self.issues) - 1} more)" if len(self.issues) > 1 else ""
        super().__init__(first + extra)
