from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ...templates import render_template
from ..engine.context import JobOptions, QuoteBreakdown, Unit, UnitKind
from .line_items import OfferLineItem
from .summary import offer_summary

OFFER_TEMPLATE = "offer.txt.j2"
DEFAULT_CITY = "Ludvika"

OFFER_CONDITIONS = (
    "Vi ansvarar för rengöring av fönsterglas efter renovering. Ej fönsterputs.",
    "Miljö- och kvalitetsansvarig: Johan Sternbeck",
    "Entreprenörens ombud: Johan Sternbeck",
    "Timtid vid tillkommande arbeten debiteras med 625 kr inkl moms.",
)


@dataclass(frozen=True)
class CompanyInfo:
    name: str = "Sternbecks Fönsterhantverk i Dalarna AB"
    signatory: str = "Johan Sternbeck"
    street: str = "Lavendelstigen 7"
    postal: str = "77143 Ludvika"
    org_nr: str = "559389-0717"
    phone: str = "076-846 52 79"


@dataclass(frozen=True)
class OfferCustomer:
    company: str = ""
    contact: str = ""
    personnummer: str = ""
    address: str = ""
    postal: str = ""
    city: str = ""
    fastighet: str = ""
    phone: str = ""
    email: str = ""

    def recipient_lines(self) -> List[str]:
        lines: List[str] = []
        if self.company:
            lines.append(self.company)
        if self.contact:
            lines.append(self.contact)
        if self.personnummer:
            lines.append(f"Personnummer: {self.personnummer}")
        if self.address:
            lines.append(self.address)
        postal_city = " ".join(p for p in (self.postal, self.city) if p)
        if postal_city:
            lines.append(postal_city)
        if self.fastighet:
            lines.append(f"Fastighetsbeteckning: {self.fastighet}")
        if self.phone:
            lines.append(f"Telefon: {self.phone}")
        if self.email:
            lines.append(f"E-post: {self.email}")
        return lines


def render_offer_text(
    customer: OfferCustomer,
    units: Sequence[Unit],
    items: Iterable[OfferLineItem],
    breakdown: QuoteBreakdown,
    job: JobOptions,
    *,
    offer_date: Optional[date] = None,
    gdpr_consent: bool = False,
    company: CompanyInfo = CompanyInfo(),
) -> str:
    context = {
        "company": company,
        "recipient_lines": customer.recipient_lines(),
        "address_line": ", ".join(p for p in (customer.address, customer.city) if p),
        "window_count": sum(1 for u in units if u.kind is UnitKind.WINDOW),
        "door_count": sum(
            1 for u in units if u.kind in (UnitKind.DOOR, UnitKind.BALCONY_DOUBLE_DOOR)
        ),
        "items": list(items),
        "calc": offer_summary(breakdown, job),
        "conditions": OFFER_CONDITIONS,
        "gdpr_consent": gdpr_consent,
        "city": customer.city or DEFAULT_CITY,
        "date": (offer_date or date.today()).isoformat(),
    }
    return render_template(OFFER_TEMPLATE, context)
