# fonsterkalkyl/routers/quote.py
import time
import uuid

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_price_table
from ..logging_config import LoggingContext, get_logger
from ..metrics import QUOTE_COMPUTE_LATENCY, QUOTES_COMPUTED
from ..pricing.engine.session import QuoteSession
from ..pricing.errors import IncompleteJobError
from ..pricing.offer.line_items import build_line_items
from ..pricing.offer.renderer import OfferCustomer, render_offer_text
from ..pricing.offer.summary import offer_summary
from ..pricing.price_table.table import PriceTable
from ..schemas.quote import LineItemOut, QuoteRequest, QuoteResponse

router = APIRouter(prefix="/api/quote", tags=["quote"])

_JOB_FIELDS = (
    "renovation_type",
    "work_description",
    "adjustment_plus",
    "adjustment_minus",
    "material_percentage",
    "glazing_enabled",
    "glazing_area_m2",
    "has_tax_deduction",
    "is_shared_deduction",
)


def _build_session(request: QuoteRequest, table: PriceTable) -> QuoteSession:
    session = QuoteSession(table)
    session.set_unit_count(len(request.units))
    for unit_id, unit_in in enumerate(request.units, start=1):
        try:
            session.update_unit(unit_id, **unit_in.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=422, detail=f"Parti {unit_id}: {e}") from e
    session.update_job(**{name: getattr(request, name) for name in _JOB_FIELDS})
    return session


@router.post("", response_model=QuoteResponse, summary="Price a job")
async def create_quote(request: QuoteRequest, table: PriceTable = Depends(get_price_table)):
    quote_id = uuid.uuid4().hex[:12]
    session = _build_session(request, table)

    with LoggingContext(session_id=session.session_id, quote_id=quote_id):
        logger = get_logger(__name__)
        start = time.perf_counter()

        issues = session.validate()
        if issues:
            QUOTES_COMPUTED.labels(status="invalid").inc()
            logger.info(f"quote_rejected issues={len(issues)}")
            raise IncompleteJobError(issues)

        breakdown = session.quote()
        items = build_line_items(session.units, table)
        QUOTE_COMPUTE_LATENCY.observe(time.perf_counter() - start)
        QUOTES_COMPUTED.labels(status="ok").inc()
        logger.info(
            f"quote_computed units={len(session.units)} total_incl_vat={breakdown.total_incl_vat:.2f} "
            f"source={table.source.value}"
        )

        offer_text = None
        if request.customer is not None:
            offer_text = render_offer_text(
                OfferCustomer(**request.customer.model_dump()),
                session.units,
                items,
                breakdown,
                session.job,
                gdpr_consent=request.gdpr_consent,
            )

    return QuoteResponse(
        quote_id=quote_id,
        price_source=table.source.value,
        price_version=table.version,
        unit_prices=session.unit_prices(),
        breakdown=breakdown.as_dict(),
        summary=offer_summary(breakdown, session.job),
        line_items=[LineItemOut(unit_id=i.unit_id, name=i.name, price_ex_vat=i.price_ex_vat) for i in items],
        offer_text=offer_text,
    )
