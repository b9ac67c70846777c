import pytest
from loguru import logger

from fonsterkalkyl.logging_config import LoggingContext, get_logger
from fonsterkalkyl.pricing.price_table.resolver import resolve_price_table


@pytest.fixture
def records():
    captured = []
    handler_id = logger.add(lambda message: captured.append(message.record), level="DEBUG")
    yield captured
    logger.remove(handler_id)


def test_module_logger_picks_up_request_context(records):
    with LoggingContext(session_id="s-1", quote_id="q-1"):
        # logs price_row_fields_defaulted through the resolver's module-level logger
        resolve_price_table({"luftare_1_pris": "fyra tusen"})

    warning = next(r for r in records if "price_row_fields_defaulted" in r["message"])
    assert warning["extra"]["session_id"] == "s-1"
    assert warning["extra"]["quote_id"] == "q-1"
    assert warning["extra"]["component"] == "fonsterkalkyl.pricing.price_table.resolver"


def test_context_is_restored_after_block(records):
    log = get_logger("tests")
    with LoggingContext(quote_id="q-2"):
        log.info("inside")
    log.info("outside")

    inside, outside = records[-2:]
    assert inside["extra"]["quote_id"] == "q-2"
    assert outside["extra"]["quote_id"] is None
