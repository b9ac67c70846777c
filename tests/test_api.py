import pytest
from fastapi.testclient import TestClient

from fonsterkalkyl.dependencies import get_price_loader
from fonsterkalkyl.main import app

WINDOW = {
    "kind": "fonster",
    "sash_count": "1_luftare",
    "work_scope": "utvandig",
    "opening": "inatgaende",
    "window_type": "kopplade_standard",
}


@pytest.fixture
def api(loader):
    app.dependency_overrides[get_price_loader] = lambda: loader
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_health(api):
    r = api.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_get_pricing(api):
    r = api.get("/api/pricing")
    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "remote"
    assert body["version"] == 1
    assert body["prices"]["luftare_1_pris"] == 4000
    assert body["prices"]["vat"] == 25
    assert body["percentages"]["renov_trad_linolja_mult"] == 15.0


def test_refresh_failure_is_502(api, sheet):
    sheet.fail = 500
    r = api.post("/api/pricing/refresh")
    assert r.status_code == 502
    assert "HTTP 500" in r.json()["detail"]


def test_save_pricing(api, sheet):
    r = api.put("/api/pricing", json={"pricing": {"luftare_1_pris": 4100}})
    assert r.status_code == 200
    assert r.json()["version"] == 8
    assert r.json()["prices"]["luftare_1_pris"] == 4100


def test_save_failure_is_502(api, sheet):
    sheet.fail = "network"
    r = api.put("/api/pricing", json={"pricing": {"luftare_1_pris": 4100}})
    assert r.status_code == 502


def test_quote(api):
    r = api.post("/api/quote", json={"units": [WINDOW], "renovation_type": "modern_alcro"})
    assert r.status_code == 200
    body = r.json()
    assert body["unit_prices"] == {"1": 4000}
    assert body["breakdown"]["total_incl_vat"] == 5000
    assert body["summary"]["customer_pays"] == 5000
    assert body["line_items"] == [{"unit_id": 1, "name": "Parti 1: Fönsterparti, 1 luftare", "price_ex_vat": 4000}]
    assert body["price_source"] == "remote"
    assert body["offer_text"] is None


def test_quote_with_offer_text(api):
    r = api.post(
        "/api/quote",
        json={
            "units": [WINDOW, WINDOW],
            "has_tax_deduction": True,
            "customer": {"contact": "Anna Andersson", "city": "Borlänge"},
        },
    )
    assert r.status_code == 200
    text = r.json()["offer_text"]
    assert "Anna Andersson" in text
    assert "KUNDEN BETALAR: 5 000 kr" in text


def test_incomplete_quote_is_422_with_issues(api):
    r = api.post("/api/quote", json={"units": [WINDOW, {"kind": "dorr"}], "material_percentage": 150})
    assert r.status_code == 422
    codes = [i["code"] for i in r.json()["issues"]]
    assert codes == ["WORK_SCOPE_MISSING", "MATERIAL_PERCENTAGE_INVALID"]


@pytest.mark.parametrize(
    "field", ["glazing_area_m2", "adjustment_plus", "adjustment_minus", "material_percentage"]
)
@pytest.mark.parametrize("value", ["NaN", "nan", "Infinity"])
def test_non_finite_job_numbers_are_422(api, field, value):
    r = api.post("/api/quote", json={"units": [WINDOW], "glazing_enabled": True, field: value})
    assert r.status_code == 422
    assert r.json()["detail"][0]["loc"] == ["body", field]


def test_bad_sash_selector_is_422(api):
    r = api.post("/api/quote", json={"units": [{**WINDOW, "sash_count": "many"}]})
    assert r.status_code == 422
    assert "Parti 1" in r.json()["detail"]


def test_metrics_exposed(api):
    api.post("/api/quote", json={"units": [WINDOW]})
    r = api.get("/metrics")
    assert r.status_code == 200
    assert "quotes_computed_total" in r.text
    assert "price_table_loads_total" in r.text
