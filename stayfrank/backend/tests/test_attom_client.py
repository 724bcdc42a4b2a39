# tests/test_attom_client.py
import httpx
import pytest

from app.adapters.clients.attom import AttomClient, PropertyLookupError, parse_expanded_profile

PAYLOAD = {
    "status": {"code": 0, "msg": "SuccessWithResult"},
    "property": [
        {
            "address": {"oneLine": "123 MAIN ST, PHOENIX, AZ 85001", "countrySubd": "AZ"},
            "summary": {"propertyType": "SINGLE FAMILY RESIDENCE", "yearBuilt": 1998},
            "avm": {"amount": {"value": 412345.6}},
            "assessment": {
                "owner": {
                    "owner1": {"fullName": "JOHN SMITH"},
                    "owner2": {"lastNameAndSuffix": "SMITH"},
                },
                "mortgage": {"FirstConcurrent": {"amount": 180000}},
            },
        }
    ],
}


def test_parse_expanded_profile():
    rec = parse_expanded_profile(PAYLOAD)
    assert rec.state == "AZ"
    assert rec.owner_names == "JOHN SMITH, SMITH"
    assert rec.raw_property_type == "SINGLE FAMILY RESIDENCE"
    assert rec.estimated_value == 412346.0
    assert rec.estimated_mortgage_balance == 180000.0


def test_value_falls_back_through_sources():
    payload = {
        "property": [
            {
                "avm": {"amount": {"value": 0}},
                "assessment": {"assessed": {"assdImprValue": 150000, "assdLandValue": 60000}},
                "mortgage": {"amount": 90000},
            }
        ]
    }
    rec = parse_expanded_profile(payload)
    assert rec.estimated_value == 210000.0
    assert rec.estimated_mortgage_balance == 90000.0
    assert rec.owner_names == "Unknown Owner"
    assert rec.raw_property_type == "Single Family"
    assert rec.state == ""


def test_market_value_beats_sale_price():
    payload = {
        "property": [
            {
                "assessment": {"market": {"mktTotalValue": 300000}},
                "sale": {"amount": {"saleamt": 250000}},
            }
        ]
    }
    assert parse_expanded_profile(payload).estimated_value == 300000.0


@pytest.mark.parametrize("payload", [{"property": []}, {}, {"property": "nope"}, ["not", "an", "object"]])
def test_bad_payloads_raise_lookup_error(payload):
    with pytest.raises(PropertyLookupError):
        parse_expanded_profile(payload)


async def test_client_sends_key_and_address():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["address"] = request.url.params.get("address")
        seen["apikey"] = request.headers.get("apikey")
        return httpx.Response(200, json=PAYLOAD)

    client = AttomClient(api_key="k-123", base_url="https://attom.test/v1", transport=httpx.MockTransport(handler))
    rec = await client.lookup("  123 Main St, Phoenix, AZ  ")

    assert rec.state == "AZ"
    assert seen == {"path": "/v1/property/expandedprofile", "address": "123 Main St, Phoenix, AZ", "apikey": "k-123"}


async def test_client_maps_404_to_not_found():
    client = AttomClient(
        api_key="k",
        base_url="https://attom.test",
        transport=httpx.MockTransport(lambda r: httpx.Response(404, json={"status": {"msg": "SuccessWithoutResult"}})),
    )
    with pytest.raises(PropertyLookupError, match="property_not_found"):
        await client.lookup("1 Nowhere Rd")


async def test_client_wraps_http_failures():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(503)

    client = AttomClient(api_key="k", base_url="https://attom-down.test", transport=httpx.MockTransport(handler))
    with pytest.raises(PropertyLookupError, match="attom_http_error"):
        await client.lookup("1 Main St")
    # first try plus retries
    assert len(calls) == 3


async def test_client_requires_configuration():
    with pytest.raises(PropertyLookupError, match="attom_not_configured"):
        await AttomClient(api_key="").lookup("1 Main St")
    with pytest.raises(PropertyLookupError, match="address_required"):
        await AttomClient(api_key="k").lookup("   ")
