"""Tests for the location directory client"""

import asyncio

import pytest

from conftest import DIRECTORY_URL, FakeResponse, FakeSession
from services.location_directory import LocationDirectoryClient, LocationDirectoryError

BASE = f"{DIRECTORY_URL}/api/location"


def client(routes):
    session = FakeSession(routes)
    return LocationDirectoryClient(base_url=DIRECTORY_URL + "/", timeout=2, session=session), session


def ok(data):
    return FakeResponse({"success": True, "data": data})


@pytest.mark.asyncio
async def test_get_states_maps_camel_case():
    directory, session = client(
        {f"{BASE}/states": ok([{"id": 27, "name": "Maharashtra", "code": "MH", "isActive": True}])}
    )

    states = await directory.get_states()

    assert states[0].id == 27
    assert states[0].name == "Maharashtra"
    assert states[0].is_active is True
    assert session.calls[0][0] == f"{BASE}/states"


@pytest.mark.asyncio
async def test_district_names_are_url_encoded():
    directory, session = client(
        {f"{BASE}/states/30/districts/North%20Goa/cities": ok([{"name": "Mapusa", "pincode": "403507"}])}
    )

    cities = await directory.get_cities(30, "North Goa")

    assert [(c.name, c.pincode) for c in cities] == [("Mapusa", "403507")]


@pytest.mark.asyncio
async def test_search_cities_passes_query_and_limit():
    directory, session = client(
        {f"{BASE}/states/27/cities/search": ok([{"name": "Pune", "pincode": "411001", "district": "Pune"}])}
    )

    results = await directory.search_cities(27, "pun", limit=5)

    assert results[0].district == "Pune"
    assert session.calls[0][1] == {"q": "pun", "limit": 5}


@pytest.mark.asyncio
async def test_get_city_by_pincode():
    directory, _ = client(
        {
            f"{BASE}/pincode/411001": ok(
                {"pincode": "411001", "city": "Pune", "district": "Pune", "state": "Maharashtra", "stateId": 27}
            )
        }
    )

    lookup = await directory.get_city_by_pincode("411001")

    assert lookup.city == "Pune"
    assert lookup.state_id == 27


@pytest.mark.asyncio
async def test_unknown_pincode_is_none():
    directory, _ = client({})
    assert await directory.get_city_by_pincode("999999") is None


@pytest.mark.asyncio
async def test_validate_pincode():
    directory, _ = client(
        {
            f"{BASE}/validate/states/27/pincode/411001": ok(
                {"pincode": "411001", "stateId": 27, "stateName": "Maharashtra", "isValid": True, "city": "Pune"}
            )
        }
    )

    validation = await directory.validate_pincode(27, "411001")

    assert validation.is_valid is True
    assert validation.state_name == "Maharashtra"


@pytest.mark.asyncio
async def test_validate_pincode_without_data_raises():
    directory, _ = client({f"{BASE}/validate/states/27/pincode/000000": ok(None)})

    with pytest.raises(LocationDirectoryError):
        await directory.validate_pincode(27, "000000")


@pytest.mark.asyncio
async def test_server_error_is_raised_with_status():
    directory, _ = client({f"{BASE}/states": FakeResponse(status=503)})

    with pytest.raises(LocationDirectoryError) as exc_info:
        await directory.get_states()
    assert exc_info.value.status == 503


@pytest.mark.asyncio
async def test_missing_endpoint_is_raised_unless_allowed():
    directory, _ = client({})

    with pytest.raises(LocationDirectoryError) as exc_info:
        await directory.get_districts(27)
    assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_timeout_is_raised():
    directory, _ = client({f"{BASE}/states": asyncio.TimeoutError()})

    with pytest.raises(LocationDirectoryError):
        await directory.get_states()


@pytest.mark.asyncio
async def test_search_locations_skips_failing_states():
    directory, _ = client(
        {
            f"{BASE}/states": ok([{"id": 27, "name": "Maharashtra"}, {"id": 30, "name": "Goa"}]),
            f"{BASE}/states/27/cities/search": ok(
                [{"name": "Pune", "pincode": "411001"}, {"name": "Pune Cantonment", "pincode": "411040"}]
            ),
            f"{BASE}/states/30/cities/search": FakeResponse(status=500),
        }
    )

    matches = await directory.search_locations("pune")

    assert [(m.state, m.city, m.pincode) for m in matches] == [
        ("Maharashtra", "Pune", "411001"),
        ("Maharashtra", "Pune Cantonment", "411040"),
    ]


@pytest.mark.asyncio
async def test_search_locations_caps_results():
    states = [{"id": i, "name": f"State {i}"} for i in range(3)]
    routes = {f"{BASE}/states": ok(states)}
    for i in range(3):
        routes[f"{BASE}/states/{i}/cities/search"] = ok(
            [{"name": f"Town {i}-{n}", "pincode": f"{i}0000{n}"} for n in range(10)]
        )
    directory, session = client(routes)

    matches = await directory.search_locations("town")

    assert len(matches) == 20
    assert matches[-1].city == "Town 1-9"
    assert session.calls[1][1]["limit"] == 10


@pytest.mark.asyncio
async def test_get_all_cities_for_state_dedupes_in_order():
    directory, _ = client(
        {
            f"{BASE}/states/27/districts": ok([{"name": "Pune", "citiesCount": 2}, {"name": "Satara"}]),
            f"{BASE}/states/27/districts/Pune/cities": ok(
                [{"name": "Pune", "pincode": "411001"}, {"name": "Pune", "pincode": "411002"}]
            ),
            f"{BASE}/states/27/districts/Satara/cities": ok(
                [{"name": "Wai", "pincode": "412803"}, {"name": "Pune", "pincode": "415000"}]
            ),
        }
    )

    assert await directory.get_all_cities_for_state(27) == ["Pune", "Wai"]


@pytest.mark.asyncio
async def test_get_all_pincodes_for_city_matches_substring():
    directory, _ = client(
        {
            f"{BASE}/states/27/districts": ok([{"name": "Pune"}, {"name": "Broken"}]),
            f"{BASE}/states/27/districts/Pune/cities": ok(
                [
                    {"name": "Pune", "pincode": "411001"},
                    {"name": "Pune Cantonment", "pincode": "411001"},
                    {"name": "Pimpri", "pincode": "411017"},
                ]
            ),
            f"{BASE}/states/27/districts/Broken/cities": FakeResponse(status=500),
        }
    )

    assert await directory.get_all_pincodes_for_city(27, "PUNE") == ["411001"]


@pytest.mark.asyncio
async def test_malformed_records_are_raised_as_directory_errors():
    directory, _ = client({f"{BASE}/states": ok([{"code": "MH"}])})

    with pytest.raises(LocationDirectoryError):
        await directory.get_states()


@pytest.mark.asyncio
async def test_non_list_data_is_raised_as_directory_error():
    directory, _ = client({f"{BASE}/states/27/districts": ok({"name": "Pune"})})

    with pytest.raises(LocationDirectoryError):
        await directory.get_districts(27)


@pytest.mark.asyncio
async def test_malformed_pincode_lookup_is_raised():
    directory, _ = client({f"{BASE}/pincode/411001": ok({"pincode": "411001"})})

    with pytest.raises(LocationDirectoryError):
        await directory.get_city_by_pincode("411001")
