import pytest

from places_proxy.models.places_model import PlaceResult, SearchQuery, format_coordinate


@pytest.mark.parametrize("value, expected", [
    (5.6037, "5.6037"),
    (-0.1870, "-0.187"),
    (5.0, "5"),
    (-90.0, "-90"),
    (-0.0, "0"),
    (1e-07, "1e-7"),
    (-1.5e-07, "-1.5e-7"),
    (0.00001, "0.00001"),
    (0.000001, "0.000001"),
    (123.456, "123.456"),
    (179.99999999999997, "179.99999999999997"),
])
def test_format_coordinate(value, expected):
    assert format_coordinate(value) == expected


def test_search_query_upstream_params():
    query = SearchQuery(latitude=5.6037, longitude=-0.187, radius_meters=3000, place_type="establishment")

    assert query.location == "5.6037,-0.187"
    assert query.to_upstream_params("k") == {
        "location": "5.6037,-0.187",
        "radius": "3000",
        "type": "establishment",
        "key": "k",
    }


def test_full_record_projection():
    record = {
        "place_id": "abc",
        "name": "Lakeside Realty",
        "vicinity": "Osu, Accra",
        "formatted_address": "12 Oxford St, Accra, Ghana",
        "geometry": {
            "location": {"lat": 5.55, "lng": -0.18},
            "viewport": {
                "northeast": {"lat": 5.56, "lng": -0.17},
                "southwest": {"lat": 5.54, "lng": -0.19},
            },
        },
        "rating": 4.4,
        "price_level": 2,
        "types": ["real_estate_agency", "point_of_interest"],
        "opening_hours": {"open_now": True, "weekday_text": []},
        "photos": [{"photo_reference": "secret"}],
        "reference": "legacy",
        "user_ratings_total": 18,
    }

    assert PlaceResult.from_upstream(record).to_json() == {
        "placeId": "abc",
        "name": "Lakeside Realty",
        "vicinity": "Osu, Accra",
        "formattedAddress": "12 Oxford St, Accra, Ghana",
        "geometry": {
            "location": {"lat": 5.55, "lng": -0.18},
            "viewport": {
                "northeast": {"lat": 5.56, "lng": -0.17},
                "southwest": {"lat": 5.54, "lng": -0.19},
            },
        },
        "rating": 4.4,
        "priceLevel": 2,
        "types": ["real_estate_agency", "point_of_interest"],
        "openingHoursNow": True,
    }


def test_absent_fields_are_omitted():
    assert PlaceResult.from_upstream({"name": "Only Name"}).to_json() == {"name": "Only Name"}


def test_closed_now_is_kept():
    place = PlaceResult.from_upstream({"place_id": "x", "opening_hours": {"open_now": False}})

    assert place.to_json() == {"placeId": "x", "openingHoursNow": False}


def test_opening_hours_without_open_now_is_omitted():
    place = PlaceResult.from_upstream({"place_id": "x", "opening_hours": {}})

    assert "openingHoursNow" not in place.to_json()


@pytest.mark.parametrize("geometry", [
    "5.5,-0.1",
    {"viewport": {}},
    {"location": {"lat": "north", "lng": 1}},
])
def test_unusable_geometry_is_omitted(geometry):
    place = PlaceResult.from_upstream({"place_id": "x", "geometry": geometry})

    assert place.to_json() == {"placeId": "x"}


def test_extra_geometry_keys_are_dropped():
    place = PlaceResult.from_upstream({
        "geometry": {"location": {"lat": 1, "lng": 2, "altitude": 9}, "bounds": {}},
    })

    assert place.to_json() == {"geometry": {"location": {"lat": 1.0, "lng": 2.0}}}


@pytest.mark.parametrize("field, value", [
    ("rating", "N/A"),
    ("price_level", "cheap"),
    ("types", "real_estate_agency"),
    ("name", {"text": "Acme"}),
    ("vicinity", ["Osu"]),
])
def test_badly_typed_field_is_omitted(field, value):
    place = PlaceResult.from_upstream({"place_id": "x", field: value})

    assert place.to_json() == {"placeId": "x"}


def test_non_string_place_id_is_omitted():
    place = PlaceResult.from_upstream({"place_id": 123, "name": "Gamma Estates"})

    assert place.to_json() == {"name": "Gamma Estates"}


def test_unreadable_open_now_is_omitted():
    place = PlaceResult.from_upstream({"place_id": "x", "opening_hours": {"open_now": "sometimes"}})

    assert place.to_json() == {"placeId": "x"}


def test_numeric_strings_are_read_as_numbers():
    place = PlaceResult.from_upstream({"rating": "4.5", "price_level": "2"})

    assert place.to_json() == {"rating": 4.5, "priceLevel": 2}
