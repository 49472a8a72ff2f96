"""Tests for geo payload handling and the country cache wrapper."""
import json
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError

from catalog.modules.geo.cache import CountryListCache
from catalog.modules.geo.service import GeoService, split_payload, validate_rows
from catalog.schemas.geo import CountryIn


class TestSplitPayload:
    def test_items_with_defaults(self):
        rows, defaults = split_payload({"country": "IN", "state": None, "items": [{"name": "A"}]})
        assert rows == [{"name": "A"}]
        assert defaults == {"country": "IN"}

    def test_raw_list(self):
        assert split_payload([{"name": "A"}, {"name": "B"}]) == ([{"name": "A"}, {"name": "B"}], {})

    def test_single_object(self):
        assert split_payload({"name": "A"}) == ([{"name": "A"}], {})

    def test_scalar_rejected(self):
        with pytest.raises(RequestValidationError):
            split_payload("nope")


def test_validate_rows_reports_item_index():
    with pytest.raises(RequestValidationError) as exc:
        validate_rows(CountryIn, [{"name": "Ok", "iso2": "OK", "iso3": "OKK"}, {"name": "Bad"}])

    locations = {error["loc"] for error in exc.value.errors()}
    assert ("body", "items", 1, "iso2") in locations


class TestCountryListCache:
    def test_disabled_without_client(self):
        cache = CountryListCache(None, 3600)
        assert cache.get({"page": 1}) is None
        cache.set({"page": 1}, {"data": []})

    def test_key_ignores_param_order(self):
        assert CountryListCache.key_for({"a": 1, "b": 2}) == CountryListCache.key_for({"b": 2, "a": 1})

    def test_service_uses_cache(self, db, india):
        client = MagicMock()
        client.get.return_value = None
        service = GeoService(db, CountryListCache(client, 60))

        first = service.list_countries()
        client.get.return_value = json.dumps(first)
        second = service.list_countries()

        assert first == second
        assert client.setex.call_count == 1
        assert client.setex.call_args.args[1] == 60
