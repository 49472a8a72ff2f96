from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from catalog.common.listing import apply_search
from catalog.common.pagination import clamp_per_page, paginate
from catalog.core.logging import get_logger
from catalog.modules.geo.cache import CountryListCache
from catalog.modules.geo.models import CityDistrict, Country, State, Town
from catalog.modules.geo.repository import (
    CityRepository,
    CountryRepository,
    StateRepository,
    TownRepository,
)
from catalog.modules.geo.resolver import (
    GeoScope,
    classify_token,
    resolve_country,
    resolve_state,
    resolve_state_in_scope,
)
from catalog.schemas.geo import (
    CityIn,
    CityRead,
    CountryIn,
    CountryRead,
    StateIn,
    StateRead,
    TownIn,
    TownRead,
)

logger = get_logger(__name__)


def _not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)


def _unprocessable(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)


def split_payload(body: Any) -> tuple[list[Any], dict[str, Any]]:
    """Accept a single object, a raw list, or ``{"items": [...]}``.

    Returns the rows and the top-level defaults (``country`` / ``state``)
    that apply to rows which do not name their own scope.
    """
    if isinstance(body, dict) and isinstance(body.get("items"), list):
        defaults = {key: body[key] for key in ("country", "state") if body.get(key) is not None}
        return list(body["items"]), defaults
    if isinstance(body, list):
        return body, {}
    if isinstance(body, dict):
        return [body], {}
    raise RequestValidationError(
        [{"loc": ("body",), "msg": "Expected an object, a list or {items: [...]}", "type": "value_error"}]
    )


def validate_rows(schema: type[BaseModel], rows: list[Any]) -> list[Any]:
    """Validate every row; errors are reported as ``items.<index>.<field>``."""
    validated, errors = [], []
    for index, row in enumerate(rows):
        try:
            validated.append(schema.model_validate(row))
        except ValidationError as exc:
            for error in exc.errors():
                errors.append(
                    {
                        "loc": ("body", "items", index, *error["loc"]),
                        "msg": error["msg"],
                        "type": error["type"],
                    }
                )
    if not rows:
        errors.append({"loc": ("body", "items"), "msg": "At least one item is required", "type": "value_error"})
    if errors:
        raise RequestValidationError(errors)
    return validated


class GeoService:
    """Listing, lookup and bulk upsert for countries, states, cities and towns."""

    def __init__(self, db: Session, cache: Optional[CountryListCache] = None):
        self.db = db
        self.cache = cache
        self.country_repo = CountryRepository(db)
        self.state_repo = StateRepository(db)
        self.city_repo = CityRepository(db)
        self.town_repo = TownRepository(db)

    # ---------- listing ----------

    def list_countries(
        self,
        q: Optional[str] = None,
        region: Optional[str] = None,
        subregion: Optional[str] = None,
        with_counts: bool = False,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> dict[str, Any]:
        per_page = clamp_per_page(per_page, default=100, maximum=200)
        page = max(1, page or 1)
        params = {
            "q": (q or "").strip(),
            "region": (region or "").strip(),
            "subregion": (subregion or "").strip(),
            "with_counts": with_counts,
            "page": page,
            "per_page": per_page,
        }
        if self.cache is not None:
            cached = self.cache.get(params)
            if cached is not None:
                return cached

        query = self.country_repo.search(
            q=params["q"],
            region=params["region"],
            subregion=params["subregion"],
            with_counts=with_counts,
        )
        result = paginate(query, page, per_page)
        if with_counts:
            data = [
                _dump(CountryRead, country, states_count=states, cities_count=cities, towns_count=towns)
                for country, states, cities, towns in result.items
            ]
        else:
            data = [_dump(CountryRead, country) for country in result.items]

        payload = {"data": data, "meta": result.meta()}
        if self.cache is not None:
            self.cache.set(params, payload)
        return payload

    def list_states(
        self,
        country: Any,
        q: Optional[str] = None,
        with_counts: bool = False,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> dict[str, Any]:
        found = resolve_country(self.db, country)
        if found is None:
            raise _not_found("Country not found")

        query = self.state_repo.search(found.id, q=q, with_counts=with_counts)
        result = paginate(query, page, clamp_per_page(per_page, default=200, maximum=500))
        if with_counts:
            data = [
                _dump(StateRead, state, cities_count=cities, towns_count=towns)
                for state, cities, towns in result.items
            ]
        else:
            data = [_dump(StateRead, state) for state in result.items]

        meta = result.meta(country={"id": found.id, "name": found.name, "iso2": found.iso2})
        return {"data": data, "meta": meta}

    def _listing_scope(self, country: Any, state: Any) -> GeoScope:
        """Turn the ``country`` / ``state`` query tokens into ids."""
        scope = GeoScope()
        if classify_token(state) is not None:
            found = resolve_state(self.db, state, country)
            if found is None:
                raise _not_found("State not found")
            scope.state_id = found.id
            scope.country_id = found.country_id
        elif classify_token(country) is not None:
            found = resolve_country(self.db, country)
            if found is None:
                raise _not_found("Country not found")
            scope.country_id = found.id
        return scope

    def list_cities(
        self,
        country: Any = None,
        state: Any = None,
        q: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> dict[str, Any]:
        scope = self._listing_scope(country, state)
        query = self.city_repo.search(country_id=scope.country_id, state_id=scope.state_id, q=q)
        result = paginate(query, page, clamp_per_page(per_page, default=100, maximum=500))
        return {
            "data": [_dump(CityRead, city) for city in result.items],
            "meta": result.meta(),
        }

    def list_towns(
        self,
        country: Any = None,
        state: Any = None,
        city_id: Optional[int] = None,
        min_pop: Optional[int] = None,
        max_pop: Optional[int] = None,
        q: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> dict[str, Any]:
        scope = self._listing_scope(country, state)
        if city_id is not None:
            if self.city_repo.get_by_id(city_id) is None:
                raise _not_found("City/District not found")
            scope.city_id = city_id

        query = self.town_repo.search(
            country_id=scope.country_id,
            state_id=scope.state_id,
            city_id=scope.city_id,
            min_pop=min_pop,
            max_pop=max_pop,
            q=q,
        )
        result = paginate(query, page, clamp_per_page(per_page, default=100, maximum=500))
        return {
            "data": [_dump(TownRead, town) for town in result.items],
            "meta": result.meta(),
        }

    def search(self, q: str, limit: Optional[int] = None) -> dict[str, Any]:
        """Name and code search across all four levels."""
        q = (q or "").strip()
        if not q:
            raise _unprocessable("The q field is required.")
        limit = clamp_per_page(limit, default=10, maximum=50)
        countries = (
            apply_search(self.country_repo.query(), q, (Country.name, Country.iso2, Country.iso3))
            .order_by(Country.name)
            .limit(limit)
            .all()
        )
        states = (
            apply_search(self.state_repo.query(), q, (State.name, State.iso2, State.iso3166_2))
            .order_by(State.name)
            .limit(limit)
            .all()
        )
        cities = (
            apply_search(self.city_repo.query(), q, (CityDistrict.name,))
            .order_by(CityDistrict.name)
            .limit(limit)
            .all()
        )
        towns = (
            apply_search(self.town_repo.query(), q, (Town.name,))
            .order_by(Town.population.is_(None), Town.population.desc(), Town.name)
            .limit(limit)
            .all()
        )
        return {
            "countries": [_dump(CountryRead, c) for c in countries],
            "states": [_dump(StateRead, s) for s in states],
            "cities": [_dump(CityRead, c) for c in cities],
            "towns": [_dump(TownRead, t) for t in towns],
        }

    # ---------- upserts ----------

    def _in_transaction(self, label: str, rows: list[Any], upsert_row: Callable) -> list[Any]:
        """Upsert all rows or none of them."""
        try:
            saved = [upsert_row(index, row) for index, row in enumerate(rows)]
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("upserted " + label, count=len(saved))
        return saved

    @staticmethod
    def _upsert(repo, match: dict[str, Any], values: dict[str, Any]):
        obj = repo.find_by(**match)
        if obj is None:
            return repo.create(**{**values, **match})
        return repo.update(obj, **values)

    def _country_for_row(self, index: int, country_id: Optional[int], token: Any, default: Optional[int]):
        """Row ``country_id`` beats row ``country`` which beats the top-level default."""
        if country_id is not None:
            if self.country_repo.get_by_id(country_id) is None:
                raise _unprocessable(f"items.{index}: the selected country_id is invalid.")
            return country_id
        if classify_token(token) is not None:
            found = resolve_country(self.db, token)
            if found is None:
                raise _unprocessable(f"items.{index}: country not resolved")
            return found.id
        return default

    def _top_country(self, defaults: dict[str, Any]) -> Optional[int]:
        if "country" not in defaults:
            return None
        found = resolve_country(self.db, defaults["country"])
        if found is None:
            raise _unprocessable("country not resolved")
        return found.id

    def _top_state(self, defaults: dict[str, Any]) -> Optional[int]:
        if "state" not in defaults:
            return None
        found = resolve_state(self.db, defaults["state"], defaults.get("country"))
        if found is None:
            raise _unprocessable("state not resolved")
        return found.id

    def upsert_countries(self, body: Any) -> list[Country]:
        rows, _ = split_payload(body)
        items = validate_rows(CountryIn, rows)

        def upsert_row(index: int, row: CountryIn) -> Country:
            values = row.model_dump(exclude_unset=True)
            return self._upsert(self.country_repo, {"iso2": row.iso2}, values)

        return self._in_transaction("countries", items, upsert_row)

    def upsert_states(self, body: Any) -> list[State]:
        rows, defaults = split_payload(body)
        items = validate_rows(StateIn, rows)
        top_country_id = self._top_country(defaults)

        def upsert_row(index: int, row: StateIn) -> State:
            country_id = self._country_for_row(index, row.country_id, row.country, top_country_id)
            if country_id is None:
                raise _unprocessable(f"items.{index}: country not resolved")
            if row.parent_id is not None and self.state_repo.get_by_id(row.parent_id) is None:
                raise _unprocessable(f"items.{index}: the selected parent_id is invalid.")

            country = self.country_repo.get_by_id(country_id)
            values = row.model_dump(exclude_unset=True, exclude={"country", "country_id"})
            values["country_code"] = row.country_code or country.iso2
            values["country_name"] = row.country_name or country.name

            # natural key: full ISO 3166-2 code, then short code, then name
            match: dict[str, Any] = {"country_id": country_id}
            if row.iso3166_2:
                match["iso3166_2"] = row.iso3166_2
            elif row.iso2:
                match["iso2"] = row.iso2
            else:
                match["name"] = row.name
            return self._upsert(self.state_repo, match, values)

        return self._in_transaction("states", items, upsert_row)

    def _scope_for_row(self, index: int, row, top_country_id, top_state_id) -> GeoScope:
        scope = GeoScope(
            country_id=self._country_for_row(index, row.country_id, row.country, top_country_id)
        )

        state: Optional[State] = None
        if row.state_id is not None:
            state = self.state_repo.get_by_id(row.state_id)
            if state is None:
                raise _unprocessable(f"items.{index}: the selected state_id is invalid.")
        elif classify_token(row.state) is not None:
            state = resolve_state_in_scope(self.db, classify_token(row.state), scope)
        elif top_state_id is not None:
            state = self.state_repo.get_by_id(top_state_id)

        if state is None:
            raise _unprocessable(f"items.{index}: state not resolved")
        if scope.country_id is None:
            scope.country_id = state.country_id
        elif state.country_id != scope.country_id:
            raise _unprocessable(f"items.{index}: state {state.id} is not in country {scope.country_id}")
        scope.state_id = state.id
        return scope

    def upsert_cities(self, body: Any) -> list[CityDistrict]:
        rows, defaults = split_payload(body)
        items = validate_rows(CityIn, rows)
        top_country_id = self._top_country(defaults)
        top_state_id = self._top_state(defaults)

        def upsert_row(index: int, row: CityIn) -> CityDistrict:
            scope = self._scope_for_row(index, row, top_country_id, top_state_id)
            values = row.model_dump(
                exclude_unset=True, exclude={"country", "country_id", "state", "state_id"}
            )
            values["country_id"] = scope.country_id
            return self._upsert(
                self.city_repo, {"state_id": scope.state_id, "name": row.name}, values
            )

        return self._in_transaction("cities", items, upsert_row)

    def upsert_towns(self, body: Any) -> list[Town]:
        rows, defaults = split_payload(body)
        items = validate_rows(TownIn, rows)
        top_country_id = self._top_country(defaults)
        top_state_id = self._top_state(defaults)

        def upsert_row(index: int, row: TownIn) -> Town:
            scope = self._scope_for_row(index, row, top_country_id, top_state_id)

            if row.city_district_id is not None:
                city = self.city_repo.get_by_id(row.city_district_id)
                if city is None or city.state_id != scope.state_id:
                    raise _unprocessable(f"items.{index}: the selected city_district_id is invalid.")
                scope.city_id = city.id
            elif row.city:
                city = self.city_repo.find_in_state(scope.state_id, row.city)
                scope.city_id = city.id if city is not None else None

            values = row.model_dump(
                exclude_unset=True,
                exclude={"country", "country_id", "state", "state_id", "city", "city_district_id"},
            )
            values["country_id"] = scope.country_id
            if row.city_district_id is not None or row.city:
                values["city_district_id"] = scope.city_id
            return self._upsert(
                self.town_repo, {"state_id": scope.state_id, "name": row.name}, values
            )

        return self._in_transaction("towns", items, upsert_row)


def _dump(schema: type[BaseModel], obj: Any, **counts: Any) -> dict[str, Any]:
    data = schema.model_validate(obj).model_dump(mode="json")
    data.update(counts)
    return data
