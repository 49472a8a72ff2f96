from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Query

from catalog.common.listing import apply_search
from catalog.db.repository import BaseRepository
from catalog.modules.geo.models import CityDistrict, Country, State, Town


def _count_of(model, column, parent_id_column):
    return (
        select(func.count(model.id))
        .where(column == parent_id_column)
        .correlate_except(model)
        .scalar_subquery()
    )


class CountryRepository(BaseRepository[Country]):
    model = Country

    def search(
        self,
        q: Optional[str] = None,
        region: Optional[str] = None,
        subregion: Optional[str] = None,
        with_counts: bool = False,
    ) -> Query:
        if with_counts:
            query = self.db.query(
                Country,
                _count_of(State, State.country_id, Country.id).label("states_count"),
                _count_of(CityDistrict, CityDistrict.country_id, Country.id).label("cities_count"),
                _count_of(Town, Town.country_id, Country.id).label("towns_count"),
            )
        else:
            query = self.query()

        query = apply_search(query, q, (Country.name, Country.iso2, Country.iso3))
        if region:
            query = query.filter(Country.region == region)
        if subregion:
            query = query.filter(Country.subregion == subregion)
        return query.order_by(Country.name.asc(), Country.id.asc())


class StateRepository(BaseRepository[State]):
    model = State

    def search(self, country_id: int, q: Optional[str] = None, with_counts: bool = False) -> Query:
        if with_counts:
            query = self.db.query(
                State,
                _count_of(CityDistrict, CityDistrict.state_id, State.id).label("cities_count"),
                _count_of(Town, Town.state_id, State.id).label("towns_count"),
            )
        else:
            query = self.query()

        query = query.filter(State.country_id == country_id)
        query = apply_search(query, q, (State.name,))
        return query.order_by(State.name.asc(), State.id.asc())


class CityRepository(BaseRepository[CityDistrict]):
    model = CityDistrict

    def search(
        self,
        country_id: Optional[int] = None,
        state_id: Optional[int] = None,
        q: Optional[str] = None,
    ) -> Query:
        query = self.query()
        if country_id is not None:
            query = query.filter(CityDistrict.country_id == country_id)
        if state_id is not None:
            query = query.filter(CityDistrict.state_id == state_id)
        query = apply_search(query, q, (CityDistrict.name,))
        return query.order_by(CityDistrict.name.asc(), CityDistrict.id.asc())

    def find_in_state(self, state_id: int, name: str) -> Optional[CityDistrict]:
        return (
            self.query()
            .filter(CityDistrict.state_id == state_id)
            .filter(func.lower(CityDistrict.name) == name.strip().lower())
            .order_by(CityDistrict.id)
            .first()
        )


class TownRepository(BaseRepository[Town]):
    model = Town

    def search(
        self,
        country_id: Optional[int] = None,
        state_id: Optional[int] = None,
        city_id: Optional[int] = None,
        min_pop: Optional[int] = None,
        max_pop: Optional[int] = None,
        q: Optional[str] = None,
    ) -> Query:
        query = self.query()
        if country_id is not None:
            query = query.filter(Town.country_id == country_id)
        if state_id is not None:
            query = query.filter(Town.state_id == state_id)
        if city_id is not None:
            query = query.filter(Town.city_district_id == city_id)
        if min_pop is not None:
            query = query.filter(Town.population >= min_pop)
        if max_pop is not None:
            query = query.filter(Town.population <= max_pop)
        query = apply_search(query, q, (Town.name,))
        # populated towns first, biggest first
        return query.order_by(
            Town.population.is_(None), Town.population.desc(), Town.name.asc(), Town.id.asc()
        )

