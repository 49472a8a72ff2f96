# catalog/modules/geo/routes.py
from typing import Any, Optional

import redis
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from catalog.common.listing import parse_bool
from catalog.core.config import settings
from catalog.core.responses import Envelope, ok
from catalog.db.deps import get_db
from catalog.integrations.redis.client import get_redis
from catalog.modules.geo.cache import CountryListCache
from catalog.modules.geo.service import GeoService
from catalog.schemas.geo import CityRead, CountryRead, GeoSearchResult, StateRead, TownRead

router = APIRouter(prefix="/geo", tags=["geo"])

def get_country_cache(client: Optional[redis.Redis] = Depends(get_redis)) -> CountryListCache:
    return CountryListCache(client, settings.COUNTRY_CACHE_TTL_SECONDS)


# ---------- listing ----------


@router.get("/countries", response_model=Envelope[list[CountryRead]])
def list_countries(
    q: Optional[str] = Query(default=None, description="Search name, iso2 and iso3"),
    region: Optional[str] = Query(default=None),
    subregion: Optional[str] = Query(default=None),
    with_counts: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
    cache: CountryListCache = Depends(get_country_cache),
):
    """Countries ordered by name; served from cache when available."""
    result = GeoService(db, cache).list_countries(
        q=q,
        region=region,
        subregion=subregion,
        with_counts=bool(parse_bool(with_counts)),
        page=page,
        per_page=per_page,
    )
    return ok(result["data"], "Countries retrieved successfully", result["meta"])


@router.get("/states", response_model=Envelope[list[StateRead]])
def list_states(
    country: str = Query(..., min_length=1, description="ISO2, ISO3, numeric code or name"),
    q: Optional[str] = Query(default=None),
    with_counts: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = GeoService(db).list_states(
        country,
        q=q,
        with_counts=bool(parse_bool(with_counts)),
        page=page,
        per_page=per_page,
    )
    return ok(result["data"], "States retrieved successfully", result["meta"])


@router.get("/cities", response_model=Envelope[list[CityRead]])
def list_cities(
    country: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None, description="Id, ISO code or name"),
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    result = GeoService(db).list_cities(
        country=country, state=state, q=q, page=page, per_page=per_page
    )
    return ok(result["data"], "Cities retrieved successfully", result["meta"])


@router.get("/towns", response_model=Envelope[list[TownRead]])
def list_towns(
    country: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
    city_id: Optional[int] = Query(default=None),
    min_pop: Optional[int] = Query(default=None),
    max_pop: Optional[int] = Query(default=None),
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Towns ordered by population (unknown last), then name."""
    result = GeoService(db).list_towns(
        country=country,
        state=state,
        city_id=city_id,
        min_pop=min_pop,
        max_pop=max_pop,
        q=q,
        page=page,
        per_page=per_page,
    )
    return ok(result["data"], "Towns retrieved successfully", result["meta"])


@router.get("/search", response_model=Envelope[GeoSearchResult])
def search(
    q: str = Query(..., min_length=1),
    limit: Optional[int] = Query(default=None, description="Per level, max 50"),
    db: Session = Depends(get_db),
):
    return ok(GeoService(db).search(q.strip(), limit=limit), "Search results")


# ---------- bulk upserts ----------


@router.post(
    "/countries",
    response_model=Envelope[list[CountryRead]],
    status_code=status.HTTP_201_CREATED,
)
def upsert_countries(body: Any = Body(...), db: Session = Depends(get_db)):
    """Insert or update countries keyed by ISO2.

    The body is a single object, a list, or ``{"items": [...]}``.
    """
    saved = GeoService(db).upsert_countries(body)
    return ok([CountryRead.model_validate(c) for c in saved], meta={"count": len(saved)})


@router.post(
    "/states",
    response_model=Envelope[list[StateRead]],
    status_code=status.HTTP_201_CREATED,
)
def upsert_states(body: Any = Body(...), db: Session = Depends(get_db)):
    saved = GeoService(db).upsert_states(body)
    return ok([StateRead.model_validate(s) for s in saved], meta={"count": len(saved)})


@router.post(
    "/cities",
    response_model=Envelope[list[CityRead]],
    status_code=status.HTTP_201_CREATED,
)
def upsert_cities(body: Any = Body(...), db: Session = Depends(get_db)):
    saved = GeoService(db).upsert_cities(body)
    return ok([CityRead.model_validate(c) for c in saved], meta={"count": len(saved)})


@router.post(
    "/towns",
    response_model=Envelope[list[TownRead]],
    status_code=status.HTTP_201_CREATED,
)
def upsert_towns(body: Any = Body(...), db: Session = Depends(get_db)):
    saved = GeoService(db).upsert_towns(body)
    return ok([TownRead.model_validate(t) for t in saved], meta={"count": len(saved)})
