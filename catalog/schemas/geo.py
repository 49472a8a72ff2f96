import json
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A country or state may be referenced by id, code or name.
Token = Union[int, str]


def _upper(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


# ---------- upsert rows ----------


class CountryIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    official_name: Optional[str] = Field(default=None, max_length=255)
    iso2: str = Field(min_length=2, max_length=2)
    iso3: str = Field(min_length=3, max_length=3)
    numeric_code: Optional[int] = None
    phonecode: Optional[int] = None
    capital: Optional[str] = Field(default=None, max_length=200)
    currency: Optional[str] = Field(default=None, max_length=50)
    currency_name: Optional[str] = Field(default=None, max_length=100)
    currency_symbol: Optional[str] = Field(default=None, max_length=20)
    tld: Optional[str] = Field(default=None, max_length=20)
    native: Optional[str] = Field(default=None, max_length=200)
    region: Optional[str] = Field(default=None, max_length=100)
    subregion: Optional[str] = Field(default=None, max_length=100)
    nationality: Optional[str] = Field(default=None, max_length=120)
    timezones: Optional[Union[list[Any], dict[str, Any], str]] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    emoji: Optional[str] = Field(default=None, max_length=10)

    @field_validator("iso2", "iso3")
    @classmethod
    def upper_codes(cls, value):
        return _upper(value)

    @field_validator("timezones")
    @classmethod
    def decode_timezones(cls, value):
        # a JSON string is decoded when it parses, otherwise kept verbatim
        if isinstance(value, str):
            try:
                return json.loads(value)
            except ValueError:
                return value
        return value


class StateIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    iso2: Optional[str] = Field(default=None, max_length=20)
    iso3166_2: Optional[str] = Field(default=None, max_length=20)
    fips_code: Optional[str] = Field(default=None, max_length=10)
    type: Optional[str] = Field(default=None, max_length=100)
    level: Optional[int] = None
    parent_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = Field(default=None, max_length=64)

    country: Optional[Token] = None
    country_id: Optional[int] = None
    country_code: Optional[str] = Field(default=None, min_length=2, max_length=2)
    country_name: Optional[str] = Field(default=None, max_length=200)

    @field_validator("iso2", "iso3166_2", "country_code")
    @classmethod
    def upper_codes(cls, value):
        return _upper(value)


class CityIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    type: Optional[str] = Field(default=None, max_length=100)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    population: Optional[int] = Field(default=None, ge=0)

    country: Optional[Token] = None
    country_id: Optional[int] = None
    state: Optional[Token] = None
    state_id: Optional[int] = None


class TownIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    population: Optional[int] = Field(default=None, ge=0)
    city_district_id: Optional[int] = None
    # resolved by exact name inside the row's state
    city: Optional[str] = None

    country: Optional[Token] = None
    country_id: Optional[int] = None
    state: Optional[Token] = None
    state_id: Optional[int] = None


# ---------- read models ----------


class CountryRead(BaseModel):
    id: int
    name: str
    official_name: Optional[str] = None
    iso2: str
    iso3: str
    numeric_code: Optional[int] = None
    phonecode: Optional[int] = None
    capital: Optional[str] = None
    currency: Optional[str] = None
    currency_name: Optional[str] = None
    currency_symbol: Optional[str] = None
    tld: Optional[str] = None
    native: Optional[str] = None
    region: Optional[str] = None
    subregion: Optional[str] = None
    nationality: Optional[str] = None
    timezones: Optional[Any] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    emoji: Optional[str] = None

    # only filled with ?with_counts=1
    states_count: Optional[int] = None
    cities_count: Optional[int] = None
    towns_count: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class StateRead(BaseModel):
    id: int
    country_id: int
    country_code: Optional[str] = None
    country_name: Optional[str] = None
    name: str
    iso2: Optional[str] = None
    iso3166_2: Optional[str] = None
    fips_code: Optional[str] = None
    type: Optional[str] = None
    level: Optional[int] = None
    parent_id: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None

    cities_count: Optional[int] = None
    towns_count: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class CityRead(BaseModel):
    id: int
    country_id: int
    state_id: int
    name: str
    type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    population: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class TownRead(BaseModel):
    id: int
    country_id: int
    state_id: int
    city_district_id: Optional[int] = None
    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    population: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class GeoSearchResult(BaseModel):
    countries: list[CountryRead]
    states: list[StateRead]
    cities: list[CityRead]
    towns: list[TownRead]
