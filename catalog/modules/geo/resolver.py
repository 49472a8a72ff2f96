"""Resolve countries and states from an id, a code or a name.

A token is classified once (numeric, short code, free text) and each branch
runs its own query. Scope is always passed in explicitly: a state lookup
receives the country token it must live under.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from catalog.common.listing import escape_like
from catalog.modules.geo.models import Country, State

# "IN", "IND", "MZ", "IN-MZ", "US-CA", "GB-LND"
_CODE = re.compile(r"^[A-Za-z0-9]{1,3}(-[A-Za-z0-9]{1,3})?$")


class TokenKind(str, enum.Enum):
    numeric = "numeric"
    code = "code"
    text = "text"


@dataclass(frozen=True)
class GeoToken:
    kind: TokenKind
    value: str

    @property
    def upper(self) -> str:
        return self.value.upper()


@dataclass
class GeoScope:
    """Ids resolved so far, threaded from one lookup step to the next."""

    country_id: Optional[int] = None
    state_id: Optional[int] = None
    city_id: Optional[int] = None


def classify_token(token: Any) -> Optional[GeoToken]:
    if token is None:
        return None
    value = str(token).strip()
    if not value:
        return None
    if value.isdigit():
        return GeoToken(TokenKind.numeric, value)
    if _CODE.match(value) and any(ch.isalpha() for ch in value):
        return GeoToken(TokenKind.code, value)
    return GeoToken(TokenKind.text, value)


def resolve_country(db: Session, token: Any) -> Optional[Country]:
    """Match by ISO2, ISO3, numeric code or name, in that order of preference."""
    parsed = classify_token(token)
    if parsed is None:
        return None

    if parsed.kind is TokenKind.numeric:
        return (
            db.query(Country)
            .filter(Country.numeric_code == int(parsed.value))
            .order_by(Country.id)
            .first()
        )

    lowered = parsed.value.lower()
    rank = case(
        (Country.iso2 == parsed.upper, 0),
        (Country.iso3 == parsed.upper, 1),
        else_=2,
    )
    return (
        db.query(Country)
        .filter(
            or_(
                Country.iso2 == parsed.upper,
                Country.iso3 == parsed.upper,
                func.lower(Country.name) == lowered,
            )
        )
        .order_by(rank, Country.id)
        .first()
    )


def resolve_state(db: Session, token: Any, country_token: Any = None) -> Optional[State]:
    """Find a state, restricted to ``country_token`` when one is given.

    Lookup order: primary key (numeric tokens), full ISO 3166-2 code, short
    code, exact name, then name substring. An unknown country yields ``None``
    rather than widening the search to every country.
    """
    parsed = classify_token(token)
    if parsed is None:
        return None

    scope = GeoScope()
    if classify_token(country_token) is not None:
        country = resolve_country(db, country_token)
        if country is None:
            return None
        scope.country_id = country.id

    return resolve_state_in_scope(db, parsed, scope)


def resolve_state_in_scope(db: Session, parsed: GeoToken, scope: GeoScope) -> Optional[State]:
    base = db.query(State)
    if scope.country_id is not None:
        base = base.filter(State.country_id == scope.country_id)

    if parsed.kind is TokenKind.numeric:
        state = base.filter(State.id == int(parsed.value)).first()
        if state is not None:
            return state

    lowered = parsed.value.lower()
    stages = (
        State.iso3166_2 == parsed.upper,
        State.iso2 == parsed.upper,
        func.lower(State.name) == lowered,
        func.lower(State.name).like(f"%{escape_like(lowered)}%", escape="\\"),
    )
    for criterion in stages:
        state = base.filter(criterion).order_by(State.id).first()
        if state is not None:
            return state
    return None
