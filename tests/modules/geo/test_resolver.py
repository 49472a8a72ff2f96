"""Tests for country / state token resolution."""
import pytest

from catalog.modules.geo.models import Country, State
from catalog.modules.geo.resolver import (
    TokenKind,
    classify_token,
    resolve_country,
    resolve_state,
)


class TestClassifyToken:
    @pytest.mark.parametrize(
        "token, kind",
        [
            ("356", TokenKind.numeric),
            (356, TokenKind.numeric),
            ("IN", TokenKind.code),
            ("ind", TokenKind.code),
            ("IN-KA", TokenKind.code),
            ("India", TokenKind.text),
            ("Tamil Nadu", TokenKind.text),
        ],
    )
    def test_kinds(self, token, kind):
        assert classify_token(token).kind is kind

    @pytest.mark.parametrize("token", [None, "", "   "])
    def test_blank(self, token):
        assert classify_token(token) is None


class TestResolveCountry:
    def test_iso2_name_and_numeric_agree(self, db, india, usa):
        assert resolve_country(db, "IN").id == india.id
        assert resolve_country(db, "in").id == india.id
        assert resolve_country(db, "IND").id == india.id
        assert resolve_country(db, "India").id == india.id
        assert resolve_country(db, "india").id == india.id
        assert resolve_country(db, "356").id == india.id
        assert resolve_country(db, 840).id == usa.id

    def test_iso2_beats_iso3_and_name(self, db):
        db.add_all(
            [
                Country(name="AAA", iso2="ZZ", iso3="ABC"),
                Country(name="Abc", iso2="AB", iso3="XYZ"),
            ]
        )
        db.commit()

        assert resolve_country(db, "AB").name == "Abc"
        assert resolve_country(db, "ABC").name == "AAA"

    def test_unknown(self, db, india):
        assert resolve_country(db, "Atlantis") is None
        assert resolve_country(db, "999") is None
        assert resolve_country(db, "") is None


class TestResolveState:
    @pytest.fixture
    def us_state_with_same_code(self, db, usa):
        state = State(country_id=usa.id, name="Kansas", iso2="KS", iso3166_2="US-KS")
        db.add(state)
        db.commit()
        return state

    def test_scoped_by_country(self, db, india, usa, karnataka):
        assert resolve_state(db, "KA", "IN").id == karnataka.id
        assert resolve_state(db, "KA", "US") is None

    def test_lookup_order(self, db, india, karnataka):
        assert resolve_state(db, "IN-KA", "India").id == karnataka.id
        assert resolve_state(db, "karnataka", "356").id == karnataka.id
        assert resolve_state(db, "arnat", "IN").id == karnataka.id
        assert resolve_state(db, str(karnataka.id), "IN").id == karnataka.id

    def test_numeric_id_outside_country(self, db, india, usa, karnataka):
        assert resolve_state(db, str(karnataka.id), "US") is None

    def test_unknown_country_means_not_found(self, db, karnataka):
        assert resolve_state(db, "KA", "Atlantis") is None

    def test_without_country(self, db, karnataka, us_state_with_same_code):
        assert resolve_state(db, "US-KS").id == us_state_with_same_code.id
        assert resolve_state(db, "Karnataka").id == karnataka.id

    def test_substring_does_not_cross_countries(self, db, india, usa, us_state_with_same_code):
        assert resolve_state(db, "kans", "IN") is None
        assert resolve_state(db, "kans", "US").id == us_state_with_same_code.id
