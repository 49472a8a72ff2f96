"""Tests for slug generation and scoped uniqueness."""
import re

import pytest
from fastapi import HTTPException

from catalog.common.slugs import resolve_slug_update, slugify, unique_slug
from catalog.modules.categories.models import Category, Subcategory

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class TestSlugify:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Web Development", "web-development"),
            ("  --Hello,   World!--  ", "hello-world"),
            ("Café Déjà Vu", "cafe-deja-vu"),
            ("C++ & C#", "c-c"),
            ("me@example", "me-at-example"),
            ("already-a-slug", "already-a-slug"),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected

    @pytest.mark.parametrize("text", ["A  B", "__x__", "Ünïcödé ☃ text", "1. Intro: Part (2)"])
    def test_output_is_url_safe(self, text):
        assert SLUG_PATTERN.match(slugify(text))

    @pytest.mark.parametrize("text", ["Русский язык", "日本語", "العربية", "Ελληνικά"])
    def test_non_latin_text_is_transliterated(self, text):
        slug = slugify(text)
        assert slug
        assert SLUG_PATTERN.match(slug)

    def test_cyrillic_reads_phonetically(self):
        assert slugify("Русский язык").startswith("russk")

    def test_max_length_trims_on_separator(self):
        slug = slugify("alpha beta gamma", max_length=12)
        assert len(slug) <= 12
        assert not slug.endswith("-")

    def test_empty_input(self):
        assert slugify("") == ""
        assert slugify(None) == ""
        assert slugify("!!!") == ""
        assert slugify("---") == ""


class TestUniqueSlug:
    def test_free_slug_is_used_as_is(self, db):
        assert unique_slug(db, Category, "Web Development") == "web-development"

    def test_suffix_follows_existing_rows(self, db):
        for slug in ("web", "web-1", "web-2"):
            db.add(Category(name="Web", slug=slug))
        db.commit()

        assert unique_slug(db, Category, "Web") == "web-3"

    def test_own_slug_is_not_a_collision(self, db):
        category = Category(name="Web", slug="web")
        db.add(category)
        db.commit()

        assert unique_slug(db, Category, "web", exclude_id=category.id) == "web"

    def test_scope_limits_collisions(self, db, category):
        other = Category(name="Design", slug="design")
        db.add(other)
        db.flush()
        db.add(Subcategory(category_id=category.id, name="Basics", slug="basics"))
        db.commit()

        assert unique_slug(db, Subcategory, "Basics", scope={"category_id": category.id}) == "basics-1"
        assert unique_slug(db, Subcategory, "Basics", scope={"category_id": other.id}) == "basics"

    def test_suffixed_slug_fits_the_column(self, db):
        longest = "a" * 140
        db.add(Category(name="Long", slug=longest))
        db.commit()

        slug = unique_slug(db, Category, longest)
        assert slug == "a" * 138 + "-1"
        assert len(slug) <= 140

    def test_expanded_text_is_cut_to_the_column(self, db):
        slug = unique_slug(db, Category, "@" * 120)
        assert len(slug) <= 140
        assert SLUG_PATTERN.match(slug)

    def test_blank_text_is_rejected(self, db):
        with pytest.raises(HTTPException) as exc:
            unique_slug(db, Category, "***")
        assert exc.value.status_code == 422


class TestResolveSlugUpdate:
    def test_name_change_regenerates(self, db, category):
        data = {"name": "Software Engineering"}
        resolve_slug_update(db, Category, category, data, "name", scope={})
        assert data["slug"] == "software-engineering"

    def test_untouched_fields_leave_slug_alone(self, db, category):
        data = {"description": "new"}
        resolve_slug_update(db, Category, category, data, "name", scope={})
        assert "slug" not in data

    def test_null_slug_regenerates_from_name(self, db, category):
        data = {"slug": None}
        resolve_slug_update(db, Category, category, data, "name", scope={})
        assert data["slug"] == "programming"

    def test_scope_change_re_resolves(self, db, category, subcategory):
        target = Category(name="Data", slug="data")
        db.add(target)
        db.flush()
        db.add(Subcategory(category_id=target.id, name="Python", slug="python"))
        db.commit()

        data = {"category_id": target.id}
        resolve_slug_update(
            db,
            Subcategory,
            subcategory,
            data,
            "name",
            scope={"category_id": target.id},
            scope_changed=True,
        )
        assert data["slug"] == "python-1"
