"""
Tests for category and subcategory endpoints.
"""
from catalog.modules.categories.models import Category, Subcategory


class TestCategoryCreation:
    def test_slug_is_derived_from_name(self, client):
        response = client.post("/v1/categories", json={"name": "Web Development"})

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["slug"] == "web-development"
        assert body["data"]["position"] == 0
        assert body["data"]["is_active"] is True

    def test_same_name_gets_suffix(self, client):
        client.post("/v1/categories", json={"name": "Web Development"})
        response = client.post("/v1/categories", json={"name": "Web Development"})

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "web-development-1"
        assert response.json()["data"]["position"] == 1

    def test_explicit_slug_is_normalised(self, client):
        response = client.post("/v1/categories", json={"name": "Data", "slug": "Data Science!"})
        assert response.json()["data"]["slug"] == "data-science"

    def test_non_latin_name_gets_a_slug(self, client):
        for name in ("Русский язык", "日本語", "العربية"):
            response = client.post("/v1/categories", json={"name": name})

            assert response.status_code == 201
            assert response.json()["data"]["slug"]
            assert response.json()["data"]["name"] == name

    def test_empty_slug_falls_back_to_name(self, client):
        response = client.post("/v1/categories", json={"name": "Web Development", "slug": ""})

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "web-development"

    def test_colliding_max_length_slug_stays_within_column(self, client):
        longest = "a" * 140
        client.post("/v1/categories", json={"name": "First", "slug": longest})
        response = client.post("/v1/categories", json={"name": "Second", "slug": longest})

        assert response.status_code == 201
        slug = response.json()["data"]["slug"]
        assert slug.endswith("-1")
        assert len(slug) == 140

    def test_name_without_letters_or_digits_is_rejected(self, client):
        response = client.post("/v1/categories", json={"name": "---"})
        assert response.status_code == 422

    def test_missing_name_is_a_validation_error(self, client):
        response = client.post("/v1/categories", json={"description": "no name"})

        assert response.status_code == 422
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "The given data was invalid."
        assert "name" in body["errors"]

    def test_negative_position_rejected(self, client):
        response = client.post("/v1/categories", json={"name": "X", "position": -1})
        assert response.status_code == 422
        assert "position" in response.json()["errors"]


class TestCategoryListing:
    def test_pagination_is_capped(self, client, db):
        db.add_all(
            [Category(name=f"Category {i}", slug=f"category-{i}", position=i) for i in range(105)]
        )
        db.commit()

        response = client.get("/v1/categories", params={"per_page": 1000})

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 100
        assert body["meta"] == {"current_page": 1, "per_page": 100, "total": 105, "last_page": 2}

    def test_default_page_size(self, client, db):
        db.add_all([Category(name=f"C{i}", slug=f"c{i}", position=i) for i in range(25)])
        db.commit()

        body = client.get("/v1/categories").json()
        assert len(body["data"]) == 20
        assert body["meta"]["last_page"] == 2

    def test_search_and_active_filter(self, client, db):
        db.add_all(
            [
                Category(name="Web Development", slug="web-development", is_active=True),
                Category(name="Web Design", slug="web-design", is_active=False),
                Category(name="Music", slug="music", is_active=True),
            ]
        )
        db.commit()

        body = client.get("/v1/categories", params={"q": "web", "active": "1"}).json()
        assert [c["slug"] for c in body["data"]] == ["web-development"]

    def test_search_treats_wildcards_literally(self, client, db):
        db.add_all(
            [
                Category(name="50% off", slug="fifty-off"),
                Category(name="500 tips", slug="five-hundred-tips"),
                Category(name="snake_case", slug="snake-case"),
                Category(name="snakes", slug="snakes"),
            ]
        )
        db.commit()

        body = client.get("/v1/categories", params={"q": "50%"}).json()
        assert [c["slug"] for c in body["data"]] == ["fifty-off"]

        body = client.get("/v1/categories", params={"q": "_"}).json()
        assert [c["slug"] for c in body["data"]] == ["snake-case"]

    def test_sort(self, client, db):
        db.add_all(
            [
                Category(name="B", slug="b", position=0),
                Category(name="A", slug="a", position=1),
            ]
        )
        db.commit()

        body = client.get("/v1/categories", params={"sort": "-name"}).json()
        assert [c["name"] for c in body["data"]] == ["B", "A"]

        body = client.get("/v1/categories").json()
        assert [c["name"] for c in body["data"]] == ["B", "A"]

    def test_counts_subcategories(self, client, category, subcategory):
        body = client.get(f"/v1/categories/{category.id}").json()
        assert body["data"]["subcategories_count"] == 1


class TestCategoryUpdateDelete:
    def test_rename_regenerates_slug(self, client, category):
        response = client.put(f"/v1/categories/{category.id}", json={"name": "Coding"})

        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "coding"

    def test_saving_same_slug_keeps_it(self, client, category):
        response = client.put(f"/v1/categories/{category.id}", json={"slug": "programming"})
        assert response.json()["data"]["slug"] == "programming"

    def test_not_found(self, client):
        response = client.get("/v1/categories/999")

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Category not found"}

    def test_delete_cascades_to_subcategories(self, client, db, category, subcategory):
        response = client.delete(f"/v1/categories/{category.id}")

        assert response.status_code == 200
        assert response.json()["message"] == "Category deleted successfully"
        db.expire_all()
        assert db.query(Subcategory).count() == 0


class TestCategoryReorder:
    def test_reorder(self, client, db):
        a = Category(name="A", slug="a", position=0)
        b = Category(name="B", slug="b", position=1)
        db.add_all([a, b])
        db.commit()

        response = client.post(
            "/v1/categories/reorder",
            json={"orders": [{"id": a.id, "position": 1}, {"id": b.id, "position": 0}]},
        )

        assert response.status_code == 200
        body = client.get("/v1/categories").json()
        assert [c["name"] for c in body["data"]] == ["B", "A"]

    def test_unknown_id_changes_nothing(self, client, db):
        a = Category(name="A", slug="a", position=0)
        db.add(a)
        db.commit()

        response = client.post(
            "/v1/categories/reorder",
            json={"orders": [{"id": a.id, "position": 5}, {"id": 999, "position": 0}]},
        )

        assert response.status_code == 422
        db.expire_all()
        assert db.get(Category, a.id).position == 0

    def test_empty_orders_rejected(self, client):
        response = client.post("/v1/categories/reorder", json={"orders": []})
        assert response.status_code == 422


class TestSubcategories:
    def test_create_nested(self, client, category):
        response = client.post(
            f"/v1/categories/{category.id}/subcategories", json={"name": "Python"}
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["category_id"] == category.id
        assert data["slug"] == "python"
        assert data["category"]["slug"] == "programming"

    def test_slug_unique_per_category(self, client, db, category, subcategory):
        other = Category(name="Data", slug="data")
        db.add(other)
        db.commit()

        same_parent = client.post(
            f"/v1/categories/{category.id}/subcategories", json={"name": "Python"}
        )
        other_parent = client.post(
            f"/v1/categories/{other.id}/subcategories", json={"name": "Python"}
        )

        assert same_parent.json()["data"]["slug"] == "python-1"
        assert other_parent.json()["data"]["slug"] == "python"

    def test_create_under_missing_category(self, client):
        response = client.post("/v1/categories/999/subcategories", json={"name": "X"})
        assert response.status_code == 404

    def test_flat_list_filter(self, client, db, category, subcategory):
        other = Category(name="Data", slug="data")
        db.add(other)
        db.flush()
        db.add(Subcategory(category_id=other.id, name="Pandas", slug="pandas"))
        db.commit()

        body = client.get("/v1/subcategories", params={"category_id": other.id}).json()
        assert [s["slug"] for s in body["data"]] == ["pandas"]
        assert body["meta"]["per_page"] == 20

    def test_nested_list_page_size(self, client, category, subcategory):
        body = client.get(f"/v1/categories/{category.id}/subcategories").json()
        assert body["meta"]["per_page"] == 50
        assert body["data"][0]["slug"] == "python"

    def test_move_to_other_category_re_resolves_slug(self, client, db, subcategory):
        target = Category(name="Data", slug="data")
        db.add(target)
        db.flush()
        db.add(Subcategory(category_id=target.id, name="Python", slug="python"))
        db.commit()

        response = client.put(
            f"/v1/subcategories/{subcategory.id}", json={"category_id": target.id}
        )

        assert response.status_code == 200
        assert response.json()["data"]["category_id"] == target.id
        assert response.json()["data"]["slug"] == "python-1"

    def test_move_to_missing_category(self, client, subcategory):
        response = client.put(f"/v1/subcategories/{subcategory.id}", json={"category_id": 999})
        assert response.status_code == 422

    def test_reorder_rejects_foreign_subcategory(self, client, db, category, subcategory):
        other = Category(name="Data", slug="data")
        db.add(other)
        db.flush()
        foreign = Subcategory(category_id=other.id, name="Pandas", slug="pandas", position=3)
        db.add(foreign)
        db.commit()

        response = client.post(
            f"/v1/categories/{category.id}/subcategories/reorder",
            json={
                "orders": [
                    {"id": subcategory.id, "position": 7},
                    {"id": foreign.id, "position": 0},
                ]
            },
        )

        assert response.status_code == 422
        assert response.json()["message"] == f"Subcategory {foreign.id} not in this category"
        db.expire_all()
        assert db.get(Subcategory, subcategory.id).position == 0
        assert db.get(Subcategory, foreign.id).position == 3

    def test_delete(self, client, subcategory):
        assert client.delete(f"/v1/subcategories/{subcategory.id}").status_code == 200
        assert client.get(f"/v1/subcategories/{subcategory.id}").status_code == 404
