"""
Tests for user and creator profile endpoints.
"""
from catalog.modules.courses.models import Course
from catalog.modules.users.models import CreatorProfile, User


class TestUserCreation:
    def test_create_with_creator(self, client):
        response = client.post(
            "/v1/users",
            json={
                "id": "firebase-uid-1",
                "name": "Ravi",
                "phone": 9123456789,
                "country": "India",
                "creator": {"marital_status": "single", "total_years_experience": 4.5},
            },
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] == "firebase-uid-1"
        assert data["creator_profile"]["marital_status"] == "single"
        assert data["creator_profile"]["total_years_experience"] == 4.5

    def test_create_without_creator(self, client):
        response = client.post("/v1/users", json={"id": "u2", "name": "Mei", "phone": 1})

        assert response.status_code == 201
        assert response.json()["data"]["creator_profile"] is None

    def test_duplicate_id(self, client, creator):
        response = client.post("/v1/users", json={"id": creator.id, "name": "Dup", "phone": 1})
        assert response.status_code == 422

    def test_name_too_long(self, client):
        response = client.post(
            "/v1/users", json={"id": "u3", "name": "x" * 16, "phone": 1}
        )
        assert response.status_code == 422
        assert "name" in response.json()["errors"]

    def test_invalid_marital_status(self, client):
        response = client.post(
            "/v1/users",
            json={"id": "u4", "name": "A", "phone": 1, "creator": {"marital_status": "complicated"}},
        )
        assert response.status_code == 422
        assert "creator.marital_status" in response.json()["errors"]

    def test_experience_upper_bound(self, client):
        response = client.post(
            "/v1/users",
            json={"id": "u5", "name": "A", "phone": 1, "creator": {"total_years_experience": 1000}},
        )
        assert response.status_code == 422


class TestUserUpdate:
    def test_update_creates_missing_profile(self, client, creator):
        response = client.put(
            f"/v1/users/{creator.id}", json={"town": "Mysuru", "creator": {"occupation": "Instructor"}}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["town"] == "Mysuru"
        assert data["creator_profile"]["occupation"] == "Instructor"

    def test_update_existing_profile(self, client, db, creator):
        db.add(CreatorProfile(user_id=creator.id, occupation="Instructor", religion="None"))
        db.commit()

        response = client.put(f"/v1/users/{creator.id}", json={"creator": {"occupation": "Author"}})

        profile = response.json()["data"]["creator_profile"]
        assert profile["occupation"] == "Author"
        assert profile["religion"] == "None"

    def test_missing_user(self, client):
        response = client.put("/v1/users/nobody", json={"name": "X"})
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestUserDeletion:
    def test_delete_creator_profile(self, client, db, creator):
        db.add(CreatorProfile(user_id=creator.id, occupation="Instructor"))
        db.commit()

        response = client.delete(f"/v1/users/{creator.id}/creator")

        assert response.status_code == 200
        assert response.json()["data"]["creator_profile"] is None
        assert db.query(CreatorProfile).count() == 0

    def test_delete_missing_creator_profile(self, client, creator):
        response = client.delete(f"/v1/users/{creator.id}/creator")

        assert response.status_code == 404
        assert response.json()["message"] == "Creator profile not found for this user"

    def test_delete_user_keeps_courses(self, client, db, course, creator):
        response = client.delete(f"/v1/users/{creator.id}")

        assert response.status_code == 200
        db.expire_all()
        assert db.get(User, creator.id) is None
        assert db.get(Course, course.id).user_id is None


class TestUserListing:
    def test_search(self, client, db):
        db.add_all(
            [
                User(id="a1", name="Zara", phone=1),
                User(id="b2", name="Arjun", phone=2),
            ]
        )
        db.commit()

        body = client.get("/v1/users").json()
        assert [u["name"] for u in body["data"]] == ["Arjun", "Zara"]

        body = client.get("/v1/users", params={"q": "zar"}).json()
        assert [u["id"] for u in body["data"]] == ["a1"]
