"""
Tests for the nested course media endpoints.
"""
import pytest

from catalog.modules.courses.models import CourseSection
from catalog.modules.media.models import CourseDocument, CourseVideo


@pytest.fixture
def video(db, course, section):
    video = CourseVideo(
        course_id=course.id,
        section_id=section.id,
        title="Welcome",
        slug="welcome",
        playback_url="https://cdn.example.com/welcome.m3u8",
        position=0,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


class TestVideos:
    def test_create(self, client, course, section):
        response = client.post(
            f"/v1/courses/{course.id}/videos",
            json={
                "title": "Install Python",
                "section_id": section.id,
                "playback_url": "https://cdn.example.com/install.m3u8",
                "duration_seconds": 420,
                "captions_json": '[{"lang": "en", "url": "https://cdn.example.com/en.vtt"}]',
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Video created successfully"
        data = body["data"]
        assert data["slug"] == "install-python"
        assert data["course_id"] == course.id
        assert data["is_free_preview"] is False
        assert data["captions_json"] == [{"lang": "en", "url": "https://cdn.example.com/en.vtt"}]

    def test_invalid_captions(self, client, course):
        response = client.post(
            f"/v1/courses/{course.id}/videos",
            json={"title": "X", "playback_url": "https://x/y", "captions_json": "{not json"},
        )
        assert response.status_code == 422
        assert "captions_json" in response.json()["errors"]

    def test_playback_url_required(self, client, course):
        response = client.post(f"/v1/courses/{course.id}/videos", json={"title": "X"})
        assert response.status_code == 422
        assert "playback_url" in response.json()["errors"]

    def test_section_from_other_course_rejected(self, client, db, course, other_course):
        foreign = CourseSection(course_id=other_course.id, title="Elsewhere", position=0)
        db.add(foreign)
        db.commit()

        response = client.post(
            f"/v1/courses/{course.id}/videos",
            json={"title": "X", "playback_url": "https://x/y", "section_id": foreign.id},
        )

        assert response.status_code == 422
        assert db.query(CourseVideo).count() == 0

    def test_cross_course_fetch_is_not_found(self, client, other_course, video):
        response = client.get(f"/v1/courses/{other_course.id}/videos/{video.id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Video not found in this course"

    def test_cross_course_delete_keeps_row(self, client, db, other_course, video):
        response = client.delete(f"/v1/courses/{other_course.id}/videos/{video.id}")

        assert response.status_code == 404
        db.expire_all()
        assert db.get(CourseVideo, video.id) is not None

    def test_list_filters(self, client, db, course, section, video):
        db.add(
            CourseVideo(
                course_id=course.id,
                title="Teaser",
                slug="teaser",
                playback_url="https://cdn.example.com/teaser.m3u8",
                is_free_preview=True,
                position=1,
            )
        )
        db.commit()

        body = client.get(f"/v1/courses/{course.id}/videos").json()
        assert [v["slug"] for v in body["data"]] == ["welcome", "teaser"]
        assert body["meta"]["per_page"] == 50

        body = client.get(f"/v1/courses/{course.id}/videos", params={"free_only": "1"}).json()
        assert [v["slug"] for v in body["data"]] == ["teaser"]

        body = client.get(
            f"/v1/courses/{course.id}/videos", params={"section_id": section.id}
        ).json()
        assert [v["slug"] for v in body["data"]] == ["welcome"]

    def test_slug_unique_within_course(self, client, course, other_course, video):
        same = client.post(
            f"/v1/courses/{course.id}/videos",
            json={"title": "Welcome", "playback_url": "https://x/a"},
        )
        other = client.post(
            f"/v1/courses/{other_course.id}/videos",
            json={"title": "Welcome", "playback_url": "https://x/b"},
        )

        assert same.json()["data"]["slug"] == "welcome-1"
        assert same.json()["data"]["position"] == 1
        assert other.json()["data"]["slug"] == "welcome"

    def test_update_detaches_section(self, client, course, video):
        response = client.put(
            f"/v1/courses/{course.id}/videos/{video.id}",
            json={"section_id": None, "title": "Hello"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["section_id"] is None
        assert data["slug"] == "hello"


class TestOtherKinds:
    def test_document(self, client, course):
        response = client.post(
            f"/v1/courses/{course.id}/documents",
            json={"title": "Cheat sheet", "file_url": "https://cdn.example.com/cs.pdf", "pages": 2},
        )

        assert response.status_code == 201
        assert response.json()["data"]["pages"] == 2

    def test_audio(self, client, course):
        response = client.post(
            f"/v1/courses/{course.id}/audios",
            json={"title": "Podcast", "playback_url": "https://cdn.example.com/p.mp3"},
        )
        assert response.status_code == 201
        assert response.json()["message"] == "Audio created successfully"

    def test_image(self, client, course):
        response = client.post(
            f"/v1/courses/{course.id}/images",
            json={"title": "Cover", "image_url": "https://cdn.example.com/c.png", "width": 640},
        )
        assert response.status_code == 201
        assert response.json()["data"]["width"] == 640

    def test_kinds_do_not_share_ids(self, client, db, course, other_course):
        doc = CourseDocument(
            course_id=other_course.id, title="Notes", slug="notes", file_url="https://x/n.pdf"
        )
        db.add(doc)
        db.commit()

        response = client.get(f"/v1/courses/{course.id}/documents/{doc.id}")
        assert response.status_code == 404
        assert response.json()["message"] == "Document not found in this course"

    def test_missing_course(self, client):
        assert client.get("/v1/courses/999/images").status_code == 404
