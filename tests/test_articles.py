"""
Tests for article endpoints.
"""
import pytest

from app.models.article import Article
from app.models.comment import Comment


class TestArticleReads:
    """Listing and viewing are public."""

    def test_list_articles_empty(self, client):
        response = client.get("/api/articles")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_articles_newest_first_with_author(self, client, test_user, auth_headers):
        for title in ("First", "Second", "Third"):
            client.post(
                "/api/articles",
                headers=auth_headers,
                json={"title": title, "category": "Tech", "content": "Body"},
            )

        response = client.get("/api/articles")
        assert response.status_code == 200
        data = response.json()
        assert [a["title"] for a in data] == ["Third", "Second", "First"]
        assert data[0]["author"]["id"] == test_user.id
        assert "password" not in data[0]["author"]

    def test_get_article(self, client, article, test_user):
        response = client.get(f"/api/articles/{article.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Hello"
        assert data["user_id"] == test_user.id
        assert data["author"]["email"] == "test@example.com"

    def test_get_article_not_found(self, client):
        response = client.get("/api/articles/99999")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"


class TestArticleCreate:
    """Test POST /api/articles."""

    def test_create_article(self, client, test_user, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={"title": "Hi", "category": "Tech", "content": "Body"},
        )
        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["status"] == "draft"
        assert data["link_picture"] is None
        assert data["user_id"] == test_user.id
        assert data["created_at"]
        assert data["updated_at"]

    def test_create_article_with_picture_and_status(self, client, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={
                "title": "Hi",
                "category": "Tech",
                "content": "Body",
                "link_picture": "http://example.com/image.jpg",
                "status": "published",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["link_picture"] == "http://example.com/image.jpg"
        assert data["status"] == "published"

    def test_create_article_unauthenticated(self, client):
        response = client.post("/api/articles", json={"title": "Hi"})
        assert response.status_code == 401

    def test_create_article_missing_fields(self, client, auth_headers):
        response = client.post("/api/articles", headers=auth_headers, json={"title": "Hi"})
        assert response.status_code == 422
        errors = response.json()["errors"]
        assert "category" in errors
        assert "content" in errors

    def test_create_article_empty_content(self, client, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={"title": "Hi", "category": "Tech", "content": ""},
        )
        assert response.status_code == 422
        assert "content" in response.json()["errors"]

    @pytest.mark.parametrize("field", ["title", "category", "content"])
    def test_create_article_blank_text(self, client, auth_headers, field):
        payload = {"title": "Hi", "category": "Tech", "content": "Body", field: "   "}
        response = client.post("/api/articles", headers=auth_headers, json=payload)
        assert response.status_code == 422
        assert list(response.json()["errors"]) == [field]

    def test_create_article_trims_text(self, client, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={"title": "  Hi  ", "category": "Tech ", "content": " Body"},
        )
        assert response.status_code == 201
        data = response.json()
        assert (data["title"], data["category"], data["content"]) == ("Hi", "Tech", "Body")

    def test_create_article_empty_picture_is_none(self, client, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={"title": "Hi", "category": "Tech", "content": "Body", "link_picture": ""},
        )
        assert response.status_code == 201
        assert response.json()["link_picture"] is None

    def test_create_article_bad_picture_url(self, client, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={"title": "Hi", "category": "Tech", "content": "Body", "link_picture": "not a url"},
        )
        assert response.status_code == 422
        assert response.json()["errors"]["link_picture"] == ["The link picture field must be a valid URL."]

    def test_create_article_bad_status(self, client, auth_headers):
        response = client.post(
            "/api/articles",
            headers=auth_headers,
            json={"title": "Hi", "category": "Tech", "content": "Body", "status": "deleted"},
        )
        assert response.status_code == 422
        assert "status" in response.json()["errors"]


class TestArticleUpdate:
    """Test PUT /api/articles/{id}."""

    def test_partial_update_changes_only_sent_fields(self, client, article, auth_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=auth_headers,
            json={"status": "published"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "published"
        assert data["title"] == "Hello"
        assert data["category"] == "Tech"
        assert data["content"] == "First body"

    def test_update_by_other_user_forbidden(self, client, article, other_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=other_headers,
            json={"title": "Hijacked"},
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    def test_update_by_other_user_forbidden_even_with_invalid_payload(self, client, article, other_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=other_headers,
            json={"status": "bogus", "title": ""},
        )
        assert response.status_code == 403

    def test_update_by_other_user_forbidden_with_list_body(self, client, article, other_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=other_headers,
            json=["not", "an", "object"],
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    def test_update_list_body_by_owner(self, client, article, auth_headers):
        response = client.put(f"/api/articles/{article.id}", headers=auth_headers, json=[1, 2])
        assert response.status_code == 422
        assert "body" in response.json()["errors"]

    def test_update_rejects_blank_title(self, client, article, auth_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=auth_headers,
            json={"title": "   "},
        )
        assert response.status_code == 422
        assert "title" in response.json()["errors"]

    def test_update_empty_picture_clears_it(self, client, db, test_user, auth_headers):
        article = Article(
            user_id=test_user.id,
            title="Pic",
            category="Tech",
            content="Body",
            link_picture="https://example.com/a.png",
        )
        db.add(article)
        db.commit()

        response = client.put(
            f"/api/articles/{article.id}",
            headers=auth_headers,
            json={"link_picture": ""},
        )
        assert response.status_code == 200
        assert response.json()["link_picture"] is None

    def test_update_invalid_payload(self, client, article, auth_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=auth_headers,
            json={"status": "bogus"},
        )
        assert response.status_code == 422
        assert "status" in response.json()["errors"]

    def test_update_rejects_null_title(self, client, article, auth_headers):
        response = client.put(
            f"/api/articles/{article.id}",
            headers=auth_headers,
            json={"title": None},
        )
        assert response.status_code == 422
        assert response.json()["errors"]["title"] == ["The title field is required."]

    def test_update_can_clear_picture(self, client, db, test_user, auth_headers):
        article = Article(
            user_id=test_user.id,
            title="Pic",
            category="Tech",
            content="Body",
            link_picture="https://example.com/a.png",
        )
        db.add(article)
        db.commit()

        response = client.put(
            f"/api/articles/{article.id}",
            headers=auth_headers,
            json={"link_picture": None},
        )
        assert response.status_code == 200
        assert response.json()["link_picture"] is None

    def test_update_not_found(self, client, auth_headers):
        response = client.put("/api/articles/99999", headers=auth_headers, json={"title": "x"})
        assert response.status_code == 404

    def test_update_unauthenticated(self, client, article):
        response = client.put(f"/api/articles/{article.id}", json={"title": "x"})
        assert response.status_code == 401


class TestArticleDelete:
    """Test DELETE /api/articles/{id}."""

    def test_delete_by_other_user_forbidden(self, client, db, article, other_headers):
        response = client.delete(f"/api/articles/{article.id}", headers=other_headers)
        assert response.status_code == 403
        assert db.query(Article).count() == 1

    def test_delete_article(self, client, article, auth_headers):
        article_id = article.id
        response = client.delete(f"/api/articles/{article_id}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""

        response = client.get(f"/api/articles/{article_id}")
        assert response.status_code == 404

    def test_delete_cascades_to_comments(self, client, db, article, other_user, auth_headers):
        db.add_all([
            Comment(user_id=other_user.id, article_id=article.id, content="Nice"),
            Comment(user_id=other_user.id, article_id=article.id, content="Agreed"),
        ])
        db.commit()

        response = client.delete(f"/api/articles/{article.id}", headers=auth_headers)
        assert response.status_code == 204
        assert db.query(Comment).count() == 0

    def test_delete_not_found(self, client, auth_headers):
        response = client.delete("/api/articles/99999", headers=auth_headers)
        assert response.status_code == 404


class TestArticleLifecycle:
    def test_register_create_update_delete(self, client, other_headers, registration_data):
        token = client.post("/api/register", json=registration_data(email="jane@x.com")).json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        created = client.post(
            "/api/articles",
            headers=headers,
            json={"title": "Hi", "category": "Tech", "content": "Body"},
        )
        assert created.status_code == 201
        article_id = created.json()["id"]
        assert created.json()["status"] == "draft"

        updated = client.put(f"/api/articles/{article_id}", headers=headers, json={"status": "published"})
        assert updated.json()["status"] == "published"
        assert updated.json()["title"] == "Hi"

        assert client.delete(f"/api/articles/{article_id}", headers=other_headers).status_code == 403
        assert client.delete(f"/api/articles/{article_id}", headers=headers).status_code == 204
        assert client.get(f"/api/articles/{article_id}").status_code == 404
