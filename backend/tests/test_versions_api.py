"""버전 이력 API(조회, 비교, 복원, 보정)와 오류 응답 형식을 검증하는 테스트입니다."""

from forum.models.comment import Comment
from tests.conftest import auth_headers


def _draft(client, community_id, headers):
    resp = client.post(
        f"/api/communities/{community_id}/posts",
        json={"title": "버전 API", "content": "<p>처음 작성한 본문입니다.</p>"},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["post_id"]


def test_post_edit_compare_restore_flow(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, headers)

    client.put(f"/api/posts/{post_id}", json={"content": "v1 text"}, headers=headers)
    client.put(f"/api/posts/{post_id}", json={"content": "v2 text"}, headers=headers)

    resp = client.get(f"/api/versions/post/{post_id}/compare?old=1&new=2", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["old_version"]["content"] == "v1 text"
    assert data["new_version"]["content"] == "v2 text"
    assert data["additions"] == 1 and data["deletions"] == 1

    resp = client.post(f"/api/posts/{post_id}/versions/restore", json={"version_number": 1}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["content"] == "v1 text"

    history = client.get(f"/api/versions/post/{post_id}", headers=headers).json()
    assert [(v["version_number"], v["content"]) for v in history] == [
        (1, "v1 text"), (2, "v2 text"), (3, "v1 text"),
    ]

    single = client.get(f"/api/versions/post/{post_id}/3", headers=headers)
    assert single.status_code == 200
    assert single.json()["created_by"] == seed_users["member"].user_id


def test_restore_current_version_api(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, headers)
    client.put(f"/api/posts/{post_id}", json={"content": "유일한 편집본"}, headers=headers)

    resp = client.post(f"/api/posts/{post_id}/versions/restore", json={"version_number": 1}, headers=headers)
    assert resp.status_code == 409
    assert resp.json() == {"detail": "현재 버전으로는 복원할 수 없습니다.", "code": "CANNOT_RESTORE_CURRENT_VERSION"}


def test_comment_version_restore_api(client, seed_users, published_post):
    headers = auth_headers(client, "user001")
    comment = client.post(
        f"/api/posts/{published_post.post_id}/comments", json={"content": "댓글 v1"}, headers=headers
    ).json()
    client.put(f"/api/comments/{comment['comment_id']}", json={"content": "댓글 v2"}, headers=headers)

    resp = client.post(
        f"/api/comments/{comment['comment_id']}/versions/restore", json={"version_number": 1}, headers=headers
    )
    assert resp.status_code == 200
    assert resp.json()["content"] == "댓글 v1"
    history = client.get(f"/api/versions/comment/{comment['comment_id']}", headers=headers).json()
    assert [v["version_number"] for v in history] == [1, 2, 3]


def test_version_error_mapping(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, headers)

    resp = client.get(f"/api/versions/article/{post_id}", headers=headers)
    assert resp.status_code == 400 and resp.json()["code"] == "INVALID_INPUT"

    resp = client.get(f"/api/versions/post/{post_id}/0", headers=headers)
    assert resp.status_code == 400 and resp.json()["code"] == "INVALID_INPUT"

    resp = client.get(f"/api/versions/post/{post_id}/5", headers=headers)
    assert resp.status_code == 404 and resp.json()["code"] == "VERSION_NOT_FOUND"

    resp = client.get(f"/api/versions/post/{post_id}/compare?old=2&new=2", headers=headers)
    assert resp.status_code == 400 and resp.json()["code"] == "INVALID_INPUT"

    resp = client.post("/api/posts/999/versions/restore", json={"version_number": 1}, headers=headers)
    assert resp.status_code == 404 and resp.json()["code"] == "VERSION_NOT_FOUND"


def test_reconcile_is_admin_only(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, headers)
    client.put(f"/api/posts/{post_id}", json={"content": "편집된 본문"}, headers=headers)

    assert client.post(f"/api/versions/post/{post_id}/reconcile", headers=headers).status_code == 403

    resp = client.post(f"/api/versions/post/{post_id}/reconcile", headers=auth_headers(client, "admin001"))
    assert resp.status_code == 200
    assert resp.json() is None


def test_requests_without_token_are_rejected(client, seed_users):
    assert client.get("/api/versions/post/1").status_code in (401, 403)
    assert client.get("/api/health").json()["status"] == "ok"


def test_draft_history_is_hidden_from_other_members(client, seed_users, seed_community):
    author = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, author)
    client.put(f"/api/posts/{post_id}", json={"content": "비밀 초안 본문 v1"}, headers=author)
    client.put(f"/api/posts/{post_id}", json={"content": "비밀 초안 본문 v2"}, headers=author)

    other = auth_headers(client, "user002")
    for url in (
        f"/api/versions/post/{post_id}",
        f"/api/versions/post/{post_id}/1",
        f"/api/versions/post/{post_id}/compare?old=1&new=2",
    ):
        resp = client.get(url, headers=other)
        assert resp.status_code == 404, url
        assert resp.json()["code"] == "POST_NOT_FOUND"
        assert "비밀" not in resp.text

        assert client.get(url, headers=author).status_code == 200
        assert client.get(url, headers=auth_headers(client, "mod001")).status_code == 200


def test_archived_comment_is_hidden_from_other_members(client, seed_users, published_post):
    author = auth_headers(client, "user001")
    comment_id = client.post(
        f"/api/posts/{published_post.post_id}/comments", json={"content": "곧 보관할 댓글"}, headers=author
    ).json()["comment_id"]
    assert client.delete(f"/api/comments/{comment_id}", headers=author).status_code == 200

    other = auth_headers(client, "user002")
    for url in (f"/api/comments/{comment_id}", f"/api/versions/comment/{comment_id}"):
        resp = client.get(url, headers=other)
        assert resp.status_code == 404, url
        assert resp.json()["code"] == "COMMENT_NOT_FOUND"
        assert client.get(url, headers=author).status_code == 200
        assert client.get(url, headers=auth_headers(client, "admin001")).status_code == 200


def test_comment_on_draft_post_is_hidden(client, db, seed_users, seed_community):
    author = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, author)
    comment = Comment(post_id=post_id, author_id=seed_users["member"].user_id, content="초안에 남은 댓글")
    db.add(comment)
    db.commit()

    resp = client.get(f"/api/comments/{comment.comment_id}", headers=auth_headers(client, "user002"))
    assert resp.status_code == 404
    assert resp.json()["code"] == "COMMENT_NOT_FOUND"


def test_compare_with_version_zero_uses_error_envelope(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    post_id = _draft(client, seed_community.community_id, headers)
    client.put(f"/api/posts/{post_id}", json={"content": "v1 text"}, headers=headers)

    resp = client.get(f"/api/versions/post/{post_id}/compare?old=0&new=1", headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_INPUT"
    assert set(resp.json()) == {"detail", "code"}
