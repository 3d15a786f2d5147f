"""커뮤니티 수정과 커뮤니티 현황 통계를 검증하는 테스트입니다."""

from datetime import timedelta

import pytest

from forum.errors import ErrorCode, ServiceError
from forum.models.community import Community
from forum.models.user import User
from forum.services import comment_service, community_service, post_service
from forum.utils.helpers import utcnow
from tests.conftest import auth_headers


def test_update_community_by_admin(client, seed_users, seed_community):
    headers = auth_headers(client, "admin001")
    resp = client.put(
        f"/api/communities/{seed_community.community_id}",
        json={"name": "질문 게시판", "description": "무엇이든 물어보세요"},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert (data["name"], data["slug"], data["description"]) == ("질문 게시판", "qna", "무엇이든 물어보세요")

    # 자기 자신의 slug는 중복이 아니다.
    resp = client.put(f"/api/communities/{seed_community.community_id}", json={"slug": "qna"}, headers=headers)
    assert resp.status_code == 200


def test_update_community_is_admin_only(client, seed_users, seed_community):
    resp = client.put(
        f"/api/communities/{seed_community.community_id}",
        json={"name": "바꾼 이름"},
        headers=auth_headers(client, "user001"),
    )
    assert resp.status_code == 403


def test_update_community_duplicate_slug(client, db, seed_users, seed_community):
    db.add(Community(name="공지", slug="notice"))
    db.commit()

    resp = client.put(
        f"/api/communities/{seed_community.community_id}",
        json={"slug": "notice"},
        headers=auth_headers(client, "admin001"),
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_INPUT"


@pytest.mark.parametrize(
    "kwargs",
    [{}, {"name": "   "}, {"slug": "Bad Slug!"}],
)
def test_update_community_validation(db, seed_community, kwargs):
    with pytest.raises(ServiceError) as exc:
        community_service.update_community(db, seed_community.community_id, **kwargs)
    assert exc.value.code == ErrorCode.INVALID_INPUT


def test_update_missing_community(db):
    with pytest.raises(ServiceError) as exc:
        community_service.update_community(db, 999, name="없는 커뮤니티")
    assert exc.value.code == ErrorCode.COMMUNITY_NOT_FOUND


def test_community_stats_counts(db, seed_users, seed_community):
    member, other = seed_users["member"], seed_users["other"]
    cid = seed_community.community_id

    live = post_service.create_post(db, cid, "게시된 글", "통계에 잡히는 본문입니다.", member)
    post_service.publish_post(db, live.post_id, member)
    post_service.create_post(db, cid, "임시 글", "통계에 잡히지 않는 본문입니다.", member)
    archived = post_service.create_post(db, cid, "보관될 글", "보관 후 빠지는 본문입니다.", other)
    post_service.publish_post(db, archived.post_id, other)

    comment_service.create_comment(db, live.post_id, "남는 댓글", other)
    removed = comment_service.create_comment(db, live.post_id, "보관될 댓글", other)
    comment_service.create_comment(db, archived.post_id, "보관 글의 댓글", member)
    comment_service.archive_comment(db, removed.comment_id, other)
    post_service.archive_post(db, archived.post_id, other)

    now = utcnow()
    db.query(User).filter(User.user_id == member.user_id).update({"last_seen_at": now})
    db.query(User).filter(User.user_id == other.user_id).update({"last_seen_at": now - timedelta(hours=1)})
    db.add(User(emp_id="gone001", name="Gone", role="admin", is_active=False, last_seen_at=now))
    db.commit()

    stats = community_service.get_community_stats(db, cid)
    assert (stats.total_members, stats.online_members, stats.total_admins) == (4, 1, 1)
    assert (stats.total_posts, stats.total_comments) == (1, 1)


def test_community_stats_api(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    resp = client.get(f"/api/communities/{seed_community.community_id}/stats", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    # 방금 요청한 본인은 접속 중으로 집계된다.
    assert data == {
        "community_id": seed_community.community_id,
        "total_members": 4,
        "online_members": 1,
        "total_admins": 1,
        "total_posts": 0,
        "total_comments": 0,
    }

    resp = client.get("/api/communities/999/stats", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["code"] == "COMMUNITY_NOT_FOUND"
