"""좋아요 토글, 좋아요 수 동기화, 커뮤니티 리더보드 집계를 검증하는 테스트입니다."""

from datetime import timedelta

import pytest

from forum.errors import ErrorCode, ServiceError
from forum.models.notification import Notification
from forum.models.post import Post
from forum.services import comment_service, leaderboard_service, like_service, post_service
from forum.utils.helpers import utcnow
from tests.conftest import auth_headers


def test_toggle_post_like(db, published_post, seed_users):
    other = seed_users["other"]
    first = like_service.toggle_post_like(db, published_post.post_id, other)
    assert (first.is_liked, first.like_count) == (True, 1)

    second = like_service.toggle_post_like(db, published_post.post_id, other)
    assert (second.is_liked, second.like_count) == (False, 0)

    db.refresh(published_post)
    assert published_post.like_count == 0


def test_like_counts_are_per_user(db, published_post, seed_users):
    for key in ("other", "admin", "moderator"):
        like_service.toggle_post_like(db, published_post.post_id, seed_users[key])
    result = like_service.toggle_post_like(db, published_post.post_id, seed_users["member"])
    assert result.like_count == 4


def test_like_notifies_author_once(db, published_post, seed_users):
    other = seed_users["other"]
    like_service.toggle_post_like(db, published_post.post_id, other)
    like_service.toggle_post_like(db, published_post.post_id, other)
    like_service.toggle_post_like(db, published_post.post_id, seed_users["member"])

    notis = db.query(Notification).filter(Notification.user_id == seed_users["member"].user_id).all()
    # 취소 후 재좋아요가 아닌 1회 좋아요만, 본인 좋아요는 알림 없음
    assert [n.noti_type for n in notis] == ["post_like"]


def test_cannot_like_archived_or_draft(db, published_post, seed_users, seed_community):
    member = seed_users["member"]
    draft = post_service.create_post(db, seed_community.community_id, "임시 글", "아직 게시 전 본문입니다.", member)
    with pytest.raises(ServiceError) as exc:
        like_service.toggle_post_like(db, draft.post_id, seed_users["other"])
    assert exc.value.code == ErrorCode.POST_NOT_FOUND

    post_service.archive_post(db, published_post.post_id, member)
    with pytest.raises(ServiceError) as exc:
        like_service.toggle_post_like(db, published_post.post_id, seed_users["other"])
    assert exc.value.code == ErrorCode.CANNOT_LIKE_ARCHIVED_CONTENT


def test_comment_like_api(client, db, published_post, seed_users):
    comment = comment_service.create_comment(db, published_post.post_id, "좋아요 받을 댓글", seed_users["member"])
    headers = auth_headers(client, "user002")

    resp = client.post(f"/api/comments/{comment.comment_id}/like", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"is_liked": True, "like_count": 1}

    resp = client.post(f"/api/comments/{comment.comment_id}/like", headers=headers)
    assert resp.json() == {"is_liked": False, "like_count": 0}

    assert client.post("/api/comments/999/like", headers=headers).json()["code"] == "COMMENT_NOT_FOUND"


def _publish(db, community_id, user, title):
    post = post_service.create_post(db, community_id, title, "리더보드용 게시글 본문입니다.", user)
    return post_service.publish_post(db, post.post_id, user)


def test_leaderboard_points_and_ranks(db, seed_users, seed_community):
    member, other, mod = seed_users["member"], seed_users["other"], seed_users["moderator"]
    cid = seed_community.community_id

    p1 = _publish(db, cid, member, "회원 글 1")
    _publish(db, cid, member, "회원 글 2")
    p3 = _publish(db, cid, other, "다른 회원 글")
    comment_service.create_comment(db, p1.post_id, "댓글 1", other)
    comment_service.create_comment(db, p1.post_id, "댓글 2", other)
    like_service.toggle_post_like(db, p3.post_id, member)
    like_service.toggle_post_like(db, p3.post_id, mod)

    board = leaderboard_service.get_leaderboard(db, cid, "all-time", 10)
    rows = [(e.rank, e.user_id, e.points) for e in board.entries]
    # member: 2글 x5 = 10, other: 1글 x5 + 2댓글 x2 + 2좋아요 = 11
    assert rows == [(1, other.user_id, 11), (2, member.user_id, 10)]
    top = board.entries[0]
    assert (top.post_count, top.comment_count, top.like_count) == (1, 2, 2)


def test_leaderboard_ties_break_by_user_id_and_limit(db, seed_users, seed_community):
    cid = seed_community.community_id
    _publish(db, cid, seed_users["other"], "동점 글 1")
    _publish(db, cid, seed_users["member"], "동점 글 2")

    board = leaderboard_service.get_leaderboard(db, cid, limit=1)
    assert len(board.entries) == 1
    assert board.entries[0].user_id == min(seed_users["other"].user_id, seed_users["member"].user_id)


def test_leaderboard_excludes_drafts_archived_and_old_activity(db, seed_users, seed_community):
    member, other = seed_users["member"], seed_users["other"]
    cid = seed_community.community_id

    post_service.create_post(db, cid, "임시 글", "게시되지 않은 본문입니다.", member)
    archived = _publish(db, cid, member, "보관될 글")
    post_service.archive_post(db, archived.post_id, member)
    old = _publish(db, cid, other, "오래된 글")
    db.query(Post).filter(Post.post_id == old.post_id).update({"published_at": utcnow() - timedelta(days=40)})
    db.commit()

    assert [e.user_id for e in leaderboard_service.get_leaderboard(db, cid, "all-time").entries] == [other.user_id]
    assert leaderboard_service.get_leaderboard(db, cid, "month").entries == []


@pytest.mark.parametrize("period, limit", [("year", 5), ("week", 0), ("week", 101)])
def test_leaderboard_input_validation(db, seed_community, period, limit):
    with pytest.raises(ServiceError) as exc:
        leaderboard_service.get_leaderboard(db, seed_community.community_id, period, limit)
    assert exc.value.code == ErrorCode.INVALID_INPUT


def test_leaderboard_api(client, seed_users, seed_community):
    headers = auth_headers(client, "user001")
    resp = client.get(f"/api/communities/{seed_community.community_id}/leaderboard?period=week", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["entries"] == []
    assert resp.json()["period"] == "week"

    resp = client.get("/api/communities/999/leaderboard", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["code"] == "COMMUNITY_NOT_FOUND"


def test_leaderboard_drops_activity_on_archived_posts(db, seed_users, seed_community):
    member, other, mod = seed_users["member"], seed_users["other"], seed_users["moderator"]
    cid = seed_community.community_id

    _publish(db, cid, member, "남을 글")
    target = _publish(db, cid, other, "보관될 글")
    comment = comment_service.create_comment(db, target.post_id, "보관될 글의 댓글", member)
    like_service.toggle_comment_like(db, comment.comment_id, mod)
    like_service.toggle_post_like(db, target.post_id, mod)

    before = {e.user_id: e.points for e in leaderboard_service.get_leaderboard(db, cid).entries}
    # member: 글 5 + 댓글 2 + 댓글 좋아요 1, other: 글 5 + 좋아요 1
    assert before == {member.user_id: 8, other.user_id: 6}

    post_service.archive_post(db, target.post_id, other)
    entries = leaderboard_service.get_leaderboard(db, cid).entries
    assert [(e.user_id, e.points, e.comment_count, e.like_count) for e in entries] == [(member.user_id, 5, 0, 0)]
