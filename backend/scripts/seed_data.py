"""Seed the database with demo users, communities and a few posts."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from forum.database import SessionLocal, engine, Base
import forum.models  # noqa: F401

from forum.models.user import User
from forum.models.community import Community
from forum.services import comment_service, post_service


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        users = [
            User(emp_id="admin001", name="관리자 김철수", role="admin", email="admin@company.com"),
            User(emp_id="mod001", name="운영자 이영희", role="moderator", email="mod1@company.com"),
            User(emp_id="user001", name="회원 정수연", role="member", email="user1@company.com"),
            User(emp_id="user002", name="회원 최동현", role="member", email="user2@company.com"),
        ]
        db.add_all(users)
        db.flush()

        communities = [
            Community(name="공지사항", slug="notice", description="운영 공지"),
            Community(name="Q&A", slug="qna", description="질문과 답변"),
            Community(name="자유게시판", slug="free", description="자유 주제"),
        ]
        db.add_all(communities)
        db.commit()

        admin, _, member1, member2 = users
        notice = post_service.create_post(
            db, communities[0].community_id, "커뮤니티 이용 안내", "<p>커뮤니티 이용 규칙을 안내드립니다.</p>", admin
        )
        post_service.publish_post(db, notice.post_id, admin)
        post_service.pin_post(db, notice.post_id, admin)

        question = post_service.create_post(
            db, communities[1].community_id, "SQLite 잠금 오류 질문", "<p>동시 쓰기 시 database is locked 오류가 납니다.</p>", member1
        )
        post_service.publish_post(db, question.post_id, member1)
        answer = comment_service.create_comment(db, question.post_id, "WAL 모드를 켜 보세요.", member2)
        comment_service.create_comment(db, question.post_id, "해결됐습니다. 감사합니다!", member1, parent_id=answer.comment_id)
        post_service.mark_solved(db, question.post_id, member1)

        print("Seed data created successfully!")
        print(f"  Users: {len(users)}")
        print(f"  Communities: {len(communities)}")
        print("  Posts: 2")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
