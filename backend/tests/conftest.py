import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from forum.database import Base, get_db
from forum.main import app
from forum.models.user import User
from forum.models.community import Community
from forum.models.post import Post
from forum.utils.helpers import utcnow

TEST_DB_URL = "sqlite:///./test_forum.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(emp_id="admin001", name="Admin", role="admin"),
        "moderator": User(emp_id="mod001", name="Moderator", role="moderator"),
        "member": User(emp_id="user001", name="Member", role="member"),
        "other": User(emp_id="user002", name="Other", role="member"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_community(db):
    community = Community(name="Q&A", slug="qna", description="질문과 답변")
    db.add(community)
    db.commit()
    db.refresh(community)
    return community


@pytest.fixture
def published_post(db, seed_users, seed_community):
    post = Post(
        community_id=seed_community.community_id,
        author_id=seed_users["member"].user_id,
        title="테스트 게시글",
        content="게시된 테스트 게시글 본문입니다.",
        published_at=utcnow(),
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def get_token(client, emp_id: str) -> str:
    resp = client.post("/api/auth/login", json={"emp_id": emp_id})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, emp_id: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, emp_id)}"}
