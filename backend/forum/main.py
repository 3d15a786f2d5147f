"""FastAPI 애플리케이션 진입점. 로깅, 미들웨어, 서비스 오류 처리기, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from forum.config import settings
from forum.database import Base, engine
from forum.errors import ServiceError
import forum.models  # noqa: F401 - 모델 import로 metadata 등록
from forum.routers import auth, communities, posts, comments, versions, notifications

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="커뮤니티 포럼",
    description="게시글/댓글 트리, 본문 버전 이력, 좋아요와 리더보드를 제공하는 커뮤니티 백엔드",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
def handle_service_error(request: Request, exc: ServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code.value},
    )


app.include_router(auth.router)
app.include_router(communities.router)
app.include_router(posts.router)
app.include_router(comments.router)
app.include_router(versions.router)
app.include_router(notifications.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "커뮤니티 포럼"}
