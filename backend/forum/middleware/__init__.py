"""인증/권한 의존성 모듈 패키지입니다."""
