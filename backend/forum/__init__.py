"""커뮤니티 포럼 백엔드 패키지입니다."""
