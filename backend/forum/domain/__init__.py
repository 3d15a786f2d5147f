"""프레임워크 비의존 도메인 값 타입과 순수 함수 모음입니다."""
