"""ToyShare 서비스 공용 라이브러리 (로깅, MongoDB, 공통 타입, 미들웨어)."""
