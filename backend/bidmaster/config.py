from pathlib import Path

from pydantic_settings import BaseSettings

# .env 파일 탐색: backend/.env → 프로젝트 루트/.env
_backend_dir = Path(__file__).resolve().parent.parent
_env_candidates = [_backend_dir / ".env", _backend_dir.parent / ".env"]
_env_file = next((p for p in _env_candidates if p.exists()), ".env")


class Settings(BaseSettings):
    model_config = {"env_file": str(_env_file), "env_file_encoding": "utf-8", "extra": "ignore"}

    # Application
    app_env: str = "development"
    debug: bool = True

    # Valuation
    min_bid_ratio: float = 0.8  # 최저가 = 감정가 × α
    fallback_fmv: int = 500_000_000  # 감정가/최저가/FMV 힌트 모두 없을 때의 교육용 기본 FMV
    default_kappa: float = 0.90  # 미등록 물건유형의 FMV 보정계수

    # 경쟁자 시뮬레이션
    bid_tick: int = 1_000
    default_competitor_count: int = 10
    default_difficulty: str = "normal"

    # Engine
    engine_version: str = "v0.2"

    # Server
    cors_origins: list[str] = ["http://localhost:3000"]


settings = Settings()
