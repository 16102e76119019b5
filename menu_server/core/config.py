"""
Menu Server Configuration

환경 변수를 통한 설정 관리
"""

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List

load_dotenv()  # .env 파일 로드


class Settings(BaseSettings):
    """Menu Server 설정"""

    # Application
    app_name: str = "Menu Server"
    version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Storage (flat JSON documents)
    data_dir: str = "data"

    # CORS
    cors_origins: List[str] = ["*"]

    # Logging
    log_dir: str = "logs"
    log_to_file: bool = True

    # Prometheus metrics
    enable_metrics: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
