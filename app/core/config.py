from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Автосохранение черновиков (миллисекунды)
    autosave_interval_ms: int = 30000
    autosave_debounce_ms: int = 2000
    autosave_error_reset_ms: int = 3000
    autosave_saved_reset_ms: int = 2000
    draft_endpoint_url: str = "http://localhost:8000/api/posts/draft"

    # PostgreSQL variables for Docker
    postgres_user: str = ""
    postgres_password: str = ""
    postgres_db: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
