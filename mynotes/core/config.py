from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./notes.db"
    sql_echo: bool = False

    # memory | sql
    data_service: str = "memory"

    page_size: int = 20
    max_page_size: int = 100

    # Параметры эталонного хранилища в памяти
    seed_notes: int = 30
    memory_latency: float = 0.0

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "MYNOTES_", "extra": "ignore"}


settings = Settings()
