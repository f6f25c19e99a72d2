from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Recipe Tracker API"
    api_prefix: str = "/api/v1"
    database_url: str = "sqlite:///./recipe-tracker.db"
    auto_create_tables: bool = True
    dev_mode: bool = False

    session_secret_key: str = "change-me-in-env-recipe-tracker-session-key"
    session_token_algorithm: str = "HS256"
    password_hash_iterations: int = 120000

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
