from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "School Registry API"
    app_version: str = "0.1.0"
    frontend_url: str = "http://localhost:3000"
    api_prefix: str = ""
    database_url: str = "sqlite:///./local.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout_seconds: float = 0.5

    log_level: str = "INFO"
    log_json: bool = False

    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    registration_rate_limit: int = 10
    registration_rate_window_seconds: int = 900
    registration_missing_fields_status: int = 400

    default_page_size: int = 10
    max_page_size: int = 100

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
