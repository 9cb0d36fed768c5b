from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TEMPLATES_DIR = str(Path(__file__).parent / "templates")


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    users_table: str = "users"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout: float = 5.0
    db_connect_timeout: int = 3
    redis_url: str = "redis://redis:6379/0"
    redis_socket_timeout: float = 2.0

    # Mail
    mail_transport: Literal["http", "smtp"] = "http"
    smtp_base_url: str = "http://smtp-mock:8025"
    mail_retries: int = 1
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_starttls: bool = True
    mail_from: str = "no-reply@localhost"
    templates_dir: str = DEFAULT_TEMPLATES_DIR
    mail_language: str = "en_US"

    # Links
    link_protocol: str = "http://"
    link_domain: str = "localhost"
    path_activate: str = "/v1/users/activate"
    path_reset_password: str = "/v1/users/passwordreset"
    path_cafe_auth: str = "/v1/cafe/auth"
    path_cafe_reset: str = "/v1/cafe/passwordreset"

    # Subjects
    activation_subject: str = "Activate Your Account"
    password_reset_subject: str = "Reset Password"
    cafe_auth_subject: str = "Your Sign-In Link"
    cafe_reset_subject: str = "Reset Password"

    # User record schema
    id_property: str = "id"
    email_property: str = "email"
    password_property: str = "password"

    # Security / policies
    bcrypt_rounds: int = 12
    reset_expire_minutes: int = 60
    resend_throttle_seconds: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def paths(self) -> dict[str, str]:
        return {
            "activate": self.path_activate,
            "password_reset": self.path_reset_password,
            "cafe_auth": self.path_cafe_auth,
            "cafe_reset": self.path_cafe_reset,
        }

    @property
    def subjects(self) -> dict[str, str]:
        return {
            "activate": self.activation_subject,
            "password_reset": self.password_reset_subject,
            "cafe_auth": self.cafe_auth_subject,
            "cafe_reset": self.cafe_reset_subject,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
