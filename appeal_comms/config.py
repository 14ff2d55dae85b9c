from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings loaded from environment."""

    # Service
    service_name: str = "appeal-comms"

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "appeals"
    db_user: str = "dbadmin"
    db_password: str = ""
    create_tables_on_startup: bool = False

    # AWS
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # For LocalStack

    # AWS SES (Email)
    ses_sender_email: str = "noreply@example.org"

    # SMS
    sms_sender_id: str = ""

    # Dispatch
    dispatch_max_concurrency: int = 10
    dispatch_send_timeout_seconds: float = 30.0
    audit_error_summary_max_length: int = 1000

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
