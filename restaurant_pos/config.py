from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/restaurant_pos"
    log_level: str = "INFO"

    # Billing
    tax_rate: float = 0.08
    currency: str = "INR"

    seed_demo_data: bool = True

    # Demo admin login
    demo_email: str = "demo@margros.in"
    demo_password: str = "demo@123"
    session_cookie_name: str = "admin_session"
    session_max_age: int = 60 * 60 * 24 * 7
    session_cookie_secure: bool = False

    # Kafka
    kafka_enabled: bool = True
    kafka_bootstrap_servers: str = "kafka:9092"

    # Observability
    otlp_endpoint: str = "http://jaeger:4318/v1/traces"

    model_config = {"env_file": ".env"}


settings = Settings()
