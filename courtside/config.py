from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database - defaults to SQLite for easy local development
    database_url: str = "sqlite:///./courtside.db"
    
    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 30  # 30 days
    bcrypt_rounds: int = 12
    
    # Real-time fan-out across worker processes
    use_redis: bool = False
    redis_url: str = "redis://localhost:6379/0"
    redis_channel_prefix: str = "courtside:game"
    
    # Rate limiting for auth endpoints
    rate_limit_enabled: bool = True
    auth_rate_limit: str = "20/minute"
    
    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    cors_origins: list[str] = ["*"]
    
    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
