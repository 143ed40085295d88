from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    CLOUDFLARE_TOKEN: str
    CLOUDFLARE_ZONE_ID: str
    CLOUDFLARE_API_URL: str = "https://api.cloudflare.com/client/v4"
    AUTH_URL: str
    AUTH_API_KEY: str
    REDIS_URL: str = "redis://localhost:6379"
    SESSION_CACHE_TTL: int = 60  # seconds, 0 turns the cache off
    DNS_RECORD_TTL: int = 3600
    DNS_RECORD_PROXIED: bool = True
    # Policy switches, see DESIGN.md
    REQUIRE_CONFIRMED_FOR_ATTACH: bool = True
    HIDE_SUBDOMAIN_EXISTENCE: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    class Config:
        env_file = ".env"

settings = Settings()

def get_settings() -> Settings:
    return settings
