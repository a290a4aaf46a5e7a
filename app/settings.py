from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content API
    PRISMIC_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Blog
    SITE_NAME: str = "spacetraveling"
    POSTS_PAGE_SIZE: int = 1
    DATE_LOCALE: str = "pt-br"

    # Generated pages
    PAGE_CACHE_URL: str = "sqlite:///./page_cache.db"
    REVALIDATE_SECONDS: int = 60 * 60 * 24  # 1 day

    # Preview
    PREVIEW_COOKIE_NAME: str = "spacetraveling.preview"

    # Comments
    UTTERANCES_REPO: str = "mjpancheri/ignite-chapter3-challenge-02"
    UTTERANCES_THEME: str = "github-dark"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def prismic_search_url(self) -> str:
        return f"{self.PRISMIC_API_ENDPOINT.rstrip('/')}/documents/search"

    @property
    def is_sqlite_cache(self) -> bool:
        return self.PAGE_CACHE_URL.startswith("sqlite")


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
