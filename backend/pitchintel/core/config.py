from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # core
    ENV: str = "dev"
    API_PREFIX: str = "/api"

    # database
    # Plain string so sqlite:// URLs used in local runs are always accepted
    DATABASE_URL: str = "sqlite:///./pitchintel.db"

    # news provider (NewsData.io)
    NEWSDATA_API_KEY: str | None = None
    NEWSDATA_BASE_URL: str = "https://newsdata.io/api/1/news"
    NEWSDATA_TIMEOUT_SECONDS: float = 15
    NEWSDATA_PAGE_SIZE: int = 10

    # jobs provider (JSearch via RapidAPI)
    JSEARCH_API_KEY: str | None = None
    JSEARCH_BASE_URL: str = "https://jsearch.p.rapidapi.com/search"
    JSEARCH_HOST: str = "jsearch.p.rapidapi.com"
    JSEARCH_TIMEOUT_SECONDS: float = 20
    JSEARCH_MAX_RESULTS: int = 10

    # sentiment provider (Twinword emotion analysis via RapidAPI)
    TWINWORD_API_KEY: str | None = None
    TWINWORD_URL: str = "https://twinword-emotion-analysis-v1.p.rapidapi.com/analyze/"
    TWINWORD_HOST: str = "twinword-emotion-analysis-v1.p.rapidapi.com"
    TWINWORD_TIMEOUT_SECONDS: float = 10

    # outreach drafts (Groq, OpenAI-compatible)
    GROQ_API_KEY: str | None = None
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama3-8b-8192"
    GROQ_TEMPERATURE: float = 0.7
    GROQ_MAX_TOKENS: int = 1000
    GROQ_TIMEOUT_SECONDS: float = 30
    # Hard cap on concurrent LLM calls per process
    LLM_MAX_CONCURRENCY: int = 4

    # brief decoration
    LOGO_BASE_URL: str = "https://logo.clearbit.com"
    FAVICON_BASE_URL: str = "https://www.google.com/s2/favicons"

    # Seed for the mock-data generators used when a provider is unavailable.
    # Left unset in production so fallback data varies between briefs.
    MOCK_DATA_SEED: int | None = None

    # auth / security
    API_AUTH_KEY: str | None = None
    FRONTEND_ORIGIN: str | None = None
    # Explicit debug-only switch for wide-open CORS in non-prod envs
    CORS_ALLOW_ALL_ORIGINS: bool = False

    # listing
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
