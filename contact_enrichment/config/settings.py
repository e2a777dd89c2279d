from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Enrichment providers
    ICYPEAS_API_KEY: str | None = None
    ICYPEAS_BASE_URL: str = "https://app.icypeas.com/api"
    FINDY_API_KEY: str | None = None
    FINDY_BASE_URL: str = "https://api.findy.com"
    APOLLO_API_KEY: str | None = None
    APOLLO_BASE_URL: str = "https://api.apollo.io"
    HUNTER_API_KEY: str | None = None
    HUNTER_BASE_URL: str = "https://api.hunter.io"
    CLEARBIT_API_KEY: str | None = None
    CLEARBIT_BASE_URL: str = "https://company.clearbit.com"

    # Hunter email-finder score above which an address counts as verified
    HUNTER_VERIFIED_SCORE: int = 75

    # Public base URL of this service, used for the verification webhook
    API_URL: str | None = None
    VERIFICATION_EVENT_LOG_PATH: str = "data/verification_events.jsonl"

    # Runtime
    LOG_LEVEL: str = "INFO"

    HTTP_TIMEOUT_S: float = 10
    PROVIDER_TIMEOUT_S: float = 20
    VERIFY_TIMEOUT_S: float = 15
    MAX_RETRIES: int = 2

settings = Settings()
