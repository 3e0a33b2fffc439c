from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    OPENAI_API_KEY: str = ""
    ANALYSIS_MODEL: str = "gpt-4o"
    SCHEDULE_MODEL: str = "gpt-4o-mini"
    WEB_SEARCH_TOOL: str = "web_search_preview"
    SCHEDULE_TIMEZONE: str = "America/New_York"
    SCHEDULE_CACHE_TTL: int = 120  # seconds
    SCHEDULE_REFRESH_MINUTES: int = 30  # 0 disables the background refresh
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
