from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    max_body_bytes: int = 100 * 1024

    # Groq (OpenAI-compatible chat completions)
    groq_api_key: str = ""
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1024
    llm_timeout_seconds: float = 60.0

    # SerpAPI
    serp_api_key: str = ""
    serp_api_url: str = "https://serpapi.com/search"
    serp_engine: str = "google"
    search_timeout_seconds: float = 15.0

    # Whole-request deadline, covers the upstream call plus post-processing
    request_timeout_seconds: float = 90.0

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # CORS
    frontend_url: str = "http://localhost:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]
        if "http://localhost:3000" not in origins:
            origins.append("http://localhost:3000")
        return origins

    def missing_credentials(self) -> list[str]:
        """Names of the API keys that are not configured."""
        missing = []
        if not self.groq_api_key:
            missing.append("GROQ_API_KEY")
        if not self.serp_api_key:
            missing.append("SERP_API_KEY")
        return missing

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
