from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Provider credentials
    brave_api_key: str = ""
    tavily_api_key: str = ""
    jina_api_key: str = ""
    semantic_scholar_api_key: str = ""  # optional, raises the public rate limit

    # Search sources
    search_sources: str = "brave,duckduckgo,scholar"  # brave | duckduckgo | scholar | tavily | jina
    search_max_results_per_query: int = 10
    brave_timeout_seconds: float = 5.0
    duckduckgo_timeout_seconds: float = 6.0
    scholar_timeout_seconds: float = 8.0
    tavily_timeout_seconds: float = 8.0
    jina_timeout_seconds: float = 8.0
    http_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )

    # Aggregation
    aggregation_deadline_seconds: float = 10.0
    report_max_results: int = 20
    institution_domains: str = "weforum.org,mckinsey.com,oecd.org,brookings.edu,ilo.org,pewresearch.org"

    # Enrichment / extraction
    enrichment_enabled: bool = True
    enrich_top_k: int = 5
    enrich_snippet_chars: int = 500
    extractor_timeout_seconds: float = 5.0
    extractor_max_chars: int = 2000
    extractor_max_bytes: int = 2_000_000

    # App
    cors_origins: str = "http://localhost:3000"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]

    @property
    def search_source_list(self) -> list[str]:
        return [s.strip().lower() for s in self.search_sources.split(",") if s.strip()]

    @property
    def institution_domain_list(self) -> list[str]:
        return [d.strip().lower() for d in self.institution_domains.split(",") if d.strip()]


settings = Settings()
