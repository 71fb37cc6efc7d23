"""Application configuration using pydantic-settings.

All configuration values are loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Ollama LLM settings
    ollama_base_url: str = "http://localhost:11434"
    generation_model: str = "qwen2.5:7b-instruct-q4_0"  # Document evolution, expand, refine
    analysis_model: str = "qwen2.5:7b-instruct-q4_0"    # Lenses, provocations, change analysis

    # Context window (evolution prompts carry the full document)
    ollama_num_ctx: int = 8192

    # Sampling temperatures
    evolution_temperature: float = 0.7
    analysis_temperature: float = 0.3
    refine_temperature: float = 0.5

    # Output token limits per call type
    evolution_max_tokens: int = 8192
    change_analysis_max_tokens: int = 1024
    lens_max_tokens: int = 4096
    provocation_max_tokens: int = 4096
    expand_max_tokens: int = 2048
    refine_max_tokens: int = 2048

    # Truncation limits for prompt inputs
    max_analysis_chars: int = 8000         # Source text sent to lens/provocation analysis
    change_analysis_chars: int = 2000      # Each document excerpt in change analysis
    reference_write_chars: int = 1000      # Each reference document in write context
    reference_analyze_chars: int = 500     # Each reference document in provocation prompt

    # Edit history window
    edit_history_capacity: int = 10  # Entries retained per session
    edit_history_prompt_window: int = 5  # Entries rendered into the prompt

    # Data paths
    data_dir: Path = Path("data")
    sessions_dir: Path = Path("data/sessions")

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "text"

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.sessions_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.ensure_directories()
    return settings
