"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Keeps the upstream registry origin, paths and host/port tunable without code changes.
"""

from typing import Dict, List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API host/port (PORT env var overrides the port, same as the old node server)
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=3000, description="Port for FastAPI/Uvicorn")

    # CORS (browser UI calls us from anywhere)
    cors_allow_origins: List[str] = Field(default=["*"], description="Allowed origins for browser apps")

    # --- Upstream registry ---
    base_url: str = Field(default="https://va.mite.gov.it", description="Origin of the project registry")
    search_endpoint: str = Field(default="/it-IT/Ricerca/ViaLibera", description="Search page path")
    search_query_param: str = Field(default="Testo", description="Query param carrying the keyword")
    # t=o switches the registry to "or" matching
    search_match_params: Dict[str, str] = Field(default={"t": "o"})
    project_info_marker: str = Field(
        default="/it-IT/Oggetti/Info/",
        description="href substring identifying a project detail page",
    )

    # The registry rejects default/bot user agents.
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        )
    )
    # None = wait forever (old behavior); set a number of seconds to bound it
    upstream_timeout: Optional[float] = Field(default=None)

    log_level: str = Field(default="INFO")

settings = Settings()
