import os
from dataclasses import dataclass
from typing import Optional, Tuple

import dotenv

# Load environment variables from .env file
dotenv.load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the generation service"""
    gemini_api_key: Optional[str] = None
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    chat_model: str = "gemini-2.5-flash"
    diagram_model: str = "gemini-2.0-flash-exp"
    diagram_temperature: float = 0.7
    diagram_max_output_tokens: int = 2000
    request_timeout: int = 30
    app_env: str = "production"
    log_level: str = "INFO"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create configuration from environment variables"""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            gemini_api_base=os.getenv("GEMINI_API_BASE", cls.gemini_api_base).rstrip("/"),
            chat_model=os.getenv("CHAT_MODEL", cls.chat_model),
            diagram_model=os.getenv("DIAGRAM_MODEL", cls.diagram_model),
            diagram_temperature=float(os.getenv("DIAGRAM_TEMPERATURE", "0.7")),
            diagram_max_output_tokens=int(os.getenv("DIAGRAM_MAX_OUTPUT_TOKENS", "2000")),
            request_timeout=int(os.getenv("GEMINI_TIMEOUT", "30")),
            app_env=os.getenv("APP_ENV", cls.app_env),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            cors_allow_origins=tuple(
                origin.strip() for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()
            ),
        )


def get_settings() -> Settings:
    # Read on every call so APP_ENV can be flipped without a restart
    return Settings.from_env()
