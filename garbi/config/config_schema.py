"""Pydantic models for configuration validation."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class OllamaConfig(BaseModel):
    """Ollama LLM configuration."""

    base_url: str = Field(default="http://localhost:11434", description="Ollama base URL")
    model: str = Field(..., description="Model name")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0, description="Temperature")
    max_tokens: int = Field(default=2048, gt=0, description="Maximum tokens")
    context_window: Optional[int] = Field(default=None, description="Context window size")


class OpenAIConfig(BaseModel):
    """OpenAI LLM configuration."""

    api_key: str = Field(..., description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Model name")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0, description="Temperature")
    max_tokens: int = Field(default=2048, gt=0, description="Maximum tokens")
    organization_id: Optional[str] = Field(default=None, description="Organization ID")


class GeminiConfig(BaseModel):
    """Gemini LLM configuration."""

    api_key: str = Field(..., description="Gemini API key")
    model: str = Field(default="gemini-2.0-flash", description="Model name")
    temperature: float = Field(default=0.0, ge=0.0, le=2.0, description="Temperature")
    max_tokens: int = Field(default=2048, gt=0, description="Maximum tokens")
    safety_settings: Optional[list] = Field(default=None, description="Safety settings")


class LLMConfig(BaseModel):
    """LLM configuration."""

    provider: str = Field(..., description="Provider: 'ollama', 'openai', or 'gemini'")
    ollama: Optional[OllamaConfig] = Field(default=None, description="Ollama configuration")
    openai: Optional[OpenAIConfig] = Field(default=None, description="OpenAI configuration")
    gemini: Optional[GeminiConfig] = Field(default=None, description="Gemini configuration")


class CalendarConfig(BaseModel):
    """Google Calendar configuration."""

    calendar_id: str = Field(default="primary", description="Calendar to operate on")
    default_max_results: int = Field(
        default=10, ge=1, le=250, description="Events returned by a list without maxResults"
    )
    search_max_results: int = Field(
        default=50, ge=1, le=50, description="Maximum candidates returned by an event search"
    )
    max_look_ahead_days: int = Field(
        default=30, ge=1, le=365, description="Search window in days when no date is given"
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=3000, gt=0, lt=65536, description="Port")


class AgentPreferencesConfig(BaseModel):
    """Agent preferences configuration."""

    timezone: str = Field(
        default="UTC",
        description="Default timezone (e.g., 'America/New_York', 'UTC', 'Asia/Tokyo')"
    )
    language: str = Field(
        default="en",
        description="Preferred response language (ISO 639-1 code, e.g., 'en', 'tr', 'es')"
    )
    assistant_name: str = Field(default="Garbi", description="Name the assistant uses")

    @model_validator(mode='after')
    def validate_timezone(self) -> 'AgentPreferencesConfig':
        """Validate timezone string using zoneinfo."""
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Invalid timezone: '{self.timezone}'. "
                f"Must be a valid IANA timezone (e.g., 'America/New_York', 'UTC', 'Asia/Tokyo')"
            )
        return self

    @field_validator('language')
    @classmethod
    def validate_language_code(cls, v: str) -> str:
        """Validate language code is 2-letter ISO 639-1 code."""
        if not v or len(v) != 2 or not v.isalpha():
            raise ValueError(
                f"Invalid language code: '{v}'. "
                f"Must be a 2-letter ISO 639-1 code (e.g., 'en', 'tr', 'es')"
            )
        return v.lower()


class AgentConfig(BaseModel):
    """Agent configuration."""

    preferences: AgentPreferencesConfig = Field(
        default_factory=AgentPreferencesConfig,
        description="Agent preferences (timezone, language, name)"
    )


class AppConfig(BaseModel):
    """Main application configuration."""

    llm: LLMConfig = Field(..., description="LLM configuration")
    calendar: CalendarConfig = Field(
        default_factory=CalendarConfig, description="Google Calendar configuration"
    )
    server: ServerConfig = Field(default_factory=ServerConfig, description="HTTP server configuration")
    agent: AgentConfig = Field(
        default_factory=AgentConfig,
        description="Agent configuration and preferences"
    )

    def validate(self) -> None:
        """Validate configuration consistency."""
        provider_configs = {
            "ollama": self.llm.ollama,
            "openai": self.llm.openai,
            "gemini": self.llm.gemini,
        }

        provider = self.llm.provider.lower()
        if provider not in provider_configs:
            raise ValueError(f"Unknown LLM provider: {self.llm.provider}")

        if not provider_configs[provider]:
            raise ValueError(f"{provider} configuration is required when provider is '{provider}'")
