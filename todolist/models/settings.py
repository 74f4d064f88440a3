import logging
import os
from typing import Optional

from dotenv import dotenv_values
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator
from pydantic_core import PydanticCustomError


class Settings(BaseModel):
    """Settings model for environment variables with validation and defaults."""

    # Server
    host: str = Field(default="localhost", description="Interface to bind to")
    port: int = Field(default=3030, description="Port to listen on")
    environment: str = Field(
        default="development", description="Deployment environment name"
    )
    cors_origin: str = Field(
        default="*", description="Value for the Access-Control-Allow-Origin header"
    )

    # Static files
    static_dir: str = Field(
        default="public", description="Directory served at the site root"
    )

    # Startup behaviour
    seed_demo_todos: bool = Field(
        default=False, description="Create demo todos when the server starts"
    )

    # Error reporting
    sentry_dsn: Optional[str] = Field(default=None, description="Sentry DSN")

    # Hidden/Internal fields
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate the port is a usable TCP port."""
        if not 1 <= v <= 65535:
            raise PydanticCustomError(
                "invalid_port", "Port must be between 1 and 65535"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate and normalise the log level name."""
        level = v.upper()
        if not isinstance(getattr(logging, level, None), int):
            raise PydanticCustomError(
                "invalid_log_level", "Unknown log level: {level}", {"level": v}
            )
        return level

    @classmethod
    def from_env_file(cls, env_path: str = ".env", validate: bool = True) -> "Settings":
        """Load settings from .env file if it exists.

        Args:
            env_path: Path to .env file
            validate: Whether to validate the settings
        """
        if not os.path.exists(env_path):
            if not validate:
                return cls.model_construct()
            raise FileNotFoundError(f".env file not found at {env_path}")

        env_values = dotenv_values(env_path)

        settings_dict = {}
        for field_name, field_info in cls.model_fields.items():
            env_value = env_values.get(field_name.upper())
            if env_value is not None:
                # Convert to appropriate type
                if field_info.annotation is int:
                    settings_dict[field_name] = int(env_value)
                elif field_info.annotation is bool:
                    settings_dict[field_name] = env_value.lower() in (
                        "true",
                        "1",
                        "yes",
                        "on",
                    )
                else:
                    settings_dict[field_name] = env_value

        # Use model_construct to bypass validation if requested
        if not validate:
            return cls.model_construct(**settings_dict)

        return cls(**settings_dict)
