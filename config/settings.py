"""
Application configuration settings.

Centralized configuration management using environment variables.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application configuration settings."""

    # Validation rules
    ALLOWED_EMAIL_DOMAIN: str = os.getenv("ALLOWED_EMAIL_DOMAIN", "rocketseat.com.br")
    PASSWORD_MIN_LENGTH: int = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))
    TECHS_MIN_COUNT: int = int(os.getenv("TECHS_MIN_COUNT", "2"))
    KNOWLEDGE_MIN: int = int(os.getenv("KNOWLEDGE_MIN", "1"))
    KNOWLEDGE_MAX: int = int(os.getenv("KNOWLEDGE_MAX", "100"))

    # Application Configuration
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "user_form.log")

    # Form fields configuration
    FORM_FIELDS = {
        "name": "Name",
        "email": "Email",
        "password": "Password",
        "techs": "Technologies",
    }


# Global settings instance
settings = Settings()
