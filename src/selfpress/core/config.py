"""
Configuration module for SelfPress.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration, including the database URL,
token signing, the payment provider and admin email management.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List

load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL (str): Database connection string.
        SECRET_KEY (str): Key used to sign access tokens.
        ACCESS_TOKEN_EXPIRE_MINUTES (int): Lifetime of an access token.
        STRIPE_SECRET_KEY (str): Secret key for the payment provider.
        STRIPE_API_BASE (str): Base URL of the payment provider API.
        PAYMENT_CURRENCY (str): Currency used for every payment intent.
        PAYMENT_TIMEOUT_SECONDS (float): Timeout for payment provider calls.
        ENVIRONMENT (str): Current environment (e.g., 'production', 'development').
        LOG_LEVEL (str): Root logging level.
        CORS_ORIGINS (str): Comma-separated list of allowed origins.
        ADMIN_EMAILS (str): Comma-separated list of emails promoted to admin
            by scripts/seed_db.py.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./selfpress.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "NO_STRIPE_KEY_SET")
    STRIPE_API_BASE: str = "https://api.stripe.com/v1"
    PAYMENT_CURRENCY: str = "usd"
    PAYMENT_TIMEOUT_SECONDS: float = 10.0
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    ADMIN_EMAILS: str = os.getenv("ADMIN_EMAILS", "")

    @property
    def list_admin_emails(self) -> List[str]:
        """
        Returns the list of admin emails parsed from ADMIN_EMAILS.

        Returns:
            List[str]: List of admin email addresses, lower-cased.
        """
        return [email.strip().lower() for email in self.ADMIN_EMAILS.split(',') if email.strip()]

    @property
    def list_cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]

    @property
    def payments_enabled(self) -> bool:
        """True when a real provider key is configured; otherwise intents are mocked."""
        return self.STRIPE_SECRET_KEY.startswith("sk_")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
