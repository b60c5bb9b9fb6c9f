"""
Configuration for PrintShop Desk.

Values come from the environment (optionally a .env file next to the app).
Select a class with create_app(config_object="config.ProductionConfig").
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


def _split_lines(value: str) -> list:
    return [line.strip() for line in value.split("|") if line.strip()]


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"
    JSON_SORT_KEYS = False

    # Relational store
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///" + str(BASE_DIR / "printshop_desk.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ==========================================================================
    # Receipt letterhead
    # ==========================================================================
    # SHOP_ADDRESS is a "|" separated list, one entry per printed line.
    # CURRENCY_SYMBOL must be drawable by the built-in Helvetica font.
    # ==========================================================================
    SHOP_NAME = os.environ.get("SHOP_NAME", "PrintShop Desk")
    SHOP_TAGLINE = os.environ.get("SHOP_TAGLINE", "Professional Printing Services")
    SHOP_ADDRESS_LINES = _split_lines(
        os.environ.get("SHOP_ADDRESS", "123 Print Street|Business District, City 12345")
    )
    SHOP_CONTACT = os.environ.get(
        "SHOP_CONTACT", "contact@printshop.example | (555) 123-4567"
    )
    CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "$")

    # Input limits
    MAX_QUANTITY = int(os.environ.get("MAX_QUANTITY", "100000"))
    MAX_NOTES_LENGTH = 1000


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    ENVIRONMENT = "production"


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    ENVIRONMENT = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
