#!/usr/bin/env python3
"""
Configuration management for the ResumeRAG web application.
"""

import os
import yaml
from pathlib import Path
from functools import lru_cache
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field

from core.config_loader import RelevanceConfig


class DatabaseConfig(BaseModel):
    """Database configuration."""
    url: str = Field(default="sqlite:///./resumerag.db")


class WebConfig(BaseModel):
    """Web server configuration."""
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)


class AuthConfig(BaseModel):
    """Token signing configuration."""
    secret_key: str = Field(default="change-me-in-production")
    token_max_age_seconds: int = Field(default=86400, ge=1)


class UploadConfig(BaseModel):
    """Resume upload limits."""
    max_size_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    allowed_extensions: List[str] = Field(
        default_factory=lambda: ['.pdf', '.docx', '.doc', '.txt']
    )


class RateLimitConfig(BaseModel):
    """Per-client request limits."""
    enabled: bool = True
    default: str = Field(default="60/minute")


class SeedConfig(BaseModel):
    """Demo data inserted at startup."""
    enabled: bool = False


class AppConfig(BaseModel):
    """Main application configuration."""
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    uploads: UploadConfig = Field(default_factory=UploadConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    relevance: RelevanceConfig = Field(default_factory=RelevanceConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)


def _load_yaml_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_path = config_path or get_project_root() / 'config.yaml'

    if config_path.exists():
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    return {}


def _apply_env_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    # Database overrides
    if 'DATABASE_URL' in os.environ:
        if 'database' not in config_dict:
            config_dict['database'] = {}
        config_dict['database']['url'] = os.environ['DATABASE_URL']

    # Web server overrides
    if 'WEB_HOST' in os.environ:
        if 'web' not in config_dict:
            config_dict['web'] = {}
        config_dict['web']['host'] = os.environ['WEB_HOST']

    if 'WEB_PORT' in os.environ:
        if 'web' not in config_dict:
            config_dict['web'] = {}
        config_dict['web']['port'] = int(os.environ['WEB_PORT'])

    # Auth overrides
    if 'APP_SECRET' in os.environ:
        if 'auth' not in config_dict:
            config_dict['auth'] = {}
        config_dict['auth']['secret_key'] = os.environ['APP_SECRET']

    return config_dict


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    raw_config = _load_yaml_config(config_path)
    raw_config = _apply_env_overrides(raw_config)
    return AppConfig(**raw_config)


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads from YAML file and applies environment variable overrides.
    Result is cached for performance.

    Returns:
        AppConfig: The application configuration.
    """
    return load_config()


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent
