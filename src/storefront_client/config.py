"""Configuration management for the storefront client.

Loads settings from .env and named backend profiles from backends.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv


DEFAULT_BACKEND = "local"


class BackendProfile(BaseModel):
    """Connection details for one storefront backend."""
    base_url: str
    login_path: str = "/login"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    base_url: str = Field(default="http://localhost:8080", description="Fallback backend URL")
    default_backend: str = Field(default=DEFAULT_BACKEND, description="Backend profile used when none is given")
    session_file: str = Field(default="./data/session.json", description="Where the session tokens are persisted")
    timeout: float = Field(default=60.0, description="Per-request timeout ceiling in seconds")


class Config(BaseModel):
    """Full application configuration."""
    settings: Settings
    backends: dict[str, BackendProfile]

    def get_backend(self, name: str | None = None) -> BackendProfile:
        """Get a backend profile by name, falling back to the default backend."""
        name = (name or self.settings.default_backend).lower()
        if name not in self.backends:
            available = ", ".join(sorted(self.backends.keys()))
            raise ValueError(f"Unknown backend '{name}'. Available: {available}")
        return self.backends[name]

    @property
    def all_backends(self) -> list[str]:
        return sorted(self.backends.keys())


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "backends.yaml").exists():
            return parent
    return Path.cwd()


def _load_backends(project_root: Path, settings: Settings) -> dict[str, BackendProfile]:
    """Load backend profiles from backends.yaml.

    Without a profiles file a single profile is built from ``settings.base_url``
    under the default backend name.
    """
    backends_path = project_root / "config" / "backends.yaml"
    if not backends_path.exists():
        return {settings.default_backend.lower(): BackendProfile(base_url=settings.base_url)}

    with open(backends_path) as f:
        data = yaml.safe_load(f) or {}

    backends = {}
    for name, profile_data in data.get("backends", {}).items():
        backends[name.lower()] = BackendProfile(**profile_data)

    # An explicit base URL in the environment overrides the default profile
    if _env("STOREFRONT_BASE_URL", "VITE_BASE_SERVER_URL"):
        default = settings.default_backend.lower()
        login_path = backends[default].login_path if default in backends else "/login"
        backends[default] = BackendProfile(base_url=settings.base_url, login_path=login_path)
    return backends


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Supports both STOREFRONT_* and the frontend's VITE_BASE_SERVER_URL name.
    """
    return Settings(
        base_url=_env("STOREFRONT_BASE_URL", "VITE_BASE_SERVER_URL", default="http://localhost:8080"),
        default_backend=_env("STOREFRONT_BACKEND", default=DEFAULT_BACKEND),
        session_file=_env("STOREFRONT_SESSION_FILE", default="./data/session.json"),
        timeout=float(_env("STOREFRONT_TIMEOUT", default="60")),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    backends = _load_backends(project_root, settings)

    return Config(settings=settings, backends=backends)
