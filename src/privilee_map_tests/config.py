"""Configuration models for the venue map test suite."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserConfig(BaseModel):
    """Settings for launching the browser."""

    headless: bool = False
    maximized: bool = True
    install_browser: bool = Field(
        default=True,
        description="Install the Chromium build matching Playwright before launching.",
    )
    viewport_width: int = 1920
    viewport_height: int = 1080
    slow_mo: float = Field(default=0.0, description="Delay in milliseconds between commands.")


class TimeoutConfig(BaseModel):
    """Implicit lookup and explicit wait timeouts, in seconds."""

    implicit: float = Field(default=10.0, gt=0)
    explicit: float = Field(default=10.0, gt=0)
    poll_interval: float = Field(default=0.5, gt=0)


class SuiteConfig(BaseSettings):
    """Top-level configuration for running the scenarios."""

    model_config = SettingsConfigDict(
        env_prefix="PRIVILEE_MAP_TESTS_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    load_time_budget: int = Field(
        default=5,
        ge=0,
        description="Maximum whole seconds from navigation until the first marker appears.",
    )


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> SuiteConfig:
    """Load configuration from an optional YAML file and overrides."""

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    config = SuiteConfig(**settings_kwargs)
    if not data:
        return config

    merged = config.model_dump(mode="python")
    _deep_update(merged, data)
    return SuiteConfig.model_validate(merged)


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(existing := target.get(key), Mapping)
        ):
            nested: dict[str, Any]
            if isinstance(existing, dict):
                nested = existing
            else:
                nested = dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
