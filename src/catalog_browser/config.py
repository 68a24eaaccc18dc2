"""BrowserConfig: user-tunable settings, with environment overrides."""

from __future__ import annotations

import logging
import os

import param

from .source.artic import DEFAULT_BASE_URL, DEFAULT_FIELDS

_ENV_PREFIX = "CATALOG_BROWSER_"


class BrowserConfig(param.Parameterized):
    """Settings for the catalog browser."""

    base_url = param.String(default=DEFAULT_BASE_URL, doc="Catalog API root URL")
    page_size = param.Integer(default=12, bounds=(1, None), doc="Records per page")
    fields = param.List(default=list(DEFAULT_FIELDS), item_type=str)
    timeout = param.Number(default=10.0, bounds=(0, None), doc="HTTP timeout (s)")
    log_level = param.String(default="INFO")

    @classmethod
    def from_env(cls, environ: dict | None = None, **overrides) -> BrowserConfig:
        """Build a config from CATALOG_BROWSER_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        params: dict = {}
        if f"{_ENV_PREFIX}BASE_URL" in env:
            params["base_url"] = env[f"{_ENV_PREFIX}BASE_URL"]
        if f"{_ENV_PREFIX}PAGE_SIZE" in env:
            params["page_size"] = _parse(env, "PAGE_SIZE", int)
        if f"{_ENV_PREFIX}TIMEOUT" in env:
            params["timeout"] = _parse(env, "TIMEOUT", float)
        if f"{_ENV_PREFIX}LOG_LEVEL" in env:
            params["log_level"] = env[f"{_ENV_PREFIX}LOG_LEVEL"].upper()
        params.update(overrides)
        return cls(**params)


def _parse(env, key: str, kind):
    raw = env[f"{_ENV_PREFIX}{key}"]
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(
            f"{_ENV_PREFIX}{key} must be a {kind.__name__}, got {raw!r}."
        ) from None


def configure_logging(level: str | int = "INFO") -> None:
    """Install a basic stderr handler for command-line launches."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
