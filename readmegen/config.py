"""Configuration loading for readmegen (.readmegen.yml plus environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .errors import ConfigError
from .logging import get_logger

CONFIG_FILENAME = ".readmegen.yml"

ENV_GITHUB_TOKEN_KEYS = ("READMEGEN_GITHUB_TOKEN", "GITHUB_TOKEN", "VITE_GITHUB_TOKEN")
ENV_OPENAI_KEY_KEYS = ("READMEGEN_OPENAI_API_KEY", "OPENAI_API_KEY", "VITE_OPENAI_API_KEY")
ENV_MODEL_KEYS = ("READMEGEN_LLM_MODEL",)
ENV_BASE_URL_KEYS = ("READMEGEN_LLM_BASE_URL",)
ENV_STORE_PATH_KEYS = ("READMEGEN_STORE_PATH",)

DEFAULT_STORE_PATH = Path("~/.readmegen/state.json")


@dataclass
class GitHubConfig:
    """GitHub REST API access settings."""

    api_url: str = "https://api.github.com"
    token: Optional[str] = None
    request_timeout: float = 30.0


@dataclass
class LLMConfig:
    """Chat-completion endpoint settings."""

    model: str = "gpt-4-turbo-preview"
    base_url: str = "https://api.openai.com/v1"
    api_key: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 4000
    request_timeout: float = 120.0


@dataclass
class SelectorConfig:
    """Which files under the source root are eligible for the prompt."""

    root: str = "src"
    extensions: Tuple[str, ...] = (".js", ".ts", ".jsx", ".tsx")
    excluded_fragments: Tuple[str, ...] = (".test.", ".spec.", ".config.")
    priority: Tuple[str, ...] = ("index", "main", "app")
    limit: int = 5


@dataclass
class Settings:
    """Effective settings for one readmegen process."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    store_path: Path = DEFAULT_STORE_PATH

    def missing_credentials(self) -> List[str]:
        missing: List[str] = []
        if not self.github.token:
            missing.append("GITHUB_TOKEN")
        if not self.llm.api_key:
            missing.append("OPENAI_API_KEY")
        return missing

    def report_missing_credentials(self) -> List[str]:
        """Log each absent credential at startup; the calls that need them raise later."""
        logger = get_logger("config")
        missing = self.missing_credentials()
        for name in missing:
            logger.error(
                "%s is missing. Export it or set it in %s before connecting.",
                name,
                CONFIG_FILENAME,
            )
        return missing


def load_settings(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from an optional config file, then apply environment overrides."""
    environ = os.environ if env is None else env
    data: Dict[str, Any] = {}
    if config_path is not None:
        config_file = _resolve_config_path(config_path)
        if config_file.exists():
            data = _read_config(config_file)

    github_data = _as_dict(data.get("github"))
    github = GitHubConfig()
    if github_data:
        github.api_url = (_as_str(github_data.get("api_url")) or github.api_url).rstrip("/")
        github.token = _as_str(github_data.get("token"))
        github.request_timeout = _as_float(github_data.get("request_timeout")) or github.request_timeout

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig()
    if llm_data:
        llm.model = _as_str(llm_data.get("model")) or llm.model
        llm.base_url = (_as_str(llm_data.get("base_url")) or llm.base_url).rstrip("/")
        llm.api_key = _as_str(llm_data.get("api_key"))
        temperature = _as_float(llm_data.get("temperature"))
        if temperature is not None:
            llm.temperature = temperature
        llm.max_tokens = _as_int(llm_data.get("max_tokens")) or llm.max_tokens
        llm.request_timeout = _as_float(llm_data.get("request_timeout")) or llm.request_timeout

    selector_data = _as_dict(data.get("selector"))
    selector = SelectorConfig()
    if selector_data:
        selector.root = (_as_str(selector_data.get("root")) or selector.root).strip("/")
        selector.extensions = tuple(_as_str_list(selector_data.get("extensions"))) or selector.extensions
        selector.excluded_fragments = (
            tuple(_as_str_list(selector_data.get("excluded_fragments"))) or selector.excluded_fragments
        )
        selector.priority = tuple(_as_str_list(selector_data.get("priority"))) or selector.priority
        limit = _as_int(selector_data.get("limit"))
        if limit is not None:
            if limit < 1:
                raise ConfigError("selector.limit must be a positive integer")
            selector.limit = limit

    store_data = _as_dict(data.get("store"))
    store_path = DEFAULT_STORE_PATH
    store_path_str = _as_str(store_data.get("path")) if store_data else None
    if store_path_str:
        store_path = Path(store_path_str)

    github.token = _first_env_value(environ, ENV_GITHUB_TOKEN_KEYS) or github.token
    llm.api_key = _first_env_value(environ, ENV_OPENAI_KEY_KEYS) or llm.api_key
    llm.model = _first_env_value(environ, ENV_MODEL_KEYS) or llm.model
    env_base_url = _first_env_value(environ, ENV_BASE_URL_KEYS)
    if env_base_url:
        llm.base_url = env_base_url.rstrip("/")
    env_store_path = _first_env_value(environ, ENV_STORE_PATH_KEYS)
    if env_store_path:
        store_path = Path(env_store_path)

    return Settings(
        github=github,
        llm=llm,
        selector=selector,
        store_path=store_path.expanduser(),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _first_env_value(environ: Mapping[str, str], keys: Sequence[str]) -> str | None:
    for key in keys:
        value = environ.get(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ConfigError",
    "GitHubConfig",
    "LLMConfig",
    "SelectorConfig",
    "Settings",
    "load_settings",
]
