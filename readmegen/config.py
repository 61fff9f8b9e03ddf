"""Configuration loading for readmegen (.readmegen.yml and environment credentials)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import ReadmeGenError
from .models import Credentials

CONFIG_FILENAME = ".readmegen.yml"

DEFAULT_MODEL = "gpt-4o"
DEFAULT_LANGUAGE = "en"
DEFAULT_MAX_LINE_WIDTH = 120
DEFAULT_REQUEST_TIMEOUT = 120.0
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (".git", ".hg", ".svn")

ENV_API_KEY_KEYS = ("READMEGEN_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY")
ENV_API_URL_KEYS = ("READMEGEN_API_URL", "OPENAI_API_URL")


class ConfigError(ReadmeGenError):
    """Raised when configuration cannot be parsed or required values are missing."""


@dataclass
class LLMConfig:
    """LLM settings from .readmegen.yml."""

    model: Optional[str] = None
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class ScanConfig:
    """Truncation limits and directory exclusions for the folder scanner.

    ``max_file_chars`` caps the raw text read from each file and is applied
    first; ``max_line_width`` then truncates every remaining line. The two
    limits are independent and either may be disabled with ``None``.
    """

    max_line_width: Optional[int] = DEFAULT_MAX_LINE_WIDTH
    max_file_chars: Optional[int] = None
    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .readmegen.yml."""

    path: Optional[Path] = None
    llm: LLMConfig = field(default_factory=LLMConfig)
    language: Optional[str] = None
    scan: ScanConfig = field(default_factory=ScanConfig)


def load_config(config_path: Path | None = None) -> ReadmeGenConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path or Path.cwd())
    if not config_file.exists():
        return ReadmeGenConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig(
        model=_as_str(llm_data.get("model")),
        api_url=_as_str(llm_data.get("api_url")),
        api_key=_as_str(llm_data.get("api_key")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
    )

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if "max_line_width" in scan_data:
        scan.max_line_width = _as_positive_int(scan_data.get("max_line_width"), "scan.max_line_width")
    if "max_file_chars" in scan_data:
        scan.max_file_chars = _as_positive_int(scan_data.get("max_file_chars"), "scan.max_file_chars")
    if "exclude_dirs" in scan_data:
        scan.exclude_dirs = _as_str_list(scan_data.get("exclude_dirs"))

    return ReadmeGenConfig(
        path=config_file,
        llm=llm,
        language=_as_str(data.get("language")),
        scan=scan,
    )


def credentials_from_env(environ: Mapping[str, str]) -> Credentials:
    """Build credentials from environment variables.

    Either a key or an endpoint URL is enough; a URL alone suits keyless
    local endpoints. Raises ``ConfigError`` when neither is set.
    """
    api_key = _first_value(environ, ENV_API_KEY_KEYS)
    api_url = _first_value(environ, ENV_API_URL_KEYS)
    if not api_key and not api_url:
        names = ", ".join(ENV_API_KEY_KEYS + ENV_API_URL_KEYS)
        raise ConfigError(
            f"No API key or URL found in the environment. Set one of: {names}."
        )
    return Credentials(api_key=api_key or "", api_url=api_url)


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
    return loaded if loaded is not None else {}


def _first_value(environ: Mapping[str, str], keys: Sequence[str]) -> str | None:
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


def _as_positive_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"{key} must be a positive integer or null")
    try:
        number = int(value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a positive integer or null") from exc
    if number <= 0:
        raise ConfigError(f"{key} must be a positive integer or null")
    return number


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_LANGUAGE",
    "DEFAULT_MODEL",
    "LLMConfig",
    "ReadmeGenConfig",
    "ScanConfig",
    "credentials_from_env",
    "load_config",
]
