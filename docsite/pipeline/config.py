"""Pipeline configuration."""

from dataclasses import dataclass, field
from pathlib import Path
import os
import re

import yaml

from docsite.errors import ConfigError


def _expand_env_var(value: str) -> str:
    """Expand environment variables in the form ${VAR:-default}.

    Args:
        value: String possibly containing ${VAR:-default}

    Returns:
        Expanded string with environment variable or default value
    """
    if not isinstance(value, str):
        return value

    # Match ${VAR:-default} or ${VAR-default}
    pattern = r"\$\{([^:}]+):-?([^}]*)\}"

    def replace_env(match):
        var_name = match.group(1)
        default_value = match.group(2)
        return os.environ.get(var_name, default_value)

    return re.sub(pattern, replace_env, value)


def _expand_env(value):
    """Recursively expand env vars in strings inside dicts/lists."""
    if isinstance(value, str):
        return _expand_env_var(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _as_int(value, name: str) -> int:
    """Coerce env-expanded values like "4" back to int."""
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass
class DocumentConfig:
    """Defaults and derivation rules for document records."""

    default_title: str = "Untitled"
    default_category: str = "General"
    default_order: int = 999
    excerpt_length: int = 150
    excerpt_separator: str = "<!-- excerpt -->"
    words_per_minute: int = 200


@dataclass
class BuildConfig:
    """Index build settings."""

    max_workers: int = 4
    progress: bool = True


@dataclass
class SearchConfig:
    """Search settings."""

    limit: int = 8


@dataclass
class APIConfig:
    """HTTP API settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class Config:
    """Main configuration class."""

    docs_dir: str = "public/docs"
    index_path: str = "public/docs-index.json"
    file_extension: str = ".md"
    log_level: str = "INFO"
    document: DocumentConfig = field(default_factory=DocumentConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @property
    def docs_path(self) -> Path:
        return Path(self.docs_dir)

    @property
    def snapshot_path(self) -> Path:
        return Path(self.index_path)

    def validate(self) -> "Config":
        """Check value ranges.

        Returns:
            The same config, for chaining

        Raises:
            ConfigError: If a value is out of range
        """
        if self.document.excerpt_length < 1:
            raise ConfigError("document.excerpt_length must be >= 1")
        if self.document.words_per_minute < 1:
            raise ConfigError("document.words_per_minute must be >= 1")
        if self.build.max_workers < 1:
            raise ConfigError("build.max_workers must be >= 1")
        if self.search.limit < 1:
            raise ConfigError("search.limit must be >= 1")
        if not self.file_extension.startswith("."):
            raise ConfigError(
                f"file_extension must start with '.', got {self.file_extension!r}"
            )
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        data = _expand_env(data)

        document_data = data.get("document") or {}
        build_data = data.get("build") or {}
        search_data = data.get("search") or {}
        api_data = data.get("api") or {}

        defaults = DocumentConfig()
        document = DocumentConfig(
            default_title=document_data.get("default_title", defaults.default_title),
            default_category=document_data.get(
                "default_category", defaults.default_category
            ),
            default_order=_as_int(
                document_data.get("default_order", defaults.default_order),
                "document.default_order",
            ),
            excerpt_length=_as_int(
                document_data.get("excerpt_length", defaults.excerpt_length),
                "document.excerpt_length",
            ),
            excerpt_separator=document_data.get(
                "excerpt_separator", defaults.excerpt_separator
            ),
            words_per_minute=_as_int(
                document_data.get("words_per_minute", defaults.words_per_minute),
                "document.words_per_minute",
            ),
        )

        build = BuildConfig(
            max_workers=_as_int(build_data.get("max_workers", 4), "build.max_workers"),
            progress=_as_bool(build_data.get("progress", True)),
        )
        search = SearchConfig(
            limit=_as_int(search_data.get("limit", 8), "search.limit"),
        )
        api = APIConfig(
            host=api_data.get("host", "0.0.0.0"),
            port=_as_int(api_data.get("port", 8000), "api.port"),
            cors_origins=list(api_data.get("cors_origins") or ["*"]),
        )

        return cls(
            docs_dir=str(data.get("docs_dir", "public/docs")),
            index_path=str(data.get("index_path", "public/docs-index.json")),
            file_extension=data.get("file_extension", ".md"),
            log_level=str(data.get("log_level", "INFO")).upper(),
            document=document,
            build=build,
            search=search,
            api=api,
        ).validate()

    @classmethod
    def from_env(cls) -> "Config":
        """Load config from environment variables."""
        return cls(
            docs_dir=os.environ.get("DOCS_DIR", "public/docs"),
            index_path=os.environ.get("DOCS_INDEX_PATH", "public/docs-index.json"),
            log_level=os.environ.get("DOCSITE_LOG_LEVEL", "INFO").upper(),
            build=BuildConfig(
                max_workers=_as_int(
                    os.environ.get("DOCSITE_MAX_WORKERS", "4"), "DOCSITE_MAX_WORKERS"
                ),
            ),
            search=SearchConfig(
                limit=_as_int(
                    os.environ.get("DOCSITE_SEARCH_LIMIT", "8"), "DOCSITE_SEARCH_LIMIT"
                ),
            ),
        ).validate()


def load_config(config_path: str | Path | None = None) -> Config:
    """Load config from YAML file, falling back to environment variables.

    Args:
        config_path: Path to YAML config file. If None or missing, uses env vars.

    Returns:
        Config object
    """
    if config_path is not None and os.path.exists(config_path):
        return Config.from_yaml(config_path)
    return Config.from_env()
