"""Pydantic configuration models for docscope."""

import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/109.0.0.0 Safari/537.36"
)

# Generic documentation containers, tried after any symbol-specific selector
CONTAINER_SELECTORS = [
    "main",
    "article",
    ".documentation",
    ".docs",
    ".content",
    ".main-content",
    ".api-docs",
    ".api-reference",
    "#documentation",
    ".markdown-body",
    "[role='main']",
    ".api-content",
]

# Tags the fallback pass accepts as content-bearing
CONTENT_TAGS = [
    "div",
    "section",
    "article",
    "main",
    "p",
    "pre",
    "code",
    "table",
    "ul",
    "ol",
    "dl",
    "blockquote",
    "figure",
    "details",
    "summary",
    "aside",
    "header",
    "footer",
    "nav",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
]

MAX_SEARCH_DEPTH = 3


class ByteSize(int):
    """
    Custom type that parses human-readable byte sizes.

    Accepts:
        - Integers (bytes)
        - Strings like '200kb', '1mb', '5gb'

    Examples:
        >>> ByteSize._parse('200kb')
        204800
        >>> ByteSize._parse(1024)
        1024
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> int:
        if isinstance(v, int):
            return v
        if isinstance(v, str):
            v = v.lower().strip()
            # Order matters: check longer suffixes first
            units = [("gb", 1024**3), ("mb", 1024**2), ("kb", 1024), ("b", 1)]
            for unit, mult in units:
                if v.endswith(unit):
                    num_str = v[: -len(unit)].strip()
                    try:
                        return int(float(num_str) * mult)
                    except ValueError as err:
                        raise ValueError(f"Invalid number in byte size: {v}") from err
            try:
                return int(v)
            except ValueError:
                pass
        raise ValueError(f"Invalid byte size: {v}. Use format like '200kb', '1mb', or integer bytes.")


class NetworkConfig(BaseModel):
    """Configuration for the HTTP client."""

    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with every request")
    timeout: float = Field(30.0, gt=0, description="Per-request timeout in seconds")
    max_content_size: ByteSize = Field(
        ByteSize(50 * 1024 * 1024),
        description="Maximum response size (e.g., '5mb')",
    )
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")
    block_private_hosts: bool = Field(
        False,
        description="Reject localhost, private and link-local addresses",
    )

    model_config = {"extra": "forbid"}


class CrawlConfig(BaseModel):
    """Crawl depth bounds for the two extraction passes."""

    max_depth: int = Field(
        2,
        ge=1,
        le=2,
        description="Targeted pass depth (2 allows one same-site meta-refresh hop)",
    )
    fallback_max_depth: int = Field(1, ge=1, le=2, description="Fallback pass depth")

    model_config = {"extra": "forbid"}


class ExtractionConfig(BaseModel):
    """Heuristic knobs for the extractor."""

    container_selectors: list[str] = Field(
        default_factory=lambda: list(CONTAINER_SELECTORS),
        description="Generic documentation container selectors, in priority order",
    )
    max_search_depth: int = Field(
        MAX_SEARCH_DEPTH,
        ge=0,
        description="How many levels below a matched node to search for a symbol container",
    )
    content_tags: list[str] = Field(
        default_factory=lambda: list(CONTENT_TAGS),
        description="Tags the fallback pass treats as content-bearing",
    )
    fallback: bool = Field(True, description="Run the wildcard fallback pass when the targeted pass misses")
    include_title: bool = Field(True, description="Prefix the result with the page <title>")

    model_config = {"extra": "forbid"}


def _env(name: str) -> Optional[str]:
    """Read an environment variable, dropping stray carriage returns."""
    value = os.environ.get(name)
    if value is None:
        return None
    # .env files saved on Windows leave \r at the end of values
    value = value.replace("\r", "").strip()
    return value or None


def _env_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "on"}


class DocscopeConfig(BaseModel):
    """
    Root configuration model for docscope.

    Example:
        config = DocscopeConfig(
            network=NetworkConfig(timeout=10),
            extraction=ExtractionConfig(include_title=False),
        )

    YAML format:
        network:
          timeout: 10
          user_agent: my-bot/1.0
        crawl:
          max_depth: 1
        extraction:
          fallback: false
    """

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    crawl: CrawlConfig = Field(default_factory=CrawlConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")
    verbose: bool = Field(False, description="Emit diagnostic progress messages")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "DocscopeConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "DocscopeConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())

    @classmethod
    def from_env(cls, base: Optional["DocscopeConfig"] = None) -> "DocscopeConfig":
        """
        Overlay DOCSCOPE_* environment variables onto a config.

        Recognized variables: DOCSCOPE_TIMEOUT, DOCSCOPE_USER_AGENT,
        DOCSCOPE_VERBOSE, DOCSCOPE_LOG_LEVEL.

        Args:
            base: Config to start from (defaults to a fresh one)

        Returns:
            New validated config
        """
        data = (base or cls()).model_dump()

        timeout = _env("DOCSCOPE_TIMEOUT")
        if timeout is not None:
            data["network"]["timeout"] = float(timeout)

        user_agent = _env("DOCSCOPE_USER_AGENT")
        if user_agent is not None:
            data["network"]["user_agent"] = user_agent

        verbose = _env("DOCSCOPE_VERBOSE")
        if verbose is not None:
            data["verbose"] = _env_bool(verbose)

        log_level = _env("DOCSCOPE_LOG_LEVEL")
        if log_level is not None:
            data["log_level"] = log_level.upper()

        return cls.model_validate(data)
