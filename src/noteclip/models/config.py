"""Pydantic configuration models for noteclip."""

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class InlineMode(str, Enum):
    """Strategies for resolving overlapping inline formatting."""

    # Category scan order wins (bold+italic, bold, italic, code, link)
    SCAN_ORDER = "scan-order"
    DELIMITER = "delimiter"


class ConversionConfig(BaseModel):
    """Configuration for the HTML and Markdown conversion stages."""

    inline_mode: InlineMode = Field(
        InlineMode.SCAN_ORDER,
        description="Overlap resolution for inline formatting",
    )
    language_aliases: dict[str, str] = Field(
        default_factory=dict,
        description="Extra code fence language aliases (e.g. {'zsh': 'shell'})",
    )
    base_url: Optional[str] = Field(
        None,
        description="Base URL for resolving relative links in captured HTML",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @field_validator("language_aliases")
    @classmethod
    def _lowercase_aliases(cls, v: dict[str, str]) -> dict[str, str]:
        return {key.strip().lower(): value.strip().lower() for key, value in v.items()}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConversionConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ConversionConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
