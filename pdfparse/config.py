"""Parser configuration with environment variable loading.

Pydantic-based settings for PDF fetching, validation and formatting defaults.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class ParserConfig(BaseModel):
    """Configuration for PDF parsing.

    Attributes:
        max_file_size: Largest accepted PDF in bytes.
        fetch_timeout: Timeout in seconds for URL fetches.
        text_formatting: Default formatting mode.
        continue_on_fail: Default batch failure policy.
        output_property: Default output key for extracted text.
    """

    model_config = ConfigDict(validate_default=True)

    max_file_size: int = Field(
        default_factory=lambda: int(
            os.getenv("PDF_MAX_FILE_SIZE", str(DEFAULT_MAX_FILE_SIZE))
        ),
        gt=0,
        description="Maximum PDF size in bytes",
    )
    fetch_timeout: float = Field(
        default_factory=lambda: float(os.getenv("PDF_FETCH_TIMEOUT", "30")),
        gt=0.0,
        description="Timeout in seconds for fetching PDFs from URLs",
    )
    text_formatting: str = Field(
        default_factory=lambda: os.getenv("PDF_TEXT_FORMATTING", "raw"),
        description="Default text formatting mode",
    )
    continue_on_fail: bool = Field(
        default_factory=lambda: _env_flag("PDF_CONTINUE_ON_FAIL"),
        description="Annotate failed batch items instead of aborting",
    )
    output_property: str = Field(
        default_factory=lambda: os.getenv("PDF_OUTPUT_PROPERTY", "result"),
        min_length=1,
        description="Output key for the extracted text",
    )

    @field_validator("text_formatting")
    @classmethod
    def normalize_formatting(cls, v: str) -> str:
        """Strip and lowercase the mode name; unknown names are kept as-is."""
        return v.strip().lower()

    @field_validator("output_property")
    @classmethod
    def validate_output_property(cls, v: str) -> str:
        """Validate that the output key is not blank."""
        if not v.strip():
            raise ValueError("Output property name must not be blank")
        return v.strip()


def get_parser_config() -> ParserConfig:
    """Create parser configuration from environment.

    Returns:
        Configured ParserConfig instance.
    """
    return ParserConfig()
