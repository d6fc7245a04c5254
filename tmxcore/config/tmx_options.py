from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SOURCE_LOCALE = "en-US"
DEFAULT_VERSION = 1.4
DEFAULT_DATATYPE = "unknown"
DEFAULT_CREATION_TOOL = "tmxcore"
DEFAULT_CREATION_TOOL_VERSION = "1.0.0"

SEGMENTATION_MODES = ("paragraph", "sentence")


class TmxOptions(BaseModel):
    """
    Construction options for a Tmx document.
    Accepts the snake_case field names as well as the camelCase spellings
    used in TMX tooling configs (sourceLocale, ...).
    """
    model_config = ConfigDict(populate_by_name=True)

    source_locale: str = Field(default=DEFAULT_SOURCE_LOCALE, alias="sourceLocale")
    version: float = DEFAULT_VERSION
    segmentation: str = "paragraph"
    datatype: str = DEFAULT_DATATYPE
    properties: Dict[str, str] = Field(default_factory=dict)
    creationtool: Optional[str] = None
    creationtoolversion: Optional[str] = None
    path: Optional[str] = None

    @field_validator("source_locale", mode="before")
    @classmethod
    def _default_empty_locale(cls, value):
        # An empty locale means "use the default", same as leaving it out
        return value or DEFAULT_SOURCE_LOCALE

    @field_validator("segmentation", mode="before")
    @classmethod
    def _known_segmentation(cls, value):
        if value not in SEGMENTATION_MODES:
            return "paragraph"
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value):
        if value is None or value == "":
            return DEFAULT_VERSION
        return float(value)

    @field_validator("properties", mode="before")
    @classmethod
    def _copy_properties(cls, value):
        # Never share the caller's dict; the header bag is mutated by add_property()
        return dict(value or {})

