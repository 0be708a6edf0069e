"""
Configuration models and YAML I/O for kdb-ingest.

This module defines the Pydantic models that map 1:1 to a kdb-ingest YAML
config, plus helper functions for loading, saving, and generating one.

Key models:
- IngestConfig: Top-level config (source + catalog + policy + columns).
- SourceConfig: Catalog export path and quote-repair toggle.
- CatalogConfig: Academic year of the export and its local timezone.
- RowPolicyConfig: What the row builder does with rows that fail to parse.
- ColumnsConfig: Header name of every raw field in the export.

Key functions:
- load_config(path) -> IngestConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- generate_default_config(...) -> IngestConfig: Config with KdB defaults.

Why Pydantic + YAML:
- Pydantic gives strict validation and clear error messages.
- YAML is human-editable (the academic year changes every export).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from kdb_ingest.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class SourceConfig(BaseModel):
    """Source file information."""

    input_path: str = Field(..., description="Path to the KdB CSV export (UTF-8 text)")
    repair_quotes: bool = Field(
        True,
        description="If True, escape the export's unescaped double quotes before CSV decoding",
    )


class CatalogConfig(BaseModel):
    """Facts about the export that are not stored in its rows."""

    academic_year: int = Field(
        ..., ge=1900, le=2999, description="Academic year the catalog describes"
    )
    timezone: str = Field(
        "Asia/Tokyo", description="Timezone of the データ更新日 column"
    )

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value!r}") from None
        return value


class RowPolicyConfig(BaseModel):
    """Row-level error policy for the row builder."""

    on_error: Literal["raise", "skip"] = Field(
        "raise",
        description="'raise' aborts on the first unparseable row; 'skip' drops and records it",
    )
    skip_blank_course_number: bool = Field(
        True, description="If True, rows without 科目番号 are not courses and are skipped"
    )


class ColumnsConfig(BaseModel):
    """Header names of the raw catalog fields.

    Defaults are the headers of the KdB CSV export.
    """

    course_number: str = "科目番号"
    course_name: str = "科目名"
    instructional_type: str = "授業方法"
    credits: str = "単位数"
    standard_registration_year: str = "標準履修年次"
    term: str = "実施学期"
    period: str = "曜時限"
    classroom: str = "教室"
    instructor: str = "担当教員"
    course_overview: str = "授業概要"
    remarks: str = "備考"
    credited_auditors: str = "科目等履修生申請可否"
    application_conditions: str = "申請条件"
    alt_course_name: str = "英語(日本語)科目名"
    course_code: str = "科目コード"
    course_code_name: str = "要件科目名"
    updated_at: str = "データ更新日"

    @model_validator(mode="after")
    def _check_unique_headers(self) -> ColumnsConfig:
        """Validate that no two fields read the same header."""
        seen: dict[str, str] = {}
        for field_name, header in self.model_dump().items():
            if header in seen:
                raise ValueError(
                    f"Fields '{seen[header]}' and '{field_name}' both map to "
                    f"header '{header}'."
                )
            seen[header] = field_name
        return self

    def headers(self) -> list[str]:
        """All configured header names, in field order."""
        return list(self.model_dump().values())


class IngestConfig(BaseModel):
    """Top-level configuration for kdb-ingest.

    Maps 1:1 to the YAML config file.
    """

    source: SourceConfig
    catalog: CatalogConfig
    policy: RowPolicyConfig = Field(default_factory=RowPolicyConfig)
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)


def load_config(path: str | Path) -> IngestConfig:
    """Load and validate a YAML config into an IngestConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return IngestConfig.model_validate(raw)


def save_config(config: IngestConfig, path: str | Path) -> None:
    """Serialize an IngestConfig to YAML.

    Writes a human-readable YAML file with a header comment.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# kdb-ingest configuration\n")
        f.write("# Edit academic_year for each new catalog export.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)


def generate_default_config(
    input_path: str,
    academic_year: int,
    on_error: Literal["raise", "skip"] = "raise",
) -> IngestConfig:
    """Build an IngestConfig with KdB export defaults.

    Args:
        input_path: Path to the catalog export.
        academic_year: Academic year the export describes.
        on_error: Row error policy.

    Returns:
        A fully populated IngestConfig.
    """
    return IngestConfig(
        source=SourceConfig(input_path=input_path),
        catalog=CatalogConfig(academic_year=academic_year),
        policy=RowPolicyConfig(on_error=on_error),
    )
