"""
kdb-ingest: Python library for normalizing KdB course-catalog exports.

Public API surface:

- ``ingest(config)`` -- read the catalog export named by an ``IngestConfig``
  (or a YAML config path) and build one normalized record per course.
  Returns a ``BuildResult``.

- Notation parsers, usable on single cells:
  ``parse_terms``, ``term_codes``, ``expand_registration_years``,
  ``parse_periods``, ``format_periods``, ``parse_credited_auditors``,
  ``split_instructors``, ``parse_updated_at``.

The library reads already-decoded text and returns Python values and
pandas DataFrames; writing the records to a database is up to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kdb_ingest.builder import BuildResult, CourseRecord, build_course_record, build_courses
from kdb_ingest.config import IngestConfig, load_config
from kdb_ingest.notation import (
    CreditedAuditors,
    PeriodToken,
    SpecialMarker,
    TermLabel,
    Weekday,
    expand_registration_years,
    format_periods,
    parse_credited_auditors,
    parse_periods,
    parse_terms,
    parse_updated_at,
    split_instructors,
    term_codes,
    term_label_for_code,
)
from kdb_ingest.reader import read_catalog

__all__ = [
    "BuildResult",
    "CourseRecord",
    "CreditedAuditors",
    "IngestConfig",
    "PeriodToken",
    "SpecialMarker",
    "TermLabel",
    "Weekday",
    "build_course_record",
    "build_courses",
    "expand_registration_years",
    "format_periods",
    "ingest",
    "parse_credited_auditors",
    "parse_periods",
    "parse_terms",
    "parse_updated_at",
    "split_instructors",
    "term_codes",
    "term_label_for_code",
]

logger = logging.getLogger(__name__)


def ingest(config: IngestConfig | str | Path) -> BuildResult:
    """Read a catalog export and build normalized course records.

    Orchestration:
      1. ``load_config()`` if *config* is a path.
      2. ``read_catalog()`` -> raw string DataFrame (quote repair per config).
      3. ``build_courses()`` -> ``BuildResult``.

    Args:
        config: An ``IngestConfig`` or a path to its YAML file.

    Returns:
        ``BuildResult`` with the records DataFrame and row statistics.

    Raises:
        FileNotFoundError: If the config or catalog file does not exist.
        pydantic.ValidationError: If the YAML config fails validation.
        CatalogFormatError: If the export lacks a configured column.
        RowParsingError: On the first bad row when ``on_error="raise"``.
    """
    if not isinstance(config, IngestConfig):
        logger.info("ingest() -- loading config from %s", config)
        config = load_config(config)

    logger.info(
        "ingest() -- input_path=%s, academic_year=%d, on_error=%s",
        config.source.input_path,
        config.catalog.academic_year,
        config.policy.on_error,
    )

    df = read_catalog(
        config.source.input_path,
        repair=config.source.repair_quotes,
        required_columns=config.columns.headers(),
    )
    result = build_courses(df, config)

    logger.info(
        "ingest() -- %d records built, %d rows rejected",
        result.rows_built,
        len(result.errors),
    )
    return result
