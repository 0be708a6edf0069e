"""
Row builder for kdb-ingest.

Turns the raw string rows produced by ``reader.py`` into normalized course
records by feeding each raw field through its notation parser:

  標準履修年次   -> expand_registration_years  -> list[str]
  実施学期       -> parse_terms + term_codes   -> list[int]
  曜時限         -> parse_periods              -> sorted list[str]
  担当教員       -> split_instructors          -> list[str]
  科目等履修生.. -> parse_credited_auditors    -> int
  データ更新日   -> parse_updated_at           -> pd.Timestamp (tz-aware)

Free-text fields are kept as-is, with empty cells mapped to ``None``.

The notation parsers only raise; this module owns the row-level policy.
A parser failure is wrapped in ``RowParsingError`` (field name, raw value,
row index) and then either raised or recorded, depending on
``RowPolicyConfig.on_error``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any, TypeVar

import pandas as pd

from kdb_ingest.config import ColumnsConfig, IngestConfig
from kdb_ingest.exceptions import CatalogFormatError, RowParsingError
from kdb_ingest.notation.auditors import parse_credited_auditors
from kdb_ingest.notation.dates import DEFAULT_TIMEZONE, parse_updated_at
from kdb_ingest.notation.instructors import split_instructors
from kdb_ingest.notation.periods import parse_periods, sorted_periods
from kdb_ingest.notation.terms import parse_terms, term_codes
from kdb_ingest.notation.years import expand_registration_years

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CourseRecord:
    """One normalized catalog entry, ready for a row sink."""

    course_number: str
    course_name: str
    instructional_type: int
    credits: str
    standard_registration_year: list[str]
    term: list[int]
    period: list[str]
    classroom: str | None
    instructor: list[str]
    course_overview: str | None
    remarks: str | None
    credited_auditors: int
    application_conditions: str | None
    alt_course_name: str | None
    course_code: str | None
    course_code_name: str | None
    csv_updated_at: pd.Timestamp
    year: int


RECORD_COLUMNS = [f.name for f in fields(CourseRecord)]


@dataclass
class BuildResult:
    """Output of ``build_courses()``.

    Attributes:
        df: One row per built record, columns ``RECORD_COLUMNS``.
        rows_total: Rows in the input DataFrame.
        rows_skipped_blank: Rows skipped for having no course number.
        errors: Row errors that were skipped under ``on_error="skip"``.
    """

    df: pd.DataFrame
    rows_total: int = 0
    rows_skipped_blank: int = 0
    errors: list[RowParsingError] = field(default_factory=list)

    @property
    def rows_built(self) -> int:
        return len(self.df)


def _optional_text(value: str) -> str | None:
    return value if value else None


def _parse_instructional_type(text: str) -> int:
    return int(text.strip())


def _parse_field(
    field_name: str,
    raw: str,
    parser: Callable[[str], T],
    row_index: object,
) -> T:
    """Run ``parser`` on one cell, wrapping failures in RowParsingError."""
    try:
        return parser(raw)
    except ValueError as exc:
        # NotationError subclasses ValueError; int() raises it directly
        raise RowParsingError(field_name, raw, row_index, reason=str(exc)) from exc


def build_course_record(
    row: Mapping[str, Any],
    academic_year: int,
    timezone: str = DEFAULT_TIMEZONE,
    columns: ColumnsConfig | None = None,
    row_index: object = None,
) -> CourseRecord:
    """Build one ``CourseRecord`` from a raw catalog row.

    Args:
        row: Mapping of header name -> raw cell text (a DataFrame row works).
        academic_year: Academic year stored on every record.
        timezone: Timezone of the データ更新日 column.
        columns: Header names; defaults to the KdB export headers.
        row_index: Position of the row, used in error messages.

    Raises:
        RowParsingError: If any field fails its notation parser.
    """
    if columns is None:
        columns = ColumnsConfig()

    def cell(field_name: str) -> str:
        return str(row[getattr(columns, field_name)])

    def parse(field_name: str, parser: Callable[[str], T]) -> T:
        return _parse_field(field_name, cell(field_name), parser, row_index)

    return CourseRecord(
        course_number=cell("course_number").strip(),
        course_name=cell("course_name"),
        instructional_type=parse("instructional_type", _parse_instructional_type),
        credits=cell("credits").strip(),
        standard_registration_year=parse(
            "standard_registration_year", expand_registration_years
        ),
        term=parse("term", lambda text: term_codes(parse_terms(text))),
        period=parse(
            "period", lambda text: [str(t) for t in sorted_periods(parse_periods(text))]
        ),
        classroom=_optional_text(cell("classroom")),
        instructor=parse("instructor", split_instructors),
        course_overview=_optional_text(cell("course_overview")),
        remarks=_optional_text(cell("remarks")),
        credited_auditors=int(parse("credited_auditors", parse_credited_auditors)),
        application_conditions=_optional_text(cell("application_conditions")),
        alt_course_name=_optional_text(cell("alt_course_name")),
        course_code=_optional_text(cell("course_code")),
        course_code_name=_optional_text(cell("course_code_name")),
        csv_updated_at=parse("updated_at", lambda text: parse_updated_at(text, timezone)),
        year=academic_year,
    )


def build_courses(df: pd.DataFrame, config: IngestConfig) -> BuildResult:
    """Build normalized records for every course row of a catalog DataFrame.

    Rows without a course number are skipped when
    ``policy.skip_blank_course_number`` is set (they are section headings
    or notes, not courses). Rows that fail to parse are handled according
    to ``policy.on_error``.

    Args:
        df: Raw catalog rows from ``read_catalog()``.
        config: The validated IngestConfig.

    Returns:
        BuildResult with the records DataFrame and row statistics.

    Raises:
        CatalogFormatError: If a configured header is missing from ``df``.
        RowParsingError: On the first bad row when ``on_error="raise"``.
    """
    columns = config.columns
    missing = [h for h in columns.headers() if h not in df.columns]
    if missing:
        raise CatalogFormatError(
            f"Expected columns {missing} not found. "
            f"Columns found: {list(df.columns[:20])}"
        )

    records: list[CourseRecord] = []
    errors: list[RowParsingError] = []
    skipped_blank = 0

    for index, row in df.iterrows():
        if config.policy.skip_blank_course_number and not str(
            row[columns.course_number]
        ).strip():
            logger.debug("Row %s: no course number, skipping", index)
            skipped_blank += 1
            continue

        try:
            record = build_course_record(
                row,
                academic_year=config.catalog.academic_year,
                timezone=config.catalog.timezone,
                columns=columns,
                row_index=index,
            )
        except RowParsingError as exc:
            if config.policy.on_error == "raise":
                raise
            logger.warning("Skipping %s", exc)
            errors.append(exc)
            continue

        records.append(record)

    result_df = pd.DataFrame([asdict(r) for r in records], columns=RECORD_COLUMNS)
    logger.info(
        "Built %d course records (%d rows, %d blank, %d rejected)",
        len(records),
        len(df),
        skipped_blank,
        len(errors),
    )
    return BuildResult(
        df=result_df,
        rows_total=len(df),
        rows_skipped_blank=skipped_blank,
        errors=errors,
    )
