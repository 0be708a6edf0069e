"""
Shared test fixtures for kdb-ingest tests.

The catalog fixtures build small synthetic KdB exports in the same shape
as the real download: every field wrapped in double quotes, CRLF line
breaks, and double quotes inside fields left unescaped.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

# ---------------------------------------------------------------------------
# Catalog layout -- header names of the KdB CSV export, in export order
# ---------------------------------------------------------------------------
HEADERS = [
    "科目番号",
    "科目名",
    "授業方法",
    "単位数",
    "標準履修年次",
    "実施学期",
    "曜時限",
    "教室",
    "担当教員",
    "授業概要",
    "備考",
    "科目等履修生申請可否",
    "申請条件",
    "英語(日本語)科目名",
    "科目コード",
    "要件科目名",
    "データ更新日",
]

DEFAULT_ROW = {
    "科目番号": "GB10101",
    "科目名": "情報科学概論",
    "授業方法": "1",
    "単位数": " 2.0 ",
    "標準履修年次": "1・2",
    "実施学期": "春AB",
    "曜時限": "月・木1-2",
    "教室": "3A204",
    "担当教員": "筑波 太郎,筑波 花子",
    "授業概要": "情報科学の基礎を学ぶ。",
    "備考": "",
    "科目等履修生申請可否": "△",
    "申請条件": "",
    "英語(日本語)科目名": "Introduction to Information Science",
    "科目コード": "GB10101",
    "要件科目名": "",
    "データ更新日": "2021-03-01 14:27:49",
}


def _quoted_line(values: list[str]) -> str:
    # The export quotes every field and never escapes inner quotes.
    return '"' + '","'.join(values) + '"'


def build_catalog_text(rows: list[dict[str, str]]) -> str:
    """Render rows (overrides of DEFAULT_ROW) as a raw KdB export."""
    lines = [_quoted_line(HEADERS)]
    for overrides in rows:
        row = {**DEFAULT_ROW, **overrides}
        lines.append(_quoted_line([row[h] for h in HEADERS]))
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture()
def make_catalog_text() -> Callable[[list[dict[str, str]]], str]:
    return build_catalog_text


@pytest.fixture()
def sample_catalog_text() -> str:
    """Three courses plus one heading row without a course number."""
    return build_catalog_text([
        {},
        {
            "科目番号": "GB20201",
            "科目名": "データ構造",
            "標準履修年次": "2",
            "実施学期": "秋C 春季休業中",
            "曜時限": "応談78 木1",
            "授業概要": 'テキスト"アルゴリズム入門"を輪読する。',
            "科目等履修生申請可否": "×",
        },
        {
            "科目番号": "",
            "科目名": "【専門科目】",
            "曜時限": "",
            "データ更新日": "",
        },
        {
            "科目番号": "GB30301",
            "科目名": "卒業研究",
            "標準履修年次": "?",
            "実施学期": "通年",
            "曜時限": "随時",
            "担当教員": "",
            "科目等履修生申請可否": "",
        },
    ])


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the full ingest on a file)",
    )
