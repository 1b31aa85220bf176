"""Read uploaded CSV / workbook files into header-keyed row dicts."""

from __future__ import annotations

import io
import logging
from typing import Any

import pandas as pd

from ..common.formatting import normalize_text
from ..core.exceptions import ImportFormatError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def decode_csv(data: bytes) -> str:
    """UTF-8 first (BOM stripped), then the legacy Korean code page."""
    for encoding in ("utf-8-sig", "cp949"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ImportFormatError("CSV 파일을 읽을 수 없습니다. (인코딩 확인)")


def clean_headers(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [normalize_text(c) for c in df.columns]
    return df


def _to_rows(df: pd.DataFrame) -> list[Row]:
    df = clean_headers(df).astype(object)
    df = df.where(pd.notna(df), "")
    rows = df.to_dict(orient="records")
    return [r for r in rows if any(normalize_text(v) for v in r.values())]


def read_rows(data: bytes, filename: str) -> list[Row]:
    """Load ``.csv`` as text cells; anything else as the first sheet of a workbook."""
    if not data:
        raise ImportFormatError("데이터가 없습니다.")

    lower = (filename or "").lower()
    if lower.endswith(".csv"):
        text = decode_csv(data)
        try:
            df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise ImportFormatError("CSV 업로드 오류") from e
    else:
        try:
            df = pd.read_excel(io.BytesIO(data), sheet_name=0)
        except Exception as e:
            logger.warning("Workbook read failed for %s: %s", filename, e)
            raise ImportFormatError("엑셀 업로드 오류") from e

    rows = _to_rows(df)
    logger.info("Read %s rows from %s (headers=%s)", len(rows), filename, list(df.columns))
    return rows


def headers_of(rows: list[Row]) -> list[str]:
    return list(rows[0].keys()) if rows else []
