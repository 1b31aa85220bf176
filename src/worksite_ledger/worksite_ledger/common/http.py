"""Small helpers shared by the JSON controllers."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, ImportFormatError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "서버 오류가 발생했습니다."


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


def ok(data: Any = None, *, message: str = "", status: int = 200):
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = to_jsonable(data)
    return jsonify(body), status


def fail(message: str, *, status: int = 400, **extra):
    body = {"success": False, "message": message}
    body.update({k: to_jsonable(v) for k, v in extra.items()})
    return jsonify(body), status


def json_api(view):
    """DomainError -> 400 with its message, anything else -> logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ImportFormatError as e:
            return fail(str(e), headers=list(e.headers))
        except DomainError as e:
            return fail(str(e))
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return fail(SERVER_ERROR_MESSAGE, status=500)

    return wrapper


def payload() -> dict:
    return request.get_json(silent=True) or {}


def date_field(data: dict, key: str = "date", *, required: bool = True) -> Optional[date]:
    raw = data.get(key)
    if isinstance(raw, str):
        raw = raw.strip()
    if not raw:
        if required:
            raise ValidationError("날짜를 입력해주세요.")
        return None
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"날짜 형식이 올바르지 않습니다: {raw!r}")


def uploaded_file() -> tuple[bytes, str]:
    f = request.files.get("file")
    if f is None or not f.filename:
        raise ValidationError("업로드할 파일을 선택해주세요.")
    return f.read(), f.filename
