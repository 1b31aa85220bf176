from __future__ import annotations

from enum import Enum


class SiteStatus(str, Enum):
    """현장 진행 상태."""

    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"


class ChecklistType(str, Enum):
    RECEIVABLE = "receivable"
    PAYABLE = "payable"
    TASK = "task"


class ChecklistStatus(str, Enum):
    PENDING = "pending"
    INVOICED = "invoiced"
    COMPLETED = "completed"


class ChangeType(str, Enum):
    """원격 저장소가 보내는 행 변경 이벤트 종류."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
