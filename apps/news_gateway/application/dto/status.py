"""Status DTOs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    """헬스 상태 스냅샷 (읽기 전용)."""

    status: str
    cache_entry_count: int
    limiter_entry_count: int
    has_upstream_credential: bool


@dataclass(frozen=True)
class ClearStateResult:
    """전체 초기화 결과."""

    cache_entries_removed: int
    limiter_entries_removed: int
