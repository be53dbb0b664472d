from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from types import ModuleType

from .analytics.mysql_analytics_repository import MySQLAnalyticsRepository
from .analytics.service import AnalyticsService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_BREAK_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .reports.mysql_report_repository import MySQLDailyReportRepository
from .reports.service import DailyReportService
from .settings.mysql_setting_repository import MySQLSettingRepository
from .tags.mysql_tag_repository import MySQLTagRepository
from .tags.notion_client import NotionClient
from .tags.service import TagService
from .tags.sync_service import TagSyncService
from .users.mysql_department_repository import MySQLDepartmentRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    """Everything the HTTP layer needs; tests build one from fakes."""

    conn: DatabaseConnection | None

    token_service: TokenService
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: DailyReportService
    analytics_service: AnalyticsService
    tag_service: TagService
    tag_sync_service: TagSyncService


def build_container(*, settings: ModuleType) -> Container:
    db_config = getattr(settings, "DB_CONFIG")
    conn = DatabaseConnection(
        DBConfig.from_dict(db_config, pool_size=int(getattr(settings, "DB_POOL_SIZE", 5))),
    )
    clock = partial(now_local, getattr(settings, "APP_TIMEZONE", None))

    users_repo = MySQLUserRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    reports_repo = MySQLDailyReportRepository(conn)
    tags_repo = MySQLTagRepository(conn)
    settings_repo = MySQLSettingRepository(conn)
    analytics_repo = MySQLAnalyticsRepository(conn)

    token_service = TokenService(
        secret=getattr(settings, "JWT_SECRET"),
        refresh_secret=getattr(settings, "JWT_REFRESH_SECRET"),
    )

    def notion_client() -> NotionClient:
        return NotionClient(
            api_key=getattr(settings, "NOTION_API_KEY", ""),
            database_id=getattr(settings, "NOTION_DATABASE_ID", ""),
        )

    return Container(
        conn=conn,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        user_service=UserService(users_repo, departments_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            strategy_factory=AttendanceStrategyFactory(),
            clock=clock,
            default_break_minutes=DEFAULT_BREAK_MINUTES,
            timezone=getattr(settings, "APP_TIMEZONE", None),
        ),
        report_service=DailyReportService(reports_repo, tags_repo),
        analytics_service=AnalyticsService(analytics_repo, today=lambda: clock().date()),
        tag_service=TagService(tags_repo),
        tag_sync_service=TagSyncService(tags_repo, settings_repo, client_factory=notion_client, clock=clock),
    )
