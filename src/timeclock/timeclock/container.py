from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import LatenessStrategyFactory
from .attendance.mysql_action_log_repository import MySQLActionLogRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import ActionLogRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .reports.service import ReportService
from .summaries.mysql_summary_repository import MySQLSummaryRepository
from .summaries.repository import SummaryRepository
from .summaries.service import SummaryService
from .summaries.summarizer import ShiftSummarizer


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    policy: AttendancePolicy

    actions_repo: ActionLogRepository
    summaries_repo: SummaryRepository
    employees_repo: EmployeeRepository

    summarizer: ShiftSummarizer
    attendance_service: AttendanceService
    summary_service: SummaryService
    report_service: ReportService


def assemble(
    *,
    actions_repo: ActionLogRepository,
    summaries_repo: SummaryRepository,
    employees_repo: EmployeeRepository,
    policy: AttendancePolicy,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    summarizer = ShiftSummarizer(
        actions_repo,
        summaries_repo,
        policy=policy,
        lateness=LatenessStrategyFactory().for_policy(policy),
    )
    attendance_service = AttendanceService(actions_repo, summarizer, employees_repo, policy=policy)

    return Container(
        conn=conn,
        policy=policy,
        actions_repo=actions_repo,
        summaries_repo=summaries_repo,
        employees_repo=employees_repo,
        summarizer=summarizer,
        attendance_service=attendance_service,
        summary_service=SummaryService(summaries_repo),
        report_service=ReportService(summaries_repo, employees_repo),
    )


def build_container(*, db_config: dict, policy_settings: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return assemble(
        actions_repo=MySQLActionLogRepository(conn),
        summaries_repo=MySQLSummaryRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        policy=AttendancePolicy.from_settings(policy_settings),
        conn=conn,
    )
