from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SECTIONS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .faculty.mysql_faculty_repository import MySQLFacultyRepository
from .faculty.repository import FacultyRepository
from .faculty.service import FacultyService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    students_repo: StudentRepository
    faculty_repo: FacultyRepository
    timetable_repo: TimetableRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    faculty_service: FacultyService
    timetable_service: TimetableService
    attendance_service: AttendanceService
    dashboard_service: DashboardService

    sections: tuple[str, ...] = DEFAULT_SECTIONS
    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    students_repo: StudentRepository,
    faculty_repo: FacultyRepository,
    timetable_repo: TimetableRepository,
    attendance_repo: AttendanceRepository,
    sections: tuple[str, ...] = DEFAULT_SECTIONS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over any repository implementations (MySQL or in-memory)."""
    student_service = StudentService(students_repo)
    faculty_service = FacultyService(faculty_repo)
    timetable_service = TimetableService(timetable_repo)
    attendance_service = AttendanceService(attendance_repo, students_repo)
    auth_service = AuthService(users_repo, student_service, faculty_service)
    dashboard_service = DashboardService(
        students=student_service,
        faculty=faculty_service,
        timetable=timetable_service,
        attendance=attendance_service,
    )

    return Container(
        users_repo=users_repo,
        students_repo=students_repo,
        faculty_repo=faculty_repo,
        timetable_repo=timetable_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        student_service=student_service,
        faculty_service=faculty_service,
        timetable_service=timetable_service,
        attendance_service=attendance_service,
        dashboard_service=dashboard_service,
        sections=tuple(sections),
        conn=conn,
    )


def build_container(*, db_config: dict, sections: tuple[str, ...] = DEFAULT_SECTIONS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        faculty_repo=MySQLFacultyRepository(conn),
        timetable_repo=MySQLTimetableRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        sections=sections,
        conn=conn,
    )
