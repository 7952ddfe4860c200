from __future__ import annotations

from dataclasses import dataclass

from .absences.service import AbsenceService
from .attendance.repository import ClockWriter
from .attendance.service import ClockService
from .company.repository import CompanyDataSource, ItemWriter
from .config.loader import Settings
from .core.capabilities import Capabilities
from .employees.service import EmployeeService
from .holidays.service import SpecialDayService
from .logging_config import configure_logging
from .reports.factory import HoursCalculatorFactory
from .reports.service import ReportService
from .requests.service import RequestService
from .schedules.service import ScheduleService
from .shifts.repository import ShiftWriter


@dataclass(frozen=True)
class Container:
    settings: Settings
    capabilities: Capabilities

    source: CompanyDataSource
    shift_writer: ShiftWriter
    clock_writer: ClockWriter
    item_writer: ItemWriter

    schedule_service: ScheduleService
    clock_service: ClockService
    report_service: ReportService
    employee_service: EmployeeService
    absence_service: AbsenceService
    special_day_service: SpecialDayService
    request_service: RequestService


def build_container(
    *,
    source: CompanyDataSource,
    shift_writer: ShiftWriter,
    clock_writer: ClockWriter,
    item_writer: ItemWriter,
    settings: Settings,
) -> Container:
    configure_logging(settings.log_level)
    capabilities = settings.capabilities

    schedule_service = ScheduleService(shift_writer)
    clock_service = ClockService(
        clock_writer,
        capabilities,
        grace_minutes=settings.clock_in_grace_minutes,
        auto_close_after_minutes=settings.auto_clock_out_after_minutes,
    )
    report_service = ReportService(capabilities, calculator_factory=HoursCalculatorFactory())
    employee_service = EmployeeService(item_writer, shift_writer, capabilities)
    absence_service = AbsenceService(item_writer, capabilities)
    special_day_service = SpecialDayService(item_writer)
    request_service = RequestService(item_writer)

    return Container(
        settings=settings,
        capabilities=capabilities,
        source=source,
        shift_writer=shift_writer,
        clock_writer=clock_writer,
        item_writer=item_writer,
        schedule_service=schedule_service,
        clock_service=clock_service,
        report_service=report_service,
        employee_service=employee_service,
        absence_service=absence_service,
        special_day_service=special_day_service,
        request_service=request_service,
    )
