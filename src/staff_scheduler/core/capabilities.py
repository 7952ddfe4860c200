from __future__ import annotations

from dataclasses import dataclass

from .enums import Plan
from .exceptions import CapabilityError


@dataclass(frozen=True)
class Capabilities:
    """What the company's plan allows.

    Passed explicitly into the clocking, reporting and employee services
    instead of being checked against a user record inline.
    """

    plan: Plan
    supports_clocking: bool
    can_access_dashboard: bool
    can_export: bool
    can_add_absence: bool
    can_import_employees: bool
    employee_limit: int

    @classmethod
    def for_plan(cls, plan: Plan | str) -> "Capabilities":
        return PLAN_CAPABILITIES[Plan(plan)]

    def require(self, flag: str, action: str) -> None:
        if not getattr(self, flag):
            raise CapabilityError(f"{action} is not available on the {self.plan.value} plan")


PLAN_CAPABILITIES: dict[Plan, Capabilities] = {
    Plan.FREE: Capabilities(
        plan=Plan.FREE,
        supports_clocking=False,
        can_access_dashboard=False,
        can_export=False,
        can_add_absence=False,
        can_import_employees=False,
        employee_limit=10,
    ),
    Plan.PRO: Capabilities(
        plan=Plan.PRO,
        supports_clocking=False,
        can_access_dashboard=True,
        can_export=True,
        can_add_absence=True,
        can_import_employees=True,
        employee_limit=100,
    ),
    Plan.PRO_PLUS: Capabilities(
        plan=Plan.PRO_PLUS,
        supports_clocking=True,
        can_access_dashboard=True,
        can_export=True,
        can_add_absence=True,
        can_import_employees=True,
        employee_limit=300,
    ),
}
