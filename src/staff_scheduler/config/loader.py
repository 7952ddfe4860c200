from __future__ import annotations

import importlib
from dataclasses import dataclass

from dotenv import load_dotenv

from ..core.capabilities import Capabilities
from ..core.constants import (
    DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES,
    DEFAULT_AUTO_CLOCK_OUT_INTERVAL_SECONDS,
    DEFAULT_CLOCK_IN_GRACE_MINUTES,
    DEFAULT_INBOX_POLL_INTERVAL_SECONDS,
)
from ..core.enums import Plan
from ..core.exceptions import ValidationError
from . import get_settings_module


@dataclass(frozen=True)
class Settings:
    module: str
    company_id: str
    plan: Plan
    clock_in_grace_minutes: int = DEFAULT_CLOCK_IN_GRACE_MINUTES
    auto_clock_out_after_minutes: int = DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES
    auto_clock_out_interval_seconds: int = DEFAULT_AUTO_CLOCK_OUT_INTERVAL_SECONDS
    inbox_poll_interval_seconds: int = DEFAULT_INBOX_POLL_INTERVAL_SECONDS
    log_level: str = "INFO"
    debug: bool = False

    @property
    def capabilities(self) -> Capabilities:
        return Capabilities.for_plan(self.plan)


def load_settings(module: str | None = None) -> Settings:
    """Read ``.env`` (without overriding the environment) and the settings module for APP_ENV."""
    load_dotenv(override=False)

    settings_module = module or get_settings_module()
    settings = importlib.import_module(settings_module)

    plan = str(getattr(settings, "PLAN", Plan.FREE.value)).lower()
    try:
        plan_enum = Plan(plan)
    except ValueError:
        raise ValidationError(f"Unknown plan {plan!r} in {settings_module}")

    return Settings(
        module=settings_module,
        company_id=str(getattr(settings, "COMPANY_ID", "")),
        plan=plan_enum,
        clock_in_grace_minutes=int(getattr(settings, "CLOCK_IN_GRACE_MINUTES", DEFAULT_CLOCK_IN_GRACE_MINUTES)),
        auto_clock_out_after_minutes=int(
            getattr(settings, "AUTO_CLOCK_OUT_AFTER_MINUTES", DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES)
        ),
        auto_clock_out_interval_seconds=int(
            getattr(settings, "AUTO_CLOCK_OUT_INTERVAL_SECONDS", DEFAULT_AUTO_CLOCK_OUT_INTERVAL_SECONDS)
        ),
        inbox_poll_interval_seconds=int(
            getattr(settings, "INBOX_POLL_INTERVAL_SECONDS", DEFAULT_INBOX_POLL_INTERVAL_SECONDS)
        ),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
