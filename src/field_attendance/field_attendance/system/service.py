from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from ..common.validators import require_float_between, require_int_between
from ..core.constants import MAX_GRACE_PERIOD_MINUTES, MAX_MIN_CLOCK_INTERVAL_HOURS
from ..core.exceptions import AuthorizationError
from ..users.model import StaffMember
from ..users.roles import has_full_control
from .model import SystemConfig
from .repository import SystemConfigRepository

logger = logging.getLogger(__name__)


class SystemConfigService:
    def __init__(self, configs: SystemConfigRepository):
        self._configs = configs

    def get_config(self) -> SystemConfig:
        return self._configs.load() or SystemConfig()

    def update_config(
        self,
        *,
        actor: StaffMember,
        grace_period_minutes: Optional[Any] = None,
        min_clock_interval_hours: Optional[Any] = None,
    ) -> SystemConfig:
        if not has_full_control(actor.role):
            raise AuthorizationError(f"User role '{actor.role}' is not authorized to change system configuration")

        changes: dict = {}
        if grace_period_minutes is not None:
            changes["grace_period_minutes"] = require_int_between(
                grace_period_minutes, "Grace period", 0, MAX_GRACE_PERIOD_MINUTES
            )
        if min_clock_interval_hours is not None:
            changes["min_clock_interval_hours"] = require_float_between(
                min_clock_interval_hours, "Minimum clock interval", 0.0, MAX_MIN_CLOCK_INTERVAL_HOURS
            )

        updated = replace(self.get_config(), **changes)
        self._configs.save(updated)
        logger.info("System config updated by %s: %s", actor.user_id, updated.as_dict())
        return updated
