from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_api, ok, pick
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/system/config", methods=["GET"], endpoint="api_get_system_config")
    @json_api
    def get_config():
        current_actor(container)
        return ok(container.system_config_service.get_config().as_dict())

    @app.route("/api/system/config", methods=["PUT"], endpoint="api_update_system_config")
    @json_api
    def update_config():
        body = request.get_json(silent=True) or {}
        updated = container.system_config_service.update_config(
            actor=current_actor(container),
            grace_period_minutes=pick(body, "gracePeriodMinutes", "grace_period_minutes"),
            min_clock_interval_hours=pick(body, "minClockIntervalHours", "min_clock_interval_hours"),
        )
        return ok(updated.as_dict())
