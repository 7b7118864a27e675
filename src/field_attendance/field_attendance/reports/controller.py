from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_api, ok
from ..container import Container
from ..core.exceptions import AuthorizationError
from ..users.roles import has_field_leadership_privileges


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    @json_api
    def attendance_report():
        actor = current_actor(container)
        if not has_field_leadership_privileges(actor.role):
            raise AuthorizationError(f"User role '{actor.role}' is not authorized to view attendance reports")

        args = request.args
        rows = container.report_service.generate_report(
            date_from=args.get("dateFrom", ""),
            date_to=args.get("dateTo", ""),
            supervisor_id=args.get("supervisorId"),
            location_id=args.get("areaId") or args.get("locationId"),
            status=args.get("status"),
        )
        return ok([row.as_dict() for row in rows])
