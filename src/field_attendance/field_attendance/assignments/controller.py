from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_api, ok, pick
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/assignments", methods=["POST"], endpoint="api_create_assignment")
    @json_api
    def create_assignment():
        body = request.get_json(silent=True) or {}
        assignment = container.assignment_service.assign_staff(
            actor=current_actor(container),
            staff_id=pick(body, "staffId", "staff_id", default=""),
            supervisor_id=pick(body, "supervisorId", "supervisor_id", default=""),
            location_id=pick(body, "areaId", "locationId", "location_id", default=""),
        )
        return ok(
            {
                "id": assignment.assignment_id,
                "staff_id": assignment.staff_id,
                "supervisor_id": assignment.supervisor_id,
                "area_id": assignment.location_id,
                "is_active": assignment.is_active,
            },
            201,
        )

    @app.route("/api/assignments/<assignment_id>/deactivate", methods=["PUT"], endpoint="api_deactivate_assignment")
    @json_api
    def deactivate_assignment(assignment_id: str):
        container.assignment_service.deactivate(actor=current_actor(container), assignment_id=assignment_id)
        return ok({"id": assignment_id, "is_active": False})

    @app.route("/api/assignments/supervisor-locations", methods=["POST"], endpoint="api_assign_supervisor_location")
    @json_api
    def assign_supervisor_location():
        body = request.get_json(silent=True) or {}
        mapping = container.assignment_service.assign_supervisor_location(
            actor=current_actor(container),
            supervisor_id=pick(body, "supervisorId", "supervisor_id", default=""),
            location_id=pick(body, "areaId", "locationId", "location_id", default=""),
        )
        return ok(
            {"id": mapping.mapping_id, "supervisor_id": mapping.supervisor_id, "area_id": mapping.location_id},
            201,
        )
