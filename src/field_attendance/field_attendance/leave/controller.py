from __future__ import annotations

from flask import Flask, request

from ..common.http import current_actor, json_api, ok, pick
from ..container import Container
from .model import LeaveRequest


def _leave_dict(leave: LeaveRequest) -> dict:
    return {
        "id": leave.request_id,
        "staff_id": leave.staff_id,
        "supervisor_id": leave.supervisor_id,
        "leave_type": leave.leave_type,
        "start_date": leave.start_date,
        "end_date": leave.end_date,
        "reason": leave.reason,
        "status": leave.status.value,
        "approved_by": leave.approved_by,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave", methods=["POST"], endpoint="api_create_leave")
    @json_api
    def create_leave():
        actor = current_actor(container)
        body = request.get_json(silent=True) or {}
        leave = container.leave_service.create_leave(
            staff_id=actor.user_id,
            leave_type=pick(body, "leaveType", "leave_type", default=""),
            start_date=pick(body, "startDate", "start_date", default=""),
            end_date=pick(body, "endDate", "end_date", default=""),
            supervisor_id=pick(body, "supervisorId", "supervisor_id"),
            reason=pick(body, "reason", default=""),
        )
        return ok(_leave_dict(leave), 201)

    @app.route("/api/leave/<request_id>/status", methods=["PUT"], endpoint="api_update_leave_status")
    @json_api
    def update_leave_status(request_id: str):
        body = request.get_json(silent=True) or {}
        leave = container.leave_service.update_status(
            actor=current_actor(container),
            request_id=request_id,
            status=pick(body, "status", default=""),
        )
        return ok(_leave_dict(leave))
