from __future__ import annotations

from flask import Flask, request

from ..common.http import as_bool, as_optional_float, as_strict_true, current_actor, json_api, ok, pick
from ..container import Container
from .model import AttendanceRecord, ClockInRequest, ClockOutRequest, GeoPoint


def _geo(body) -> GeoPoint | None:
    lat = as_optional_float(pick(body, "lat", "latitude"), "lat")
    lng = as_optional_float(pick(body, "lng", "longitude"), "lng")
    if lat is None or lng is None:
        return None
    return GeoPoint(lat=lat, lng=lng)


def _review_dict(record: AttendanceRecord) -> dict:
    return {
        "id": record.attendance_id,
        "approval_status": record.approval_status.value,
        "overtime": record.overtime,
        "double_duty": record.double_duty,
        "overtime_approval_status": record.overtime_approval_status.value if record.overtime_approval_status else None,
        "double_duty_approval_status": (
            record.double_duty_approval_status.value if record.double_duty_approval_status else None
        ),
        "marked_by_supervisor": record.marked_by_supervisor,
        "approved_by_manager": record.approved_by_manager,
        "rejected_by": record.rejected_by,
        "rejection_reason": record.rejection_reason,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    @json_api
    def clock_in():
        actor = current_actor(container)
        body = request.get_json(silent=True) or {}
        result = container.attendance_service.clock_in(
            ClockInRequest(
                staff_id=pick(body, "staffId", "staff_id", default=""),
                supervisor_id=pick(body, "supervisorId", "supervisor_id", default=""),
                location_id=pick(body, "areaId", "locationId", "location_id", default=""),
                geo=_geo(body),
                photo_url=pick(body, "photoUrl", "photo_url"),
                overtime=as_bool(pick(body, "overtime", default=False)),
                double_duty=as_bool(pick(body, "doubleDuty", "double_duty", default=False)),
                is_override=as_strict_true(pick(body, "isOverride", "is_override", default=False)),
                attendance_date=pick(body, "attendanceDate", "attendance_date"),
            ),
            actor=actor,
        )
        return ok(result.as_dict(), 200 if result.already_processed else 201)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    @json_api
    def clock_out():
        actor = current_actor(container)
        body = request.get_json(silent=True) or {}
        result = container.attendance_service.clock_out(
            ClockOutRequest(
                staff_id=pick(body, "staffId", "staff_id", default=""),
                supervisor_id=pick(body, "supervisorId", "supervisor_id", default=""),
                location_id=pick(body, "areaId", "locationId", "location_id", default=""),
                geo=_geo(body),
                photo_url=pick(body, "photoUrl", "photo_url"),
                is_override=as_strict_true(pick(body, "isOverride", "is_override", default=False)),
                attendance_date=pick(body, "attendanceDate", "attendance_date"),
            ),
            actor=actor,
        )
        return ok(result.as_dict())

    # -- approvals ---------------------------------------------------------

    @app.route("/api/approvals/attendance/<attendance_id>/approve", methods=["PUT"], endpoint="api_approve_attendance")
    @json_api
    def approve_attendance(attendance_id: str):
        record = container.approval_service.approve(actor=current_actor(container), attendance_id=attendance_id)
        return ok(_review_dict(record))

    @app.route("/api/approvals/attendance/<attendance_id>/reject", methods=["PUT"], endpoint="api_reject_attendance")
    @json_api
    def reject_attendance(attendance_id: str):
        body = request.get_json(silent=True) or {}
        record = container.approval_service.reject(
            actor=current_actor(container),
            attendance_id=attendance_id,
            reason=pick(body, "reason"),
        )
        return ok(_review_dict(record))

    @app.route("/api/approvals/mark-overtime/<attendance_id>", methods=["PUT"], endpoint="api_mark_overtime")
    @json_api
    def mark_overtime(attendance_id: str):
        record = container.approval_service.mark_overtime(actor=current_actor(container), attendance_id=attendance_id)
        return ok(_review_dict(record))

    @app.route("/api/approvals/mark-double-duty/<attendance_id>", methods=["PUT"], endpoint="api_mark_double_duty")
    @json_api
    def mark_double_duty(attendance_id: str):
        record = container.approval_service.mark_double_duty(
            actor=current_actor(container), attendance_id=attendance_id
        )
        return ok(_review_dict(record))

    @app.route("/api/approvals/approve-overtime/<attendance_id>", methods=["PUT"], endpoint="api_approve_overtime")
    @json_api
    def approve_overtime(attendance_id: str):
        record = container.approval_service.approve_overtime(
            actor=current_actor(container), attendance_id=attendance_id
        )
        return ok(_review_dict(record))

    @app.route("/api/approvals/reject-overtime/<attendance_id>", methods=["PUT"], endpoint="api_reject_overtime")
    @json_api
    def reject_overtime(attendance_id: str):
        body = request.get_json(silent=True) or {}
        record = container.approval_service.reject_overtime(
            actor=current_actor(container),
            attendance_id=attendance_id,
            reason=pick(body, "reason"),
        )
        return ok(_review_dict(record))

    @app.route("/api/approvals/approve-double-duty/<attendance_id>", methods=["PUT"], endpoint="api_approve_double_duty")
    @json_api
    def approve_double_duty(attendance_id: str):
        record = container.approval_service.approve_double_duty(
            actor=current_actor(container), attendance_id=attendance_id
        )
        return ok(_review_dict(record))

    @app.route("/api/approvals/reject-double-duty/<attendance_id>", methods=["PUT"], endpoint="api_reject_double_duty")
    @json_api
    def reject_double_duty(attendance_id: str):
        body = request.get_json(silent=True) or {}
        record = container.approval_service.reject_double_duty(
            actor=current_actor(container),
            attendance_id=attendance_id,
            reason=pick(body, "reason"),
        )
        return ok(_review_dict(record))
