from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..container import Container
from .service import Viewer


def _optional_int(value) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"숫자가 아닌 값입니다: {value}")


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Unauthorized"}), 401
            try:
                g.viewer = Viewer(
                    user_id=int(session["user_id"]),
                    role=Role(session.get("role")),
                    company_id=_optional_int(session.get("company_id")),
                )
            except (TypeError, ValueError, ValidationError):
                return jsonify({"error": "Unauthorized"}), 401
            return view(*args, **kwargs)

        return wrapper

    def manager_required(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if not g.viewer.manages_payroll:
                return jsonify({"error": "Forbidden"}), 403
            return view(*args, **kwargs)

        return wrapper

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"error": str(e)}), 400
            except AuthorizationError as e:
                return jsonify({"error": str(e)}), 403
            except NotFoundError as e:
                return jsonify({"error": str(e)}), 404
            except InvalidTransitionError as e:
                return jsonify({"error": str(e)}), 409
            except Exception:
                app.logger.exception("unhandled error in %s", request.path)
                return jsonify({"error": "Internal Server Error"}), 500

        return wrapper

    @app.route("/api/salaries", methods=["GET"], endpoint="list_salaries")
    @login_required
    @json_errors
    def list_salaries():
        args = request.args
        page = container.payroll_service.list_payrolls(
            viewer=g.viewer,
            staff_id=_optional_int(args.get("staffId")),
            year=_optional_int(args.get("year")),
            month=_optional_int(args.get("month")),
            status=args.get("status") or None,
            page=_optional_int(args.get("page")) or 1,
            limit=_optional_int(args.get("limit")) or container.page_limit,
        )
        return jsonify(
            {
                "data": [r.to_dict() for r in page.data],
                "pagination": {
                    "page": page.page,
                    "limit": page.limit,
                    "total": page.total,
                    "totalPages": page.total_pages,
                },
            }
        )

    @app.route("/api/salaries/calculate", methods=["POST"], endpoint="calculate_salaries")
    @manager_required
    @json_errors
    def calculate_salaries():
        body = request.get_json(silent=True) or {}
        result = container.payroll_service.calculate_monthly(
            viewer=g.viewer,
            year=body.get("year"),
            month=body.get("month"),
            staff_id=_optional_int(body.get("staffId")),
            company_id=_optional_int(body.get("companyId")),
        )
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "data": [r.to_dict() for r in result.records],
                "failures": [{"staffId": f.staff_id, "error": f.error} for f in result.failures],
            }
        )

    @app.route("/api/salaries/preview", methods=["POST"], endpoint="preview_salaries")
    @manager_required
    @json_errors
    def preview_salaries():
        body = request.get_json(silent=True) or {}
        records = container.payroll_service.preview_monthly(
            viewer=g.viewer,
            year=body.get("year"),
            month=body.get("month"),
            staff_id=_optional_int(body.get("staffId")),
            company_id=_optional_int(body.get("companyId")),
        )
        return jsonify({"data": [r.to_dict() for r in records]})

    @app.route("/api/salaries/<int:payroll_id>/confirm", methods=["POST"], endpoint="confirm_salary")
    @manager_required
    @json_errors
    def confirm_salary(payroll_id: int):
        record = container.payroll_service.confirm(viewer=g.viewer, payroll_id=payroll_id)
        return jsonify({"success": True, "data": record.to_dict()})

    @app.route("/api/salaries/<int:payroll_id>/pay", methods=["POST"], endpoint="pay_salary")
    @manager_required
    @json_errors
    def pay_salary(payroll_id: int):
        record = container.payroll_service.mark_paid(viewer=g.viewer, payroll_id=payroll_id)
        return jsonify({"success": True, "data": record.to_dict()})
