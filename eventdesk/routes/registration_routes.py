import traceback
from flask import Blueprint, jsonify, request, current_app
from flask_cors import cross_origin
from flask_jwt_extended import jwt_required, get_jwt_identity
from eventdesk.extensions import db, limiter
from eventdesk.exceptions import (
    CheckInError,
    MissingFieldsError,
    NotFoundError,
    UnauthorizedError,
)
from eventdesk.services.check_in_service import CheckInService
from eventdesk.services.event_service import EventService
from eventdesk.services.registration_service import RegistrationService

registration_bp = Blueprint("registration", __name__)


def error_response(error: str, status_code: int, reason=None, debug=None, **extra):
    body = {"error": error, **extra}
    if reason:
        body["reason"] = reason
    if debug and current_app.config.get("INCLUDE_DEBUG_PAYLOADS"):
        body["debug"] = debug
    return jsonify(body), status_code


@registration_bp.route("/events/<int:event_id>", methods=["GET", "OPTIONS"])
@cross_origin(supports_credentials=True)
@jwt_required()
def get_event(event_id):
    if request.method == "OPTIONS":
        return "", 204

    current_user_id = get_jwt_identity()
    try:
        event = EventService.get_owned_event(event_id, current_user_id)
    except NotFoundError as e:
        return jsonify({"error": e.message}), 404
    except UnauthorizedError:
        return jsonify({"error": "Unauthorized to view this event"}), 403

    return jsonify(event.to_dict()), 200


@registration_bp.route("/events/<int:event_id>/registrations", methods=["GET", "OPTIONS"])
@cross_origin(supports_credentials=True)
@jwt_required()
def get_registrations(event_id):
    if request.method == "OPTIONS":
        return "", 204

    current_user_id = get_jwt_identity()
    try:
        EventService.get_owned_event(event_id, current_user_id)
    except NotFoundError as e:
        return jsonify({"error": e.message}), 404
    except UnauthorizedError:
        return jsonify({"error": "Unauthorized to view registrations for this event"}), 403

    registrations = RegistrationService.get_registrations(event_id)
    return jsonify([registration.to_dict() for registration in registrations]), 200


@registration_bp.route("/events/<int:event_id>/registrations", methods=["POST"])
@cross_origin(supports_credentials=True)
@jwt_required()
def create_registration(event_id):
    current_user_id = get_jwt_identity()
    try:
        event = EventService.get_owned_event(event_id, current_user_id)
    except NotFoundError as e:
        return jsonify({"error": e.message}), 404
    except UnauthorizedError:
        return jsonify({"error": "Unauthorized to register attendees for this event"}), 403

    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "No data provided"}), 400

    try:
        result = RegistrationService.create_registration(event, data)
    except MissingFieldsError as e:
        return (
            jsonify({"error": "Missing required fields", "missing_fields": e.fields}),
            400,
        )
    except Exception as e:
        current_app.logger.error(
            f"Error creating registration for event {event_id}: {str(e)}", exc_info=True
        )
        return jsonify({"error": "Failed to create registration"}), 500

    if isinstance(result, dict):
        return jsonify(result), 400
    return jsonify(result.to_dict()), 201


@registration_bp.route("/registrations/check-in", methods=["POST", "OPTIONS"])
@cross_origin(supports_credentials=True)
@limiter.limit("60 per minute")
@jwt_required()
def check_in():
    if request.method == "OPTIONS":
        return "", 204

    current_user_id = get_jwt_identity()
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        registration = CheckInService.check_in(data, current_user_id)
    except MissingFieldsError as e:
        return error_response(
            "QR code and event ID are required", 400, missing_fields=e.fields
        )
    except UnauthorizedError:
        return error_response(
            "Unauthorized to check in registrations for this event", 403
        )
    except CheckInError as e:
        return error_response(e.message, e.status_code, reason=e.reason, debug=e.debug)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Check-in error: {str(e)}", exc_info=True)
        return error_response(
            "Failed to process check-in",
            400,
            reason=CheckInError.reason,
            debug={"message": str(e), "stack": traceback.format_exc()},
        )

    return jsonify(registration.to_dict()), 200


@registration_bp.route("/registrations/<qr_code>/qr", methods=["GET", "OPTIONS"])
@cross_origin(supports_credentials=True)
@jwt_required()
def get_registration_qr(qr_code):
    if request.method == "OPTIONS":
        return "", 204

    try:
        data_url = RegistrationService.render_qr_data_url(qr_code)
    except Exception as e:
        current_app.logger.error(f"Failed to generate QR code: {str(e)}")
        return jsonify({"error": "Failed to generate QR code"}), 500

    return jsonify({"qrCode": data_url}), 200
