from flask import jsonify


def envelope(data=None, message="Success", success=True, errors=None):
    return {
        "success": success,
        "message": message,
        "data": data,
        "errors": errors or [],
    }


def success_response(data=None, message="Success", status_code=200):
    return jsonify(envelope(data, message)), status_code


def error_response(message, status_code=400, errors=None):
    return jsonify(envelope(None, message, success=False, errors=errors)), status_code
