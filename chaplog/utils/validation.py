"""
Request-body checks shared by the services.

Each helper appends ``{"field", "message"}`` dicts to an error list instead of
raising, so one request reports every problem at once. Call
:func:`raise_if_errors` when done.
"""
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from chaplog.utils.errors import ValidationError

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
URL_PATTERN = re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE)

Errors = List[Dict[str, str]]


def add_error(errors: Errors, field: str, message: str):
    errors.append({"field": field, "message": message})


def require_json(data) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("JSON body required")
    return data


def required_string(data, field, errors, max_length=None) -> Optional[str]:
    value = data.get(field)
    if value is None or not isinstance(value, str) or not value.strip():
        add_error(errors, field, f"{field} is required")
        return None
    value = value.strip()
    if max_length and len(value) > max_length:
        add_error(errors, field, f"{field} must be {max_length} characters or fewer")
    return value


def optional_string(data, field, errors, max_length=None) -> Optional[str]:
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        add_error(errors, field, f"{field} must be a string")
        return None
    value = value.strip()
    if max_length and len(value) > max_length:
        add_error(errors, field, f"{field} must be {max_length} characters or fewer")
    return value or None


def _as_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def required_int(data, field, errors, minimum=None, maximum=None) -> Optional[int]:
    if data.get(field) is None:
        add_error(errors, field, f"{field} is required")
        return None
    return optional_int(data, field, errors, minimum, maximum)


def optional_int(data, field, errors, minimum=None, maximum=None) -> Optional[int]:
    raw = data.get(field)
    if raw is None:
        return None
    value = _as_int(raw)
    if value is None:
        add_error(errors, field, f"{field} must be an integer")
        return None
    if minimum is not None and value < minimum:
        if maximum is not None:
            add_error(errors, field, f"{field} must be between {minimum} and {maximum}")
        else:
            add_error(errors, field, f"{field} must be {minimum} or greater")
    elif maximum is not None and value > maximum:
        add_error(errors, field, f"{field} must be between {minimum} and {maximum}")
    return value


def required_date(data, field, errors) -> Optional[date]:
    raw = data.get(field)
    if not raw:
        add_error(errors, field, f"{field} is required")
        return None
    try:
        return datetime.strptime(str(raw).strip(), '%Y-%m-%d').date()
    except ValueError:
        add_error(errors, field, f"{field} must be a date in YYYY-MM-DD format")
        return None


def string_list(data, field, errors) -> List[str]:
    value = data.get(field)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        add_error(errors, field, f"{field} must be a list of strings")
        return []
    return [item.strip() for item in value if item.strip()]


def email(data, field, errors, max_length=256) -> Optional[str]:
    value = required_string(data, field, errors, max_length)
    if value and not EMAIL_PATTERN.match(value):
        add_error(errors, field, "A valid email address is required")
    return value


def optional_url(data, field, errors) -> Optional[str]:
    value = optional_string(data, field, errors)
    if value and not URL_PATTERN.match(value):
        add_error(errors, field, f"{field} must be a valid URL")
    return value


def raise_if_errors(errors: Errors, message="Validation failed"):
    if errors:
        raise ValidationError(message, errors)
