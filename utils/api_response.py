"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "Error message", "code": "..."}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data={'id': 1}, message='Created', status=201)
    return api_error('Listing not found', status=404, code='not_found')
"""

from flask import jsonify
from typing import Any


def api_success(
    data: Any = None,
    message: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional payload to include as 'data' key.
        message: Optional success message.
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response.

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message.
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g., code, fields).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def bind_json_form(form_class, data: dict | None = None):
    """
    Instantiate a Flask-WTF form from a JSON body.

    Scalars are converted to the strings WTForms expects from HTML forms;
    nulls and nested values are dropped. CSRF is left to CSRFProtect,
    which checks the X-CSRFToken header for the whole request.

    Args:
        form_class: FlaskForm subclass
        data: Parsed JSON (defaults to the current request body)

    Returns:
        Bound form instance
    """
    from flask import request
    from werkzeug.datastructures import MultiDict

    if data is None:
        data = request.get_json(silent=True) or {}

    formdata = MultiDict()
    for key, value in data.items():
        if value is None or isinstance(value, (list, dict)):
            continue
        if isinstance(value, bool):
            value = 'y' if value else 'false'
        formdata[key] = str(value)

    return form_class(formdata=formdata, meta={'csrf': False})


def form_error(form) -> tuple:
    """
    Build a 400 response from a failed Flask-WTF form.

    The first field error becomes the message; all errors are listed
    under 'fields'.
    """
    fields = {name: errors for name, errors in form.errors.items() if errors}
    first = next(iter(fields.values()), ['Invalid input'])[0]
    return api_error(first, status=400, code='invalid_input', fields=fields)
