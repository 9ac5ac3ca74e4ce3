"""
JSON envelope helpers

Every response body is ``{success, data?, message?, error?}``.
"""

from flask import jsonify


def send_success(data=None, message=None, status_code=200):
    body = {'success': True}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return jsonify(body), status_code


def send_created(data=None, message=None):
    return send_success(data, message, status_code=201)


def send_error(message, status_code=400, code=None, details=None):
    error = {'code': code or 'ERROR', 'message': message}
    if details is not None:
        error['details'] = details
    return jsonify({'success': False, 'message': message, 'error': error}), status_code
