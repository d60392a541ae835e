import logging

from fastapi import HTTPException

from hire_api.utils.errors import error_response


def test_error_response_structure():
    exc = error_response('Invalid data', {'email': 'invalid_email'})
    assert isinstance(exc, HTTPException)
    assert exc.status_code == 422
    assert exc.detail == {'message': 'Invalid data', 'field_errors': {'email': 'invalid_email'}}


def test_error_response_custom_status():
    exc = error_response('Not found', {'inquiry_id': 'not_found'}, 404)
    assert exc.status_code == 404
    assert exc.detail['field_errors'] == {'inquiry_id': 'not_found'}


def test_client_errors_log_as_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger='hire_api.utils.errors'):
        error_response('Missing', {'name': 'required'})
        error_response('Broken', {'catalog': 'unavailable'}, 503)
    levels = [(r.getMessage(), r.levelno) for r in caplog.records]
    assert levels == [
        ("Missing {'name': 'required'}", logging.WARNING),
        ("Broken {'catalog': 'unavailable'}", logging.ERROR),
    ]
