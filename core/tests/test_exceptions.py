"""
Tests for the exception taxonomy and the API error envelope.
"""

import pytest
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework.exceptions import NotAuthenticated, ValidationError

from core.exceptions import (
    BusinessRuleViolationError,
    InvalidInputError,
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    marketplace_exception_handler,
)


class TestExceptionClasses:

    @pytest.mark.parametrize('exc_class, status_code, code', [
        (InvalidInputError, 400, 'VALIDATION_ERROR'),
        (ResourceNotFoundError, 404, 'NOT_FOUND'),
        (PermissionDeniedError, 403, 'PERMISSION_DENIED'),
        (ResourceAlreadyExistsError, 400, 'ALREADY_EXISTS'),
        (BusinessRuleViolationError, 400, 'BUSINESS_RULE_VIOLATION'),
    ])
    def test_status_and_code(self, exc_class, status_code, code):
        exc = exc_class()
        assert exc.status_code == status_code
        assert exc.error_code == code

    def test_not_found_message_names_resource(self):
        exc = ResourceNotFoundError('Project', 42)
        assert str(exc.detail) == 'Project not found'
        assert exc.extra_data == {'resource_type': 'Project', 'resource_id': '42'}

    def test_invalid_input_records_field(self):
        exc = InvalidInputError('Budget must be a number', field='budget')
        assert exc.extra_data['field'] == 'budget'


class TestExceptionHandler:

    def test_custom_exception_envelope(self):
        response = marketplace_exception_handler(
            PermissionDeniedError('You are not authorized to update this project'), {}
        )

        assert response.status_code == 403
        assert response.data['success'] is False
        assert response.data['message'] == 'You are not authorized to update this project'
        assert response.data['error_code'] == 'PERMISSION_DENIED'
        assert 'timestamp' in response.data['meta']

    def test_serializer_validation_errors_are_listed_per_field(self):
        response = marketplace_exception_handler(
            ValidationError({'plan': ['This field is required.']}), {}
        )

        assert response.status_code == 400
        assert response.data['error_code'] == 'VALIDATION_ERROR'
        assert response.data['errors'] == [
            {'field': 'plan', 'messages': ['This field is required.']}
        ]

    def test_http404(self):
        response = marketplace_exception_handler(Http404('Missing'), {})

        assert response.status_code == 404
        assert response.data['error_code'] == 'NOT_FOUND'

    def test_unexpected_exception_becomes_server_error(self):
        response = marketplace_exception_handler(RuntimeError('boom'), {})

        assert response.status_code == 500
        assert response.data['message'] == 'Server error'
        assert response.data['error_code'] == 'INTERNAL_ERROR'

    def test_business_rule_is_reported_in_meta(self):
        response = marketplace_exception_handler(
            BusinessRuleViolationError('Cannot delete a project that is in progress', rule_name='in_progress'),
            {},
        )

        assert response.status_code == 400
        assert response.data['error_code'] == 'BUSINESS_RULE_VIOLATION'
        assert response.data['meta']['rule'] == 'in_progress'

    def test_django_permission_denied(self):
        response = marketplace_exception_handler(DjangoPermissionDenied(), {})

        assert response.status_code == 403
        assert response.data['error_code'] == 'PERMISSION_DENIED'

    def test_other_drf_errors_use_their_code(self):
        response = marketplace_exception_handler(NotAuthenticated(), {})

        assert response.status_code == 401
        assert response.data['error_code'] == 'NOT_AUTHENTICATED'
        assert response.data['message'] == str(NotAuthenticated.default_detail)
