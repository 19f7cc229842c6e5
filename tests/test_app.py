"""
Tests for the Flask API.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from validates_email import ConfigurationError, MockDNSService, ValidationConfig


@pytest.fixture
def client():
    app = create_app(ValidationConfig(), max_batch_size=3)
    app.config['TESTING'] = True
    return app.test_client()


@pytest.fixture
def mx_client():
    dns = MockDNSService(mx_responses={'gmail.com': True})
    app = create_app(ValidationConfig(use_mx=True, mx_message='no mail server'), dns_service=dns)
    app.config['TESTING'] = True
    return app.test_client()


class TestHealth:

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {
            'status': 'healthy',
            'service': 'validates-email',
            'check_mx': False,
            'mx_fallback_to_a': False
        }


class TestValidate:

    def test_valid_email(self, client):
        response = client.post('/validate', json={'email': 'valid@example.com'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['is_valid'] is True
        assert data['failure_reason'] is None

    def test_invalid_email(self, client):
        response = client.post('/validate', json={'email': 'invalid@example.com.'})
        data = response.get_json()
        assert data['is_valid'] is False
        assert data['failure_reason'] == 'syntax_invalid'
        assert data['message'] == 'is invalid'

    def test_non_string_email(self, client):
        response = client.post('/validate', json={'email': 12})
        assert response.status_code == 200
        assert response.get_json()['is_valid'] is False

    def test_missing_email(self, client):
        response = client.post('/validate', json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing required field: email'

    def test_not_json(self, client):
        response = client.post('/validate', data='email=valid@example.com')
        assert response.status_code == 415

    def test_malformed_json(self, client):
        response = client.post('/validate', data='{', content_type='application/json')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid JSON body'

    def test_json_array_body(self, client):
        response = client.post('/validate', json=['valid@example.com'])
        assert response.status_code == 400

    def test_mx_failure(self, mx_client):
        data = mx_client.post('/validate', json={'email': 'test@example.com'}).get_json()
        assert data['is_valid'] is False
        assert data['failure_reason'] == 'domain_unreachable'
        assert data['message'] == 'no mail server'
        assert data['domain_checked'] is True

    def test_mx_success(self, mx_client):
        data = mx_client.post('/validate', json={'email': 'test@gmail.com'}).get_json()
        assert data['is_valid'] is True


class TestValidateBatch:

    def test_batch(self, client):
        response = client.post('/validate/batch', json={'emails': ['valid@example.com', 'invalidexample.com']})
        assert response.status_code == 200
        data = response.get_json()
        assert data['total'] == 2
        assert data['valid_count'] == 1
        assert data['invalid_count'] == 1
        assert [r['is_valid'] for r in data['results']] == [True, False]

    @pytest.mark.parametrize("body,error", [
        ({}, 'Missing required field: emails'),
        ({'emails': 'valid@example.com'}, 'emails must be an array'),
        ({'emails': []}, 'emails array cannot be empty'),
        ({'emails': ['a@example.com'] * 4}, 'emails array cannot exceed 3 items'),
    ])
    def test_bad_requests(self, client, body, error):
        response = client.post('/validate/batch', json=body)
        assert response.status_code == 400
        assert response.get_json()['error'] == error


class TestQuickCheck:

    def test_quick_check(self, client):
        response = client.get('/quick-check', query_string={'email': '"Fred\\ Bloggs"@example.com'})
        assert response.status_code == 200
        assert response.get_json()['is_valid'] is True

    def test_missing_parameter(self, client):
        assert client.get('/quick-check').status_code == 400


class TestErrorHandlers:

    def test_not_found(self, client):
        response = client.get('/nope')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Endpoint not found'}

    def test_method_not_allowed(self, client):
        response = client.get('/validate')
        assert response.status_code == 405
        assert response.get_json() == {'error': 'Method not allowed'}


class TestCreateApp:

    def test_batch_size_from_environment(self, monkeypatch):
        monkeypatch.setenv('MAX_BATCH_SIZE', '7')
        app = create_app(ValidationConfig())
        assert app.config['MAX_BATCH_SIZE'] == 7

    def test_bad_batch_size_is_configuration_error(self, monkeypatch):
        monkeypatch.setenv('MAX_BATCH_SIZE', 'lots')
        with pytest.raises(ConfigurationError):
            create_app(ValidationConfig())
