"""Testes do envio de planos para o Google Drive."""

from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, urlparse

import requests


def fake_response(payload, status_error=None):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.side_effect = status_error
    return response


class TestGoogleDrive:
    def test_auth_url(self, teacher_client):
        url = teacher_client.get('/api/auth/google/url').get_json()['url']
        query = parse_qs(urlparse(url).query)

        assert url.startswith('https://accounts.google.com/o/oauth2/v2/auth')
        assert query['client_id'] == ['client-id-teste']
        assert query['redirect_uri'] == ['http://localhost:5000/auth/google/callback']
        assert query['scope'] == ['https://www.googleapis.com/auth/drive.file']
        assert query['access_type'] == ['offline']

    def test_callback_posts_code_to_opener(self, client):
        page = client.get('/auth/google/callback?code=abc"123').get_data(as_text=True)

        assert 'GOOGLE_AUTH_SUCCESS' in page
        assert 'abc"123' not in page

    def test_upload(self, teacher_client):
        responses = [fake_response({'access_token': 'tok'}), fake_response({'id': 'file-1'})]

        with patch('utils.drive.requests.post', side_effect=responses) as post:
            response = teacher_client.post('/api/google/upload', json={
                'code': 'auth-code', 'title': 'Plano Matemática', 'content': '# Plano'})

        assert response.get_json() == {'success': True, 'fileId': 'file-1'}
        token_call, upload_call = post.call_args_list
        assert token_call.kwargs['data']['grant_type'] == 'authorization_code'
        assert upload_call.kwargs['headers'] == {'Authorization': 'Bearer tok'}
        assert upload_call.kwargs['files']['file'][0] == 'Plano Matemática.md'

    def test_token_failure(self, teacher_client):
        with patch('utils.drive.requests.post', return_value=fake_response({'error': 'invalid_grant'})):
            response = teacher_client.post('/api/google/upload', json={'code': 'x', 'title': 'Plano'})

        assert response.status_code == 500

    def test_upload_failure(self, teacher_client):
        responses = [
            fake_response({'access_token': 'tok'}),
            fake_response({}, status_error=requests.HTTPError('403 Forbidden')),
        ]
        with patch('utils.drive.requests.post', side_effect=responses):
            response = teacher_client.post('/api/google/upload', json={'code': 'x', 'title': 'Plano'})

        assert response.status_code == 500

    def test_missing_fields(self, teacher_client):
        assert teacher_client.post('/api/google/upload', json={'title': 'Plano'}).status_code == 400

    def test_requires_login(self, client):
        assert client.get('/api/auth/google/url').status_code == 401
