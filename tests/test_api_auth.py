"""
API tests for teacher registration, login and admin password reset.
"""

from schoolboard.store import TEACHERS


def register(client, **overrides):
    payload = {'name': 'A', 'email': 'a@x.com', 'password': 'p'}
    payload.update(overrides)
    return client.post('/api/register', json=payload)


def test_register_then_duplicate(client):
    first = register(client)
    assert first.status_code == 200
    assert first.get_json() == {'message': 'Teacher registered!'}

    second = register(client)
    assert second.status_code == 200
    assert second.get_json() == {'error': 'Email already exists'}


def test_register_missing_fields(client):
    response = client.post('/api/register', json={'email': 'a@x.com'})
    assert response.status_code == 200
    assert response.get_json() == {'error': 'Fill all fields'}


def test_register_without_body(client):
    response = client.post('/api/register')
    assert response.get_json() == {'error': 'Fill all fields'}


def test_email_match_is_case_sensitive(client):
    register(client)
    response = register(client, email='A@x.com')
    assert response.get_json() == {'message': 'Teacher registered!'}


def test_login_success_hides_password(client):
    register(client)
    response = client.post('/api/login', json={'email': 'a@x.com', 'password': 'p'})

    user = response.get_json()['user']
    assert user['email'] == 'a@x.com'
    assert user['name'] == 'A'
    assert user['id']
    assert 'password' not in user


def test_login_wrong_password(client):
    register(client)
    response = client.post('/api/login', json={'email': 'a@x.com', 'password': 'nope'})
    assert response.status_code == 200
    assert response.get_json() == {'error': 'Invalid credentials'}


def test_login_unknown_email_same_error(client):
    response = client.post('/api/login', json={'email': 'ghost@x.com', 'password': 'p'})
    assert response.status_code == 200
    assert response.get_json() == {'error': 'Invalid credentials'}


def test_reset_password(client, store):
    register(client)
    response = client.post('/api/admin/reset-teacher-password',
                           json={'email': 'a@x.com', 'newPassword': 'fresh'})

    assert response.get_json() == {'message': 'Password for a@x.com reset successfully!'}
    assert store.find_one(TEACHERS, 'email', 'a@x.com')['password'] == 'fresh'

    login = client.post('/api/login', json={'email': 'a@x.com', 'password': 'fresh'})
    assert 'user' in login.get_json()


def test_reset_password_unknown_teacher(client):
    response = client.post('/api/admin/reset-teacher-password',
                           json={'email': 'ghost@x.com', 'newPassword': 'x'})
    assert response.status_code == 200
    assert response.get_json() == {'error': 'Teacher not found'}


def test_reset_password_requires_new_password(client, store):
    register(client)
    response = client.post('/api/admin/reset-teacher-password', json={'email': 'a@x.com'})

    assert response.status_code == 200
    assert response.get_json() == {'error': 'Email and new password required'}
    assert store.find_one(TEACHERS, 'email', 'a@x.com')['password'] == 'p'


def test_login_without_password_is_rejected(client):
    register(client)
    client.post('/api/admin/reset-teacher-password', json={'email': 'a@x.com'})

    response = client.post('/api/login', json={'email': 'a@x.com'})

    assert response.get_json() == {'error': 'Invalid credentials'}


def test_login_rejects_record_without_password(client, store):
    store.insert(TEACHERS, {'id': 'x', 'name': 'X', 'email': 'x@x.com', 'password': None})
    response = client.post('/api/login', json={'email': 'x@x.com', 'password': None})
    assert response.get_json() == {'error': 'Invalid credentials'}
