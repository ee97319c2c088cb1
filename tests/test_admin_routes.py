from fastapi.testclient import TestClient

from conftest import auth_header, login_token, register
from services.token_service import TokenClaims


def test_admin_lists_students_of_own_school(client: TestClient) -> None:
    admin = register(client, name='Principal', email='principal@s1.edu', role='admin')
    register(client, name='Asha', email='asha@s1.edu')
    register(client, name='Ben', email='ben@s1.edu')
    register(client, name='Cara', email='cara@s2.edu', schoolId='school-2')

    response = client.get('/api/admin/students', headers=auth_header(login_token(client, admin)))

    assert response.status_code == 200
    students = response.json()
    assert [s['name'] for s in students] == ['Asha', 'Ben']
    assert all(s['role'] == 'student' and s['schoolId'] == 'school-1' for s in students)
    assert all('passwordHash' not in s and 'password' not in s for s in students)
    assert students[0]['drills'] == []
    assert students[0]['preparednessScore'] == 0


def test_student_token_is_forbidden(client: TestClient) -> None:
    student = register(client)

    response = client.get('/api/admin/students', headers=auth_header(login_token(client, student)))

    assert response.status_code == 403
    assert response.json() == {'message': 'Admin access required'}


def test_missing_token_is_401(client: TestClient) -> None:
    response = client.get('/api/admin/students')

    assert response.status_code == 401


def test_admin_token_without_school_is_400(client: TestClient, codec) -> None:
    token = codec.issue(TokenClaims(subject='0123456789abcdef01234567', role='admin', schoolId=None))

    response = client.get('/api/admin/students', headers=auth_header(token))

    assert response.status_code == 400
    assert response.json() == {'message': 'Admin has no schoolId'}
