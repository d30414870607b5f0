import json

from api import create_app
from conftest import login_as, DEMO_PASSWORD
from db.seed_data import initialize_sample_data
from db.storage import MemoryStorage
from db.record_store import CURRENT_USER_KEY


class TestHealth:
    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json()['authenticated'] is False

    def test_auth_health(self, client):
        assert client.get('/api/auth/health').get_json()['status'] == 'healthy'


class TestAuth:
    def test_register_success(self, client, test_user_data):
        """Test registering a new student logs them in"""
        response = client.post('/api/auth/register', json=test_user_data)

        assert response.status_code == 201
        data = response.get_json()
        assert data['user']['email'] == test_user_data['email']
        assert data['user']['studentId'] == 'CS/2024/042'
        assert 'password' not in data['user']
        assert data['notification']['title'] == 'Registration Successful'
        assert client.get('/api/auth/user').get_json()['user']['email'] == test_user_data['email']

    def test_register_duplicate_email(self, client, test_user_data):
        client.post('/api/auth/register', json=test_user_data)
        client.post('/api/auth/logout')

        response = client.post('/api/auth/register', json=test_user_data)

        assert response.status_code == 409
        assert response.get_json()['message'] == 'User with this email already exists'

    def test_register_password_mismatch(self, client, test_user_data):
        test_user_data['confirm_password'] = 'something-else'

        response = client.post('/api/auth/register', json=test_user_data)

        assert response.status_code == 400
        assert response.get_json()['message'] == 'Passwords do not match!'

    def test_login_and_logout(self, client, seeded_storage):
        user = login_as(client, 'staff')
        assert user['name'] == 'Dr. Sarah Johnson'
        assert json.loads(seeded_storage.get_item(CURRENT_USER_KEY))['id'] == '2'

        response = client.post('/api/auth/logout')

        assert response.get_json()['notification']['title'] == 'Logged Out'
        assert seeded_storage.get_item(CURRENT_USER_KEY) is None
        assert client.get('/api/auth/user').status_code == 401

    def test_login_role_mismatch(self, client):
        """Test that a correct password with the wrong role is rejected"""
        response = client.post('/api/auth/login', json={
            'email': 'student@unijos.edu.ng',
            'password': DEMO_PASSWORD,
            'role': 'admin',
        })

        assert response.status_code == 401
        assert response.get_json()['message'] == 'Invalid credentials or role mismatch'

    def test_login_missing_fields(self, client):
        response = client.post('/api/auth/login', json={'email': 'student@unijos.edu.ng'})
        assert response.status_code == 400


class TestMaterials:
    def test_search(self, client):
        response = client.get('/api/materials', query_string={'q': 'machine learning'})

        data = response.get_json()
        assert data['count'] == 1
        assert data['materials'][0]['id'] == '2'

    def test_search_with_filters(self, client):
        data = client.get('/api/materials?type=thesis&year=all').get_json()
        assert data['count'] == 5

    def test_download_increments_counter(self, client):
        before = client.get('/api/materials/2').get_json()['material']['downloads']

        for _ in range(3):
            client.post('/api/materials/2/download')

        assert client.get('/api/materials/2').get_json()['material']['downloads'] == before + 3

    def test_download_unknown_material(self, client):
        assert client.post('/api/materials/missing/download').status_code == 404

    def test_citation_styles(self, client):
        bibtex = client.get('/api/materials/2/citation?style=bibtex').get_json()['citation']
        assert '@article{' in bibtex

        apa = client.get('/api/materials/2/citation?style=apa').get_json()['citation']
        assert apa.startswith('Adebayo, M. (2024).')

        assert client.get('/api/materials/2/citation?style=harvard').status_code == 400

    def test_create_material_requires_staff(self, student_client):
        response = student_client.post('/api/materials', json={'title': 'X'})
        assert response.status_code == 403

    def test_create_material(self, staff_client):
        response = staff_client.post('/api/materials', json={
            'title': 'Compiler Construction Notes',
            'author': 'Dr. Sarah Johnson',
            'type': 'book',
            'year': 2024,
            'keywords': 'compilers, parsing',
        })

        assert response.status_code == 201
        material = response.get_json()['material']
        assert material['keywords'] == ['compilers', 'parsing']
        assert material['uploadedBy'] == 'staff@unijos.edu.ng'
        assert material['downloads'] == 0

    def test_delete_material_admin_only(self, admin_client):
        assert admin_client.delete('/api/materials/1').status_code == 200
        assert admin_client.get('/api/materials/1').status_code == 404


class TestProjects:
    def test_requires_login(self, client):
        assert client.get('/api/projects/mine').status_code == 401

    def test_upload_project(self, student_client):
        """Test a student upload lands as a draft under the active supervisor"""
        response = student_client.post('/api/projects', json={
            'title': 'Campus Energy Dashboard',
            'description': 'Energy usage monitoring for halls of residence.',
        })

        assert response.status_code == 201
        project = response.get_json()['project']
        assert project['status'] == 'draft'
        assert project['studentId'] == '1'
        assert project['supervisorId'] == '2'
        assert student_client.get('/api/projects/mine').get_json()['count'] == 21

    def test_upload_project_missing_fields(self, student_client):
        response = student_client.post('/api/projects', json={'title': 'Only a title'})
        assert response.status_code == 400

    def test_student_submits_but_cannot_approve(self, student_client):
        project = student_client.post('/api/projects', json={'title': 'T', 'description': 'D'}).get_json()['project']
        url = f"/api/projects/{project['id']}/status"

        submitted = student_client.patch(url, json={'status': 'submitted'})
        assert submitted.get_json()['project']['submittedAt']

        assert student_client.patch(url, json={'status': 'approved'}).status_code == 403

    def test_add_and_export_citations(self, student_client):
        project = student_client.post('/api/projects', json={'title': 'T', 'description': 'D'}).get_json()['project']
        base = f"/api/projects/{project['id']}/citations"

        assert student_client.post(base, json={'material_id': '2'}).status_code == 201
        assert student_client.post(base, json={'material_id': 'missing'}).status_code == 404

        export = student_client.get(f'{base}/export?style=mla').get_json()
        assert export['count'] == 1
        assert export['content'].startswith('Adebayo, Mary.')

    def test_other_student_cannot_view(self, client, test_user_data):
        login_as(client, 'student')
        project_id = client.get('/api/projects/mine').get_json()['projects'][0]['id']
        client.post('/api/auth/logout')
        client.post('/api/auth/register', json=test_user_data)

        assert client.get(f'/api/projects/{project_id}').status_code == 403


class TestStaff:
    def test_supervised_students_and_projects(self, staff_client):
        students = staff_client.get('/api/staff/students').get_json()
        assert [s['id'] for s in students['students']] == ['1']
        assert 'password' not in students['students'][0]

        projects = staff_client.get('/api/staff/projects').get_json()
        assert projects['count'] == 20
        approved = staff_client.get('/api/staff/projects?status=approved').get_json()
        assert all(p['status'] == 'approved' for p in approved['projects'])

    def test_validate_pending_citation(self, staff_client):
        pending = staff_client.get('/api/staff/citations?pending=true').get_json()['citations']
        assert len(pending) == 1

        response = staff_client.post(f"/api/staff/citations/{pending[0]['id']}/validate",
                                     json={'approved': True, 'notes': 'Looks good'})

        assert response.status_code == 200
        assert response.get_json()['citation']['validatedBy'] == '2'
        assert staff_client.get('/api/staff/citations?pending=true').get_json()['count'] == 0

    def test_staff_routes_reject_students(self, student_client):
        assert student_client.get('/api/staff/students').status_code == 403


class TestAdmin:
    def test_stats(self, admin_client):
        stats = admin_client.get('/api/admin/stats').get_json()['stats']

        assert stats['total_users'] == 3
        assert stats['users_by_role'] == {'student': 1, 'staff': 1, 'admin': 1}
        assert stats['materials'] == 52
        assert stats['projects'] == 20
        assert sum(stats['projects_by_status'].values()) == 20
        assert stats['citations'] == 4
        assert stats['pending_citations'] == 1

    def test_list_users_redacts_passwords(self, admin_client):
        users = admin_client.get('/api/admin/users?role=staff').get_json()['users']
        assert [u['email'] for u in users] == ['staff@unijos.edu.ng']
        assert 'password' not in users[0]

    def test_cannot_delete_self(self, admin_client):
        assert admin_client.delete('/api/admin/users/3').status_code == 400

    def test_assign_supervisor_validates_roles(self, admin_client):
        bad = admin_client.post('/api/admin/supervisions', json={'supervisor_id': '1', 'student_id': '1'})
        assert bad.status_code == 400

        response = admin_client.post('/api/admin/supervisions', json={'supervisor_id': '2', 'student_id': '1'})
        assert response.status_code == 201
        supervision_id = response.get_json()['supervision']['id']

        patched = admin_client.patch(f'/api/admin/supervisions/{supervision_id}', json={'status': 'completed'})
        assert patched.get_json()['supervision']['status'] == 'completed'


class TestMessages:
    def test_recipients_depend_on_role(self, student_client):
        options = student_client.get('/api/messages/recipients').get_json()['recipients']
        assert [o['value'] for o in options] == ['supervisor', 'admin', 'support']

    def test_send_message(self, staff_client):
        response = staff_client.post('/api/messages', json={
            'recipient': 'student',
            'subject': 'Chapter two',
            'message': 'Please review the comments.',
        })

        assert response.status_code == 200
        assert response.get_json()['notification']['title'] == 'Message Sent'

    def test_send_message_invalid_recipient(self, student_client):
        response = student_client.post('/api/messages', json={
            'recipient': 'all-staff',
            'subject': 'Hi',
            'message': 'Hello',
        })
        assert response.status_code == 400


class FailingStorage(MemoryStorage):
    """Storage that starts failing once `fail` is set"""
    fail = False

    def get_item(self, key):
        if self.fail:
            raise RuntimeError('storage unavailable')
        return super().get_item(key)


class TestErrorHandling:
    def test_non_string_field_is_rejected(self, admin_client):
        """Test that a numeric title is a validation error, not a crash"""
        response = admin_client.post('/api/materials', json={
            'title': 123,
            'author': 'Dr. A',
            'type': 'book',
            'year': 2024,
        })

        assert response.status_code == 400
        assert response.get_json() == {'status': 'error', 'message': 'Invalid value for field: title'}

    def test_non_string_login_email(self, client):
        response = client.post('/api/auth/login', json={'email': 5, 'password': 'x', 'role': 'student'})

        assert response.status_code == 400
        assert response.get_json()['status'] == 'error'

    def test_non_object_body(self, student_client):
        response = student_client.post('/api/projects', json=['title', 'description'])

        assert response.status_code == 400
        assert response.get_json()['message'] == 'Request body must be a JSON object'

    def test_bad_keywords(self, staff_client):
        response = staff_client.post('/api/materials', json={
            'title': 'T', 'author': 'A', 'type': 'book', 'year': '2024', 'keywords': [1, 2],
        })
        assert response.status_code == 400

    def test_storage_failure_returns_json_500(self):
        storage = FailingStorage()
        initialize_sample_data(storage)
        app = create_app(storage=storage, seed=False)
        app.config['TESTING'] = True
        client = app.test_client()

        storage.fail = True
        response = client.get('/api/materials')

        assert response.status_code == 500
        assert response.get_json()['status'] == 'error'

    def test_unknown_route_stays_404(self, client):
        assert client.get('/api/nowhere').status_code == 404

    def test_stats_with_statusless_project(self, admin_client, seeded_storage):
        projects = json.loads(seeded_storage.get_item('projects'))
        projects.append({'id': 'legacy', 'title': 'Old', 'studentId': '1'})
        seeded_storage.set_item('projects', json.dumps(projects))

        response = admin_client.get('/api/admin/stats')

        assert response.status_code == 200
        assert response.get_json()['stats']['projects_by_status']['unknown'] == 1


class TestSharedStorage:
    def test_login_and_logout_seen_by_another_app(self, seeded_storage):
        """Test that two apps on one storage agree on the current user"""
        first = create_app(storage=seeded_storage, seed=False).test_client()
        second = create_app(storage=seeded_storage, seed=False).test_client()

        login_as(first, 'admin')
        assert second.get('/api/auth/user').get_json()['user']['email'] == 'admin@unijos.edu.ng'
        assert second.get('/api/admin/stats').status_code == 200

        first.post('/api/auth/logout')
        assert second.get('/api/auth/user').status_code == 401
