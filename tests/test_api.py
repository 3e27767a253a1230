from io import BytesIO

import sqlalchemy as sa
from PIL import Image

from police_id import db
from police_id.models import Member, ScanLog


def register(client, **fields):
    payload = {
        'full_name': 'Abebe Kebede',
        'rank': 'Inspector',
        'responsibility': 'Field Officer',
        'phone_number': '+251911000000',
    }
    payload.update(fields)
    return client.post('/api/members', json=payload)


def scan_count():
    return db.session.query(ScanLog).count()


def test_register_returns_id_and_id_number(client):
    response = register(client)

    assert response.status_code == 200
    assert response.get_json() == {'id': 1, 'id_number': 'BGR-POL-0001'}


def test_register_missing_field_is_bad_request(client):
    response = client.post('/api/members', json={'full_name': 'No Rank'})

    assert response.status_code == 400
    assert 'rank is required' in response.get_json()['error']


def test_register_rejects_non_object_body(client):
    response = client.post('/api/members', json=['Abebe Kebede'])

    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_register_rejects_malformed_json(client):
    response = client.post('/api/members', data='{"full_name": ', content_type='application/json')

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Request body must be valid JSON'}


def test_register_store_failure_passes_message_through(client):
    register(client)
    # A row holding the number the next registration would derive
    db.session.add(Member(
        id_number='BGR-POL-0003', full_name='Imported', rank='Constable',
        responsibility='Patrol', phone_number='+251900000000',
    ))
    db.session.commit()

    response = register(client, full_name='Clash')

    assert response.status_code == 500
    assert 'UNIQUE' in response.get_json()['error']
    assert db.session.query(Member).count() == 2


def test_lookup_store_failure_passes_message_through(client):
    db.session.execute(sa.text('DROP TABLE scans'))
    db.session.execute(sa.text('DROP TABLE members'))
    db.session.commit()

    response = client.get('/api/members/BGR-POL-0001')

    assert response.status_code == 500
    assert 'no such table' in response.get_json()['error']


def test_register_body_too_large(app, client):
    app.config['MAX_CONTENT_LENGTH'] = 1024
    response = register(client, photo_url='data:image/png;base64,' + 'A' * 4096)

    assert response.status_code == 413
    assert 'error' in response.get_json()


def test_get_member(client):
    register(client, photo_url='data:image/png;base64,AAAA')

    response = client.get('/api/members/BGR-POL-0001')

    assert response.status_code == 200
    member = response.get_json()
    assert member['id'] == 1
    assert member['id_number'] == 'BGR-POL-0001'
    assert member['full_name'] == 'Abebe Kebede'
    assert member['rank'] == 'Inspector'
    assert member['responsibility'] == 'Field Officer'
    assert member['phone_number'] == '+251911000000'
    assert member['photo_url'] == 'data:image/png;base64,AAAA'
    assert member['right_flag_url'] is None
    assert member['created_at']


def test_get_unknown_member_is_not_found(client):
    response = client.get('/api/members/BGR-POL-0404')

    assert response.status_code == 404
    assert response.get_json() == {'error': 'Member not found'}


def test_list_members_sorted_by_name(client):
    for name in ['zewdu Girma', 'Almaz Ayana', 'meron Kassa']:
        register(client, full_name=name)

    response = client.get('/api/members')

    assert response.status_code == 200
    assert [m['full_name'] for m in response.get_json()] == ['Almaz Ayana', 'meron Kassa', 'zewdu Girma']


def test_search_requires_query(client):
    assert client.get('/api/members/search').status_code == 400
    assert client.get('/api/members/search?query=').status_code == 400


def test_search_does_not_log_scans(client):
    register(client)
    register(client, full_name='Sara Tadesse', phone_number='+251922555555')

    response = client.get('/api/members/search', query_string={'query': 'BGR-POL-0001'})

    assert response.status_code == 200
    assert [m['full_name'] for m in response.get_json()] == ['Abebe Kebede']
    assert scan_count() == 0


def test_search_by_phone(client):
    register(client)
    register(client, full_name='Sara Tadesse', phone_number='+251922555555')

    response = client.get('/api/members/search', query_string={'query': '+251922'})

    assert [m['id_number'] for m in response.get_json()] == ['BGR-POL-0002']


def test_scan_and_stats(client):
    register(client)

    response = client.post('/api/scan', json={'id_number': 'BGR-POL-0001', 'scanner_info': 'Web Search'})

    assert response.status_code == 200
    assert response.get_json() == {'success': True}
    assert client.get('/api/stats').get_json() == {'totalMembers': 1, 'totalScans': 1}


def test_scan_unknown_member(client):
    response = client.post('/api/scan', json={'id_number': 'BGR-POL-0404', 'scanner_info': 'Web Search'})

    assert response.status_code == 404
    assert response.get_json() == {'error': 'Member not found'}
    assert scan_count() == 0


def test_scan_without_id_number(client):
    response = client.post('/api/scan', json={'scanner_info': 'Web Search'})

    assert response.status_code == 400


def test_stats_on_empty_store(client):
    assert client.get('/api/stats').get_json() == {'totalMembers': 0, 'totalScans': 0}


def test_verify_api_logs_scan(client):
    register(client)

    response = client.post('/api/verify/BGR-POL-0001', json={'scanner_info': 'Checkpoint 4'})

    assert response.status_code == 200
    body = response.get_json()
    assert body['verified'] is True
    assert body['member']['full_name'] == 'Abebe Kebede'
    assert db.session.query(ScanLog.scanner_info).scalar() == 'Checkpoint 4'


def test_verify_api_default_scanner_info(client):
    register(client)

    assert client.get('/api/verify/BGR-POL-0001').status_code == 200
    assert db.session.query(ScanLog.scanner_info).scalar() == 'Web Verification'


def test_verify_api_unknown_member(client):
    response = client.get('/api/verify/BGR-POL-0404')

    assert response.status_code == 404
    assert scan_count() == 0


def test_verification_page(client):
    register(client)

    response = client.get('/verify/BGR-POL-0001', headers={'User-Agent': 'CardScanner/1.0'})

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert 'Abebe Kebede' in page
    assert 'Verified Officer' in page
    assert db.session.query(ScanLog.scanner_info).scalar() == 'QR Scan: CardScanner/1.0'


def test_verification_page_unknown_member(client):
    response = client.get('/verify/BGR-POL-0404')

    assert response.status_code == 404
    assert 'Not Registered' in response.get_data(as_text=True)
    assert scan_count() == 0


def test_member_qr_code(client):
    register(client)

    response = client.get('/api/members/BGR-POL-0001/qr?size=200')

    assert response.status_code == 200
    assert response.mimetype == 'image/png'
    image = Image.open(BytesIO(response.data))
    assert image.format == 'PNG'
    assert image.size == (200, 200)


def test_member_qr_code_rejects_bad_size(client):
    register(client)

    assert client.get('/api/members/BGR-POL-0001/qr?size=8').status_code == 400
    assert client.get('/api/members/BGR-POL-0001/qr?size=5000').status_code == 400
    response = client.get('/api/members/BGR-POL-0001/qr?size=abc')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'size must be an integer'}


def test_member_qr_code_unknown_member(client):
    assert client.get('/api/members/BGR-POL-0404/qr').status_code == 404


def test_unknown_api_route_returns_json(client):
    response = client.get('/api/nothing-here')

    assert response.status_code == 404
    assert 'error' in response.get_json()
