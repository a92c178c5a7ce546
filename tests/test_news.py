"""
News API Tests
==============

CRUD over /api/news: validation, ordering, identity, guard and storage
failures.
"""

import pytest

from newsdesk.core.database import db, news_items
from newsdesk.modules.news.models import utc_today


def _create(client, **fields):
    payload = {'title': 'Title', 'body': 'Body'}
    payload.update(fields)
    response = client.post('/api/news', json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_login_then_create_scenario(client):
    """Login, then POST a minimal item: category and date get their defaults."""
    login = client.post('/api/login', json={'username': 'admin', 'password': 'correct'})
    assert login.status_code == 200

    response = client.post('/api/news', json={'title': 'T', 'body': 'B'})

    assert response.status_code == 201
    assert response.get_json() == {
        'id': 1,
        'category': 'News',
        'title': 'T',
        'body': 'B',
        'date': utc_today().isoformat(),
    }


def test_delete_nonexistent_item_is_404(admin_client):
    response = admin_client.delete('/api/news/999')
    assert response.status_code == 404
    assert response.get_json() == {'message': 'News item not found.'}


def test_empty_title_is_400_and_creates_nothing(admin_client):
    response = admin_client.post('/api/news', json={'title': '', 'body': 'B'})

    assert response.status_code == 400
    assert admin_client.get('/api/news').get_json() == []


# ---------------------------------------------------------------------------
# GET /api/news
# ---------------------------------------------------------------------------

def test_list_is_public_and_empty_initially(client):
    response = client.get('/api/news')
    assert response.status_code == 200
    assert response.get_json() == []


def test_list_orders_by_date_then_id_descending(admin_client):
    older = _create(admin_client, title='older', date='2024-01-01')
    first_same_day = _create(admin_client, title='same day 1', date='2024-03-01')
    second_same_day = _create(admin_client, title='same day 2', date='2024-03-01')
    oldest = _create(admin_client, title='oldest', date='2023-12-31')

    items = admin_client.get('/api/news').get_json()

    assert [item['id'] for item in items] == [
        second_same_day['id'], first_same_day['id'], older['id'], oldest['id'],
    ]
    keys = [(item['date'], item['id']) for item in items]
    assert keys == sorted(keys, reverse=True)


def test_list_visible_without_session(app, admin_client):
    created = _create(admin_client)
    anonymous = app.test_client()

    assert anonymous.get('/api/news').get_json() == [created]


# ---------------------------------------------------------------------------
# GET /api/news/<id>
# ---------------------------------------------------------------------------

def test_get_single_item(admin_client, app):
    created = _create(admin_client, category='Events', date='2024-05-06')

    response = app.test_client().get(f"/api/news/{created['id']}")

    assert response.status_code == 200
    assert response.get_json() == created


def test_get_unknown_item_is_404(client):
    assert client.get('/api/news/42').status_code == 404


def test_get_malformed_id_is_400(client):
    response = client.get('/api/news/abc')
    assert response.status_code == 400
    assert response.get_json() == {'message': 'Invalid news item ID.'}


# ---------------------------------------------------------------------------
# POST /api/news
# ---------------------------------------------------------------------------

def test_created_ids_are_unique_and_listed(admin_client):
    ids = [_create(admin_client, title=f'item {n}')['id'] for n in range(5)]

    assert len(set(ids)) == len(ids)
    listed = {item['id'] for item in admin_client.get('/api/news').get_json()}
    assert set(ids) <= listed


def test_create_trims_and_keeps_explicit_fields(admin_client):
    item = _create(admin_client, category='  Events ', title='  Match day ', body=' Come! ', date='2024-06-01')

    assert item['category'] == 'Events'
    assert item['title'] == 'Match day'
    assert item['body'] == 'Come!'
    assert item['date'] == '2024-06-01'


def test_create_blank_category_defaults_to_news(admin_client):
    assert _create(admin_client, category='   ')['category'] == 'News'


def test_create_accepts_iso_timestamp(admin_client):
    assert _create(admin_client, date='2024-06-01T10:30:00.000Z')['date'] == '2024-06-01'


def test_create_ignores_client_supplied_id(admin_client):
    item = _create(admin_client, id=500)
    assert item['id'] != 500
    assert admin_client.get('/api/news/500').status_code == 404


@pytest.mark.parametrize('payload', [
    {'body': 'B'},
    {'title': 'T'},
    {'title': '   ', 'body': 'B'},
    {'title': 'T', 'body': '\n\t'},
    {'title': 7, 'body': 'B'},
    {'title': 'T', 'body': 'B', 'category': 3},
])
def test_create_rejects_invalid_fields(admin_client, payload):
    response = admin_client.post('/api/news', json=payload)

    assert response.status_code == 400
    assert 'message' in response.get_json()
    assert admin_client.get('/api/news').get_json() == []


@pytest.mark.parametrize('bad_date', ['not-a-date', '2024-02-30', '2024-13-01', 20240101])
def test_create_rejects_invalid_date(admin_client, bad_date):
    response = admin_client.post('/api/news', json={'title': 'T', 'body': 'B', 'date': bad_date})

    assert response.status_code == 400
    assert response.get_json() == {'message': 'Invalid date.'}


def test_create_rejects_non_object_body(admin_client):
    response = admin_client.post('/api/news', json=['title', 'body'])
    assert response.status_code == 400

    response = admin_client.post('/api/news', data='not json', content_type='text/plain')
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# PUT /api/news/<id>
# ---------------------------------------------------------------------------

def test_update_replaces_fields_and_keeps_id(admin_client):
    created = _create(admin_client, category='Events', title='Old', body='Old body', date='2024-01-01')
    update = {'category': 'Results', 'title': 'New', 'body': 'New body', 'date': '2024-02-02', 'id': 999}

    response = admin_client.put(f"/api/news/{created['id']}", json=update)

    expected = {'id': created['id'], 'category': 'Results', 'title': 'New',
                'body': 'New body', 'date': '2024-02-02'}
    assert response.status_code == 200
    assert response.get_json() == expected
    assert admin_client.get(f"/api/news/{created['id']}").get_json() == expected
    assert admin_client.get('/api/news/999').status_code == 404


def test_update_is_idempotent(admin_client):
    created = _create(admin_client)
    update = {'title': 'Same', 'body': 'Same body', 'date': '2024-02-02'}

    first = admin_client.put(f"/api/news/{created['id']}", json=update)
    second = admin_client.put(f"/api/news/{created['id']}", json=update)

    assert first.status_code == second.status_code == 200
    assert first.get_json() == second.get_json()


def test_update_is_full_replace(admin_client):
    """Omitted category falls back to the default rather than keeping the old one."""
    created = _create(admin_client, category='Events')

    response = admin_client.put(f"/api/news/{created['id']}", json={'title': 'T', 'body': 'B'})

    assert response.get_json()['category'] == 'News'
    assert response.get_json()['date'] == utc_today().isoformat()


def test_update_unknown_id_is_404(admin_client):
    response = admin_client.put('/api/news/999', json={'title': 'T', 'body': 'B'})
    assert response.status_code == 404


def test_update_malformed_id_is_400(admin_client):
    response = admin_client.put('/api/news/abc', json={'title': 'T', 'body': 'B'})
    assert response.status_code == 400
    assert response.get_json() == {'message': 'Invalid news item ID.'}


def test_update_validation_runs_before_lookup(admin_client):
    """An invalid payload is rejected with 400 even for an unknown id."""
    response = admin_client.put('/api/news/999', json={'title': '', 'body': 'B'})
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# DELETE /api/news/<id>
# ---------------------------------------------------------------------------

def test_delete_removes_item(admin_client):
    keep = _create(admin_client, title='keep')
    gone = _create(admin_client, title='gone')

    response = admin_client.delete(f"/api/news/{gone['id']}")

    assert response.status_code == 204
    assert response.data == b''
    assert [item['id'] for item in admin_client.get('/api/news').get_json()] == [keep['id']]


def test_deleted_item_is_gone_for_update_and_delete(admin_client):
    created = _create(admin_client)
    assert admin_client.delete(f"/api/news/{created['id']}").status_code == 204

    assert admin_client.put(f"/api/news/{created['id']}", json={'title': 'T', 'body': 'B'}).status_code == 404
    assert admin_client.delete(f"/api/news/{created['id']}").status_code == 404


@pytest.mark.parametrize('bad_id', ['abc', '1.5', '--1', '1e3'])
def test_delete_malformed_id_is_400(admin_client, bad_id):
    response = admin_client.delete(f'/api/news/{bad_id}')
    assert response.status_code == 400


@pytest.mark.parametrize('missing_id', ['-1', '0', '99999999999999999999999', '-99999999999999999999999'])
def test_ids_that_cannot_exist_are_404(admin_client, missing_id):
    assert admin_client.get(f'/api/news/{missing_id}').status_code == 404
    assert admin_client.put(f'/api/news/{missing_id}', json={'title': 'T', 'body': 'B'}).status_code == 404

    response = admin_client.delete(f'/api/news/{missing_id}')
    assert response.status_code == 404
    assert response.get_json() == {'message': 'News item not found.'}


# ---------------------------------------------------------------------------
# Guard
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('method,path,payload', [
    ('post', '/api/news', {'title': 'T', 'body': 'B'}),
    ('post', '/api/news', {}),
    ('put', '/api/news/1', {'title': 'T', 'body': 'B'}),
    ('put', '/api/news/abc', {'title': ''}),
    ('delete', '/api/news/1', None),
    ('delete', '/api/news/abc', None),
])
def test_mutations_require_session(client, method, path, payload):
    response = getattr(client, method)(path, json=payload)

    assert response.status_code == 401
    assert response.get_json() == {'message': 'Login required.'}


def test_guard_blocks_writes_without_touching_storage(app, admin_client):
    created = _create(admin_client)
    anonymous = app.test_client()

    assert anonymous.delete(f"/api/news/{created['id']}").status_code == 401
    assert anonymous.put(f"/api/news/{created['id']}", json={'title': 'X', 'body': 'Y'}).status_code == 401
    assert admin_client.get(f"/api/news/{created['id']}").get_json() == created


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------

@pytest.fixture
def broken_storage(app):
    """Drop the news table so every news query fails at the database."""
    with app.app_context():
        news_items.drop(db.engine)


def test_storage_failure_on_list_is_generic_500(client, broken_storage):
    response = client.get('/api/news')

    assert response.status_code == 500
    assert response.get_json() == {'message': 'Storage is currently unavailable.'}
    assert b'news_items' not in response.data


def test_storage_failure_on_create_is_generic_500(admin_client, broken_storage):
    response = admin_client.post('/api/news', json={'title': 'T', 'body': 'B'})

    assert response.status_code == 500
    assert response.get_json() == {'message': 'Storage is currently unavailable.'}


def test_validation_precedes_storage(admin_client, broken_storage):
    """Invalid input is reported as 400 even when storage is down."""
    response = admin_client.post('/api/news', json={'title': '', 'body': 'B'})
    assert response.status_code == 400


def test_ids_are_not_reused_after_delete(admin_client):
    _create(admin_client, title='first')
    latest = _create(admin_client, title='latest')
    admin_client.delete(f"/api/news/{latest['id']}")

    assert _create(admin_client, title='after delete')['id'] > latest['id']
