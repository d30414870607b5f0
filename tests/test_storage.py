import json

import pytest

from db.storage import MemoryStorage, FileStorage, SupabaseStorage, create_storage


def test_memory_storage_basic_operations():
    """Test set/get/remove on the in-memory storage"""
    storage = MemoryStorage()

    assert storage.get_item('missing') is None
    storage.set_item('users', '[]')
    assert storage.get_item('users') == '[]'
    assert storage.keys() == ['users']

    storage.remove_item('users')
    storage.remove_item('users')
    assert storage.get_item('users') is None
    assert len(storage) == 0


def test_file_storage_persists_between_instances(tmp_path):
    """Test that values written by one instance are read by another"""
    first = FileStorage(str(tmp_path), origin='unijos')
    first.set_item('materials', json.dumps([{'id': '1'}]))

    second = FileStorage(str(tmp_path), origin='unijos')
    assert json.loads(second.get_item('materials')) == [{'id': '1'}]
    assert (tmp_path / 'unijos.json').exists()


def test_file_storage_is_scoped_by_origin(tmp_path):
    """Test that two origins do not see each other's keys"""
    FileStorage(str(tmp_path), origin='a').set_item('currentUser', '{}')

    assert FileStorage(str(tmp_path), origin='b').get_item('currentUser') is None


def test_file_storage_treats_corrupt_file_as_empty(tmp_path):
    """Test that an unreadable storage file behaves like an empty storage"""
    (tmp_path / 'localhost.json').write_text('{not json', encoding='utf-8')
    storage = FileStorage(str(tmp_path))

    assert storage.get_item('users') is None
    storage.set_item('users', '[]')
    assert storage.get_item('users') == '[]'


def test_file_storage_clear(tmp_path):
    storage = FileStorage(str(tmp_path))
    storage.set_item('a', '1')
    storage.set_item('b', '2')

    storage.clear()

    assert storage.keys() == []


def test_supabase_storage_round_trip(fake_supabase):
    """Test storage rows in a Supabase table"""
    storage = SupabaseStorage(fake_supabase, origin='unijos', table='local_storage')

    storage.set_item('projects', '[]')
    storage.set_item('projects', '[{"id": "p1"}]')

    assert storage.get_item('projects') == '[{"id": "p1"}]'
    assert len(fake_supabase.tables['local_storage']) == 1
    assert storage.keys() == ['projects']

    storage.remove_item('projects')
    assert storage.get_item('projects') is None


def test_supabase_storage_is_scoped_by_origin(fake_supabase):
    SupabaseStorage(fake_supabase, origin='a').set_item('users', '[]')

    assert SupabaseStorage(fake_supabase, origin='b').get_item('users') is None


def test_supabase_storage_propagates_client_errors():
    """Test that client failures are raised, not swallowed"""
    class BrokenClient:
        def table(self, name):
            raise RuntimeError('connection refused')

    storage = SupabaseStorage(BrokenClient())

    with pytest.raises(RuntimeError):
        storage.get_item('users')
    with pytest.raises(RuntimeError):
        storage.set_item('users', '[]')


def test_create_storage_selects_backend(tmp_path):
    assert isinstance(create_storage({'backend': 'memory'}), MemoryStorage)

    storage = create_storage({'backend': 'file', 'data_dir': str(tmp_path), 'origin': 'test'})
    assert isinstance(storage, FileStorage)
    assert storage.origin == 'test'

    with pytest.raises(ValueError):
        create_storage({'backend': 'indexeddb'})
