"""Best-effort JSON persistence in StateStore."""

import json

from docker_mcp.connector.state_store import StateStore


class TestLoad:

    def test_missing_file_is_empty(self, state_store):
        assert state_store.load() == {}

    def test_reads_json(self, state_store, state_path):
        state_path.write_text(json.dumps({'lastConnection': {'version': '1'}}))
        assert state_store.load() == {'lastConnection': {'version': '1'}}

    def test_invalid_json_is_empty(self, state_store, state_path):
        state_path.write_text('{not json')
        assert state_store.load() == {}

    def test_non_object_is_empty(self, state_store, state_path):
        state_path.write_text('[1, 2, 3]')
        assert state_store.load() == {}

    def test_directory_path_is_empty(self, tmp_path):
        assert StateStore(str(tmp_path)).load() == {}


class TestSave:

    def test_writes_indented_json(self, state_store, state_path):
        assert state_store.save({'a': 1}) is True
        assert state_path.read_text() == '{\n  "a": 1\n}'

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / 'nested' / 'dir' / 'state.json'
        assert StateStore(str(path)).save({'a': 1}) is True
        assert json.loads(path.read_text()) == {'a': 1}

    def test_failure_is_swallowed(self, tmp_path):
        blocker = tmp_path / 'file'
        blocker.write_text('')
        assert StateStore(str(blocker / 'state.json')).save({'a': 1}) is False

    def test_unserializable_state_is_swallowed(self, state_store):
        assert state_store.save({'a': object()}) is False

    def test_record_connection_overwrites_only_last_connection(self, state_store, state_path):
        state_path.write_text(json.dumps({'other': True, 'lastConnection': {'version': 'old'}}))
        state_store.record_connection({'version': 'new'})
        assert json.loads(state_path.read_text()) == {
            'other': True,
            'lastConnection': {'version': 'new'},
        }
