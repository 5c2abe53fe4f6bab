import os

import pytest
from pytest_mock import MockerFixture

from ddc_brightness_control import config
from ddc_brightness_control.exceptions import StateCorruptError, StateNotFoundError, StateWriteError
from ddc_brightness_control.state import FileStateStore


class TestFileStateStore:
    def test_default_path(self):
        assert FileStateStore().path == config.STATE_FILE

    class TestLoad:
        def test_missing_file(self, state_file: str):
            with pytest.raises(StateNotFoundError):
                FileStateStore(state_file).load()

        @pytest.mark.parametrize('contents, expected', [('50', 50), ('0', 0), ('100', 100), ('83\n', 83)])
        def test_valid_contents(self, state_file: str, contents: str, expected: int):
            with open(state_file, 'w') as f:
                f.write(contents)
            assert FileStateStore(state_file).load() == expected

        @pytest.mark.parametrize('contents', ['', 'abc', '12.5', '101', '-1', '+50', '5_0', ' 5 0', '\u0665\u0660'])
        def test_corrupt_contents(self, state_file: str, contents: str):
            with open(state_file, 'w', encoding='utf-8') as f:
                f.write(contents)
            with pytest.raises(StateCorruptError):
                FileStateStore(state_file).load()

        def test_unreadable(self, state_file: str):
            os.mkdir(state_file)
            with pytest.raises(StateCorruptError):
                FileStateStore(state_file).load()

    class TestSave:
        def test_writes_decimal_string(self, state_file: str):
            FileStateStore(state_file).save(83)
            with open(state_file) as f:
                assert f.read() == '83'

        def test_overwrites(self, state_file: str):
            store = FileStateStore(state_file)
            store.save(83)
            store.save(100)
            assert store.load() == 100
            assert not os.path.exists(state_file + '.tmp')

        @pytest.mark.parametrize('value', (-1, 101))
        def test_out_of_range(self, state_file: str, value: int):
            with pytest.raises(ValueError):
                FileStateStore(state_file).save(value)
            assert not os.path.exists(state_file)

        def test_write_error(self, tmp_path):
            store = FileStateStore(str(tmp_path / 'missing_dir' / 'brightness.value'))
            with pytest.raises(StateWriteError):
                store.save(50)

        def test_replace_error(self, state_file: str, mocker: MockerFixture):
            mocker.patch.object(os, 'replace', side_effect=PermissionError(13, 'Permission denied'))
            with pytest.raises(StateWriteError):
                FileStateStore(state_file).save(50)
            assert not os.path.exists(state_file + '.tmp'), 'temporary file should be cleaned up'

    class TestClear:
        def test_removes_file(self, state_file: str):
            store = FileStateStore(state_file)
            store.save(50)
            assert store.clear() is True
            with pytest.raises(StateNotFoundError):
                store.load()

        def test_missing_file(self, state_file: str):
            assert FileStateStore(state_file).clear() is False
