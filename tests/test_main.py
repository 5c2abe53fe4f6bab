from unittest.mock import Mock

import pytest
from pytest_mock import MockerFixture

import ddc_brightness_control as dbc
from ddc_brightness_control import __main__ as cli
from ddc_brightness_control.exceptions import KernelModuleError, ProtocolError, StateWriteError
from ddc_brightness_control.types import Operation


@pytest.fixture
def ensure_i2c_dev(mocker: MockerFixture) -> Mock:
    return mocker.patch.object(cli, 'ensure_i2c_dev', return_value=False)


@pytest.fixture
def adjust(mocker: MockerFixture) -> Mock:
    outcome = dbc.Outcome(operation=Operation.INCREASE, previous=50, value=83, written=True, message='Set to 83')
    return mocker.patch.object(dbc, 'adjust_brightness', return_value=outcome)


class TestUsage:
    def test_missing_operation(self, ensure_i2c_dev, adjust):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 2
        adjust.assert_not_called()

    def test_invalid_operation(self, ensure_i2c_dev, adjust):
        with pytest.raises(SystemExit) as exc:
            cli.main(['brighter'])
        assert exc.value.code == 2
        adjust.assert_not_called()

    def test_version(self, capsys):
        assert cli.main(['-V']) == 0
        assert capsys.readouterr().out.strip() == dbc.__version__

    def test_package_metadata(self):
        assert dbc.__author__ == 'ddc_brightness_control contributors'


class TestOperations:
    @pytest.mark.parametrize('operation', [i.value for i in Operation])
    def test_success(self, ensure_i2c_dev, adjust, operation: str):
        assert cli.main([operation]) == 0
        assert adjust.call_args.args[0] == operation
        ensure_i2c_dev.assert_called_once()

    def test_overrides(self, ensure_i2c_dev, adjust):
        cli.main(['max', '--display', '2', '--state-file', '/tmp/other.value', '--no-notify'])
        kwargs = adjust.call_args.kwargs
        assert kwargs['display'] == 2
        assert kwargs['state_file'] == '/tmp/other.value'
        assert kwargs['notifier'].enabled is False

    def test_no_module_check(self, ensure_i2c_dev, adjust):
        cli.main(['min', '--no-module-check'])
        ensure_i2c_dev.assert_not_called()

    def test_module_failure_is_not_fatal(self, ensure_i2c_dev, adjust):
        ensure_i2c_dev.side_effect = KernelModuleError('modprobe failed')
        assert cli.main(['increase']) == 0
        adjust.assert_called_once()

    @pytest.mark.parametrize('error', [ProtocolError('write failed'), StateWriteError('save failed')])
    def test_fatal_outcome(self, ensure_i2c_dev, adjust, capsys, error):
        adjust.return_value.errors.append(error)
        assert cli.main(['increase']) == 1
        assert str(error) in capsys.readouterr().err

    def test_boundary_exits_zero(self, ensure_i2c_dev, adjust):
        adjust.return_value.boundary = True
        adjust.return_value.message = dbc.AT_MAX_MESSAGE
        assert cli.main(['increase']) == 0


class TestExtras:
    def test_get(self, mocker: MockerFixture, capsys):
        mocker.patch.object(dbc, 'get_brightness', return_value=42)
        assert cli.main(['--get']) == 0
        assert capsys.readouterr().out.strip() == '42%'

    def test_reset(self, state_file: str, capsys):
        dbc.FileStateStore(state_file).save(50)
        assert cli.main(['--reset', '--state-file', state_file]) == 0
        assert 'cleared' in capsys.readouterr().out

    def test_debug_info(self, mocker: MockerFixture, capsys):
        mocker.patch.object(dbc.linux, 'check_output', side_effect=FileNotFoundError())
        assert cli.main(['--debug-info']) == 0
        out = capsys.readouterr().out
        assert '"version"' in out and '"display_brightness"' in out


class TestDebugInfo:
    def test_collects_state(self, mocker: MockerFixture, state_file: str):
        from ddc_brightness_control import _debug
        dbc.FileStateStore(state_file).save(33)
        mocker.patch.object(
            dbc.linux, 'check_output',
            side_effect=[b'VCP code 0x10 (Brightness): current value = 40, max value = 100\n', b'i2c_dev 1 0\n']
        )
        info = _debug.info(state_file=state_file)
        assert info['persisted_brightness'] == 33
        assert info['display_brightness'] == 40
        assert info['i2c_dev_loaded'] is True
        assert info['config']['STEP'] == 33
