import logging
import re
import subprocess
from typing import List, Optional, Tuple

from . import config
from .exceptions import KernelModuleError, MaxRetriesExceededError, ProtocolError, format_exc
from .helpers import BrightnessChannel, check_output, percentage
from .types import IntPercentage

_logger = logging.getLogger(__name__)

_MAX_VALUE_PATTERN = re.compile(r'max value\s*=\s*(\d+)')


def parse_vcp_brightness(output: str) -> Tuple[int, int]:
    '''
    Extract the brightness from the output of `ddcutil getvcp 10`.

    The relevant line looks like this:
    ```
    VCP code 0x10 (Brightness                    ): current value =    67, max value =   100
    ```
    The current value is the first `=` delimited token after the `Brightness`
    label, up to the end of that line.

    Args:
        output: the decoded stdout of ddcutil

    Returns:
        A tuple of the raw current value and the max value reported by the display.
        If no max value is reported, 100 is assumed

    Raises:
        ProtocolError: if the brightness field is missing or unparsable
    '''
    for line in output.splitlines():
        if 'Brightness' not in line:
            continue
        field = line[line.index('Brightness'):]
        tokens = field.split('=')
        if len(tokens) < 2:
            continue

        raw_current = tokens[1].split(',')[0].strip()
        try:
            current = int(raw_current)
        except ValueError:
            raise ProtocolError(f'cannot parse brightness value {raw_current!r}') from None

        max_match = _MAX_VALUE_PATTERN.search(field)
        max_value = int(max_match.group(1)) if max_match else 100
        if max_value <= 0:
            raise ProtocolError(f'display reported an invalid max brightness ({max_value})')
        return current, max_value

    raise ProtocolError('no brightness field found in ddcutil output')


class DDCUtil(BrightnessChannel):
    '''
    Read and write the brightness of a single external display using the
    [ddcutil](https://www.ddcutil.com/) executable.

    Talking to the display over DDC/CI requires access to `/dev/i2c-*`, which
    usually means running ddcutil as root (see `.config.USE_SUDO`) and having the
    `i2c-dev` kernel module loaded (see `ensure_i2c_dev`).

    Example:
        ```python
        from ddc_brightness_control.linux import DDCUtil

        channel = DDCUtil(display=1)
        print(channel.query())
        channel.write(50)
        ```
    '''
    _logger = _logger.getChild('DDCUtil')

    VCP_BRIGHTNESS: str = '10'
    '''The MCCS feature code for brightness'''

    def __init__(
        self,
        display: Optional[int] = None,
        executable: Optional[str] = None,
        use_sudo: Optional[bool] = None,
        sleep_multiplier: Optional[float] = None,
        max_tries: Optional[int] = None
    ):
        self.display: int = config.DISPLAY if display is None else display
        self.executable: str = executable or config.DDCUTIL_EXECUTABLE
        self.use_sudo: bool = config.USE_SUDO if use_sudo is None else use_sudo
        self.sleep_multiplier: Optional[float] = (
            config.SLEEP_MULTIPLIER if sleep_multiplier is None else sleep_multiplier
        )
        self.max_tries: int = max_tries or config.DDCUTIL_MAX_TRIES
        # max brightness reported by the display during the last query
        self._max_value: Optional[int] = None

    def __repr__(self):
        return f'{self.__class__.__name__}(display={self.display!r}, executable={self.executable!r})'

    def _command(self, *args: str) -> List[str]:
        command = ['sudo'] if self.use_sudo else []
        command += [self.executable, '--display', str(self.display), *args]
        if self.sleep_multiplier is not None:
            command.append(f'--sleep-multiplier={self.sleep_multiplier}')
        return command

    def _run(self, *args: str) -> str:
        command = self._command(*args)
        try:
            return check_output(command, max_tries=self.max_tries).decode(errors='replace')
        except MaxRetriesExceededError as e:
            stderr = (e.stderr or b'').decode(errors='replace').strip()
            raise ProtocolError(
                f'{" ".join(command)!r} exited with status {e.returncode}'
                + (f': {stderr}' if stderr else '')
            ) from e
        except OSError as e:
            raise ProtocolError(f'could not run {command[0]!r} - {format_exc(e)}') from e

    def query(self) -> IntPercentage:
        output = self._run('getvcp', self.VCP_BRIGHTNESS)
        value, max_value = parse_vcp_brightness(output)
        if max_value != 100:
            # if the max brightness is not 100 then the number is not a percentage
            # and will need to be scaled
            self._logger.debug(f'display {self.display} max brightness:{max_value} (current: {value})')
            value = int((value / max_value) * 100)
        self._max_value = max_value
        return percentage(value)

    def write(self, value: IntPercentage):
        if not 0 <= value <= 100:
            raise ValueError(f'brightness must be between 0 and 100, not {value!r}')
        if self._max_value is None:
            # the display's max brightness is needed to know how to scale the value
            self.query()
        if self._max_value != 100:
            value = int((value / 100) * self._max_value)
        self._logger.debug(f'setvcp {self.VCP_BRIGHTNESS} {value} on display {self.display}')
        self._run('setvcp', self.VCP_BRIGHTNESS, str(value))


def ensure_i2c_dev(use_sudo: Optional[bool] = None) -> bool:
    '''
    Make sure the `i2c-dev` kernel module, which ddcutil needs, is loaded.

    Args:
        use_sudo: run `modprobe` through sudo. Defaults to `.config.USE_SUDO`

    Returns:
        True if the module had to be loaded, False if it already was

    Raises:
        KernelModuleError: if the loaded modules cannot be listed or `modprobe` fails
    '''
    use_sudo = config.USE_SUDO if use_sudo is None else use_sudo

    try:
        modules = check_output(['lsmod']).decode(errors='replace')
    except (subprocess.CalledProcessError, OSError) as e:
        raise KernelModuleError(f'could not list kernel modules - {format_exc(e)}') from e

    # lsmod reports the module with an underscore
    for line in modules.splitlines():
        if line.split(' ', 1)[0] == 'i2c_dev':
            return False

    _logger.info('loading kernel module i2c-dev')
    command = ['sudo'] if use_sudo else []
    command += ['modprobe', 'i2c-dev']
    try:
        check_output(command)
    except (subprocess.CalledProcessError, OSError) as e:
        raise KernelModuleError(f'could not load i2c-dev - {format_exc(e)}') from e
    return True
