import contextlib
import logging
import os
import re
from typing import Optional

from . import config
from .exceptions import StateCorruptError, StateNotFoundError, StateWriteError, format_exc
from .helpers import StateStore
from .types import IntPercentage

_logger = logging.getLogger(__name__)

_DECIMAL_PATTERN = re.compile(r'[0-9]+')


class FileStateStore(StateStore):
    '''
    Keeps the last known brightness in a plain text file containing nothing
    but the decimal value, eg: `83`.

    The file is owned by whichever process is running; no locking is done.
    '''
    _logger = _logger.getChild('FileStateStore')

    def __init__(self, path: Optional[str] = None):
        self.path: str = path or config.STATE_FILE

    def __repr__(self):
        return f'{self.__class__.__name__}({self.path!r})'

    def load(self) -> IntPercentage:
        try:
            with open(self.path, 'r') as f:
                contents = f.read()
        except FileNotFoundError:
            raise StateNotFoundError(f'{self.path} does not exist') from None
        except (OSError, UnicodeDecodeError) as e:
            raise StateCorruptError(f'cannot read {self.path} - {format_exc(e)}') from e

        if not _DECIMAL_PATTERN.fullmatch(contents.strip()):
            raise StateCorruptError(f'{self.path} does not contain an integer: {contents[:20]!r}')
        value = int(contents.strip())

        if not 0 <= value <= 100:
            raise StateCorruptError(f'{self.path} holds out of range brightness {value}')
        return value

    def save(self, value: IntPercentage):
        if not 0 <= value <= 100:
            raise ValueError(f'brightness must be between 0 and 100, not {value!r}')

        tmp = self.path + '.tmp'
        try:
            with open(tmp, 'w') as f:
                f.write(str(value))
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                os.remove(tmp)
            raise StateWriteError(f'cannot write {self.path} - {format_exc(e)}') from e
        self._logger.debug(f'saved {value} to {self.path}')

    def clear(self) -> bool:
        '''
        Remove the state file, so the next invocation asks the display instead.

        Returns:
            True if a file was removed
        '''
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StateWriteError(f'cannot remove {self.path} - {format_exc(e)}') from e
        return True
