import logging
import subprocess
from typing import Optional

from . import config
from .exceptions import format_exc

_logger = logging.getLogger(__name__)


class Notifier:
    '''
    Sends short desktop notifications through `notify-send`.

    Notifications are fire-and-forget: a missing `notify-send` or a failing
    notification daemon is logged and otherwise ignored.
    '''
    _logger = _logger.getChild('Notifier')

    title: str = 'Brightness control'

    def __init__(self, enabled: bool = True, app_name: Optional[str] = None):
        self.enabled = enabled
        self.app_name: str = app_name or config.NOTIFY_APP_NAME

    def send(self, message: str):
        self._logger.info(message)
        if not self.enabled:
            return
        command = [
            'notify-send', f'--app-name={self.app_name}', '--urgency=low',
            self.title, message
        ]
        try:
            subprocess.run(command, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
        except (subprocess.CalledProcessError, OSError) as e:
            self._logger.warning(f'failed to send notification {message!r} - {format_exc(e)}')
