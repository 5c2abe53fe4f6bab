'''
Contains globally applicable configuration variables.
'''
from functools import wraps
from typing import Callable, Optional


def default_params(func: Callable):
    '''
    This decorator sets default kwarg values using global configuration variables.
    '''
    @wraps(func)
    def wrapper(*args, **kwargs):
        kwargs.setdefault('display', DISPLAY)
        kwargs.setdefault('state_file', STATE_FILE)
        return func(*args, **kwargs)
    return wrapper


DISPLAY: int = 1
'''
The ddcutil display number (`ddcutil --display N`) of the monitor to adjust.
Run `ddcutil detect` to list the numbers assigned to connected displays.
'''

STATE_FILE: str = '/tmp/brightness.value'
'''
Where the last known brightness value is kept between invocations.
The file holds a single decimal integer and nothing else.
'''

STEP: int = 33
'''How far `increase` and `decrease` move the brightness'''

SNAP_MARGIN: int = 5
'''
Relative adjustments that land within this distance of 0 or 100
are rounded to the boundary.
'''

FALLBACK_BRIGHTNESS: int = 100
'''Assumed brightness when neither the state file nor the display can tell us'''

DDCUTIL_EXECUTABLE: str = 'ddcutil'
'''The ddcutil executable to be called'''

USE_SUDO: bool = True
'''
Prefix privileged commands (ddcutil, modprobe) with `sudo`.
Disable this if your user already has read/write access to `/dev/i2c-*`.
'''

SLEEP_MULTIPLIER: Optional[float] = None
'''
How long ddcutil should sleep between each DDC request (lower is shorter).
`None` leaves ddcutil's own default in place.
See [the ddcutil docs](https://www.ddcutil.com/performance_options/#option-sleep-multiplier).
'''

DDCUTIL_MAX_TRIES: int = 3
'''Max number of tries when calling ddcutil'''

NOTIFY_APP_NAME: str = 'brightness-control'
'''Application name attached to desktop notifications'''
