'''
A small helper module to assist with debugging the ddc_brightness_control library
'''
import logging
import platform
import traceback
from typing import Optional


def info(display: Optional[int] = None, state_file: Optional[str] = None) -> dict:
    '''
    Gather and return information that may (or may not) be useful for debugging
    issues with the library.

    Nothing here writes to the display or the state file.
    '''
    import ddc_brightness_control as dbc
    from ddc_brightness_control import config
    from ddc_brightness_control.linux import check_output

    # configure logging
    logger = logging.getLogger(__name__).getChild('info')

    channel = dbc.DDCUtil(display=display)
    store = dbc.FileStateStore(state_file)

    debug_info = {
        'version': dbc.__version__,
        'platform': platform.system(),
        'file': dbc.__file__,
        'config': {
            name: getattr(config, name) for name in dir(config)
            if name.isupper()
        },
        'channel': repr(channel),
        'store': repr(store)
    }

    logger.debug('reading persisted brightness')
    try:
        debug_info['persisted_brightness'] = store.load()
    except Exception:
        debug_info['persisted_brightness'] = traceback.format_exc()

    logger.debug('querying display brightness')
    try:
        debug_info['display_brightness'] = channel.query()
    except Exception:
        debug_info['display_brightness'] = traceback.format_exc()

    logger.debug('listing kernel modules')
    try:
        modules = check_output(['lsmod']).decode(errors='replace')
        debug_info['i2c_dev_loaded'] = any(
            line.split(' ', 1)[0] == 'i2c_dev' for line in modules.splitlines()
        )
    except Exception:
        debug_info['i2c_dev_loaded'] = traceback.format_exc()

    return debug_info
