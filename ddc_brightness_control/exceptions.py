import subprocess


def format_exc(e: Exception) -> str:
    '''@private'''
    return f'{type(e).__name__}: {e}'


class BrightnessControlError(Exception):
    '''
    Generic error class designed to make catching errors under one umbrella easy.
    '''
    ...


class UsageError(BrightnessControlError, ValueError):
    '''Missing or unrecognised operation'''
    ...


class ProtocolError(BrightnessControlError):
    '''A DDC/CI query or write failed, or the display's response could not be parsed'''
    ...


class KernelModuleError(BrightnessControlError):
    '''The i2c-dev kernel module could not be checked or loaded'''
    ...


class StateError(BrightnessControlError):
    '''Base class for errors raised by a `.helpers.StateStore`'''
    ...


class StateNotFoundError(StateError, LookupError):
    '''No brightness value has been persisted yet'''
    ...


class StateCorruptError(StateError):
    '''The persisted brightness value is unreadable or out of range'''
    ...


class StateWriteError(StateError):
    '''The brightness value could not be persisted'''
    ...


class MaxRetriesExceededError(BrightnessControlError, subprocess.CalledProcessError):
    '''
    The command has been retried too many times.

    Example:
        ```python
        try:
            subprocess.check_output(['exit', '1'])
        except subprocess.CalledProcessError as e:
            raise MaxRetriesExceededError('failed after 1 try', e)
        ```
    '''
    def __init__(self, message: str, exc: subprocess.CalledProcessError):
        self.message: str = message
        BrightnessControlError.__init__(self, message)
        super().__init__(exc.returncode, exc.cmd, exc.stdout, exc.stderr)

    def __str__(self):
        string = super().__str__()
        string += f'\n\t-> {self.message}'
        return string
