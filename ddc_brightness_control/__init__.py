import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ._version import __author__, __version__  # noqa: F401
from .exceptions import (BrightnessControlError, ProtocolError, StateError,
                         StateWriteError, format_exc)
from .helpers import BrightnessChannel, StateStore, adjust
from .linux import DDCUtil
from .notify import Notifier
from .state import FileStateStore
from .types import IntPercentage, Operation
from . import config


_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())

AT_MIN_MESSAGE = 'Already at min value'
AT_MAX_MESSAGE = 'Already at max value'
SET_FAILED_MESSAGE = 'Failed to set value'
SAVE_FAILED_MESSAGE = 'Failed to save value'
SET_AND_SAVE_FAILED_MESSAGE = 'Failed to set and save value'


def resolve_brightness(
    store: StateStore,
    channel: BrightnessChannel,
    fallback: Optional[IntPercentage] = None
) -> IntPercentage:
    '''
    Work out the current brightness of the display without ever failing.

    Sources are tried in order:
    1. the value persisted in `store`
    2. a query sent to the display through `channel`
    3. `fallback` (defaults to `.config.FALLBACK_BRIGHTNESS`)

    Args:
        store: where the last known value was persisted
        channel: the display's hardware channel
        fallback: the value to assume when both of the above fail

    Returns:
        `.types.IntPercentage`

    Example:
        ```python
        import ddc_brightness_control as dbc

        current = dbc.resolve_brightness(dbc.FileStateStore(), dbc.DDCUtil())
        ```
    '''
    try:
        value = store.load()
    except StateError as e:
        _logger.debug(f'no usable persisted brightness - {format_exc(e)}')
    else:
        _logger.debug(f'resolved brightness {value} from {store!r}')
        return value

    try:
        value = channel.query()
    except ProtocolError as e:
        _logger.info(f'could not query display brightness - {format_exc(e)}')
    else:
        _logger.debug(f'resolved brightness {value} from {channel!r}')
        return value

    fallback = config.FALLBACK_BRIGHTNESS if fallback is None else fallback
    _logger.debug(f'falling back to brightness {fallback}')
    return fallback


@dataclass
class Outcome:
    '''
    What happened during a single `BrightnessController.run`.
    '''
    operation: Operation
    previous: IntPercentage
    '''The brightness before the operation, as resolved by `resolve_brightness`'''
    value: IntPercentage
    '''The brightness the operation aimed for. This is what gets persisted'''
    boundary: bool = False
    '''The display was already at the requested boundary so it was left alone'''
    written: bool = False
    '''The new value was successfully written to the display'''
    message: str = ''
    '''The text sent to the notifier'''
    errors: List[BrightnessControlError] = field(default_factory=list)
    '''Fatal errors encountered while writing or persisting'''

    @property
    def ok(self) -> bool:
        return not self.errors


class BrightnessController:
    '''
    Runs one brightness operation against one display.

    Each call to `run` resolves the current brightness, decides whether the
    display is already at the requested boundary, writes the new value to the
    display and persists it. Write and persist failures do not raise; they are
    collected in `Outcome.errors` once every step has had a chance to run.
    '''
    def __init__(
        self,
        channel: BrightnessChannel,
        store: StateStore,
        notifier: Optional[Notifier] = None
    ):
        self.channel = channel
        self.store = store
        self.notifier = notifier or Notifier(enabled=False)
        self._logger = _logger.getChild(self.__class__.__name__)

    @staticmethod
    def is_boundary(current: IntPercentage, operation: Operation) -> bool:
        '''
        Whether `operation` cannot move the brightness any further from `current`
        '''
        if operation in (Operation.INCREASE, Operation.MAX):
            return current == 100
        return current == 0

    def run(self, operation: Union[Operation, str]) -> Outcome:
        '''
        Args:
            operation (.types.Operation): the adjustment to make

        Returns:
            An `Outcome` describing the result. Check `Outcome.ok` for failures

        Raises:
            UsageError: if `operation` is not a valid `.types.Operation`
        '''
        if not isinstance(operation, Operation):
            operation = Operation.parse(operation)

        current = resolve_brightness(self.store, self.channel)
        outcome = Outcome(operation=operation, previous=current, value=current)

        if self.is_boundary(current, operation):
            outcome.boundary = True
            outcome.message = AT_MAX_MESSAGE if current == 100 else AT_MIN_MESSAGE
            self._logger.debug(f'{operation.value}: already at {current}, display left untouched')
        else:
            outcome.value = adjust(current, operation)
            self._logger.debug(f'{operation.value}: {current} -> {outcome.value}')
            try:
                self.channel.write(outcome.value)
            except ProtocolError as e:
                # the intended value is still persisted below
                self._logger.error(f'failed to set brightness to {outcome.value} - {format_exc(e)}')
                outcome.errors.append(e)
                outcome.message = SET_FAILED_MESSAGE
            else:
                outcome.written = True
                outcome.message = f'Set to {outcome.value}'

        # persist even on a boundary no-op, as there may be no saved value yet
        try:
            self.store.save(outcome.value)
        except StateWriteError as e:
            self._logger.error(f'failed to save brightness {outcome.value} - {format_exc(e)}')
            outcome.message = SAVE_FAILED_MESSAGE if outcome.ok else SET_AND_SAVE_FAILED_MESSAGE
            outcome.errors.append(e)

        self.notifier.send(outcome.message)
        return outcome


@config.default_params
def adjust_brightness(
    operation: Union[Operation, str],
    display: Optional[int] = None,
    state_file: Optional[str] = None,
    channel: Optional[BrightnessChannel] = None,
    store: Optional[StateStore] = None,
    notifier: Optional[Notifier] = None
) -> Outcome:
    '''
    Increase, decrease, minimise or maximise the brightness of the display

    Args:
        operation (.types.Operation): the adjustment to make. Accepts the enum or
            its string value (`'increase'`, `'decrease'`, `'min'`, `'max'`)
        display: the ddcutil display number. Ignored if `channel` is given
        state_file: where to persist the brightness. Ignored if `store` is given
        channel: override the hardware channel
        store: override the state store
        notifier: where to send the human readable result. Defaults to no notifications

    Returns:
        An `Outcome`. Failures to write or persist are reported in `Outcome.errors`
        rather than raised

    Example:
        ```python
        import ddc_brightness_control as dbc

        outcome = dbc.adjust_brightness('increase')
        if not outcome.ok:
            print('failed:', outcome.errors)
        ```
    '''
    controller = BrightnessController(
        channel or DDCUtil(display=display),
        store or FileStateStore(state_file),
        notifier
    )
    return controller.run(operation)


@config.default_params
def get_brightness(
    display: Optional[int] = None,
    state_file: Optional[str] = None,
    channel: Optional[BrightnessChannel] = None,
    store: Optional[StateStore] = None
) -> IntPercentage:
    '''
    Returns the current brightness of the display, as `adjust_brightness` would see it.
    See `resolve_brightness` for the order in which sources are consulted.
    '''
    return resolve_brightness(
        store or FileStateStore(state_file),
        channel or DDCUtil(display=display)
    )
