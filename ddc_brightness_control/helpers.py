'''
Helper functions for the library
'''
from __future__ import annotations

import logging
import subprocess
import time
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from . import config
from .exceptions import MaxRetriesExceededError
from .types import IntPercentage, Operation

_logger = logging.getLogger(__name__)


class BrightnessChannel(ABC):
    '''Something that can read and write the brightness of the target display'''
    @abstractmethod
    def query(self) -> IntPercentage:
        '''
        Ask the display for its current brightness

        Returns:
            `.types.IntPercentage`

        Raises:
            ProtocolError: if the display could not be queried or its
                response could not be understood
        '''
        ...

    @abstractmethod
    def write(self, value: IntPercentage):
        '''
        Set the brightness of the display.
        If this raises, the caller must not assume the display changed.

        Args:
            value (.types.IntPercentage): the new brightness value

        Raises:
            ProtocolError: if the write command failed
        '''
        ...


class StateStore(ABC):
    '''Durable storage for the last known brightness value'''
    @abstractmethod
    def load(self) -> IntPercentage:
        '''
        Raises:
            StateNotFoundError: nothing has been stored yet
            StateCorruptError: the stored value cannot be used
        '''
        ...

    @abstractmethod
    def save(self, value: IntPercentage):
        '''
        Raises:
            StateWriteError: the value could not be stored
        '''
        ...


def check_output(command: List[str], max_tries: int = 1) -> bytes:
    '''
    Run a command with retry management built in.

    Args:
        command: the command to run
        max_tries: the maximum number of retries to allow before raising an error

    Returns:
        The output from the command
    '''
    tries = 1
    while True:
        try:
            output = subprocess.check_output(command, stderr=subprocess.PIPE)
        except subprocess.CalledProcessError as e:
            if tries >= max_tries:
                raise MaxRetriesExceededError(f'process failed after {tries} tries', e) from e
            tries += 1
            time.sleep(0.04 if tries < 5 else 0.5)
        else:
            if tries > 1:
                _logger.debug(f'command {command} took {tries}/{max_tries} tries')
            return output


def percentage(value: Union[int, float, str], lower_bound: int = 0, upper_bound: int = 100) -> IntPercentage:
    '''
    Convenience function to convert a brightness value into a percentage. Can handle
    integers, floats and numeric strings.

    Args:
        value: the brightness value to convert
        lower_bound: the minimum value the brightness can be set to
        upper_bound: the maximum value the brightness can be set to

    Returns:
        `.types.IntPercentage`: The new brightness percentage, between `lower_bound` and `upper_bound`
    '''
    value = int(float(str(value)))
    return min(upper_bound, max(lower_bound, value))


def adjust(
    current: IntPercentage,
    operation: Operation,
    step: Optional[int] = None,
    snap: Optional[int] = None
) -> IntPercentage:
    '''
    Work out the brightness that an operation should produce.

    `INCREASE`/`DECREASE` move `current` by `step`, clamp the result to 0-100 and
    then snap values within `snap` of either end onto that end, so that repeated
    steps that do not divide 100 evenly still reach 0 and 100.
    `MIN` and `MAX` ignore `current` entirely.

    Args:
        current (.types.IntPercentage): the current brightness
        operation (.types.Operation): the requested adjustment
        step: defaults to `.config.STEP`
        snap: defaults to `.config.SNAP_MARGIN`

    Returns:
        `.types.IntPercentage`

    Example:
        ```python
        from ddc_brightness_control.helpers import adjust
        from ddc_brightness_control.types import Operation

        adjust(50, Operation.INCREASE)  # 83
        adjust(92, Operation.INCREASE)  # 100
        adjust(36, Operation.DECREASE)  # 0
        ```
    '''
    operation = Operation(operation)
    if not operation.is_relative:
        return 0 if operation is Operation.MIN else 100

    step = config.STEP if step is None else step
    snap = config.SNAP_MARGIN if snap is None else snap

    if operation is Operation.INCREASE:
        value = percentage(current + step)
    else:
        value = percentage(current - step)

    if value >= 100 - snap:
        return 100
    if value <= snap:
        return 0
    return value
