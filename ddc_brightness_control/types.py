'''
Submodule containing types and type aliases used throughout the library.
'''
from enum import Enum

from .exceptions import UsageError

IntPercentage = int
'''
An integer between 0 and 100 (inclusive) that represents a brightness level.
Other than the implied bounds, this is just a normal integer.
'''


class Operation(str, Enum):
    '''
    A brightness adjustment requested for a single invocation.

    `INCREASE` and `DECREASE` are relative to the current brightness and move
    it by `.config.STEP`. `MIN` and `MAX` set the brightness to 0 and 100.
    '''
    INCREASE = 'increase'
    DECREASE = 'decrease'
    MIN = 'min'
    MAX = 'max'

    @classmethod
    def parse(cls, value: str) -> 'Operation':
        '''
        Convert a command line argument into an `Operation`

        Raises:
            UsageError: if `value` does not name a known operation
        '''
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(i.value for i in cls)
            raise UsageError(f'operation must be one of: {valid} (got {value!r})') from None

    @property
    def is_relative(self) -> bool:
        return self in (Operation.INCREASE, Operation.DECREASE)
