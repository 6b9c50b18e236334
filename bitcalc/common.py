#
# Definitions shared by the integer, fixed-point and floating point formats
#

import re
from enum import Enum, IntEnum

__all__ = ('Category', 'BitCategory', 'BASES', 'parse_float_prefix',
           'BINARY_INPUT_REGEX', 'HEX_INPUT_REGEX')


class Category(str, Enum):
    '''The kind of a number format.'''
    INTEGER = 'integer'
    FLOAT = 'float'
    FIXED = 'fixed'


# The role a bit plays in a format, used to colour a bit grid.  Values 2 and 3 mean
# different things to different categories, so they carry several names.
class BitCategory(IntEnum):
    SIGN = 1
    MAGNITUDE = 2
    INTEGER_PART = 2
    EXPONENT = 2
    FRACTION = 3
    MANTISSA = 3


BASES = (2, 10, 16)

BINARY_INPUT_REGEX = re.compile('^[01]*$')
HEX_INPUT_REGEX = re.compile('^[0-9a-fA-F]*$')

# The longest leading decimal float literal, as JavaScript's parseFloat() reads it
DEC_FLOAT_PREFIX_REGEX = re.compile(
    # sign[opt]
    '[-+]?'
    # (dec-integer.fraction[opt] or .fraction)
    '([0-9]+\\.?[0-9]*|\\.[0-9]+)'
    # e sign[opt]dec-exponent   [opt]
    '([eE][-+]?[0-9]+)?',
    re.ASCII
)


def parse_float_prefix(text):
    '''Return the float value of the leading decimal literal in text, or None if text
    does not start (after whitespace) with one.

    Trailing garbage is ignored, so '1.5abc' reads as 1.5.  Out-of-range exponents
    read as infinities or zeroes.
    '''
    match = DEC_FLOAT_PREFIX_REGEX.match((text or '').strip())
    if match is None:
        return None
    return float(match.group(0))
