#
# The catalogue of named number formats
#

import logging
from types import MappingProxyType
from typing import Union

from .fixed import FixedFormat, create_fixed_format
from .floating import FloatFormat, create_float_format
from .integer import IntegerFormat, create_integer_format

__all__ = ('NumberFormat', 'FORMATS', 'FORMAT_LIST', 'DEFAULT_FORMAT_ID', 'get_format')

logger = logging.getLogger(__name__)


NumberFormat = Union[IntegerFormat, FloatFormat, FixedFormat]

DEFAULT_FORMAT_ID = 'int32'

# (kind, id, name, parameters).  Registry order is display order.
_FORMAT_TABLE = (
    ('integer', 'int8', 'int8', (8, True)),
    ('integer', 'uint8', 'uint8', (8, False)),
    ('integer', 'int16', 'int16', (16, True)),
    ('integer', 'uint16', 'uint16', (16, False)),
    ('integer', 'int32', 'int32', (32, True)),
    ('integer', 'uint32', 'uint32', (32, False)),
    ('integer', 'int64', 'int64', (64, True)),
    ('integer', 'uint64', 'uint64', (64, False)),
    # exponent bits, mantissa bits
    ('float', 'float16', 'float16', (5, 10)),
    ('float', 'bfloat16', 'bfloat16', (8, 7)),
    ('float', 'float32', 'float32', (8, 23)),
    ('float', 'float64', 'float64', (11, 52)),
    # integer bits, fractional bits, signed
    ('fixed', 'q7.8', 'Q7.8', (7, 8, True)),
    ('fixed', 'q15.16', 'Q15.16', (15, 16, True)),
    ('fixed', 'uq8.8', 'UQ8.8', (8, 8, False)),
)


def _build_format(kind, id, name, params):
    if kind == 'integer':
        return create_integer_format(*params)
    if kind == 'float':
        return create_float_format(id, name, *params)
    return create_fixed_format(id, name, *params)


FORMATS = MappingProxyType({entry[1]: _build_format(*entry) for entry in _FORMAT_TABLE})
FORMAT_LIST = tuple(FORMATS.values())


def get_format(id):
    '''Return the format registered under id, or the default int32 format if there is
    none.'''
    fmt = FORMATS.get(id)
    if fmt is None:
        logger.debug('unknown format %r; using %s', id, DEFAULT_FORMAT_ID)
        fmt = FORMATS[DEFAULT_FORMAT_ID]
    return fmt
