#
# Fixed-width two's-complement integers with wraparound arithmetic
#

import re

import attr

from .bits import (
    mask, to_signed, wrap_result, trunc_div, trunc_mod, format_radix, parse_radix,
    shift_left, shift_right_logical, shift_right_arithmetic,
)
from .common import Category, BitCategory, BINARY_INPUT_REGEX, HEX_INPUT_REGEX
from .errors import check_width

__all__ = ('IntegerFormat', 'create_integer_format')


NON_DIGIT_REGEX = re.compile('[^0-9]')
SIGNED_INPUT_REGEX = re.compile('^-?[0-9]*$')
UNSIGNED_INPUT_REGEX = re.compile('^[0-9]*$')

# Longest digit run converted by one int() call, well inside the interpreter's limit on
# decimal string conversion
DIGIT_CHUNK = 1000


def decimal_digits_modulo(digits, width):
    '''Return the value of a string of decimal digits modulo 2^width.'''
    modulus = 1 << width
    value = 0
    for start in range(0, len(digits), DIGIT_CHUNK):
        chunk = digits[start:start + DIGIT_CHUNK]
        value = (value * 10 ** len(chunk) + int(chunk)) % modulus
    return value


@attr.s(slots=True, frozen=True, kw_only=True)
class IntegerFormat:
    '''A signed or unsigned integer of bit_width bits.

    Arithmetic reads the operands as signed when the format is signed, computes the
    exact result and wraps it to bit_width bits.  Division truncates towards zero and
    the remainder has the sign of the dividend.  Dividing by zero returns the dividend.
    '''

    id = attr.ib()
    name = attr.ib()
    bit_width = attr.ib()
    signed = attr.ib()

    def __attrs_post_init__(self):
        check_width('bit_width', self.bit_width, 1)

    @property
    def category(self):
        return Category.INTEGER

    @property
    def supports_negation(self):
        return self.signed

    @property
    def supports_decimal_point(self):
        return False

    def _operands(self, lhs, rhs):
        if self.signed:
            return to_signed(lhs, self.bit_width), to_signed(rhs, self.bit_width)
        return mask(lhs, self.bit_width), mask(rhs, self.bit_width)

    def _wrap(self, result):
        return wrap_result(result, self.bit_width, self.signed)

    ##
    ## Text conversion
    ##

    def format(self, bits, base):
        '''Return the text of bits in base 2, 10 or 16.'''
        if base in (2, 16):
            return format_radix(bits, self.bit_width, base)
        if self.signed:
            return str(to_signed(bits, self.bit_width))
        return str(mask(bits, self.bit_width))

    def parse(self, text, base):
        '''Return the bit pattern of user text in base 2, 10 or 16.

        Characters that are not digits of the base are dropped.  In base 10 a leading
        '-' negates the value, but only for signed formats.
        '''
        if not text or text == '-':
            return 0
        if base in (2, 16):
            return parse_radix(text, self.bit_width, base)
        value = decimal_digits_modulo(NON_DIGIT_REGEX.sub('', text), self.bit_width)
        if self.signed and text.startswith('-'):
            value = -value
        return self._wrap(value)

    def valid_input_pattern(self, base):
        if base == 2:
            return BINARY_INPUT_REGEX
        if base == 16:
            return HEX_INPUT_REGEX
        return SIGNED_INPUT_REGEX if self.signed else UNSIGNED_INPUT_REGEX

    def get_bit_category(self, index):
        if self.signed and index == self.bit_width - 1:
            return BitCategory.SIGN
        return BitCategory.MAGNITUDE

    ##
    ## Arithmetic
    ##

    def add(self, lhs, rhs):
        lhs, rhs = self._operands(lhs, rhs)
        return self._wrap(lhs + rhs)

    def subtract(self, lhs, rhs):
        lhs, rhs = self._operands(lhs, rhs)
        return self._wrap(lhs - rhs)

    def multiply(self, lhs, rhs):
        lhs, rhs = self._operands(lhs, rhs)
        return self._wrap(lhs * rhs)

    def divide(self, lhs, rhs):
        a, b = self._operands(lhs, rhs)
        if b == 0:
            return mask(lhs, self.bit_width)
        return self._wrap(trunc_div(a, b))

    def modulo(self, lhs, rhs):
        a, b = self._operands(lhs, rhs)
        if b == 0:
            return mask(lhs, self.bit_width)
        return self._wrap(trunc_mod(a, b))

    ##
    ## Bitwise operations and shifts
    ##

    def and_(self, lhs, rhs):
        return mask(lhs & rhs, self.bit_width)

    def or_(self, lhs, rhs):
        return mask(lhs | rhs, self.bit_width)

    def xor(self, lhs, rhs):
        return mask(lhs ^ rhs, self.bit_width)

    def shift_left(self, lhs, rhs):
        return shift_left(lhs, rhs, self.bit_width)

    def shift_right(self, lhs, rhs):
        '''Arithmetic shift for signed formats, logical for unsigned ones.'''
        if self.signed:
            return shift_right_arithmetic(lhs, rhs, self.bit_width)
        return shift_right_logical(lhs, rhs, self.bit_width)

    def shift_right_unsigned(self, lhs, rhs):
        return shift_right_logical(lhs, rhs, self.bit_width)

    ##
    ## Unary operations
    ##

    def not_(self, value):
        return mask(~value, self.bit_width)

    def negate(self, value):
        return mask(-value, self.bit_width)

    def clear(self, value=None):
        return 0


def create_integer_format(bit_width, signed):
    '''Return the integer format int<bit_width> or uint<bit_width>.'''
    name = f'int{bit_width}' if signed else f'uint{bit_width}'
    return IntegerFormat(id=name, name=name, bit_width=bit_width, signed=signed)
