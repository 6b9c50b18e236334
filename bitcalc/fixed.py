#
# Signed and unsigned binary fixed-point numbers in Q format
#

import re
from decimal import Decimal, localcontext, ROUND_HALF_UP
from math import ceil, floor, isfinite, log10

import attr

from .bits import (
    mask, to_signed, to_unsigned, wrap_result, trunc_div, trunc_mod, format_radix,
    parse_radix, shift_left, shift_right_logical, shift_right_arithmetic,
)
from .common import (
    Category, BitCategory, BINARY_INPUT_REGEX, HEX_INPUT_REGEX, parse_float_prefix,
)
from .errors import check_width, FormatError

__all__ = ('FixedFormat', 'create_fixed_format')


SIGNED_INPUT_REGEX = re.compile('^-?[0-9]*\\.?[0-9]*$')
UNSIGNED_INPUT_REGEX = re.compile('^[0-9]*\\.?[0-9]*$')


@attr.s(slots=True, frozen=True, kw_only=True)
class FixedFormat:
    '''A Qm.n (signed) or UQm.n (unsigned) fixed-point format.

    The bit pattern is the value multiplied by scale = 2^fractional_bits, stored as a
    two's-complement integer when signed.  A signed format spends one extra bit on the
    sign, so Q7.8 is 16 bits wide.
    '''

    id = attr.ib()
    name = attr.ib()
    integer_bits = attr.ib()
    fractional_bits = attr.ib()
    signed = attr.ib()

    def __attrs_post_init__(self):
        check_width('integer_bits', self.integer_bits, 0)
        check_width('fractional_bits', self.fractional_bits, 0)
        if self.bit_width < 1:
            raise FormatError('a fixed-point format needs at least one bit')

    @property
    def bit_width(self):
        return self.integer_bits + self.fractional_bits + (1 if self.signed else 0)

    @property
    def scale(self):
        return 1 << self.fractional_bits

    @property
    def decimal_places(self):
        '''Decimal places needed to show the weight of the least significant bit.'''
        return ceil(self.fractional_bits * log10(2))

    @property
    def category(self):
        return Category.FIXED

    @property
    def supports_negation(self):
        return self.signed

    @property
    def supports_decimal_point(self):
        return True

    def _raw(self, bits):
        if self.signed:
            return to_signed(bits, self.bit_width)
        return mask(bits, self.bit_width)

    def _operands(self, lhs, rhs):
        return self._raw(lhs), self._raw(rhs)

    def _wrap(self, result):
        return wrap_result(result, self.bit_width, self.signed)

    ##
    ## Text conversion
    ##

    def format(self, bits, base):
        if base in (2, 16):
            return format_radix(bits, self.bit_width, base)

        places = self.decimal_places
        with localcontext() as context:
            # Enough digits that the division by a power of two is exact
            context.prec = self.bit_width + self.fractional_bits + 2
            value = Decimal(self._raw(bits)) / self.scale
            text = f'{value.quantize(Decimal(1).scaleb(-places), ROUND_HALF_UP):f}'
        if '.' in text:
            text = text.rstrip('0').rstrip('.')
        return text

    def parse(self, text, base):
        '''Return the bit pattern of user text.

        Base 10 text is read as a decimal number (trailing junk ignored) and rounded to the
        nearest multiple of 2^-fractional_bits, ties rounding upwards.  Text that is not a
        number, or overflows to an infinity, reads as zero.
        '''
        if not text or text == '-':
            return 0
        if base in (2, 16):
            return parse_radix(text, self.bit_width, base)

        value = parse_float_prefix(text)
        if value is None:
            return 0
        # Finite text can still overflow once scaled
        scaled = value * self.scale
        if not isfinite(scaled):
            return 0
        scaled = floor(scaled + 0.5)
        if self.signed and scaled < 0:
            return to_unsigned(scaled, self.bit_width)
        return mask(scaled, self.bit_width)

    def valid_input_pattern(self, base):
        if base == 2:
            return BINARY_INPUT_REGEX
        if base == 16:
            return HEX_INPUT_REGEX
        return SIGNED_INPUT_REGEX if self.signed else UNSIGNED_INPUT_REGEX

    def get_bit_category(self, index):
        if self.signed and index == self.bit_width - 1:
            return BitCategory.SIGN
        if index >= self.fractional_bits:
            return BitCategory.INTEGER_PART
        return BitCategory.FRACTION

    ##
    ## Arithmetic.  Both operands share the scale, so only multiply and divide rescale.
    ##

    def add(self, lhs, rhs):
        lhs, rhs = self._operands(lhs, rhs)
        return self._wrap(lhs + rhs)

    def subtract(self, lhs, rhs):
        lhs, rhs = self._operands(lhs, rhs)
        return self._wrap(lhs - rhs)

    def multiply(self, lhs, rhs):
        lhs, rhs = self._operands(lhs, rhs)
        return self._wrap((lhs * rhs) >> self.fractional_bits)

    def divide(self, lhs, rhs):
        a, b = self._operands(lhs, rhs)
        if b == 0:
            return mask(lhs, self.bit_width)
        return self._wrap(trunc_div(a << self.fractional_bits, b))

    def modulo(self, lhs, rhs):
        a, b = self._operands(lhs, rhs)
        if b == 0:
            return mask(lhs, self.bit_width)
        return self._wrap(trunc_mod(a, b))

    ##
    ## Bitwise operations and shifts act on the raw pattern
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
        if self.signed:
            return shift_right_arithmetic(lhs, rhs, self.bit_width)
        return shift_right_logical(lhs, rhs, self.bit_width)

    def shift_right_unsigned(self, lhs, rhs):
        return shift_right_logical(lhs, rhs, self.bit_width)

    def not_(self, value):
        return mask(~value, self.bit_width)

    def negate(self, value):
        return mask(-value, self.bit_width)

    def clear(self, value=None):
        return 0


def create_fixed_format(id, name, integer_bits, fractional_bits, signed):
    return FixedFormat(id=id, name=name, integer_bits=integer_bits,
                       fractional_bits=fractional_bits, signed=signed)
