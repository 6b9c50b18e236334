#
# IEEE-754 style binary floating point of any exponent and mantissa width
#
# Values are decoded to host (IEEE double) floats for arithmetic and encoded back.
# Arithmetic in formats wider than a double, and even in float64 itself, is therefore
# only as precise as a double: the result of each operation is the double result
# re-encoded, not a correctly rounded result computed in the format.
#

import re
from collections import namedtuple
from decimal import Decimal, localcontext, ROUND_HALF_UP
from math import ceil, copysign, floor, fmod, frexp, inf, isinf, isnan, ldexp, log10, nan

import attr

from .bits import (
    mask, format_radix, parse_radix, shift_left, shift_right_logical, sign_bit,
)
from .common import (
    Category, BitCategory, BINARY_INPUT_REGEX, HEX_INPUT_REGEX, parse_float_prefix,
)
from .errors import check_width

__all__ = ('FloatFormat', 'FloatComponents', 'create_float_format')


FloatComponents = namedtuple('FloatComponents', 'sign exponent mantissa value')

DEC_INPUT_REGEX = re.compile(
    '^-?[0-9]*\\.?[0-9]*([eE][+-]?[0-9]*)?$|^-?[Ii]nf(inity)?$|^[Nn]a[Nn]$'
)

SPECIAL_VALUES = {
    'nan': nan,
    'inf': inf,
    'infinity': inf,
    '-inf': -inf,
    '-infinity': -inf,
}

# JavaScript's Number.prototype.toPrecision() accepts at most 21 significant digits
MAX_DECIMAL_PRECISION = 21


def round_half_up(value):
    '''Round to the nearest integer, ties towards positive infinity.'''
    whole = floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def to_precision(value, precision):
    '''Return the finite non-zero value with precision significant digits, in positional
    notation if its decimal exponent is in [-6, precision) and scientific otherwise.
    Trailing zeroes of the significand are removed.'''
    exact = Decimal(value)
    with localcontext() as context:
        context.prec = precision + 1
        # Ties round away from zero.  Rounding can carry into the next decade, so take
        # the exponent from the rounded value.
        rounded = exact.quantize(Decimal(1).scaleb(exact.adjusted() - precision + 1),
                                 ROUND_HALF_UP)
        exponent = rounded.adjusted()
        if -7 < exponent < precision:
            text = f'{rounded:f}'
            if '.' in text:
                text = text.rstrip('0').rstrip('.')
            return text
        digits = f'{rounded.scaleb(-exponent):f}'
    if '.' in digits:
        digits = digits.rstrip('0').rstrip('.')
    sign = '-' if exponent < 0 else '+'
    return f'{digits}e{sign}{abs(exponent)}'


@attr.s(slots=True, frozen=True, kw_only=True)
class FloatFormat:
    '''A binary floating point format with a sign bit, exponent_bits of biased exponent
    and mantissa_bits of mantissa (the fraction after the implicit integer bit).

    The all-zeroes exponent encodes zeroes and subnormals; the all-ones exponent
    encodes infinities (zero mantissa) and NaNs.  Encoding a NaN always produces the
    canonical quiet NaN: positive sign and only the top mantissa bit set.
    '''

    id = attr.ib()
    name = attr.ib()
    exponent_bits = attr.ib()
    mantissa_bits = attr.ib()

    def __attrs_post_init__(self):
        check_width('exponent_bits', self.exponent_bits, 2)
        check_width('mantissa_bits', self.mantissa_bits, 1)

    @property
    def bit_width(self):
        return 1 + self.exponent_bits + self.mantissa_bits

    @property
    def bias(self):
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def max_exponent(self):
        '''The all-ones biased exponent of infinities and NaNs.'''
        return (1 << self.exponent_bits) - 1

    @property
    def decimal_precision(self):
        '''Significant decimal digits shown when formatting in base 10.'''
        return min(ceil(self.mantissa_bits * log10(2)) + 1, MAX_DECIMAL_PRECISION)

    @property
    def category(self):
        return Category.FLOAT

    @property
    def supports_negation(self):
        return True

    @property
    def supports_decimal_point(self):
        return True

    ##
    ## Encoding and decoding
    ##

    def get_components(self, bits):
        '''Return the raw sign, biased exponent and mantissa fields, and the value.'''
        bits = mask(bits, self.bit_width)
        sign = bits >> (self.bit_width - 1)
        exponent = (bits >> self.mantissa_bits) & self.max_exponent
        mantissa = mask(bits, self.mantissa_bits)
        return FloatComponents(sign, exponent, mantissa, self.to_number(bits))

    def to_number(self, bits):
        '''Decode a bit pattern to a Python float.'''
        bits = mask(bits, self.bit_width)
        sign = -1.0 if bits >> (self.bit_width - 1) else 1.0
        exponent = (bits >> self.mantissa_bits) & self.max_exponent
        mantissa = mask(bits, self.mantissa_bits)

        if exponent == 0:
            # Zeroes and subnormals: 2^(1 - bias) * mantissa / 2^mantissa_bits
            return copysign(ldexp(mantissa, 1 - self.bias - self.mantissa_bits), sign)
        if exponent == self.max_exponent:
            if mantissa:
                return nan
            return copysign(inf, sign)
        significand = (1 << self.mantissa_bits) + mantissa
        try:
            value = ldexp(significand, exponent - self.bias - self.mantissa_bits)
        except OverflowError:
            value = inf
        return copysign(value, sign)

    def to_bits(self, value):
        '''Encode a Python float, rounding the mantissa to nearest.'''
        if isnan(value):
            return (self.max_exponent << self.mantissa_bits) | (1 << (self.mantissa_bits - 1))

        sign = sign_bit(self.bit_width) if copysign(1.0, value) < 0 else 0
        magnitude = abs(value)
        if isinf(magnitude):
            return sign | (self.max_exponent << self.mantissa_bits)
        if magnitude == 0:
            return sign

        # frexp() gives magnitude = fraction * 2^e with fraction in [0.5, 1), so
        # floor(log2(magnitude)) is exactly e - 1
        exponent = frexp(magnitude)[1] - 1
        biased = exponent + self.bias

        if biased <= 0:
            # Subnormal: the mantissa counts units of 2^(1 - bias - mantissa_bits).  If it
            # rounds up to 2^mantissa_bits the result is the smallest normal, which is
            # exactly what the carry into the exponent field encodes.
            mantissa = round_half_up(ldexp(magnitude, self.bias - 1 + self.mantissa_bits))
            return sign | mantissa

        if biased >= self.max_exponent:
            return sign | (self.max_exponent << self.mantissa_bits)

        fraction = ldexp(magnitude, -exponent) - 1.0
        mantissa = round_half_up(ldexp(fraction, self.mantissa_bits))
        # A mantissa rounding up to 2^mantissa_bits carries into the exponent
        encoded = (biased << self.mantissa_bits) + mantissa
        if encoded >> self.mantissa_bits >= self.max_exponent:
            return sign | (self.max_exponent << self.mantissa_bits)
        return sign | encoded

    def number_class(self, bits):
        '''Return a string describing the class of the encoded number.'''
        sign, exponent, mantissa, _value = self.get_components(bits)
        sign = '-' if sign else '+'
        if exponent == self.max_exponent:
            return 'NaN' if mantissa else sign + 'Infinity'
        if exponent == 0:
            return sign + ('Subnormal' if mantissa else 'Zero')
        return sign + 'Normal'

    ##
    ## Text conversion
    ##

    def format(self, bits, base):
        if base in (2, 16):
            return format_radix(bits, self.bit_width, base)

        value = self.to_number(bits)
        if isnan(value):
            return 'NaN'
        if isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value == 0:
            return '-0' if copysign(1.0, value) < 0 else '0'
        return to_precision(value, self.decimal_precision)

    def parse(self, text, base):
        '''Return the bit pattern of user text.

        Base 2 and 16 text is a literal bit pattern.  Base 10 text is a decimal number,
        optionally in scientific notation, or one of nan, inf, infinity, -inf and -infinity
        in any case.  Unrecognised text reads as zero.
        '''
        if not text:
            return 0
        if base in (2, 16):
            return parse_radix(text, self.bit_width, base)

        value = SPECIAL_VALUES.get(text.strip().lower())
        if value is None:
            value = parse_float_prefix(text)
            if value is None:
                return 0
        return self.to_bits(value)

    def valid_input_pattern(self, base):
        if base == 2:
            return BINARY_INPUT_REGEX
        if base == 16:
            return HEX_INPUT_REGEX
        return DEC_INPUT_REGEX

    def get_bit_category(self, index):
        if index == self.bit_width - 1:
            return BitCategory.SIGN
        if index < self.mantissa_bits:
            return BitCategory.MANTISSA
        return BitCategory.EXPONENT

    ##
    ## Arithmetic in host floating point
    ##

    def add(self, lhs, rhs):
        return self.to_bits(self.to_number(lhs) + self.to_number(rhs))

    def subtract(self, lhs, rhs):
        return self.to_bits(self.to_number(lhs) - self.to_number(rhs))

    def multiply(self, lhs, rhs):
        return self.to_bits(self.to_number(lhs) * self.to_number(rhs))

    def divide(self, lhs, rhs):
        '''Return lhs / rhs, or lhs unchanged if rhs is a zero of either sign.'''
        a, b = self.to_number(lhs), self.to_number(rhs)
        if b == 0:
            return mask(lhs, self.bit_width)
        return self.to_bits(a / b)

    def modulo(self, lhs, rhs):
        '''Return the remainder of truncating division (C fmod), or lhs unchanged if rhs is
        a zero of either sign.'''
        a, b = self.to_number(lhs), self.to_number(rhs)
        if b == 0:
            return mask(lhs, self.bit_width)
        if isnan(a) or isnan(b) or isinf(a):
            return self.to_bits(nan)
        if isinf(b):
            return self.to_bits(a)
        return self.to_bits(fmod(a, b))

    ##
    ## Operations on the raw bit pattern, ignoring its floating point meaning
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
        return shift_right_logical(lhs, rhs, self.bit_width)

    def shift_right_unsigned(self, lhs, rhs):
        return shift_right_logical(lhs, rhs, self.bit_width)

    def not_(self, value):
        return mask(~value, self.bit_width)

    def negate(self, value):
        '''Flip the sign bit only.'''
        return mask(value ^ sign_bit(self.bit_width), self.bit_width)

    def clear(self, value=None):
        return 0


def create_float_format(id, name, exponent_bits, mantissa_bits):
    return FloatFormat(id=id, name=name, exponent_bits=exponent_bits,
                       mantissa_bits=mantissa_bits)
