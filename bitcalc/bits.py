#
# Primitive operations on fixed-width two's-complement bit patterns
#
# A bit pattern is a Python int holding the unsigned interpretation of exactly `width`
# bits.  Every helper here is total: any integer input gives a canonical result.
#

import re

__all__ = ('mask', 'to_signed', 'to_unsigned', 'wrap_result', 'all_ones', 'sign_bit',
           'trunc_div', 'trunc_mod', 'format_radix', 'parse_radix',
           'shift_left', 'shift_right_logical', 'shift_right_arithmetic',
           'get_bit', 'set_bit', 'toggle_bit')


NON_BINARY_REGEX = re.compile('[^01]')
NON_HEX_REGEX = re.compile('[^0-9a-fA-F]')


def all_ones(width):
    '''Return the pattern with all width bits set.'''
    return (1 << width) - 1


def sign_bit(width):
    '''Return the pattern with only the most significant of width bits set.'''
    return 1 << (width - 1)


def mask(value, width):
    '''Return the low width bits of value.'''
    return value & all_ones(width)


def to_signed(value, width):
    '''Interpret the low width bits of value as a two's-complement number.'''
    value = mask(value, width)
    if value & sign_bit(width):
        return value - (1 << width)
    return value


def to_unsigned(value, width):
    '''Map a signed value back to its unsigned width-bit pattern.'''
    if value < 0:
        value += 1 << width
    # Values below -2^width are still negative here; masking wraps them as well
    return mask(value, width)


def wrap_result(result, width, signed):
    '''Normalize an unbounded arithmetic result to the canonical unsigned pattern.'''
    if signed and result < 0:
        return to_unsigned(result, width)
    return mask(result, width)


def trunc_div(lhs, rhs):
    '''Integer quotient rounded towards zero.  rhs must be non-zero.'''
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient


def trunc_mod(lhs, rhs):
    '''Remainder of trunc_div(); it has the sign of lhs.'''
    return lhs - rhs * trunc_div(lhs, rhs)


def format_radix(bits, width, base):
    '''Return the pattern as zero-padded binary (base 2) or upper-case hex (base 16).'''
    bits = mask(bits, width)
    if base == 2:
        return f'{bits:0{width}b}'
    return f'{bits:0{(width + 3) // 4}X}'


def parse_radix(text, width, base):
    '''Read binary (base 2) or hex (base 16) digits from text, ignoring anything else.

    Text without any digit reads as zero.  The result is masked to width.'''
    if base == 2:
        digits = NON_BINARY_REGEX.sub('', text or '')
    else:
        digits = NON_HEX_REGEX.sub('', text or '')
    return mask(int(digits or '0', base), width)


def shift_left(value, count, width):
    '''Shift left by count bits; bits shifted past width are lost.'''
    if count >= width:
        return 0
    return mask(value << count, width)


def shift_right_logical(value, count, width):
    '''Shift right by count bits, filling with zeroes.'''
    if count >= width:
        return 0
    return mask(value, width) >> count


def shift_right_arithmetic(value, count, width):
    '''Shift right by count bits, filling with copies of the sign bit.'''
    count = min(count, width)
    return to_unsigned(to_signed(value, width) >> count, width)


def get_bit(value, index):
    return (value >> index) & 1


def set_bit(value, index, bit, width):
    '''Return value with bit index set (bit true) or cleared (bit false).'''
    if bit:
        return mask(value | (1 << index), width)
    return mask(value & ~(1 << index), width)


def toggle_bit(value, index, width):
    return mask(value ^ (1 << index), width)
