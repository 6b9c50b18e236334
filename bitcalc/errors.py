#
# Exceptions.  Parsing, formatting and arithmetic never raise; only building a format
# from bad parameters does.
#

__all__ = ('BitcalcError', 'FormatError')


class BitcalcError(Exception):
    '''All exceptions raised by this package subclass from this.'''


class FormatError(BitcalcError, ValueError):
    '''A number format was requested with parameters that cannot describe one.'''


def check_width(name, value, minimum):
    '''Raise unless value is an integer of at least minimum.'''
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'{name} must be an integer')
    if value < minimum:
        raise FormatError(f'{name} must be at least {minimum}: {value}')
