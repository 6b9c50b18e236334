#
# Calculator operator tokens and their dispatch to format methods
#

from enum import Enum

__all__ = ('BinaryOp', 'UnaryOp', 'perform_binary_op', 'perform_unary_op',
           'is_binary_op', 'is_unary_op')


class BinaryOp(str, Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MODULO = '%'
    AND = 'AND'
    OR = 'OR'
    XOR = 'XOR'
    SHIFT_LEFT = '<<'
    SHIFT_RIGHT = '>>'
    SHIFT_RIGHT_UNSIGNED = '>>>'


class UnaryOp(str, Enum):
    NOT = 'NOT'
    CLEAR = 'CLR'
    NEGATE = '±'


# Operator to method name.  Every member has an entry.
BINARY_METHODS = {
    BinaryOp.ADD: 'add',
    BinaryOp.SUBTRACT: 'subtract',
    BinaryOp.MULTIPLY: 'multiply',
    BinaryOp.DIVIDE: 'divide',
    BinaryOp.MODULO: 'modulo',
    BinaryOp.AND: 'and_',
    BinaryOp.OR: 'or_',
    BinaryOp.XOR: 'xor',
    BinaryOp.SHIFT_LEFT: 'shift_left',
    BinaryOp.SHIFT_RIGHT: 'shift_right',
    BinaryOp.SHIFT_RIGHT_UNSIGNED: 'shift_right_unsigned',
}

UNARY_METHODS = {
    UnaryOp.NOT: 'not_',
    UnaryOp.CLEAR: 'clear',
    UnaryOp.NEGATE: 'negate',
}

_BINARY_TOKENS = frozenset(op.value for op in BinaryOp)
_UNARY_TOKENS = frozenset(op.value for op in UnaryOp)


def perform_binary_op(fmt, lhs, op, rhs):
    '''Return the pattern of lhs op rhs in format fmt.  op is a BinaryOp or its token.'''
    method = getattr(fmt, BINARY_METHODS[BinaryOp(op)])
    return method(lhs, rhs)


def perform_unary_op(fmt, value, op):
    '''Return the pattern of op applied to value in format fmt.  op is a UnaryOp or its
    token.'''
    method = getattr(fmt, UNARY_METHODS[UnaryOp(op)])
    return method(value)


def is_binary_op(token):
    return isinstance(token, BinaryOp) or token in _BINARY_TOKENS


def is_unary_op(token):
    return isinstance(token, UnaryOp) or token in _UNARY_TOKENS
