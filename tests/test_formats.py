import logging
import threading
from itertools import product

import pytest

from bitcalc import *


class TestRegistry:

    @pytest.mark.parametrize('id, cls, bit_width', (
        ('int8', IntegerFormat, 8),
        ('uint8', IntegerFormat, 8),
        ('int16', IntegerFormat, 16),
        ('uint16', IntegerFormat, 16),
        ('int32', IntegerFormat, 32),
        ('uint32', IntegerFormat, 32),
        ('int64', IntegerFormat, 64),
        ('uint64', IntegerFormat, 64),
        ('float16', FloatFormat, 16),
        ('bfloat16', FloatFormat, 16),
        ('float32', FloatFormat, 32),
        ('float64', FloatFormat, 64),
        ('q7.8', FixedFormat, 16),
        ('q15.16', FixedFormat, 32),
        ('uq8.8', FixedFormat, 16),
    ))
    def test_lookup(self, id, cls, bit_width):
        fmt = get_format(id)
        assert isinstance(fmt, cls)
        assert fmt.id == id
        assert fmt.bit_width == bit_width
        assert fmt is FORMATS[id]

    def test_names(self):
        assert get_format('q7.8').name == 'Q7.8'
        assert get_format('uq8.8').name == 'UQ8.8'
        assert get_format('bfloat16').name == 'bfloat16'

    def test_order(self):
        assert [fmt.id for fmt in FORMAT_LIST] == list(FORMATS)
        assert FORMAT_LIST[0].id == 'int8'
        assert FORMAT_LIST[-1].id == 'uq8.8'

    @pytest.mark.parametrize('id', ('int128', '', 'INT8', None, 'float'))
    def test_fallback(self, id):
        assert get_format(id) is FORMATS[DEFAULT_FORMAT_ID]
        assert get_format(id).id == 'int32'

    def test_fallback_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='bitcalc.formats'):
            get_format('int7')
        assert 'int7' in caplog.text

    def test_known_id_not_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='bitcalc.formats'):
            get_format('int8')
        assert caplog.text == ''

    def test_read_only(self):
        with pytest.raises(TypeError):
            FORMATS['int8'] = FORMATS['int16']

    def test_shared_between_threads(self):
        seen = []
        threads = [threading.Thread(target=lambda: seen.append(get_format('float32')))
                   for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert all(fmt is FORMATS['float32'] for fmt in seen)
        assert len(seen) == 4


class TestCommonContract:
    '''Properties every registered format has, whatever its category.'''

    @pytest.mark.parametrize('fmt', FORMAT_LIST)
    def test_attributes(self, fmt):
        assert fmt.category in (Category.INTEGER, Category.FLOAT, Category.FIXED)
        assert isinstance(fmt.supports_negation, bool)
        assert fmt.get_bit_category(fmt.bit_width - 1) in (BitCategory.SIGN,
                                                           BitCategory.MAGNITUDE)
        for index in range(fmt.bit_width):
            assert fmt.get_bit_category(index) in (1, 2, 3)

    @pytest.mark.parametrize('fmt, base', product(FORMAT_LIST, (2, 16)))
    def test_radix_round_trip(self, fmt, base):
        top = all_ones(fmt.bit_width)
        for bits in (0, 1, top, top >> 1, sign_bit(fmt.bit_width), 0x0123456789ABCDEF & top):
            text = fmt.format(bits, base)
            assert len(text) == (fmt.bit_width if base == 2 else (fmt.bit_width + 3) // 4)
            assert fmt.parse(text, base) == bits

    @pytest.mark.parametrize('fmt, op', product(FORMAT_LIST, ('divide', 'modulo')))
    def test_by_zero_returns_dividend(self, fmt, op):
        top = all_ones(fmt.bit_width)
        for bits in (0, 1, 0x3C00 & top, top, sign_bit(fmt.bit_width)):
            assert getattr(fmt, op)(bits, 0) == bits

    @pytest.mark.parametrize('fmt, op', product(FORMAT_LIST, ('divide', 'modulo')))
    def test_by_zero_masks_dividend(self, fmt, op):
        top = all_ones(fmt.bit_width)
        for bits in (top + 1, (top << 1) | 1, (1 << 80) | 0x3C00):
            assert getattr(fmt, op)(bits, 0) == bits & top

    @pytest.mark.parametrize('fmt', FORMAT_LIST)
    def test_complement_identities(self, fmt):
        top = all_ones(fmt.bit_width)
        for bits in (0, 1, top, 0x0123456789ABCDEF & top):
            assert fmt.and_(bits, fmt.not_(bits)) == 0
            assert fmt.or_(bits, fmt.not_(bits)) == top

    @pytest.mark.parametrize('fmt', FORMAT_LIST)
    def test_results_in_range(self, fmt):
        top = all_ones(fmt.bit_width)
        operands = (0, 1, top, top >> 1, sign_bit(fmt.bit_width))
        for lhs, rhs, op in product(operands, operands, BinaryOp):
            assert 0 <= perform_binary_op(fmt, lhs, op, rhs) <= top
        for value, op in product(operands, UnaryOp):
            assert 0 <= perform_unary_op(fmt, value, op) <= top

    @pytest.mark.parametrize('fmt', FORMAT_LIST)
    def test_malformed_text_never_raises(self, fmt):
        for text, base in product(('', '-', '--', 'x', '1e', '.', '-.', '1.2.3', 'NaN',
                                   '٣', ' ', 'infinityx', '1e308', '-1.7e308',
                                   '9' * 5000, '-' + '1' * 5000), BASES):
            bits = fmt.parse(text, base)
            assert 0 <= bits <= all_ones(fmt.bit_width)

    @pytest.mark.parametrize('fmt', FORMAT_LIST)
    def test_deterministic(self, fmt):
        for base in BASES:
            assert fmt.format(fmt.parse('42', base), base) == \
                fmt.format(fmt.parse('42', base), base)

    @pytest.mark.parametrize('fmt', FORMAT_LIST)
    def test_unknown_base_reads_as_decimal(self, fmt):
        assert fmt.format(fmt.parse('1', 10), 8) == fmt.format(fmt.parse('1', 10), 10)
        assert fmt.parse('1', 8) == fmt.parse('1', 10)
