'''
Accumulator tests
'''

from basecalc.util import (ParseError, ConversionError, CONVERSION_ERROR,
                           DIVISION_ERROR, INT64_MIN, INT64_MAX)
from basecalc.accumulator import (Accumulator, Operator, convert_base,
                                  format_int, parse_int)

from pytest import raises, mark


@mark.parametrize('n', [INT64_MIN, INT64_MIN + 1, -255, -1, 0, 1, 255,
                               INT64_MAX - 1, INT64_MAX])
def test_round_trip(n):
    for base in range(2, 17):
        assert convert_base(format_int(n, base), base, 10) == str(n)


@mark.parametrize('value, from_base, to_base, expected', [
    ('ff', 16, 10, '255'),
    ('FF', 16, 2, '11111111'),
    ('255', 10, 16, 'ff'),
    ('-10', 2, 10, '-2'),
    ('+7', 8, 8, '7'),
    ('0', 10, 3, '0'),
    ('-8000000000000000', 16, 10, str(INT64_MIN)),
])
def test_convert_base(value, from_base, to_base, expected):
    assert convert_base(value, from_base, to_base) == expected


@mark.parametrize('value, from_base', [
    ('z', 16),
    ('2', 2),
    ('', 10),
    ('-', 10),
    ('1_000', 10),
    (' 1', 10),
    ('1\n', 10),
    ('0x10', 16),
    ('8000000000000000', 16),
    (str(INT64_MAX + 1), 10),
    ('error', 10),
])
def test_convert_base_fails(value, from_base):
    with raises(ConversionError):
        convert_base(value, from_base, 10)


def test_conversion_error_is_parse_error():
    with raises(ParseError, match="Cannot parse 'z' in base 16"):
        convert_base('z', 16, 10)


def test_parse_int():
    assert parse_int('7fffffffffffffff', 16) == INT64_MAX
    with raises(ParseError):
        parse_int('a', 10)


@mark.parametrize('base', [1, 17])
def test_format_int_bad_base(base):
    with raises(ValueError):
        format_int(1, base)


@mark.parametrize('op, left, right, expected', [
    ('+', 2, 3, 5),
    ('-', 2, 3, -1),
    ('*', -4, 3, -12),
    ('/', 7, 2, 3),
    ('/', -7, 2, -3),
    ('/', 7, -2, -3),
    ('/', -7, -2, 3),
    ('+', INT64_MAX, 1, INT64_MIN),
    ('-', INT64_MIN, 1, INT64_MAX),
    ('*', INT64_MAX, 2, -2),
    ('/', INT64_MIN, -1, INT64_MIN),
])
def test_operator(op, left, right, expected):
    assert Operator(op).apply(left, right) == expected


def test_unknown_operator():
    with raises(ValueError):
        Operator('%')


def test_defaults(accumulator):
    assert accumulator.display == ''
    assert accumulator.base == 10
    assert accumulator.previous == '0'
    assert accumulator.pending is Operator.ADD


def test_bad_initial_base():
    with raises(ValueError):
        Accumulator(base=17)


def test_add(accumulator):
    accumulator.clear()
    accumulator.append('5')
    accumulator.operation('+')
    accumulator.append('3')
    accumulator.evaluate()
    assert accumulator.display == '8'
    assert accumulator.previous == '0'
    assert accumulator.pending is Operator.ADD


def test_hex_then_decimal():
    accumulator = Accumulator()
    accumulator.clear()
    accumulator.set_base(16)
    accumulator.append('f')
    accumulator.operation('+')
    assert accumulator.previous == '15'
    accumulator.set_base(10)
    assert accumulator.display == '15'
    assert accumulator.base == 10


def test_left_to_right(keys):
    assert keys('2+3*4=') == '20'


def test_operator_shows_running_total(keys, accumulator):
    assert keys('9-4') == '4'
    assert keys('*') == '5'
    assert accumulator.previous == '5'
    assert accumulator.pending is Operator.MUL


def test_digit_after_result_starts_new_number(keys):
    assert keys('1+1=') == '2'
    assert keys('7') == '7'


def test_operator_after_result(keys):
    assert keys('6*7=') == '42'
    assert keys('-2=') == '40'


def test_negative_result(keys):
    assert keys('3-5=') == '-2'
    assert keys('@2') == '-10'


def test_empty_display_is_zero(keys, accumulator):
    assert keys('=') == '0'
    accumulator.clear()
    accumulator.previous = '4'
    accumulator.pending = Operator.MUL
    accumulator.evaluate()
    assert accumulator.display == '0'


def test_previous_stays_decimal(keys, accumulator):
    keys('@16ff+')
    assert accumulator.previous == '255'
    keys('@2')
    assert accumulator.previous == '255'
    assert keys('1=') == '100000000'


def test_overflow_wraps(keys):
    assert keys('9223372036854775807+1=') == str(INT64_MIN)


def test_backspace(accumulator):
    accumulator.append('1')
    accumulator.append('2')
    accumulator.backspace()
    assert accumulator.display == '1'
    accumulator.backspace()
    assert accumulator.display == ''
    accumulator.backspace()
    assert accumulator.display == ''


def test_backspace_on_error_clears(accumulator):
    accumulator.display = 'error'
    accumulator.previous = '12'
    accumulator.pending = Operator.DIV
    accumulator.backspace()
    assert accumulator.display == ''
    assert accumulator.previous == '0'
    assert accumulator.pending is Operator.ADD


def test_backspace_after_result_keeps_result(keys, accumulator):
    keys('12+3=')
    accumulator.backspace()
    assert accumulator.display == '15'


def test_clear_keeps_base(keys, accumulator):
    keys('@8' '7+1')
    accumulator.clear()
    assert accumulator.display == ''
    assert accumulator.previous == '0'
    assert accumulator.pending is Operator.ADD
    assert accumulator.base == 8


def test_divide_by_zero(keys, accumulator):
    keys('8/0')
    assert accumulator.previous == '8'
    accumulator.evaluate()
    assert accumulator.display == DIVISION_ERROR
    assert accumulator.failed
    assert accumulator.previous == '8'
    assert accumulator.pending is Operator.DIV
    accumulator.backspace()
    assert accumulator.display == ''
    assert accumulator.previous == '0'


def test_digit_outside_base(keys, accumulator):
    keys('@8' '9')
    accumulator.evaluate()
    assert accumulator.display == CONVERSION_ERROR


def test_operation_keeps_previous_on_error(keys, accumulator):
    keys('5+a')
    accumulator.set_base(8)
    assert accumulator.display == CONVERSION_ERROR
    accumulator.operation('*')
    assert accumulator.display == CONVERSION_ERROR
    assert accumulator.previous == '5'
    assert accumulator.pending is Operator.MUL


def test_bad_previous(accumulator):
    accumulator.previous = 'nope'
    accumulator.append('1')
    accumulator.evaluate()
    assert accumulator.display == CONVERSION_ERROR


def test_set_base_converts_entry(keys, accumulator):
    keys('10')
    accumulator.set_base(16)
    assert accumulator.display == 'a'
    assert keys('1') == 'a1'


def test_set_base_after_result_starts_new_number(keys, accumulator):
    keys('8+8=')
    accumulator.set_base(16)
    assert accumulator.display == '10'
    assert keys('1') == '1'


def test_set_base_empty(accumulator):
    accumulator.set_base(2)
    assert accumulator.display == CONVERSION_ERROR
    assert accumulator.base == 2
    accumulator.backspace()
    assert accumulator.display == ''
    assert accumulator.base == 2


def test_set_base_fails_still_changes_base(accumulator):
    accumulator.append('z')
    accumulator.set_base(16)
    assert accumulator.display == CONVERSION_ERROR
    assert accumulator.base == 16


@mark.parametrize('base', [0, 1, 17])
def test_set_bad_base(accumulator, base):
    with raises(ValueError):
        accumulator.set_base(base)
    assert accumulator.base == 10


def test_errors_logged(keys, caplog):
    keys('1/0=')
    assert 'division by zero' in caplog.text


def test_feed_unknown_keystroke(accumulator):
    with raises(ValueError, match='Not a keystroke'):
        accumulator.feed({'space': ' '})
    assert accumulator.display == ''
