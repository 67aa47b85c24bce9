from enum import Enum
import logging
import operator

import regex

from .util import (ParseError, ConversionError, wrap_user_errors, wrap64,
                   iserror, CONVERSION_ERROR, DIVISION_ERROR,
                   INT64_MIN, INT64_MAX, MIN_BASE, MAX_BASE)


log = logging.getLogger(__name__)

DIGITS = '0123456789abcdef'


def _truncdiv(left, right):
    '''
    Integer division truncating toward zero, as opposed to Python's floor.
    '''
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Operator(Enum):
    '''
    The four binary operators, applied with 64-bit wraparound.
    '''
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'

    def apply(self, left, right):
        return wrap64(_FUNCTIONS[self](left, right))


_FUNCTIONS = {
    Operator.ADD: operator.__add__,
    Operator.SUB: operator.__sub__,
    Operator.MUL: operator.__mul__,
    Operator.DIV: _truncdiv,
}


def check_base(base):
    if not MIN_BASE <= base <= MAX_BASE:
        raise ValueError('Base {} not in [{}, {}]'.format(base, MIN_BASE,
                                                        MAX_BASE))


@wrap_user_errors('Cannot parse {0!r} in base {1}', ParseError)
def parse_int(text, base):
    '''
    Parse signed 64-bit integer written in base.

    Stricter than int(): no whitespace, no underscores, no prefixes.
    '''
    check_base(base)
    pattern = r'[+-]?[' + DIGITS[:base] + r']+'
    if not regex.fullmatch(pattern, text, flags=regex.IGNORECASE):
        raise ValueError(text)
    n = int(text, base)
    if not INT64_MIN <= n <= INT64_MAX:
        raise OverflowError(text)
    return n


def format_int(n, base):
    '''
    Render integer in base, lowercase, with a leading - when negative.
    '''
    check_base(base)
    if n < 0:
        return '-' + format_int(-n, base)
    digits = []
    while True:
        n, digit = divmod(n, base)
        digits.append(DIGITS[digit])
        if not n:
            break
    return ''.join(reversed(digits))


def convert_base(value, from_base, to_base):
    '''
    Convert integer text from one base to another.

    :raises ConversionError: value isn't a 64-bit integer in from_base.
    '''
    try:
        n = parse_int(value, from_base)
    except ParseError as e:
        raise ConversionError(*e.args) from e
    return format_int(n, to_base)


class Accumulator:
    '''
    Immediate-execution integer calculator.

    Operators apply left to right as they're entered, no precedence. The
    running total is kept in base 10 whatever the display base is, so that
    switching base never corrupts it.
    '''

    DEFAULT_BASE = 10
    DEFAULT_PREVIOUS = '0'
    DEFAULT_OPERATOR = Operator.ADD

    def __init__(self, base=None):
        '''
        Create cleared accumulator.

        :param base: Initial display base, 2 to 16.
        '''
        self.base = type(self).DEFAULT_BASE if base is None else base
        check_base(self.base)
        self.display = ''
        self.entry = ''
        self.previous = type(self).DEFAULT_PREVIOUS
        self.pending = type(self).DEFAULT_OPERATOR

    def __repr__(self):
        return '{}(display={!r}, base={}, previous={!r}, pending={!r})'.format(
            type(self).__name__, self.display, self.base, self.previous,
            self.pending.value)

    def feed(self, groups):
        '''
        Run a lexed keystroke.

        :param groups: Matched groups of a keystroke lexeme, by name.
        '''
        if 'digit' in groups:
            self.append(groups['digit'])
        elif 'operator' in groups:
            self.operation(groups['operator'])
        elif 'evaluate' in groups:
            self.evaluate()
        elif 'clear' in groups:
            self.clear()
        elif 'backspace' in groups:
            self.backspace()
        elif 'base' in groups:
            self.set_base(int(groups['__base__']))
        else:
            raise ValueError('Not a keystroke: {!r}'.format(groups))

    def _show(self, text):
        self.entry = text
        self.display = text

    def _fail(self, message, error):
        log.warning('%s: %s', message, error.args[0])
        self.display = message

    @property
    def failed(self):
        return iserror(self.display)

    def append(self, char):
        '''
        Append character to the number being typed. Not validated.
        '''
        self._show(self.entry + char)

    def clear(self):
        '''
        Reset everything but the base.
        '''
        self._show('')
        self.previous = type(self).DEFAULT_PREVIOUS
        self.pending = type(self).DEFAULT_OPERATOR
        log.debug('Cleared: %r', self)

    def backspace(self):
        '''
        Delete last typed character. Clears on error.
        '''
        if self.failed:
            self.clear()
        elif self.entry:
            self._show(self.entry[:-1])

    def operation(self, op):
        '''
        Run pending operation, then remember op and the result for next time.
        '''
        op = Operator(op)
        self.evaluate()
        self.pending = op
        try:
            self.previous = convert_base(self.display, self.base, 10)
        except ConversionError as e:
            # Stale, but still a valid number
            log.warning('Cannot convert number, keeping %s: %s',
                        self.previous, e.args[0])
        log.debug('Operation %s: %r', op.value, self)

    def evaluate(self):
        '''
        Apply pending operator to previous and displayed number; show result.
        '''
        try:
            previous = parse_int(self.previous, 10)
        except ParseError as e:
            return self._fail(CONVERSION_ERROR, e)
        current = 0
        if self.display:
            try:
                current = parse_int(self.display, self.base)
            except ParseError as e:
                return self._fail(CONVERSION_ERROR, e)
        try:
            result = self.pending.apply(previous, current)
        except ZeroDivisionError as e:
            return self._fail(DIVISION_ERROR, e)
        rendered = format_int(result, self.base)
        log.debug('%d %s %d = %d', previous, self.pending.value, current,
                  result)
        self.clear()
        # Shown, but not typed: the next digit starts a new number
        self.display = rendered

    def set_base(self, base):
        '''
        Re-render displayed number in base, and make base current.

        The base changes even if the number can't be converted.
        '''
        check_base(base)
        try:
            converted = convert_base(self.display, self.base, base)
        except ConversionError as e:
            self._fail(CONVERSION_ERROR, e)
        else:
            if self.entry:
                self.entry = converted
            self.display = converted
        log.debug('Base %d -> %d', self.base, base)
        self.base = base
