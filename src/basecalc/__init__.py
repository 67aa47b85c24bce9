'''
Integer calculator.

Immediate execution, no precedence: 2+3*4= is 20, not 14. Arithmetic is on
signed 64-bit integers, wrapping around on overflow, displayed in any base
from 2 to 16. Switching base converts the number on display, and leaves the
running total alone.

Runs either as a full-screen terminal calculator, or non-interactively on
keystrokes given on the command line or stdin.
'''

from .accumulator import Accumulator, Operator, convert_base
from .lexer import Lexer
from .cli import CLI


__all__ = 'Accumulator', 'Operator', 'convert_base', 'Lexer', 'CLI'
