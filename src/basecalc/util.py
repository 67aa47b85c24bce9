from functools import wraps


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

MIN_BASE = 2
MAX_BASE = 16

# Anything shown on the display starting with this is an error, not a number.
ERROR = 'error'
CONVERSION_ERROR = ERROR + ': cannot convert this number'
DIVISION_ERROR = ERROR + ': division by zero'


class CalcError(Exception):
    pass


class ParseError(CalcError):
    pass


class ConversionError(ParseError):
    pass


class LexError(CalcError):
    pass


def wrap_user_errors(fmt, error=CalcError):
    '''
    Decorator that converts stray exceptions to user errors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise error(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def wrap64(n):
    '''
    Wrap integer to signed 64 bits, two's complement.
    '''
    return (n - INT64_MIN) % (1 << 64) + INT64_MIN


def iserror(text):
    return text.startswith(ERROR)
