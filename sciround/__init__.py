# coding: utf-8

"""
Publication-style rounding and formatting of values with multiple uncertainties.

Values are kept as exact decimals, rounded with the PDG or the two digit rule and rendered for the
terminal, LaTeX, typst or gnuplot.
"""

from __future__ import annotations

__author__ = "The sciround authors"
__copyright__ = "Copyright 2025, The sciround authors"
__credits__ = ["The sciround authors"]
__license__ = "BSD-3-Clause"
__status__ = "Beta"
__version__ = "0.3.0"
__all__ = [
    "DecimalValue", "CentralValue", "Uncertainty", "Measurement", "FormatOptions",
    "Sign", "ErrorShape", "Mode", "Algorithm", "RoundingError", "RoundingWarning",
    "parse_decimal", "digit_count", "reduce_to_three_significant_digits", "pdg_rule", "pdg_round",
    "two_digit_round", "round_to_exponent", "quadrature_sum", "symmetrize_errors",
    "round_measurement", "render", "format", "format_array", "create_hep_data_representer",
    "symbol_dict", "get_symbols", "group_labels", "MAX_MANTISSA",
]

import math
import enum
import decimal
import functools
import warnings
import types
from collections import defaultdict, namedtuple
from typing import TypeVar, Callable, Any, Sequence, Tuple, Union

T = TypeVar("T")

# optional imports
try:
    import numpy as np
    HAS_NUMPY = True
except ImportError:
    np = None  # type: ignore[assignment]
    HAS_NUMPY = False

try:
    import uncertainties as _uncs  # type: ignore[import-untyped]
    HAS_UNCERTAINTIES = True
except ImportError:
    _uncs = None
    HAS_UNCERTAINTIES = False

try:
    import yaml  # type: ignore[import-untyped]
    HAS_YAML = True
except ImportError:
    yaml = None
    HAS_YAML = False


# type aliases
InValueType = Union[str, int, float, decimal.Decimal]
InUncType = Union[InValueType, "Uncertainty", Tuple[InValueType, InValueType]]

#: Largest mantissa that can be stored, i.e., the range of an unsigned 64-bit integer.
MAX_MANTISSA = 2**64 - 1


class typed(property):
    """
    Shorthand for the most common property definition. Can be used as a decorator to wrap around
    a single function. Example:

    .. code-block:: python

        class MyClass(object):

            def __init__(self):
                self._foo = None

            @typed
            def foo(self, foo):
                if not isinstance(foo, str):
                    raise TypeError("not a string: {}".format(foo))
                return foo

        myInstance = MyClass()
        myInstance.foo = 123    # -> TypeError
        myInstance.foo = "bar"  # -> ok

    Set/get calls target the instance member ``_foo``, i.e. "_<function_name>". Prior to updating
    the member when the setter is called, the wrapped function is invoked to check and convert the
    value.
    """

    def __init__(
        self,
        fparse: Callable[[T], T | None] | None = None,
        *,
        setter: bool = True,
        deleter: bool = True,
        name: str | None = None,
    ) -> None:
        # only register the property if fparse is set
        if fparse is not None:
            self.fparse = fparse

            # build the default name
            if name is None:
                name = fparse.__name__
            self.__name__ = name

            # the name of the wrapped member
            m_name = "_" + name

            super().__init__(
                functools.wraps(fparse)(self._fget(m_name)),
                self._fset(m_name) if setter else None,
                self._fdel(m_name) if deleter else None,
            )

        self._setter = setter
        self._deleter = deleter
        self._name = name

    def __call__(self, fparse: Callable[[T], T | None]) -> typed:
        return self.__class__(fparse, setter=self._setter, deleter=self._deleter, name=self._name)

    def _fget(self, name: str) -> Callable[[typed], Any]:
        def fget(inst: typed) -> Any:
            return getattr(inst, name)
        return fget

    def _fset(self, name: str) -> Callable[[typed, Any], None]:
        def fset(inst: typed, value: Any) -> None:
            # the setter uses the wrapped function as well to allow for value checks
            value = self.fparse.__get__(inst)(value)
            setattr(inst, name, value)
        return fset

    def _fdel(self, name: str) -> Callable[[typed], None]:
        def fdel(inst: typed) -> None:
            delattr(inst, name)
        return fdel


class _NamedEnum(enum.Enum):
    """
    Enumeration whose members compare equal to their string values.
    """

    def __str__(self) -> str:
        return self.value

    def __eq__(self, other: Any) -> bool:
        return str(self) == other

    def __hash__(self) -> int:
        return hash(self.value)


class Sign(_NamedEnum):
    """
    Sign of a central value.
    """

    NEGATIVE = "negative"
    NON_NEGATIVE = "non_negative"


class ErrorShape(_NamedEnum):
    """
    Shape of an uncertainty, i.e., whether it is symmetric or the upper or lower half of an
    asymmetric pair.
    """

    SYMMETRIC = "symmetric"
    UPPER = "upper"
    LOWER = "lower"


class Mode(_NamedEnum):
    """
    Output dialects.
    """

    TERMINAL = "terminal"
    TEX = "tex"
    TYPST = "typst"
    GNUPLOT = "gnuplot"


class Algorithm(_NamedEnum):
    """
    Rules to reduce a value to its significant digits.
    """

    PDG = "pdg"
    TWO_DIGIT = "two_digit"


class RoundingError(ValueError):
    """
    Raised when an input cannot be represented or rounded without publishing a numerically wrong
    precision. No partial result is produced in that case.
    """


class RoundingWarning(UserWarning):
    """
    Category of non-fatal diagnostics, e.g. when zeros are padded to reach three significant digits
    or when asymmetric uncertainties do not come in pairs.
    """


def _warn(msg: str, quiet: bool = False) -> None:
    if not quiet:
        warnings.warn(msg, RoundingWarning, stacklevel=3)


#
# decimal values
#

def parse_decimal(token: str) -> tuple[str, int, int]:
    """
    Parses a decimal *token* and returns a 3-tuple containing the leading sign character (``""``,
    ``"+"`` or ``"-"``), the integer mantissa and the decimal exponent. Surrounding whitespace is
    ignored. Exponent notation and grouping separators are not accepted. Example:

    .. code-block:: python

        parse_decimal("27.432")  # -> ("", 27432, -3)
        parse_decimal("-0.05")   # -> ("-", 5, -2)
        parse_decimal("+12")     # -> ("+", 12, 0)

    A :py:class:`RoundingError` is raised for empty tokens, tokens without digits, with multiple
    decimal points or invalid characters, and when the mantissa exceeds :py:data:`MAX_MANTISSA`.
    """
    if not isinstance(token, str):
        raise TypeError(f"cannot parse non-string token: {token!r}")

    text = token.strip()
    if not text:
        raise RoundingError(f"empty number '{token}'")

    sign = ""
    if text[0] in "+-":
        sign, text = text[0], text[1:]

    # validate characters and locate the decimal point
    dot = None
    n_digits = 0
    for i, c in enumerate(text):
        if c == ".":
            if dot is not None:
                raise RoundingError(f"multiple decimal points in '{token}'")
            dot = i
        elif c in "0123456789":
            n_digits += 1
        else:
            raise RoundingError(f"invalid character '{c}' in '{token}'")
    if n_digits == 0:
        raise RoundingError(f"no digits in '{token}'")

    # accumulate the mantissa
    mantissa = 0
    for c in text:
        if c == ".":
            continue
        mantissa = mantissa * 10 + int(c)
        if mantissa > MAX_MANTISSA:
            raise RoundingError(f"mantissa overflow for '{token}'")

    exponent = 0 if dot is None else -(len(text) - dot - 1)

    return sign, mantissa, exponent


def numeric_to_string(value: int | float | decimal.Decimal) -> str:
    """
    Converts a numeric *value* to a plain decimal string without exponent notation. Floats are
    converted through their shortest round-trip representation so that ``0.1`` yields ``"0.1"``
    rather than its binary expansion. NumPy scalars are unwrapped first.
    """
    value = _unwrap(value)

    if isinstance(value, bool):
        raise TypeError(f"boolean is not a valid numeric value: {value}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise RoundingError(f"cannot convert non-finite value {value}")
        value = decimal.Decimal(repr(value))
    if isinstance(value, decimal.Decimal):
        if not value.is_finite():
            raise RoundingError(f"cannot convert non-finite value {value}")
        return "{:f}".format(value)

    raise TypeError(f"invalid numeric value: {value!r}")


class DecimalValue(object):
    """ __init__(mantissa=0, exponent=0)
    Exact decimal representation of a non-negative magnitude ``mantissa * 10**exponent``. The
    *mantissa* holds the significant digits without leading zeros and must fit into an unsigned
    64-bit integer. The *exponent* can be any integer, including values that place the decimal point
    outside of the mantissa's digits, in which case zeros are synthesized by :py:meth:`to_string`.

    This class is the common base of :py:class:`CentralValue` and :py:class:`Uncertainty` which add
    the sign of a central value and the shape of an uncertainty, respectively. Rounding functions
    never modify instances but return new ones via :py:meth:`copy`.

    .. py:attribute:: mantissa

        type: int

        The significant digits.

    .. py:attribute:: exponent

        type: int

        The decimal exponent.

    .. py:attribute:: digits

        type: int (read-only)

        The number of digits of the mantissa.

    .. py:attribute:: negative

        type: bool (read-only)

        Whether a ``-`` is rendered in front of the value.
    """

    def __init__(self, mantissa: int = 0, exponent: int = 0) -> None:
        super().__init__()

        self.mantissa = mantissa
        self.exponent = exponent

    def _init_kwargs(self) -> dict[str, Any]:
        return {}

    @typed  # type: ignore[arg-type]
    def mantissa(self, mantissa: int) -> int:
        if isinstance(mantissa, bool) or not isinstance(mantissa, int):
            raise TypeError(f"invalid mantissa: {mantissa!r}")
        if mantissa < 0:
            raise ValueError(f"mantissa must not be negative: {mantissa}")
        if mantissa > MAX_MANTISSA:
            raise RoundingError(f"mantissa overflow: {mantissa}")
        return mantissa

    @typed  # type: ignore[arg-type]
    def exponent(self, exponent: int) -> int:
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"invalid exponent: {exponent!r}")
        return exponent

    @property
    def digits(self) -> int:
        return digit_count(self.mantissa)

    @property
    def negative(self) -> bool:
        return False

    def copy(self, mantissa: int | None = None, exponent: int | None = None) -> DecimalValue:
        """
        Returns a copy of this value, keeping its sign or shape. When *mantissa* or *exponent* are
        set, they overwrite the fields of the copied instance.
        """
        if mantissa is None:
            mantissa = self.mantissa
        if exponent is None:
            exponent = self.exponent

        return self.__class__(mantissa, exponent, **self._init_kwargs())

    def to_string(self, factorize_powers: bool = False) -> str:
        """
        Returns the canonical decimal string of the value. When *factorize_powers* is *True*, only
        the mantissa digits are returned and the power of ten is expected to be rendered separately.
        Example:

        .. code-block:: python

            CentralValue(123, 2).to_string()                       # -> "12300"
            CentralValue(123, 2).to_string(factorize_powers=True)  # -> "123"
            CentralValue(123, -1).to_string()                      # -> "12.3"
            CentralValue(123, -5).to_string()                      # -> "0.00123"
        """
        mant = str(self.mantissa)
        n = len(mant)

        text = "-" if self.negative else ""

        if self.exponent >= 0 or factorize_powers:
            text += mant
            if not factorize_powers:
                text += self.exponent * "0"
        else:
            shift = -self.exponent
            if shift >= n:
                text += "0." + (shift - n) * "0" + mant
            else:
                text += mant[:n - shift] + "." + mant[n - shift:]

        return text

    def to_decimal(self) -> decimal.Decimal:
        """
        Returns the exact value as a ``decimal.Decimal``.
        """
        digits = tuple(int(c) for c in str(self.mantissa))
        return decimal.Decimal((int(self.negative), digits, self.exponent))

    def to_float(self) -> float:
        """
        Returns the value as a float. The conversion is lossy and only meant for combining
        magnitudes, never for display.
        """
        return float(self.to_decimal())

    def _key(self) -> tuple:
        return (self.__class__, self.mantissa, self.exponent, tuple(self._init_kwargs().values()))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other: Any) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self) -> int:
        return hash(self._key())

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at {hex(id(self))}, '{self.to_string()}'>"


class CentralValue(DecimalValue):
    """ __init__(mantissa=0, exponent=0, sign=Sign.NON_NEGATIVE)
    A central value, i.e., a :py:class:`DecimalValue` with a :py:class:`Sign`. An explicit leading
    ``+`` is not distinguished from an unsigned value.
    """

    def __init__(
        self,
        mantissa: int = 0,
        exponent: int = 0,
        sign: Sign | str = Sign.NON_NEGATIVE,
    ) -> None:
        super().__init__(mantissa, exponent)

        self.sign = sign

    def _init_kwargs(self) -> dict[str, Any]:
        return {"sign": self.sign}

    @typed  # type: ignore[arg-type]
    def sign(self, sign: Sign | str) -> Sign:
        return Sign(sign)

    @property
    def negative(self) -> bool:
        return self.sign == Sign.NEGATIVE

    @classmethod
    def from_string(cls, token: str) -> CentralValue:
        sign, mantissa, exponent = parse_decimal(token)
        return cls(mantissa, exponent, Sign.NEGATIVE if sign == "-" else Sign.NON_NEGATIVE)

    @classmethod
    def from_numeric(cls, value: int | float | decimal.Decimal) -> CentralValue:
        return cls.from_string(numeric_to_string(value))


class Uncertainty(DecimalValue):
    """ __init__(mantissa=0, exponent=0, shape=ErrorShape.SYMMETRIC)
    An uncertainty, i.e., a :py:class:`DecimalValue` with an :py:class:`ErrorShape`. When parsed
    from text, a leading ``+`` denotes the upper and a leading ``-`` the lower half of an asymmetric
    pair, whereas unsigned values are symmetric.

    .. code-block:: python

        Uncertainty.from_string("0.3").shape   # -> ErrorShape.SYMMETRIC
        Uncertainty.from_string("+0.3").shape  # -> ErrorShape.UPPER
        Uncertainty.from_string("-0.3").shape  # -> ErrorShape.LOWER

        # numeric values can be forced into one half of a pair
        Uncertainty.from_numeric(0.3, ErrorShape.LOWER).to_string()  # -> "-0.3"
    """

    _shapes = {"": ErrorShape.SYMMETRIC, "+": ErrorShape.UPPER, "-": ErrorShape.LOWER}

    def __init__(
        self,
        mantissa: int = 0,
        exponent: int = 0,
        shape: ErrorShape | str = ErrorShape.SYMMETRIC,
    ) -> None:
        super().__init__(mantissa, exponent)

        self.shape = shape

    def _init_kwargs(self) -> dict[str, Any]:
        return {"shape": self.shape}

    @typed  # type: ignore[arg-type]
    def shape(self, shape: ErrorShape | str) -> ErrorShape:
        return ErrorShape(shape)

    @property
    def negative(self) -> bool:
        return self.shape == ErrorShape.LOWER

    @property
    def is_asymmetric(self) -> bool:
        return self.shape != ErrorShape.SYMMETRIC

    @classmethod
    def from_string(cls, token: str, shape: ErrorShape | str | None = None) -> Uncertainty:
        sign, mantissa, exponent = parse_decimal(token)
        return cls(mantissa, exponent, cls._shapes[sign] if shape is None else shape)

    @classmethod
    def from_numeric(
        cls,
        value: int | float | decimal.Decimal,
        shape: ErrorShape | str | None = None,
    ) -> Uncertainty:
        # the parsed sign is dropped when the shape is forced
        return cls.from_string(numeric_to_string(value), shape=shape)

    @classmethod
    def from_anything(cls, value: Any, shape: ErrorShape | str | None = None) -> Uncertainty:
        """
        Creates an uncertainty from a string, a number or another :py:class:`Uncertainty` instance
        *value*. When *shape* is set, it overrides the shape that would be inferred from a sign.
        """
        value = _unwrap(value)
        if isinstance(value, Uncertainty):
            return value if shape is None else value.__class__(value.mantissa, value.exponent, shape)
        if isinstance(value, DecimalValue):
            raise TypeError(f"cannot interpret {value!r} as uncertainty")
        if isinstance(value, str):
            return cls.from_string(value, shape=shape)
        return cls.from_numeric(value, shape=shape)


#
# rounding algorithms
#

def digit_count(n: int) -> int:
    """
    Returns the number of decimal digits of a non-negative integer *n*. Zero has one digit.
    """
    if n < 0:
        raise ValueError(f"cannot count digits of negative number {n}")
    return len(str(n))


def reduce_to_three_significant_digits(value: DecimalValue, quiet: bool = False) -> DecimalValue:
    """
    Returns a copy of *value* whose mantissa has exactly three digits. Excess digits are dropped
    without rounding. Missing digits are padded with zeros, which fabricates precision and therefore
    issues a :py:class:`RoundingWarning` unless *quiet* is *True*. Example:

    .. code-block:: python

        reduce_to_three_significant_digits(Uncertainty(12345, -3))  # -> 123 x 10^-1
        reduce_to_three_significant_digits(Uncertainty(5, 0))       # -> 500 x 10^-2, warning
    """
    n = value.digits
    if n < 3:
        _warn(f"not enough significant digits in {value}, padding with zeros", quiet=quiet)
        pad = 3 - n
        return value.copy(mantissa=value.mantissa * 10**pad, exponent=value.exponent - pad)

    drop = n - 3
    return value.copy(mantissa=value.mantissa // 10**drop, exponent=value.exponent + drop)


def pdg_rule(value: DecimalValue) -> DecimalValue:
    """
    Applies the rounding rule of the `PDG
    <https://pdg.lbl.gov/2021/reviews/rpp2021-rev-rpp-intro.pdf#page=18>`_ to a *value* with exactly
    three significant digits and returns the rounded copy:

    - ``100`` to ``354``: two significant digits.
    - ``355`` to ``949``: one significant digit.
    - ``950`` to ``999``: rounded up to ``10`` with the exponent raised by two.

    A :py:class:`RoundingError` is raised when the mantissa does not have three digits.
    """
    m = value.mantissa
    if digit_count(m) != 3:
        raise RoundingError(f"number {m} does not have 3 digits")

    if m <= 354:
        last = m % 10
        return value.copy(mantissa=m // 10 + int(last >= 5), exponent=value.exponent + 1)

    if m <= 949:
        tens = (m // 10) % 10
        return value.copy(mantissa=m // 100 + int(tens >= 5), exponent=value.exponent + 2)

    return value.copy(mantissa=10, exponent=value.exponent + 2)


def pdg_round(value: DecimalValue, quiet: bool = False) -> DecimalValue:
    """
    Reduces *value* to three significant digits and applies the :py:func:`pdg_rule`. Example:

    .. code-block:: python

        pdg_round(Uncertainty.from_string("0.352")).to_string()  # -> "0.35"
        pdg_round(Uncertainty.from_string("0.835")).to_string()  # -> "0.8"
        pdg_round(Uncertainty.from_string("0.962")).to_string()  # -> "1.0"
    """
    return pdg_rule(reduce_to_three_significant_digits(value, quiet=quiet))


def two_digit_round(value: DecimalValue, quiet: bool = False) -> DecimalValue:
    """
    Reduces *value* to three significant digits and rounds the last one half-up, leaving two
    significant digits. A carry into a third digit (``995`` -> ``100``) is moved into the exponent.
    """
    value = reduce_to_three_significant_digits(value, quiet=quiet)
    m = value.mantissa // 10 + int(value.mantissa % 10 >= 5)
    exponent = value.exponent + 1
    if m == 100:
        m //= 10
        exponent += 1

    return value.copy(mantissa=m, exponent=exponent)


def round_to_exponent(value: DecimalValue, exponent: int) -> DecimalValue:
    """
    Rounds *value* half-up to the decimal place given by *exponent* and returns the rounded copy.
    Only the last discarded digit decides about the rounding. A :py:class:`RoundingError` is raised
    when *value* does not carry enough digits, i.e., when its exponent is already larger than
    *exponent*. Example:

    .. code-block:: python

        round_to_exponent(CentralValue.from_string("27.432"), -1).to_string()  # -> "27.4"
        round_to_exponent(CentralValue.from_string("0.125"), -2).to_string()   # -> "0.13"
        round_to_exponent(CentralValue.from_string("27"), -1)                  # -> RoundingError
    """
    if value.exponent > exponent:
        raise RoundingError(f"cannot round {value} to precision {exponent}")

    m, e, last = value.mantissa, value.exponent, 0
    while e < exponent:
        last = m % 10
        m //= 10
        e += 1
    if last >= 5:
        m += 1

    return value.copy(mantissa=m, exponent=e)


#: Rounding functions per :py:class:`Algorithm`.
rounding_functions: dict[Algorithm, Callable[..., DecimalValue]] = {
    Algorithm.PDG: pdg_round,
    Algorithm.TWO_DIGIT: two_digit_round,
}


#
# combination of uncertainties
#

def quadrature_sum(errors: Sequence[Uncertainty], quiet: bool = False) -> Uncertainty:
    """
    Returns the square root of the sum of squares of all uncertainties in *errors* as a symmetric
    :py:class:`Uncertainty`. A single uncertainty is returned unchanged.

    Asymmetric uncertainties are approximated by the average of their pair: each magnitude is halved
    before squaring and, once a pair is complete, half of the running product of all halved
    asymmetric magnitudes is added to compensate for the missing cross term. The summation is
    compensated (Kahan) to limit the floating point error of this intermediate step. When the number
    of asymmetric uncertainties is odd, a :py:class:`RoundingWarning` is issued unless *quiet* is
    *True*, and the result should not be trusted.

    .. code-block:: python

        quadrature_sum([Uncertainty(3), Uncertainty(4)]).to_float()  # -> 5.0
    """
    errors = list(errors)
    if len(errors) == 1:
        return errors[0]

    total = 0.0
    compensation = 0.0
    n_asym = 0
    product = 1.0
    for err in errors:
        v = abs(err.to_float())
        asym = err.is_asymmetric
        if asym:
            n_asym += 1
            v *= 0.5
            product *= v

        y = v * v - compensation
        if asym and n_asym % 2 == 0:
            y += 0.5 * product
        t = total + y
        compensation = (t - total) - y
        total = t

    if n_asym % 2 != 0:
        _warn(
            "asymmetric errors do not seem to come in pairs, the total error computation is wrong",
            quiet=quiet,
        )

    return Uncertainty.from_numeric(math.sqrt(total))


def symmetrize_errors(
    errors: Sequence[Uncertainty],
    threshold: float = 0.1,
    quiet: bool = False,
) -> list[Uncertainty]:
    """
    Returns a new list of uncertainties where adjacent asymmetric pairs whose magnitudes differ by
    less than a fraction *threshold* are replaced by a single symmetric uncertainty equal to their
    exact average. Pairs are searched from the end of the list. An asymmetric uncertainty preceded
    by a symmetric one is left untouched and issues a :py:class:`RoundingWarning` unless *quiet* is
    *True*. Example:

    .. code-block:: python

        errors = [Uncertainty.from_string(s) for s in ("+0.30", "-0.31", "0.1")]
        [str(e) for e in symmetrize_errors(errors)]
        # -> ["0.305", "0.1"]
    """
    errors = list(errors)
    rel = decimal.Decimal(repr(float(threshold)))

    i = len(errors) - 1
    while i > 0:
        err1 = errors[i]
        if not err1.is_asymmetric:
            i -= 1
            continue

        i -= 1
        err2 = errors[i]
        if not err2.is_asymmetric:
            _warn("asymmetric errors do not seem to come in pairs", quiet=quiet)
            continue

        e1 = abs(err1.to_decimal())
        e2 = abs(err2.to_decimal())
        if abs(e1 - e2) < rel * e2:
            errors[i] = Uncertainty.from_numeric((e1 + e2) / 2, shape=ErrorShape.SYMMETRIC)
            del errors[i + 1]
        i -= 1

    return errors


#
# precision reconciliation
#

def round_measurement(
    central: CentralValue,
    uncertainties: Sequence[Uncertainty],
    options: FormatOptions | str | None = None,
    **kwargs,
) -> tuple[CentralValue, list[Uncertainty]]:
    """
    Rounds a *central* value and its *uncertainties* according to *options* and returns a 2-tuple
    with the rounded central value and the list of rounded uncertainties. *options* can be a
    :py:class:`FormatOptions` instance or a flag string, *kwargs* overwrite single options.

    1. When :py:attr:`FormatOptions.symmetrize_errors` is set, near-equal asymmetric pairs are
       merged first via :py:func:`symmetrize_errors`.
    2. With :py:attr:`FormatOptions.precision_to_total_error`, the precision of the
       :py:func:`quadrature_sum` of all uncertainties, rounded with the selected algorithm, is
       enforced on all values.
    3. Otherwise, with :py:attr:`FormatOptions.precision_to_larger_error`, all uncertainties are
       rounded with the selected algorithm and the coarsest resulting precision is enforced.
    4. When neither applies, or there are no uncertainties, every value is rounded independently.

    Warnings are not issued when the mode is terminal and powers are factorized.
    """
    options = ensure_options(options, **kwargs)
    quiet = options.quiet
    round_fn = rounding_functions[options.algorithm]

    uncertainties = list(uncertainties)
    if options.symmetrize_errors:
        uncertainties = symmetrize_errors(
            uncertainties,
            threshold=options.symmetrize_threshold,
            quiet=quiet,
        )

    # determine a shared exponent
    exponent = None
    if uncertainties:
        if options.precision_to_total_error:
            total = round_fn(quadrature_sum(uncertainties, quiet=quiet), quiet=quiet)
            exponent = total.exponent
        elif options.precision_to_larger_error:
            uncertainties = [round_fn(u, quiet=quiet) for u in uncertainties]
            exponent = max(u.exponent for u in uncertainties)

    if exponent is not None:
        central = round_to_exponent(central, exponent)
        uncertainties = [round_to_exponent(u, exponent) for u in uncertainties]
    else:
        central = round_fn(central, quiet=quiet)
        uncertainties = [round_fn(u, quiet=quiet) for u in uncertainties]

    return central, uncertainties  # type: ignore[return-value]


#
# configuration
#

#: Symbols used by :py:func:`render`: multiplication, alternate multiplication, plus-minus,
#: parenthesis open/close, curly open/close, space before super/subscripts, text open/close.
SymbolTable = namedtuple("SymbolTable", [
    "times", "times_alt", "pm", "paren_open", "paren_close", "curly_open", "curly_close",
    "curly_space", "text_open", "text_close",
])

#: Dictionary mapping each :py:class:`Mode` to its :py:class:`SymbolTable`. As an example, the
#: TeX table is
#:
#: .. code-block:: python
#:
#:     SymbolTable(
#:         times=r" \times ", times_alt=r"\cdot", pm=r"\pm",
#:         paren_open=r"\left( ", paren_close=r" \right)", curly_open="{", curly_close="}",
#:         curly_space=r"\,", text_open=r"\text{", text_close="}",
#:     )
symbol_dict = {
    Mode.TERMINAL: SymbolTable("×", "·", "±", "(", ")", "", "", "", "", ""),
    Mode.TEX: SymbolTable(
        r" \times ", r"\cdot", r"\pm", r"\left( ", r" \right)", "{", "}", r"\,", r"\text{", "}",
    ),
    Mode.TYPST: SymbolTable(
        " times ", " dot.op ", " plus.minus ", "(", ")", "(", ")", "#h(0.0em)", "\"", "\"",
    ),
    Mode.GNUPLOT: SymbolTable("×", "· ", "±", "(", ")", "{", "}", "", "", ""),
}


def get_symbols(mode: Mode | str, no_utf8: bool = False) -> SymbolTable:
    """
    Returns the :py:class:`SymbolTable` for a *mode*. When *no_utf8* is *True*, the multiplication
    and plus-minus symbols are replaced by ASCII equivalents while brackets are kept.
    """
    symbols = symbol_dict[Mode(mode)]
    if no_utf8:
        symbols = symbols._replace(times="x", times_alt=".", pm="+/-")
    return symbols


_FormatOptionsBase = namedtuple("_FormatOptionsBase", [
    "mode", "algorithm", "symmetrize_errors", "symmetrize_threshold", "precision_to_total_error",
    "precision_to_larger_error", "factorize_powers", "no_utf8",
    "use_alternate_multiplication_symbol", "labels",
])


class FormatOptions(_FormatOptionsBase):
    """ FormatOptions(mode="terminal", algorithm="pdg", symmetrize_errors=False, symmetrize_threshold=0.1, precision_to_total_error=False, precision_to_larger_error=True, factorize_powers=False, no_utf8=False, use_alternate_multiplication_symbol=False, labels=None)
    Immutable set of options that control rounding and rendering. Use :py:meth:`copy` to derive
    modified options and :py:meth:`from_flags` to parse a compact flag string.

    .. py:attribute:: mode

        type: Mode

        The output dialect, ``"terminal"``, ``"tex"``, ``"typst"`` or ``"gnuplot"``.

    .. py:attribute:: algorithm

        type: Algorithm

        The significant digit rule, ``"pdg"`` or ``"two_digit"``.

    .. py:attribute:: labels

        type: tuple, None

        Labels to render after symmetric uncertainties or asymmetric pairs.
    """

    __slots__ = ()

    #: Mapping of flag characters to the options they set.
    flag_map = {
        "c": {"algorithm": Algorithm.TWO_DIGIT, "precision_to_total_error": True},
        "e": {"precision_to_total_error": True},
        "l": {"precision_to_larger_error": True, "precision_to_total_error": False},
        "p": {"algorithm": Algorithm.PDG},
        "s": {"symmetrize_errors": True},
        "t": {"algorithm": Algorithm.TWO_DIGIT},
        "D": {"use_alternate_multiplication_symbol": True},
        "F": {"factorize_powers": True},
        "G": {"mode": Mode.GNUPLOT},
        "T": {"mode": Mode.TYPST},
        "U": {"no_utf8": True},
        "X": {"mode": Mode.TEX},
    }

    def __new__(
        cls,
        mode: Mode | str = Mode.TERMINAL,
        algorithm: Algorithm | str = Algorithm.PDG,
        symmetrize_errors: bool = False,
        symmetrize_threshold: float = 0.1,
        precision_to_total_error: bool = False,
        precision_to_larger_error: bool = True,
        factorize_powers: bool = False,
        no_utf8: bool = False,
        use_alternate_multiplication_symbol: bool = False,
        labels: Sequence[str] | None = None,
    ) -> FormatOptions:
        symmetrize_threshold = float(symmetrize_threshold)
        if symmetrize_threshold < 0:
            raise ValueError(f"symmetrize_threshold must not be negative: {symmetrize_threshold}")

        return super().__new__(
            cls,
            Mode(mode),
            Algorithm(algorithm),
            bool(symmetrize_errors),
            symmetrize_threshold,
            bool(precision_to_total_error),
            bool(precision_to_larger_error),
            bool(factorize_powers),
            bool(no_utf8),
            bool(use_alternate_multiplication_symbol),
            _parse_labels(labels),
        )

    @classmethod
    def from_flags(cls, flags: str, **kwargs) -> FormatOptions:
        """
        Creates options from a compact string of *flags*, see :py:attr:`flag_map` for the meaning of
        each character. Unknown characters are ignored. The flags may be enclosed in curly braces,
        in which case a missing closing brace raises a :py:class:`RoundingError`. Options passed in
        *kwargs* are applied first, flags are applied on top. Example:

        .. code-block:: python

            FormatOptions.from_flags("csF")
            # -> two digit rounding to the total error, symmetrized errors, factorized powers

            FormatOptions.from_flags("{X}").mode
            # -> Mode.TEX
        """
        if not isinstance(flags, str):
            raise TypeError(f"flags must be a string: {flags!r}")

        if flags.startswith("{"):
            if len(flags) < 2 or not flags.endswith("}"):
                raise RoundingError(f"unterminated flag sequence '{flags}'")
            flags = flags[1:-1]

        for c in flags:
            kwargs.update(cls.flag_map.get(c, {}))

        return cls(**kwargs)

    def copy(self, **kwargs) -> FormatOptions:
        """
        Returns a copy of the options with fields overwritten by *kwargs*.
        """
        return self.__class__(**dict(self._asdict(), **kwargs))

    @property
    def symbols(self) -> SymbolTable:
        return get_symbols(self.mode, no_utf8=self.no_utf8)

    @property
    def quiet(self) -> bool:
        return self.mode == Mode.TERMINAL and self.factorize_powers


def _parse_labels(labels: Sequence[str] | str | None) -> tuple[str, ...] | None:
    if labels is None:
        return None
    if isinstance(labels, str):
        labels = [labels]
    labels = tuple(labels)
    for label in labels:
        if not isinstance(label, str):
            raise TypeError(f"invalid label: {label!r}")
    return labels


def ensure_options(options: FormatOptions | str | None = None, **kwargs) -> FormatOptions:
    """
    Returns :py:class:`FormatOptions` from *options*, which might be *None*, an instance or a flag
    string. *kwargs* overwrite single options.
    """
    if options is None:
        return FormatOptions(**kwargs)
    if isinstance(options, str):
        return FormatOptions.from_flags(options, **kwargs)
    if isinstance(options, FormatOptions):
        return options.copy(**kwargs) if kwargs else options

    raise TypeError(f"invalid options: {options!r}")


#
# rendering
#

def _label_index(
    labels: Sequence[str],
    n_uncertainties: int,
    n_groups: int,
    group_index: int,
    first_index: int,
) -> int:
    # labels are positional when there is one per uncertainty rather than one per group
    if len(labels) == n_uncertainties and n_uncertainties != n_groups:
        return first_index
    return group_index


def group_labels(
    labels: Sequence[str] | None,
    uncertainties: Sequence[Uncertainty],
) -> list[str] | None:
    """
    Returns *labels* with one entry per symmetric uncertainty or asymmetric pair in *uncertainties*.
    Labels given per uncertainty are resolved to the label of the first uncertainty of each group.
    Groups without a label are dropped from the end. Example:

    .. code-block:: python

        uncs = [Uncertainty.from_string(s) for s in ("+0.31", "-0.29", "0.01")]
        group_labels(["stat", "syst", "theo"], uncs)  # -> ["stat", "theo"]
        group_labels(["stat", "theo"], uncs)          # -> ["stat", "theo"]
    """
    if labels is None:
        return None
    labels = list(labels)

    n_groups = sum(1 if u.is_asymmetric else 2 for u in uncertainties) // 2
    result = []
    count = 0
    for i, unc in enumerate(uncertainties):
        if count % 2 == 0:
            idx = _label_index(labels, len(uncertainties), n_groups, count // 2, i)
            if idx >= len(labels):
                break
            result.append(labels[idx])
        count += 1 if unc.is_asymmetric else 2

    return result


def render(
    central: CentralValue,
    uncertainties: Sequence[Uncertainty],
    options: FormatOptions | str | None = None,
    labels: Sequence[str] | None = None,
) -> str:
    """
    Renders an already rounded *central* value and its *uncertainties* to a string in the dialect
    selected by *options*. Symmetric uncertainties are preceded by a plus-minus symbol, asymmetric
    ones are rendered with explicit signs and, in math-like modes, as super- and subscripts. When
    *labels* (default to :py:attr:`FormatOptions.labels`) are given, they follow each symmetric
    uncertainty or asymmetric pair. Examples:

    .. code-block:: python

        c = CentralValue.from_string("27.46")
        u = [Uncertainty.from_string(s) for s in ("+0.31", "-0.29", "0.01")]

        render(c, u)
        # -> "27.46 +0.31 -0.29 ± 0.01"

        render(c, u, FormatOptions(mode="tex"), labels=["stat", "syst"])
        # -> "27.46 \\,^{+0.31} _{-0.29} \\text{stat} \\pm 0.01 \\text{syst}"

        render(CentralValue(274, -1), [Uncertainty(21, -1)], FormatOptions(factorize_powers=True))
        # -> "(274 ± 21)×10^-1"

    When there is exactly one label per uncertainty (and not per group), the label of a group is the
    one at the position of its first uncertainty.
    """
    options = ensure_options(options)
    if labels is None:
        labels = options.labels
    labels = list(labels or [])
    symbols = options.symbols
    math_like = options.mode in (Mode.TEX, Mode.TYPST, Mode.GNUPLOT)
    fp = options.factorize_powers
    factorize = fp and central.exponent != 0

    text = symbols.paren_open if factorize else ""
    text += central.to_string(factorize_powers=fp)

    # symmetric uncertainties occupy two slots, asymmetric ones a single slot
    n_slots = sum(1 if u.is_asymmetric else 2 for u in uncertainties)

    count = 0
    first = 0
    for i, unc in enumerate(uncertainties):
        text += " "
        if count % 2 == 0:
            first = i

        wrap = unc.is_asymmetric and math_like
        if wrap:
            # small space before super/subscripts
            if count % 2 == 0:
                text += symbols.curly_space
            text += "^" if unc.shape == ErrorShape.UPPER else "_"
            text += symbols.curly_open

        if not unc.is_asymmetric:
            text += symbols.pm + " "
            count += 1
        elif unc.shape == ErrorShape.UPPER:
            text += "+"

        text += unc.to_string(factorize_powers=fp)
        if wrap:
            text += symbols.curly_close
        count += 1

        if labels and count % 2 == 0:
            idx = _label_index(labels, len(uncertainties), n_slots // 2, count // 2 - 1, first)
            if idx < len(labels):
                text += " " + symbols.text_open + labels[idx] + symbols.text_close

    # trailing power of ten
    if factorize:
        text += symbols.paren_close
        text += symbols.times_alt if options.use_alternate_multiplication_symbol else symbols.times
        text += "10"
        if central.exponent != 1:
            text += "^" + symbols.curly_open + str(central.exponent) + symbols.curly_close

    return text


#
# public interface
#

def ensure_central(value: InValueType | CentralValue) -> CentralValue:
    """
    Returns *value* again if it is a :py:class:`CentralValue`, or parses it from a string or number.
    """
    value = _unwrap(value)
    if isinstance(value, CentralValue):
        return value
    if isinstance(value, DecimalValue):
        raise TypeError(f"cannot interpret {value!r} as central value")
    if isinstance(value, str):
        return CentralValue.from_string(value)
    return CentralValue.from_numeric(value)


def ensure_uncertainties(
    uncertainties: InUncType | Sequence[InUncType] | None,
) -> list[Uncertainty]:
    """
    Converts *uncertainties* into a list of :py:class:`Uncertainty` instances. *uncertainties* can
    be *None*, a single value or a list of values. Values can be strings (with an optional sign to
    mark asymmetric halves), numbers, :py:class:`Uncertainty` instances or 2-tuples describing an
    asymmetric (up, down) pair. Example:

    .. code-block:: python

        ensure_uncertainties(["+0.31", "-0.29", 0.01])
        ensure_uncertainties([(0.31, 0.29), 0.01])  # same as above
    """
    if uncertainties is None:
        return []

    result = []
    for unc in make_list(uncertainties, cast=False):
        if isinstance(unc, tuple):
            if len(unc) != 2:
                raise ValueError(f"asymmetric uncertainties must be provided as 2-tuple: {unc}")
            result.append(Uncertainty.from_anything(unc[0], shape=ErrorShape.UPPER))
            result.append(Uncertainty.from_anything(unc[1], shape=ErrorShape.LOWER))
        else:
            result.append(Uncertainty.from_anything(unc))

    return result


def format(
    central: Any,
    uncertainties: Any = None,
    options: FormatOptions | str | None = None,
    **kwargs,
) -> str:
    """
    Rounds and renders a *central* value with *uncertainties* and returns the string. Inputs are
    interpreted by :py:func:`ensure_central` and :py:func:`ensure_uncertainties`. *options* can be a
    :py:class:`FormatOptions` instance or a flag string, *kwargs* overwrite single options.
    Examples:

    .. code-block:: python

        format("27.432", ["2.134", "0.125"], algorithm="two_digit")
        # -> "27.4 ± 2.1 ± 0.1"

        format("27.462", ["+0.3134", "-0.292", "0.0124"], "cX", labels=["stat", "syst"])
        # -> "27.46 \\,^{+0.31} _{-0.29} \\text{stat} \\pm 0.01 \\text{syst}"

        format(1234.5, 56.7, factorize_powers=True)
        # -> "(123 ± 6)×10"

    A :py:class:`RoundingError` is raised when an input is malformed or cannot be rounded to the
    required precision.
    """
    options = ensure_options(options, **kwargs)
    uncs = ensure_uncertainties(uncertainties)

    # labels refer to the uncertainties before pairs are merged
    if options.labels:
        options = options.copy(labels=group_labels(options.labels, uncs))

    central, uncs = round_measurement(ensure_central(central), uncs, options)
    return render(central, uncs, options)


def format_array(
    central: Any,
    uncertainties: Any = None,
    options: FormatOptions | str | None = None,
    **kwargs,
) -> Any:
    """
    Element-wise version of :py:func:`format` for NumPy arrays. *central* and each entry in
    *uncertainties* (a single array, a list of arrays, or 2-tuples of arrays for asymmetric pairs)
    must be broadcastable against each other. Returns an array of strings. Example:

    .. code-block:: python

        format_array(np.array([12.345, 27.432]), [np.array([0.678, 2.134])], algorithm="two_digit")
        # -> array(["12.35 ± 0.68", "27.4 ± 2.1"])
    """
    if not HAS_NUMPY:
        raise RuntimeError(
            "format_array requires NumPy (https://numpy.org) to be installed on your system",
        )

    options = ensure_options(options, **kwargs)

    # flatten uncertainty arrays and remember forced shapes of asymmetric pairs
    flat, shapes = [], []
    if uncertainties is not None:
        for unc in make_list(uncertainties, cast=False):
            if isinstance(unc, tuple):
                if len(unc) != 2:
                    raise ValueError(f"asymmetric uncertainties must be provided as 2-tuple: {unc}")
                flat.extend(unc)
                shapes.extend([ErrorShape.UPPER, ErrorShape.LOWER])
            else:
                flat.append(unc)
                shapes.append(None)

    arrays = np.broadcast_arrays(np.asarray(central), *(np.asarray(u) for u in flat))
    out = np.empty(arrays[0].shape, dtype=object)
    for idx in np.ndindex(*out.shape):
        uncs = [
            Uncertainty.from_anything(a[idx], shape=shape)
            for a, shape in zip(arrays[1:], shapes)
        ]
        out[idx] = format(arrays[0][idx], uncs, options)

    return out.astype(str)


class Measurement(object):
    """ __init__(central, uncertainties=None, labels=None)
    A *central* value with an ordered list of *uncertainties* and optional *labels*, one per
    symmetric uncertainty or asymmetric pair. Values are parsed by :py:func:`ensure_central` and
    :py:func:`ensure_uncertainties`.

    Instances implement Python's formatting protocol where the format spec is a flag string
    as understood by :py:meth:`FormatOptions.from_flags`, prepended by :py:attr:`default_flags`:

    .. code-block:: python

        m = Measurement("27.462", ["+0.3134", "-0.292", "0.0124"], labels=["stat", "syst"])

        "{}".format(m)
        # -> "27.46 +0.31 -0.29 stat ± 0.01 syst"

        "{:X}".format(m)
        # -> "27.46 \\,^{+0.31} _{-0.29} \\text{stat} \\pm 0.01 \\text{syst}"

        m.str(algorithm="pdg", mode="gnuplot")
        # -> "27.46 ^{+0.31} _{-0.29} stat ± 0.01 syst"

    .. py:classattribute:: default_flags

        type: string

        Flags that are applied before the format spec (``"c"``, i.e., two digit rounding
        with the precision of the total error).

    .. py:attribute:: central

        type: CentralValue

        The central value.

    .. py:attribute:: uncertainties

        type: list

        The list of :py:class:`Uncertainty` instances.

    .. py:attribute:: labels

        type: list, None

        Optional labels.
    """

    default_flags = "c"

    def __init__(
        self,
        central: Any,
        uncertainties: Any = None,
        labels: Sequence[str] | None = None,
    ) -> None:
        super().__init__()

        self.central = central
        self.uncertainties = uncertainties
        self.labels = labels

    @typed  # type: ignore[arg-type]
    def central(self, central: Any) -> CentralValue:
        return ensure_central(central)

    @typed  # type: ignore[arg-type]
    def uncertainties(self, uncertainties: Any) -> list[Uncertainty]:
        return ensure_uncertainties(uncertainties)

    @typed  # type: ignore[arg-type]
    def labels(self, labels: Sequence[str] | None) -> list[str] | None:
        labels = _parse_labels(labels)
        return None if labels is None else list(labels)

    @classmethod
    def from_ufloat(cls, x: Any, default_tag: str = "default") -> Measurement:
        """
        Creates a measurement from a ``ufloat`` object *x* of the "uncertainties" package. Error
        components with the same tag are combined assuming full correlation. When at least one
        component is tagged, tags are used as labels and untagged components are labeled
        *default_tag*.
        """
        if not is_ufloat(x):
            raise TypeError(f"not a ufloat: {x!r}")

        # sum components per tag, assume full correlation
        components: dict[str | None, float] = defaultdict(float)
        for var, value in x.error_components().items():
            components[getattr(var, "tag", None)] += value

        uncertainties = [Uncertainty.from_numeric(abs(value)) for value in components.values()]
        labels = None
        if any(tag is not None for tag in components):
            labels = [default_tag if tag is None else str(tag) for tag in components]

        return cls(x.nominal_value, uncertainties, labels=labels)

    def copy(
        self,
        central: Any = None,
        uncertainties: Any = None,
        labels: Sequence[str] | None = None,
    ) -> Measurement:
        """
        Returns a copy of the measurement. When *central*, *uncertainties* or *labels* are set, they
        overwrite the fields of the copied instance.
        """
        if central is None:
            central = self.central
        if uncertainties is None:
            uncertainties = self.uncertainties
        if labels is None:
            labels = self.labels

        return self.__class__(central, uncertainties, labels=labels)

    def _options(self, options: FormatOptions | str | None, **kwargs) -> FormatOptions:
        options = ensure_options(options, **kwargs)
        if self.labels:
            options = options.copy(labels=self.labels)
        return options

    def round(self, options: FormatOptions | str | None = None, **kwargs) -> Measurement:
        """
        Returns a copy of the measurement with values rounded by :py:func:`round_measurement`.
        """
        central, uncertainties = round_measurement(
            self.central,
            self.uncertainties,
            self._options(options, **kwargs),
        )
        return self.copy(central, uncertainties)

    def str(self, options: FormatOptions | str | None = None, **kwargs) -> str:
        """
        Returns the rounded and rendered measurement. *options* and *kwargs* are interpreted by
        :py:func:`ensure_options`. Labels of the measurement take precedence over labels in the
        options.
        """
        return format(self.central, self.uncertainties, self._options(options, **kwargs))

    def __format__(self, format_spec: str) -> str:
        defaults = FormatOptions.from_flags(self.default_flags)._asdict()
        return self.str(FormatOptions.from_flags(format_spec, **defaults))

    def __str__(self) -> str:
        return self.__format__("")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} at {hex(id(self))}, '{self}'>"

    def _repr_latex_(self) -> str:
        return "${}$".format(self.__format__("X"))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return (
            self.central == other.central and
            self.uncertainties == other.uncertainties and
            self.labels == other.labels
        )

    def __ne__(self, other: Any) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    __hash__ = None  # type: ignore[assignment]


#
# helper functions
#

def is_numpy(x: Any) -> bool:
    """
    Returns *True* when numpy is available on your system and *x* is a numpy type.
    """
    return HAS_NUMPY and type(x).__module__ == np.__name__


def is_ufloat(x: Any) -> bool:
    """
    Returns *True* when the "uncertainties" package is available on your system and *x* is a
    ``ufloat``.
    """
    return HAS_UNCERTAINTIES and isinstance(x, _uncs.core.AffineScalarFunc)


def _unwrap(value: Any) -> Any:
    # numpy scalars and zero-dimensional arrays to python objects
    return value.item() if is_numpy(value) else value


def make_list(obj: Any, cast: bool = True) -> list:
    """
    Converts an object *obj* to a list and returns it. Objects of types *tuple* and *set* are
    converted if *cast* is *True*. Otherwise, and for all other types, *obj* is put in a new list.
    """
    if isinstance(obj, list):
        return list(obj)
    if isinstance(obj, types.GeneratorType):
        return list(obj)
    if isinstance(obj, (tuple, set)) and cast:
        return list(obj)
    return [obj]


def create_hep_data_representer(
    options: FormatOptions | str | None = None,
    force_asymmetric: bool = False,
    **kwargs,
) -> Callable:
    """
    Creates a PyYAML representer function that encodes a :py:class:`Measurement` as a data
    structure that is compatible to the `HEPData
    <https://hepdata-submission.readthedocs.io/en/latest/data_yaml.html>`_ format for values in data
    files.

    .. code-block:: python

        import yaml
        import sciround as sr

        yaml.add_representer(sr.Measurement, sr.create_hep_data_representer())

    Values are rounded by :py:meth:`Measurement.round` with *options* and *kwargs*. Symmetric
    uncertainties are encoded as ``symerror``, asymmetric pairs as ``asymerror``. When
    *force_asymmetric* is *True*, symmetric uncertainties are encoded as ``asymerror`` as well.
    Values without decimal digits are encoded as integers.
    """
    if not HAS_YAML:
        raise RuntimeError(
            "create_hep_data_representer requires PyYAML (https://pyyaml.org) to be installed on " +
            "your system",
        )

    # yaml node factories
    y_map = lambda value: yaml.MappingNode(tag="tag:yaml.org,2002:map", value=value)
    y_seq = lambda value: yaml.SequenceNode(tag="tag:yaml.org,2002:seq", value=value)
    y_str = lambda value: yaml.ScalarNode(tag="tag:yaml.org,2002:str", value=str(value))
    y_int = lambda value: yaml.ScalarNode(tag="tag:yaml.org,2002:int", value=str(value))
    y_float = lambda value: yaml.ScalarNode(tag="tag:yaml.org,2002:float", value=str(value))
    y_int_or_float = lambda value: y_float(value) if "." in str(value) else y_int(value)

    def representer(dumper, m):
        """
        Produced node structure:
          value: float
          errors:
            - symerror: float
              label: str
            - asymerror:
                plus: float
                minus: float
              label: str
        """
        labels = m.labels or list(ensure_options(options, **kwargs).labels or [])
        labels = group_labels(labels, m.uncertainties)
        m = m.round(options, **kwargs)

        # group uncertainties into symmetric ones and asymmetric pairs
        groups = []
        uncs = m.uncertainties
        i = 0
        while i < len(uncs):
            unc = uncs[i]
            if not unc.is_asymmetric:
                groups.append(({"plus": unc, "minus": unc}, True))
                i += 1
            elif (
                unc.shape == ErrorShape.UPPER and
                i + 1 < len(uncs) and
                uncs[i + 1].shape == ErrorShape.LOWER
            ):
                groups.append(({"plus": unc, "minus": uncs[i + 1]}, False))
                i += 2
            else:
                key = "plus" if unc.shape == ErrorShape.UPPER else "minus"
                groups.append(({key: unc}, False))
                i += 1

        # build error nodes
        error_nodes = []
        for group_index, (values, sym) in enumerate(groups):
            items = []
            if group_index < len(labels):
                items.append((y_str("label"), y_str(labels[group_index])))
            if sym and not force_asymmetric:
                items.append((y_str("symerror"), y_int_or_float(values["plus"].to_string())))
            else:
                asym_items = []
                if "plus" in values:
                    plus = values["plus"].to_string()
                    asym_items.append((y_str("plus"), y_int_or_float(plus)))
                if "minus" in values:
                    minus = values["minus"].to_string()
                    if not minus.startswith("-"):
                        minus = "-" + minus
                    asym_items.append((y_str("minus"), y_int_or_float(minus)))
                items.append((y_str("asymerror"), y_map(asym_items)))
            error_nodes.append(y_map(items))

        # build the value node
        value_node_items = [(y_str("value"), y_int_or_float(m.central.to_string()))]
        if error_nodes:
            value_node_items.append((y_str("errors"), y_seq(error_nodes)))

        return y_map(value_node_items)

    return representer
