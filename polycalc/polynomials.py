"""Sparse polynomials of one variable and arithmetic over them.

A Polynomial maps exponents (non-negative ints) to coefficients (floats).
Arithmetic results never contain zero coefficients; the zero polynomial is
the empty mapping.  Polynomials built directly (e.g. by the parser) are
stored as given, so `Polynomial({0: 0.0})` is a legal value that is not
equal to `Polynomial.ZERO`.

Important functions:
 - add, subtract, multiply: (Polynomial, Polynomial) -> Polynomial
 - divide: (Polynomial, Polynomial) -> DivisionResult
 - long_division: generator over the steps of `divide`
 - evaluate: (Polynomial, float) -> float
 - format_polynomial: Polynomial -> str
"""

from collections import namedtuple
from collections.abc import Mapping
import functools
import math
import numbers

from polycalc import logging

class InvalidOperandError(TypeError):
    """An operand is missing or is not a polynomial."""
    pass

class DivisionByZeroError(ZeroDivisionError):
    """The divisor has no leading term."""
    pass

@functools.total_ordering
class Polynomial(Mapping):
    __slots__ = ("terms",)

    def __init__(self, terms=()):
        terms = dict(terms)
        for exponent, coefficient in terms.items():
            if isinstance(exponent, bool) or not isinstance(exponent, numbers.Integral) or exponent < 0:
                raise InvalidOperandError("exponent must be a non-negative integer, got {!r}".format(exponent))
            if isinstance(coefficient, bool) or not isinstance(coefficient, numbers.Real):
                raise InvalidOperandError("coefficient must be a real number, got {!r}".format(coefficient))
        self.terms = { int(e) : float(c) for e, c in terms.items() }

    def __getitem__(self, exponent):
        return self.terms[exponent]

    def __iter__(self):
        return iter(self.terms)

    def __len__(self):
        return len(self.terms)

    def __hash__(self):
        return hash(frozenset(self.terms.items()))

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.terms == dict(other.items())

    def __lt__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        other = _operand(other)
        if self.degree != other.degree:
            return self.degree < other.degree
        for i in sorted(set(self.terms) | set(other.terms), reverse=True):
            self_term = self.get_coefficient(i)
            other_term = other.get_coefficient(i)
            if self_term < other_term:
                return True
            if other_term < self_term:
                return False
        return False

    def __str__(self):
        return format_polynomial(self)

    def __repr__(self):
        return "Polynomial({!r})".format(dict(sorted(self.terms.items(), reverse=True)))

    def get_coefficient(self, i):
        return self.terms.get(i, 0.0)

    @property
    def degree(self):
        """The largest exponent present, or 0 for the empty polynomial."""
        return max(self.terms, default=0)

    @property
    def leading_coefficient(self):
        """The coefficient at `degree`, or None if there is no such term."""
        return self.terms.get(self.degree)

    def is_zero(self):
        return all(c == 0 for c in self.terms.values())

    def pruned(self):
        """This polynomial without its zero-coefficient terms."""
        return Polynomial((e, c) for e, c in self.terms.items() if c != 0)

    def __add__(self, other):
        return add(self, other)

    def __sub__(self, other):
        return subtract(self, other)

    def __neg__(self):
        return Polynomial((e, -c) for e, c in self.terms.items())

    def __mul__(self, other):
        if isinstance(other, numbers.Real) and not isinstance(other, bool):
            return Polynomial((e, c * other) for e, c in self.terms.items()).pruned()
        return multiply(self, other)

    __rmul__ = __mul__

    def __divmod__(self, other):
        return divide(self, other)

    def __call__(self, value):
        return evaluate(self, value)

Polynomial.ZERO = Polynomial()
Polynomial.ONE  = Polynomial({0: 1.0})
Polynomial.X    = Polynomial({1: 1.0})

class DivisionResult(namedtuple("DivisionResult", ["quotient", "remainder"])):
    __slots__ = ()

    @property
    def exact(self):
        """True when the divisor divides the dividend evenly."""
        return not self.remainder

# One iteration of long division: the quotient term that was produced and
# the remainder left after subtracting (term * divisor).
DivisionStep = namedtuple("DivisionStep", ["exponent", "coefficient", "remainder"])

def _operand(p, name="operand"):
    if isinstance(p, Polynomial):
        return p
    if isinstance(p, Mapping):
        return Polynomial(p)
    raise InvalidOperandError("{} is not a polynomial: {!r}".format(name, p))

def _combine(p1, p2, sign):
    result = dict(p1.terms)
    for e, c in p2.terms.items():
        result[e] = result.get(e, 0.0) + sign * c
    return Polynomial(result).pruned()

def add(p1, p2):
    p1 = _operand(p1, "first operand")
    p2 = _operand(p2, "second operand")
    return _combine(p1, p2, 1)

def subtract(p1, p2):
    p1 = _operand(p1, "first operand")
    p2 = _operand(p2, "second operand")
    return _combine(p1, p2, -1)

def multiply(p1, p2):
    p1 = _operand(p1, "first operand")
    p2 = _operand(p2, "second operand")
    result = {}
    for e1, c1 in p1.terms.items():
        for e2, c2 in p2.terms.items():
            result[e1 + e2] = result.get(e1 + e2, 0.0) + c1 * c2
    return Polynomial(result).pruned()

def long_division(p1, p2):
    """Divide p1 by p2, yielding a DivisionStep per quotient term.

    Each step cancels the remainder's leading term, so the degree of the
    remainder strictly decreases from one step to the next (or the remainder
    becomes empty).  This is what bounds the number of steps by
    degree(p1) - degree(p2) + 1.

    Raises DivisionByZeroError if p2 is the zero polynomial.
    """
    dividend = _operand(p1, "dividend")
    divisor = _operand(p2, "divisor").pruned()
    if not divisor or divisor.leading_coefficient is None:
        raise DivisionByZeroError("division by zero polynomial")

    degree_d = divisor.degree
    leading_d = divisor.leading_coefficient
    remainder = dividend.pruned()

    while remainder and remainder.degree >= degree_d:
        degree_r = remainder.degree
        exponent = degree_r - degree_d
        coefficient = remainder.leading_coefficient / leading_d
        product = multiply(Polynomial({exponent: coefficient}), divisor)
        remainder = subtract(remainder, product)
        # (r/d)*d may differ from r in the last bit; the leading term is
        # gone by construction, so drop whatever rounding left behind.
        remainder = Polynomial((e, c) for e, c in remainder.terms.items() if e != degree_r)
        assert not remainder or remainder.degree < degree_r
        logging.event("quotient term {}x^{}, remainder degree {}".format(
            coefficient, exponent, remainder.degree if remainder else None))
        yield DivisionStep(exponent, coefficient, remainder)

def divide(p1, p2):
    """Polynomial long division.  Returns a DivisionResult; a non-empty
    remainder means p2 does not divide p1 evenly."""
    with logging.task("dividing", dividend=p1, divisor=p2):
        quotient = {}
        remainder = _operand(p1, "dividend").pruned()
        for step in long_division(p1, p2):
            quotient[step.exponent] = quotient.get(step.exponent, 0.0) + step.coefficient
            remainder = step.remainder
        return DivisionResult(Polynomial(quotient).pruned(), remainder)

def evaluate(p, value):
    p = _operand(p)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidOperandError("cannot evaluate at {!r}".format(value))
    try:
        x = float(value)
    except OverflowError:
        x = math.inf if value > 0 else -math.inf
    result = 0.0
    for e, c in p.terms.items():
        if c != 0:
            result += c * _power(x, e)
    return result

def _power(x, e):
    try:
        return x ** e
    except OverflowError:
        # only raised for |x| > 1
        return math.copysign(math.inf, x) if e % 2 else math.inf

def format_polynomial(p):
    """Render p as text with exponents in descending order, e.g.
    `2.0x^2 + 3.0x -5.0`.  The result can be read back with `parse` as long
    as every coefficient is finite; `inf` and `nan` are rendered by their
    float repr, which `parse` rejects."""
    p = _operand(p)
    s = ""
    for exponent, coefficient in sorted(p.terms.items(), reverse=True):
        if coefficient == 0:
            continue
        if s:
            s += " + " if coefficient > 0 else " "
        if exponent == 0:
            s += repr(coefficient)
        else:
            term = "" if coefficient == 1 else repr(coefficient)
            s += term + ("x" if exponent == 1 else "x^{}".format(exponent))
    return s or "0"
