"""Single-variable polynomial parsing and arithmetic.

Important functions:
 - parse: str -> Polynomial
 - add, subtract, multiply: (Polynomial, Polynomial) -> Polynomial
 - divide: (Polynomial, Polynomial) -> DivisionResult
 - evaluate: (Polynomial, float) -> float
 - format_polynomial: Polynomial -> str
"""

from polycalc.parse import parse, tokenize, FormatError
from polycalc.polynomials import (
    Polynomial, DivisionResult, DivisionStep,
    InvalidOperandError, DivisionByZeroError,
    add, subtract, multiply, divide, long_division, evaluate,
    format_polynomial)
