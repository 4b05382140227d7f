"""Parser for polynomial expressions such as `2x^2 + 3x - 5`.

The important functions are:
 - tokenize: str -> iterator of ply tokens
 - parse:    str -> Polynomial

Whitespace is insignificant and removed before lexing, so `2 x ^ 2` and
`2x^2` are the same input.  Terms are a number, `x`, `x^n`, or a number
immediately followed by `x` or `x^n`.  Every term after the first needs a
leading `+` or `-`.
"""

# builtin
import re
import threading

# 3rd party
from ply import lex, yacc

# ours
from polycalc import logging
from polycalc.polynomials import Polynomial

class FormatError(ValueError):
    """The text is not a well-formed polynomial."""
    def __init__(self, message):
        super().__init__("Invalid polynomial format: {}".format(message))

def report_lex_error(t):
    raise FormatError("contains invalid characters ({!r} at position {})".format(t.value[0], t.lexpos))

def report_parse_error(t):
    if t is None:
        raise FormatError("unexpected end of input")
    raise FormatError("unexpected {!r} at position {}".format(t.value, t.lexpos))

_WHITESPACE = re.compile(r"\s+")

# Lexer ########################################################################

tokens = ("NUM", "X", "CARET", "PLUS", "MINUS")

def make_lexer():
    t_X     = r"x"
    t_CARET = r"\^"
    t_PLUS  = r"\+"
    t_MINUS = r"-"

    def t_NUM(t):
        r"(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?"
        return t

    def t_error(t):
        report_lex_error(t)

    return lex.lex()

_lexer = make_lexer()
def tokenize(s):
    lexer = _lexer.clone() # Because lexer objects are stateful
    lexer.input(_WHITESPACE.sub("", s))
    while True:
        tok = lexer.token()
        if not tok:
            break
        yield tok

# Parser #######################################################################

def make_parser():
    start = "polynomial"

    # The value of a polynomial is a dict from exponent to coefficient.  The
    # value of a term is an (unsigned coefficient, exponent) pair.

    def p_polynomial(p):
        """polynomial : term
                      | sign term
                      | polynomial sign term"""
        if len(p) == 2:
            p[0] = {}
            sign, (coefficient, exponent) = 1, p[1]
        elif len(p) == 3:
            p[0] = {}
            sign, (coefficient, exponent) = p[1], p[2]
        else:
            p[0] = p[1]
            sign, (coefficient, exponent) = p[2], p[3]
        p[0][exponent] = p[0].get(exponent, 0.0) + sign * coefficient

    def p_sign(p):
        """sign : PLUS
                | MINUS"""
        p[0] = 1 if p[1] == "+" else -1

    def p_term(p):
        """term : NUM
                | NUM monomial
                | monomial"""
        if len(p) == 3:
            p[0] = (float(p[1]), p[2])
        elif isinstance(p[1], int):
            p[0] = (1.0, p[1])
        else:
            p[0] = (float(p[1]), 0)

    def p_monomial(p):
        """monomial : X
                    | X CARET NUM"""
        if len(p) == 2:
            p[0] = 1
        elif p[3].isdigit():
            p[0] = int(p[3])
        else:
            raise FormatError("exponent must be a non-negative integer, got {!r}".format(p[3]))

    def p_error(p):
        report_parse_error(p)

    return yacc.yacc(debug=False, write_tables=False)

_parser = make_parser()
_parser_lock = threading.Lock() # LRParser keeps its stacks on self

def parse(s):
    """Parse a string as a Polynomial.

    Coefficients of terms with the same exponent are summed but never
    pruned, so `parse("3 - 3")` is `{0: 0.0}`.  Raises FormatError if `s` is
    not a polynomial.
    """
    text = _WHITESPACE.sub("", s)
    with logging.task("parsing", text=text):
        if not text:
            raise FormatError("no valid terms found")
        with _parser_lock:
            terms = _parser.parse(text, lexer=_lexer.clone())
        if not terms:
            raise FormatError("no valid terms found")
        logging.event("parsed {} term(s)".format(len(terms)))
        return Polynomial(terms)
