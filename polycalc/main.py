#!/usr/bin/env python

"""
Command-line polynomial calculator. Run with --help for options.
"""

import argparse
import re
import sys

from polycalc import opts
from polycalc import logging
from polycalc.parse import parse, FormatError
from polycalc.polynomials import (
    add, subtract, multiply, divide, evaluate, format_polynomial,
    DivisionByZeroError)

results_file = opts.Option("results-file", str, "PolynomialResults.txt", metavar="PATH",
    description="File that --save appends results to")

_BINARY_OPERATIONS = {
    "add"      : add,
    "subtract" : subtract,
    "multiply" : multiply,
}

OPERATIONS = tuple(_BINARY_OPERATIONS) + ("divide", "evaluate")

# argparse takes "-x^2+1" or "-2x" for an option.  These never start an
# option name, and a leading space is enough to make argparse see a
# positional; whitespace means nothing to `parse` or `float`.
_LEADING_MINUS_TERM = re.compile(r"-[\d.x\s]")

def _protect_leading_minus(argv):
    return [" " + a if _LEADING_MINUS_TERM.match(a) else a for a in argv]

class CalculationError(Exception):
    pass

def _parse_operand(text, which):
    try:
        return parse(text)
    except FormatError as e:
        logging.warn("Parsing error: {}".format(e))
        logging.warn("Invalid polynomial input for Polynomial {}: {}".format(which, text))
        raise CalculationError("Invalid polynomial input for Polynomial {}.".format(which))

def calculate(operation, first, second):
    """Run `operation` on the textual operands and return the lines to show.

    The last line is always the `Result: ...` line, which is the one that
    gets saved.  Raises CalculationError with a user-facing message.
    """
    if operation not in OPERATIONS:
        raise CalculationError("Unknown operation {!r}.".format(operation))
    p1 = _parse_operand(first, 1)

    if operation == "evaluate":
        try:
            value = float(second)
        except (TypeError, ValueError):
            logging.warn("Invalid input for value: {}".format(second))
            raise CalculationError("Invalid input for value.")
        return ["Result: {}".format(evaluate(p1, value))]

    p2 = _parse_operand(second, 2)

    if operation == "divide":
        try:
            result = divide(p1, p2)
        except DivisionByZeroError as e:
            logging.warn("Division error: {}".format(e))
            raise CalculationError("Cannot divide: {}.".format(e))
        lines = []
        if not result.exact:
            lines.append("Polynomials do not divide evenly. Remainder: {}".format(format_polynomial(result.remainder)))
        lines.append("Result: {}".format(format_polynomial(result.quotient)))
        return lines

    result = _BINARY_OPERATIONS[operation](p1, p2)
    return ["Result: {}".format(format_polynomial(result))]

def save_result(line, path):
    with open(path, "a") as f:
        f.write(line + "\n")

def run(argv=None):
    """Entry point for the polycalc executable.

    This procedure reads sys.argv (or `argv`) and prints the result of the
    requested operation.  Returns the process exit status.
    """

    parser = argparse.ArgumentParser(
        description="Single-variable polynomial calculator.",
        epilog="Operands may start with a minus sign (polycalc add -x^2+1 x); " +
               "arguments after `--` are never read as options.")
    parser.add_argument("operation", choices=OPERATIONS, help="Operation to perform")
    parser.add_argument("polynomial", help="First polynomial, e.g. '2x^2 + 3x - 5'")
    parser.add_argument("operand", help="Second polynomial, or the value of x for 'evaluate'")
    parser.add_argument("-S", "--save", action="store_true", help="Append the result line to the results file")

    internal_opts = parser.add_argument_group("Internal parameters")
    opts.setup(internal_opts)

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(_protect_leading_minus(argv))
    opts.read(args)

    try:
        lines = calculate(args.operation, args.polynomial, args.operand)
    except CalculationError as e:
        print(str(e), file=sys.stderr)
        return 1

    for line in lines:
        print(line)

    if args.save:
        try:
            save_result(lines[-1], results_file.value)
        except OSError as e:
            logging.warn("Error writing to file: {}".format(e))
            print("Error saving result to file.", file=sys.stderr)
            return 1
        print("Result saved to {}.".format(results_file.value))

    return 0

def main():
    sys.exit(run())

if __name__ == "__main__":
    main()
