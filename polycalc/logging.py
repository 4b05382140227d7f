"""A small logging framework that supports timing and indented log messages.

Important functions:
 - task: a context manager to wrap self-contained tasks (parsing a string,
   dividing two polynomials)
 - event: print a log message (indented based on active tasks)
 - warn: report a recoverable problem, regardless of verbosity
"""

from contextlib import contextmanager
import datetime
import sys

from polycalc.opts import Option

verbose = Option("verbose", bool, False, description="Print parsing and division steps")

_task_stack = []

def log(string):
    if verbose.value:
        print(string)

def task_begin(name, **kwargs):
    start = datetime.datetime.now()
    _task_stack.append((name, start))
    if not verbose.value:
        return
    indent = "  " * (len(_task_stack) - 1)
    log("{indent}{name}{maybe_kwargs}...".format(
        indent = indent,
        name   = name,
        maybe_kwargs = (" [" + ", ".join("{}={}".format(k, v) for k, v in kwargs.items()) + "]") if kwargs else ""))

def task_end():
    name, start = _task_stack.pop()
    if not verbose.value:
        return
    duration = (datetime.datetime.now() - start).total_seconds()
    indent = "  " * len(_task_stack)
    log("{indent}Finished {name} [duration={duration:.3}s]".format(indent=indent, name=name, duration=duration))

@contextmanager
def task(name, **kwargs):
    try:
        yield task_begin(name, **kwargs)
    finally:
        task_end()

def event(name):
    if not verbose.value:
        return
    indent = "  " * len(_task_stack)
    log("{indent}{name}".format(indent=indent, name=name))

def warn(message):
    print("warning: {}".format(message), file=sys.stderr)
