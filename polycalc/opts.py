"""Tools to define local options.

Modules such as the logger and the command-line front end have settings
(verbosity, where to save results).  Each module declares an Option for each
of its settings next to the code that reads it; `setup` then informs a
command-line parser about every Option that has been defined so far, and
`read` copies the parsed values back.
"""

# All Option objects that have ever been created.
_OPTS = []

class Option(object):
    def __init__(self, name, type, default, description="", metavar=None):
        assert type in (bool, str)
        self.name = name
        self.description = description
        self.type = type
        self.default = default
        self.value = default
        self.metavar = metavar
        _OPTS.append(self)

    def __bool__(self):
        raise Exception(
            "An attempt was made to convert an Option to a boolean. " +
            "If you intended to read the value of this Option, use `_.value`.")

    def __repr__(self):
        return "Option({!r}, {}, {!r})".format(self.name, self.type.__name__, self.value)

def _argname(o):
    if o.type is bool:
        return ("no-" + o.name) if o.default else o.name
    return o.name

def _help(o):
    default = "default={}".format(repr(o.default))
    if o.description:
        return "{} ({})".format(o.description, default)
    return default

def setup(parser):
    """Add an argument to `parser` for every Option declared so far."""
    for o in _OPTS:
        n = _argname(o)
        if o.type is bool:
            parser.add_argument("--" + n, action="store_true", default=False, help=o.description)
        else:
            parser.add_argument("--" + n, metavar=o.metavar, default=o.default, help=_help(o))

def read(args):
    """Load Option values from an argparse namespace produced by a parser
    that was passed to `setup`."""
    for o in _OPTS:
        o.value = getattr(args, _argname(o).replace("-", "_"))
        if o.type is bool and o.default:
            o.value = not o.value

def snapshot():
    """Produce a snapshot of current option values."""
    return { o.name : o.value for o in _OPTS }

def restore(snap):
    """Restore a snapshot of option values."""
    for o in _OPTS:
        o.value = snap.get(o.name, o.value)
