"""
Scoped flag parsers.

cmdtree does not parse flags itself. A command handler that needs flags asks
for a parser labelled with the command path it is running under and parses
its remaining arguments with it:

    def add(context, args):
        parser = flagset(context)
        parser.add_argument("-email", required=True)
        options = parser.parse_args(args)

Usage and error lines then read "usage: tool user add ..." instead of the
interpreter's script name. A parse failure terminates the process (argparse
exits with status 2).
"""
import argparse

from .context import names


def flagset(context, /, **options):
    """
    Return a new argparse.ArgumentParser named after the command path in `context`.

    Parameters
    - context: Context | Any
      The context handed to the running handler. A context carrying no path
      yields a parser with an empty program name.
    - **options:
      Forwarded to argparse.ArgumentParser (description, epilog, ...). `prog`
      and `exit_on_error` are fixed and cannot be overridden.
    """
    for name in ("prog", "exit_on_error"):
        if name in options:
            raise TypeError(f"flagset() got an unexpected keyword argument {name!r}")
    return argparse.ArgumentParser(prog=" ".join(names(context)), exit_on_error=True, **options)


__all__ = (
    "flagset",
)
