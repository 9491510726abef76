"""
Tests for scoped flag parsers.

Scope
- flagset() names the parser after the running command path.
- A parse failure terminates the process (argparse exit status 2).
"""
import argparse
import contextlib
import io
import unittest
from unittest import TestCase

from cmdtree import Context, command, commandset, flagset, run


class FlagSetTest(TestCase):

    def testNoName(self):
        parser = flagset(Context())
        self.assertIsInstance(parser, argparse.ArgumentParser)
        self.assertEqual(parser.prog, "")

    def testForeignContext(self):
        self.assertEqual(flagset(None).prog, "")

    def testWithNames(self):
        seen = []

        def third(context, args):
            seen.append(flagset(context).prog)

        tree = commandset("first", "",
            commandset("second", "",
                command("third", "", third),
            ),
        )
        run(tree, "second", "third")
        self.assertEqual(seen, ["first second third"])

    def testParsesHandlerArguments(self):
        def add(context, args):
            parser = flagset(context)
            parser.add_argument("-email", required=True)
            return parser.parse_args(args).email

        tree = commandset("set", "", commandset("user", "", command("add", "", add)))
        self.assertEqual(run(tree, "user", "add", "-email", "x@example.com"), "x@example.com")

    def testExitsOnError(self):
        parser = flagset(Context(("tool", "add")))
        parser.add_argument("-count", type=int)
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as caught:
            parser.parse_args(["-count", "many"])
        self.assertEqual(caught.exception.code, 2)
        self.assertIn("usage: tool add", stderr.getvalue())

    def testOptionsForwarded(self):
        parser = flagset(Context(("tool",)), description="does things")
        self.assertEqual(parser.description, "does things")

    def testFixedOptionsCannotBeOverridden(self):
        with self.assertRaises(TypeError):
            flagset(Context(), prog="other")
        with self.assertRaises(TypeError):
            flagset(Context(), exit_on_error=False)


if __name__ == '__main__':
    unittest.main()
