"""
Tests for the execution context.

This module verifies that the name-path accumulator behaves as a value:
- extend() returns a new context and never touches the original.
- Sibling branches extended from one parent do not observe each other.
- names() reads a path without mutating it and tolerates foreign objects.
"""
import unittest
from threading import Thread, Lock
from unittest import TestCase

from cmdtree import Context, command, commandset, names, run


class ContextTest(TestCase):

    def testEmptyByDefault(self):
        context = Context()
        self.assertEqual(context.names, ())
        self.assertIsNone(context.signal)

    def testExtendCopies(self):
        root = Context()
        child = root.extend("set")
        self.assertEqual(root.names, ())
        self.assertEqual(child.names, ("set",))

    def testSiblingBranchesAreIndependent(self):
        parent = Context().extend("set")
        left = parent.extend("user")
        right = parent.extend("post")
        self.assertEqual(left.names, ("set", "user"))
        self.assertEqual(right.names, ("set", "post"))
        self.assertEqual(parent.names, ("set",))

    def testExtendKeepsSignal(self):
        signal = object()
        self.assertIs(Context((), signal).extend("a").signal, signal)

    def testExtendRejectsNonString(self):
        with self.assertRaises(TypeError):
            Context().extend(1)

    def testNamesOfForeignObjects(self):
        self.assertEqual(names(None), ())
        self.assertEqual(names(object()), ())
        self.assertEqual(names(("not", "a", "context")), ())

    def testNamesOfContext(self):
        self.assertEqual(names(Context(("a", "b"))), ("a", "b"))

    def testConcurrentDispatch(self):
        """
        Concurrent runs over one tree each see only their own path.
        """
        results = []
        lock = Lock()

        def record(context, args):
            with lock:
                results.append((names(context), tuple(args)))

        tree = commandset("set", "",
            commandset("user", "", command("add", "", record)),
            commandset("post", "", command("add", "", record)),
        )

        def worker(index):
            group = ("user", "post")[index % 2]
            run(tree, group, "add", str(index))

        threads = [Thread(target=worker, args=(index,)) for index in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for path, (index,) in results:
            self.assertEqual(path, ("set", ("user", "post")[int(index) % 2], "add"))


if __name__ == '__main__':
    unittest.main()
