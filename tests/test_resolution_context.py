"""
Resolution Context Tests

Tests for the chain of entries being resolved and its isolation between
threads and asyncio tasks.
"""

import sys
import os
import asyncio
import threading
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from reflectinject.exceptions import CircularDependencyError
from reflectinject.resolution_context import ResolutionContext, _resolution_context


class TestResolutionContext(unittest.TestCase):
    """Tests for ResolutionContext.enter()"""

    def test_enter_returns_new_context(self):
        root = ResolutionContext()
        child = root.enter("app.Mailer")

        self.assertEqual(root.resolving, [])
        self.assertEqual(child.resolving, ["app.Mailer"])

    def test_cycle_detected(self):
        ctx = ResolutionContext(["app.A", "app.B"])

        with self.assertRaises(CircularDependencyError) as error:
            ctx.enter("app.A")

        self.assertIn("app.A -> app.B -> app.A", str(error.exception))

    def test_siblings_allowed(self):
        """The same entry can appear twice as long as it is not nested in itself."""
        ctx = ResolutionContext(["app.Service"])

        ctx.enter("app.Database")
        ctx.enter("app.Database")


class TestContextIsolation(unittest.TestCase):
    """Each thread and task sees its own resolution chain."""

    def test_thread_starts_without_context(self):
        seen = []
        token = _resolution_context.set(ResolutionContext(["app.Main"]))
        try:
            thread = threading.Thread(target=lambda: seen.append(_resolution_context.get()))
            thread.start()
            thread.join()
        finally:
            _resolution_context.reset(token)

        self.assertEqual(seen, [None])

    def test_tasks_do_not_share_changes(self):
        async def resolve(name):
            ctx = (_resolution_context.get() or ResolutionContext()).enter(name)
            _resolution_context.set(ctx)
            await asyncio.sleep(0)
            return _resolution_context.get().resolving

        async def main():
            return await asyncio.gather(resolve("app.A"), resolve("app.B"))

        self.assertEqual(asyncio.run(main()), [["app.A"], ["app.B"]])


if __name__ == "__main__":
    unittest.main()
