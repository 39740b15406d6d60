from __future__ import annotations

from queue import Queue
import unittest

from lazypdf import commands
from lazypdf.input import EOF_TOKEN
from lazypdf.runtime.input_source import InputSource


def _scripted_reader(tokens: list[str]):
    pending = list(tokens)

    def read(_fd: int) -> str:
        item = pending.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return read


def _drain(queue: Queue) -> list:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


class InputSourceTests(unittest.TestCase):
    def test_every_key_becomes_one_command_until_eof(self) -> None:
        queue = Queue()
        source = InputSource(0, queue, read_key_fn=_scripted_reader(["j", "x", "", "G", EOF_TOKEN]))

        source.run()

        self.assertEqual(
            _drain(queue),
            [commands.NEXT_PAGE, commands.NO_OP, commands.LAST_PAGE, commands.QUIT],
        )

    def test_read_error_queues_quit(self) -> None:
        queue = Queue()
        source = InputSource(0, queue, read_key_fn=_scripted_reader(["k", OSError("bad fd")]))

        with self.assertLogs("lazypdf.runtime.input_source", level="WARNING"):
            source.run()

        self.assertEqual(_drain(queue), [commands.PREVIOUS_PAGE, commands.QUIT])

    def test_start_runs_reader_on_daemon_thread(self) -> None:
        queue = Queue()
        source = InputSource(0, queue, read_key_fn=_scripted_reader(["q", EOF_TOKEN]))

        thread = source.start()
        thread.join(timeout=2.0)

        self.assertTrue(thread.daemon)
        self.assertFalse(thread.is_alive())
        self.assertEqual(queue.get_nowait(), commands.QUIT)


if __name__ == "__main__":
    unittest.main()
