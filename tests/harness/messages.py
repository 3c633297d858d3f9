"""Message capture for Textual in-process tests.

Callable class passed as message_hook to run_test().
"""

from textual.message import Message


class MessageCapture:
    """Captures Textual messages during run_test().

    Usage:
        capture = MessageCapture()
        async with run_app(message_hook=capture) as (pilot, app):
            ...
            assert len(capture.distinct("Changed")) == 1
    """

    def __init__(self):
        self._messages: list[Message] = []

    def __call__(self, message: Message) -> None:
        self._messages.append(message)

    def of_type(self, type_name: str) -> list[Message]:
        """Filter messages by class name (string match avoids import coupling)."""
        return [m for m in self._messages if type(m).__name__ == type_name]

    def distinct(self, type_name: str) -> list[Message]:
        """Like of_type, but each message once.

        The hook fires for every node a bubbling message is dispatched to.
        """
        seen: dict[int, Message] = {}
        for m in self.of_type(type_name):
            seen.setdefault(id(m), m)
        return list(seen.values())

    def clear(self) -> None:
        self._messages.clear()
