"""In-memory buffer of pending write commands."""

from typing import Iterator

from ohlc_loader.data.models import WriteCommand

DEFAULT_CAPACITY = 50


class WriteBuffer:
    """Ordered buffer of write commands, flushed by its owner."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self.capacity = capacity
        self._commands: list[WriteCommand] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Buffer capacity must be non-negative, got {value}")
        self._capacity = value

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[WriteCommand]:
        return iter(self._commands)

    def append(self, command: WriteCommand) -> None:
        self._commands.append(command)

    def over_capacity(self) -> bool:
        """True once the buffer holds more commands than its capacity."""
        return len(self._commands) > self.capacity

    def drain(self) -> list[WriteCommand]:
        """Return all buffered commands in order and clear the buffer."""
        commands = self._commands
        self._commands = []
        return commands
