from enum import Enum
from typing import Any, Dict, List, Optional

from models import Coordinate


class CommandType(Enum):
    MOVE = "MOVE"
    BUILD = "BUILD"
    SPAWN = "SPAWN"
    WAIT = "WAIT"
    MESSAGE = "MESSAGE"


class Command:
    """Base class for everything the bot can send to the judge in one turn."""
    command_type: CommandType

    def arguments(self) -> List[Any]:
        return []

    def __str__(self) -> str:
        return " ".join([self.command_type.value] + [str(a) for a in self.arguments()])

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{self.__class__.__name__}({fields})"


class Move(Command):
    command_type = CommandType.MOVE

    def __init__(self, amount: int, source: Coordinate, target: Coordinate):
        """Move amount units from source towards target."""
        self.amount = amount
        self.source = source
        self.target = target

    def arguments(self) -> List[Any]:
        return [self.amount, self.source, self.target]


class Build(Command):
    command_type = CommandType.BUILD

    def __init__(self, target: Coordinate):
        """Build a fortification on target."""
        self.target = target

    def arguments(self) -> List[Any]:
        return [self.target]


class Spawn(Command):
    command_type = CommandType.SPAWN

    def __init__(self, amount: int, target: Coordinate):
        """Spawn amount new units on target."""
        self.amount = amount
        self.target = target

    def arguments(self) -> List[Any]:
        return [self.amount, self.target]


class Wait(Command):
    command_type = CommandType.WAIT


class Message(Command):
    command_type = CommandType.MESSAGE

    def __init__(self, text: str):
        """Show text next to our units in the viewer; ignored by the game rules."""
        self.text = text

    def arguments(self) -> List[Any]:
        return [self.text]


def format_commands(commands: List[Command]) -> str:
    """Join a turn's commands into the single line the judge expects."""
    if not commands:
        commands = [Wait()]
    return ";".join(str(command) for command in commands)


def command_to_dict(command: Command) -> Dict[str, Any]:
    """Get a summary of a command for API responses."""
    summary: Dict[str, Any] = {"type": command.command_type.value}

    amount: Optional[int] = getattr(command, "amount", None)
    if amount is not None:
        summary["amount"] = amount

    for name in ("source", "target"):
        coordinate = getattr(command, name, None)
        if coordinate is not None:
            summary[name] = {"x": coordinate.x, "y": coordinate.y}

    if isinstance(command, Message):
        summary["text"] = command.text

    return summary
