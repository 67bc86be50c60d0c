"""
Multi-level logger for the modvendor framework.

Each record is emitted as a single JSON line describing where it was logged from.
"""

import inspect
import logging

from pydantic import BaseModel


class LogLine(BaseModel):
    """
    Represents a line in the modvendor log
    """

    caller_file: str
    caller_name: str
    caller_line: int
    level: str
    message: str


class ModvendorLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "modvendor") -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

    def log(self, debug_message: str, level: int, sanitized_error_message: str = "") -> None:
        """
        Log the debug and sanitized messages using the logger.

        Args:
            debug_message: Full message, may contain paths and tool output
            level: A ``logging`` level constant
            sanitized_error_message: Optional short message safe to surface to users
        """
        debug_message = debug_message.replace("'", '"').replace("\n", " ")
        sanitized_error_message = sanitized_error_message.replace("'", '"').replace("\n", " ")

        # Collect details about the callee
        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller_file = calframe[1][1].split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        message = debug_message
        if sanitized_error_message:
            message = f"{debug_message} ({sanitized_error_message})"

        self.logger.log(
            level=level,
            msg=LogLine(
                caller_file=caller_file,
                caller_name=caller_name,
                caller_line=caller_line,
                level=logging.getLevelName(level),
                message=message,
            ).model_dump_json(),
        )
