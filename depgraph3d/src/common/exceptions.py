from typing import Optional

"""Layout engine exceptions."""


class LayoutError(Exception):
    """Exception raised for input the layout engine cannot work with."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        self.message = message
        self.stage = stage
        prefix = f"[{stage}] " if stage else ""
        super().__init__(f"{prefix}{message}")


class GraphFormatError(LayoutError):
    """Exception raised when a serialized graph document is malformed."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        location = f" in {path}" if path else ""
        super().__init__(f"{message}{location}", stage="serialization")
