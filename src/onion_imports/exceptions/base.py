"""Root of the onion-imports exception hierarchy."""

from typing import Any, Dict, Optional


class OnionImportsError(Exception):
    """Base exception for all onion-imports errors.

    ``details`` carries structured context such as the offending config key
    or file path. A ``hint`` entry is advice for the user and is kept out of
    ``str(error)``; the CLI prints it on its own line.
    """

    exit_code = 2

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details) if details else {}

    @property
    def hint(self) -> Optional[str]:
        return self.details.get("hint")

    def __str__(self) -> str:
        context = [f"{k}={v}" for k, v in self.details.items() if k != "hint"]
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"

    def to_dict(self) -> Dict[str, Any]:
        """Machine-readable form used by ``--format json``."""
        return {"error": type(self).__name__, "message": self.message, **self.details}
