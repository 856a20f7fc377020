"""Configuration errors."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """Raised when configuration cannot be loaded or fails validation.

    Carries the individual validation errors and suggestions for fixing
    them; str() renders all of them.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [self.message]
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)

    @classmethod
    def from_validation_error(
        cls,
        exc: ValidationError,
        message: str = "Configuration validation failed",
        suggestions: Optional[List[str]] = None,
    ) -> "ConfigurationError":
        """Translate pydantic errors into readable one-line messages."""
        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"]) or "<root>"
            error_type = error["type"]
            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type.endswith("_type"):
                expected = error_type[: -len("_type")]
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected}, got {error.get('input')!r}"
                )
            else:
                errors.append(f"{field_path}: {error['msg']}")

        return cls(
            message,
            errors=errors,
            suggestions=suggestions
            or [
                "Review config.example.yaml for the expected format",
                "Check that every field pattern has exactly one capture group",
            ],
        )
