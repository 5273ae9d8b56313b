"""
Schema validation utilities for persisted learning records.

Provides JSON Schema validation with clear error messages, plus
path-specific consistency checks:
- current_progress matches the completed-module share
- module order values are a permutation of 1..N
- estimated_duration equals the module minute sum / 60
"""

import json
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

from ..config import config


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data
    """

    def __init__(self, valid: bool, errors: list[str], data: Any = None):
        self.valid = valid
        self.errors = errors
        self.data = data

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            return "✓ Validation passed"
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if not result:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: dict) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with validation status and any errors
        """
        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]
        return ValidationResult(valid=not errors, errors=errors, data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )


class LearningProfileValidator(SchemaValidator):
    """Validator for persisted learning profiles."""

    def __init__(self, schema_path: Optional[Path] = None):
        super().__init__(schema_path or config.paths.profile_schema)


class LearningPathValidator(SchemaValidator):
    """
    Validator for persisted learning paths with path-specific checks.

    Features:
    - JSON Schema validation
    - Progress/completion consistency
    - Module order permutation
    - Duration consistency
    """

    def __init__(self, schema_path: Optional[Path] = None, tolerance: float = 0.01):
        super().__init__(schema_path or config.paths.path_schema)
        self.tolerance = tolerance

    def validate(self, data: dict) -> ValidationResult:
        result = super().validate(data)
        if not result.valid:
            return result

        path_errors = []
        modules = data.get("modules", [])

        # Check 1: progress matches completed share
        if modules:
            completed = sum(1 for m in modules if m.get("status") == "completed")
            expected = 100 * completed / len(modules)
        else:
            expected = 0.0
        actual = data.get("current_progress", 0.0)
        if abs(expected - actual) > self.tolerance:
            path_errors.append(
                f"Progress mismatch: expected {expected:.2f}%, got {actual}%"
            )

        # Check 2: order is a permutation of 1..N
        orders = sorted(m.get("order") for m in modules)
        if orders != list(range(1, len(modules) + 1)):
            path_errors.append(f"Module order must be a permutation of 1..{len(modules)}, got {orders}")

        # Check 3: duration is the minute sum in hours
        minutes = sum(m.get("duration", 0) for m in modules)
        if abs(minutes / 60 - data.get("estimated_duration", 0.0)) > self.tolerance:
            path_errors.append(
                f"Duration mismatch: modules total {minutes / 60:.2f}h, "
                f"path declares {data.get('estimated_duration')}h"
            )

        return ValidationResult(valid=not path_errors, errors=path_errors, data=data)


# Convenience functions for quick validation
def validate_learning_profile(data: dict) -> ValidationResult:
    """
    Quick validation of learning profile data.

    Example:
        result = validate_learning_profile(profile_dict)
        if not result:
            print("Errors:", result.errors)
    """
    return LearningProfileValidator().validate(data)


def validate_learning_path(data: dict) -> ValidationResult:
    """Quick validation of learning path data."""
    return LearningPathValidator().validate(data)
