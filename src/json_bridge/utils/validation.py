"""Precondition checks shared by the bridge operations."""

from collections.abc import Iterable
from typing import Any
from ..types import ValidationResult, ValidationError, ErrorType, PreconditionError, CollectorInterface


class ValidationUtils:
    """Utility class for validating operation inputs before any work is done."""

    @staticmethod
    def validate_filler(filler: Any) -> ValidationResult:
        """
        Validate a filler callable.

        Args:
            filler: Candidate filler

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if filler is None:
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message="filler cannot be None",
                location="filler"
            ))
        elif not callable(filler):
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message=f"filler must be callable, got {type(filler).__name__}",
                location="filler"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_source(source: Any) -> ValidationResult:
        """
        Validate an iterable or iterator source.

        Args:
            source: Candidate source of elements

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if source is None:
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message="source cannot be None",
                location="source"
            ))
        elif not isinstance(source, Iterable):
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message=f"source must be iterable, got {type(source).__name__}",
                location="source"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_json_array(array: Any) -> ValidationResult:
        """
        Validate a JSON array used as a sequence source.

        Args:
            array: Candidate JSON array

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if array is None:
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message="array cannot be None",
                location="array"
            ))
        elif not isinstance(array, list):
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message=f"array must be a list, got {type(array).__name__}",
                location="array"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_element_type(element_type: Any) -> ValidationResult:
        """Validate a requested element type (a class or a tuple of classes)."""
        errors = []
        warnings = []

        candidates = element_type if isinstance(element_type, tuple) else (element_type,)
        if not candidates or not all(isinstance(c, type) for c in candidates):
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message=f"element_type must be a type or a tuple of types, got {element_type!r}",
                location="element_type"
            ))
        elif int in candidates and bool not in candidates:
            warnings.append("bool is a subclass of int; JSON booleans will match element_type int")

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)

    @staticmethod
    def validate_collector(collector: Any) -> ValidationResult:
        """
        Validate a collector passed to a reducer.

        Args:
            collector: Candidate fold descriptor

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if collector is None:
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message="collector cannot be None",
                location="collector"
            ))
        elif not isinstance(collector, CollectorInterface):
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message=f"collector must implement CollectorInterface, got {type(collector).__name__}",
                location="collector"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_parts(parts: Any) -> ValidationResult:
        """Validate the number of parts for split-and-merge collection."""
        errors = []

        if isinstance(parts, bool) or not isinstance(parts, int) or parts < 1:
            errors.append(ValidationError(
                type=ErrorType.PRECONDITION,
                message=f"parts must be a positive integer, got {parts!r}",
                location="parts"
            ))

        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def ensure_valid(*results: ValidationResult) -> None:
        """
        Raise on the first failed validation result.

        Args:
            results: Validation results to check, in order

        Raises:
            PreconditionError: If any result is invalid
        """
        for result in results:
            if not result.is_valid:
                raise PreconditionError(result.errors[0].message, context=result)

