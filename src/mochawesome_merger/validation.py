"""
Validation of merge inputs.
"""

from typing import Any

from .exceptions import InputValidationError, ValidationFailure


def validate_sources(sources: Any) -> None:
    """
    Validate the list of report sources.

    Checks, in order, that the list is given, that it is a list or tuple,
    that it is not empty and that every element is a string.

    Raises:
        InputValidationError: For the first rule that is violated
    """
    if sources is None:
        raise InputValidationError(ValidationFailure.MISSING_SOURCES)

    if not isinstance(sources, (list, tuple)):
        raise InputValidationError(ValidationFailure.SOURCES_NOT_A_SEQUENCE)

    if len(sources) == 0:
        raise InputValidationError(ValidationFailure.EMPTY_SOURCE_LIST)

    for source in sources:
        if not isinstance(source, str):
            raise InputValidationError(ValidationFailure.INVALID_SOURCE_ELEMENT_TYPE)


def validate_destination(destination: Any) -> None:
    """
    Validate the destination identifier.

    Raises:
        InputValidationError: If it is missing, empty or not a string
    """
    if destination is None or destination == "":
        raise InputValidationError(ValidationFailure.MISSING_DESTINATION)

    if not isinstance(destination, str):
        raise InputValidationError(ValidationFailure.INVALID_DESTINATION_TYPE)


def validate_inputs(sources: Any, destination: Any) -> None:
    """Validate sources fully, then the destination. Performs no I/O."""
    validate_sources(sources)
    validate_destination(destination)
