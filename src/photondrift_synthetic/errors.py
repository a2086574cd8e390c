"""Exception hierarchy for photondrift-synthetic.

- ConfigurationError: Raised when generator configuration is invalid
- EmptyDomainError: Raised when a random choice is made from an empty pool

Generation performs no I/O, so every error here is a programmer or
configuration error. They are raised eagerly and are never retried.

User-facing messages are safe to display; technical details are logged
internally via structlog.
"""

from __future__ import annotations

from photondrift_synthetic.observability import get_logger


class ConfigurationError(Exception):
    """Raised when a generator configuration or call is invalid.

    Use this exception when:
    - date_range.start is not before date_range.end
    - A data volume field is negative
    - A preset or team roster lookup fails
    - A random choice is made from an empty pool

    Attributes:
        user_message: Message including field and operation context.
        field_path: Dot-separated path to the invalid field (e.g., "data_volume.repositories").
        operation: Name of the call that detected the problem (e.g., "choice").

    Example:
        >>> raise ConfigurationError(
        ...     "Value must be greater than or equal to 0",
        ...     field_path="data_volume.repositories",
        ...     internal_details="got -1",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        field_path: str | None = None,
        operation: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            field_path: Dot-separated path to the field (optional).
            operation: Generator call that failed (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if operation:
            context_parts.append(f"in {operation}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message)

        self.user_message = full_message
        self.field_path = field_path
        self.operation = operation

        if internal_details:
            get_logger().error(
                "configuration_error",
                error_type=self.__class__.__name__,
                user_message=full_message,
                internal_details=internal_details,
            )


class EmptyDomainError(ConfigurationError):
    """Raised when a random selection is requested from an empty pool.

    Example:
        >>> rng.choice([])
        Traceback (most recent call last):
        ...
        EmptyDomainError: Cannot select from an empty pool (in choice)
    """

    def __init__(
        self,
        operation: str = "choice",
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize EmptyDomainError.

        Args:
            operation: Random source operation that received the empty pool.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            "Cannot select from an empty pool",
            operation=operation,
            internal_details=internal_details,
        )
