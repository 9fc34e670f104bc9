"""Custom exceptions for the cluster gatherer."""


class GatherError(Exception):
    """Base exception for all gatherer errors."""

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: Main error message
            details: Additional details or suggestions
        """
        self.message = message
        self.details = details
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message.

        Returns:
            Formatted error message with details
        """
        if self.details:
            return f"{self.message}\n\nDetails: {self.details}"
        return self.message


class ClientConstructionError(GatherError):
    """Exception raised when API clients cannot be built from the kube config."""

    pass


class GatherCancelled(GatherError):
    """Exception raised when the gather context was cancelled or its deadline passed."""

    def __init__(self, step: str, details: str | None = None):
        self.step = step
        super().__init__(f"Gather cancelled during step '{step}'", details)
