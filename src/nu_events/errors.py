class ConfigurationError(Exception):
    """A required sub-component is missing or misconfigured; raised at setup, never mid-run."""


class IntegrationError(ArithmeticError):
    """A numerical integration produced a non-finite result."""
