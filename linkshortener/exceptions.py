class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class RegistrationError(LinkShortenerError):
    """Base exception for errors caused by registration input.

    These are caller-recoverable: the driver layer should report them to the
    user and never treat them as system faults.
    """

    error_code = 'registration:registration_error'


class InvalidUrlError(RegistrationError):
    """Raised when a target URL is not an absolute, well-formed URL."""

    error_code = 'registration:invalid_url'


class InvalidAliasError(RegistrationError):
    """Raised when a custom alias contains whitespace."""

    error_code = 'registration:invalid_alias'


class AliasTakenError(RegistrationError):
    """Raised when a custom alias is already reserved."""

    error_code = 'registration:alias_taken'


class GenerationExhaustedError(RegistrationError):
    """Raised when no unused shortcode was found within the retry cap."""

    error_code = 'registration:generation_exhausted'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
