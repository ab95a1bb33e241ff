class ShardShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shardshortener_error'


class ConfigurationError(ShardShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
