"""Exceptions raised while loading or consulting Eduverse settings."""


class ConfigError(Exception):
    """Raised when configuration data cannot be parsed or validated."""


class MissingSettingError(ConfigError):
    """Raised when a feature needs a setting that was never provided.

    Attributes:
        key: Dotted path of the missing setting (e.g. ``assistant.api_key``).
    """

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Setting '{key}' is required. Set it with "
            f"`eduverse config set {key} --value <value>` "
            f"or the EDUVERSE__{key.replace('.', '__').upper()} environment variable."
        )
        self.key = key
