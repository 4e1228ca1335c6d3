"""
Exceptions raised by the shadow baker
"""


class ShadowBakerError(Exception):
    """Base class for shadow baker errors"""


class ConfigError(ShadowBakerError):
    """The batch configuration cannot be used; nothing was processed"""


class OutputDirectoryError(ShadowBakerError, OSError):
    """The output directory is missing and could not be created"""


class SpriteDecodeError(ShadowBakerError, ValueError):
    """A source image exists but its pixel data could not be read"""
