"""Global configuration for seamcarve."""


class Config:
    """Global configuration."""

    # Image buffer layout
    CHANNELS = 4  # RGBA, interleaved

    # Width reduction, in percent of the original width
    MAX_AMOUNT = 100
    DEFAULT_AMOUNT = 10

    # CLI
    LOG_LEVEL = "INFO"
    OUTPUT_FORMAT = "PNG"
    OPAQUE_FORMATS = ("JPEG", "BMP")  # written as RGB, alpha dropped
