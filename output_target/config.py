# output_target/config.py

"""
Output Target Configuration

Default settings for the Flask integration. Values are loaded from
environment variables and applied to ``app.config`` with ``setdefault``,
so anything the host application already configured wins.
"""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    """Output target settings."""
    # Locale used for diagnostic notices
    OUTPUT_TARGET_LANGUAGE = os.getenv('OUTPUT_TARGET_LANGUAGE', 'pt')
    OUTPUT_TARGET_REGION = os.getenv('OUTPUT_TARGET_REGION', 'br')

    # Response compression
    OUTPUT_TARGET_COMPRESSION_ENABLED = _env_flag('OUTPUT_TARGET_COMPRESSION_ENABLED', 'true')
    OUTPUT_TARGET_COMPRESS_LEVEL = int(os.getenv('OUTPUT_TARGET_COMPRESS_LEVEL', 9))

    @classmethod
    def settings(cls) -> dict:
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}


class TestingConfig(Config):
    """Settings for the test suite: English notices, fastest compression."""
    OUTPUT_TARGET_LANGUAGE = 'en'
    OUTPUT_TARGET_REGION = 'us'
    OUTPUT_TARGET_COMPRESSION_ENABLED = True
    OUTPUT_TARGET_COMPRESS_LEVEL = 1


def apply_config(app, config_class=Config):
    """Fill in any output target settings missing from ``app.config``."""
    for key, value in config_class.settings().items():
        app.config.setdefault(key, value)
