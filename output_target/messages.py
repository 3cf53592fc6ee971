# output_target/messages.py

"""
Localized diagnostic messages.

The catalog is resolved at import time. Lookups fall back from the exact
language/region code to the language alone, and then to the default
Brazilian Portuguese catalog. Fallbacks are logged, never raised.
"""

import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = 'pt'
DEFAULT_REGION = 'br'
DEFAULT_LOCALE = f'{DEFAULT_LANGUAGE}_{DEFAULT_REGION}'


class Messages(NamedTuple):
    compressed_with_gzip: str
    cant_compress: str


_PT_BR = Messages(
    compressed_with_gzip='A saída para o usuário foi comprimida utilizando `gzip`.',
    cant_compress='Não foi possível comprimir a saída para o usuário. Foi enviado o conteúdo original.',
)

_EN = Messages(
    compressed_with_gzip='The output was compressed with `gzip`.',
    cant_compress='Can not compress the output. Raw data sent.',
)

CATALOG = {
    'pt_br': _PT_BR,
    'en': _EN,
    'en_gb': _EN,
    'en_us': _EN,
}


def locale_code(language: str, region: str = '') -> str:
    language = (language or '').strip().lower()
    region = (region or '').strip().lower()
    return f'{language}_{region}' if region else language


def get_messages(language: str = DEFAULT_LANGUAGE, region: str = DEFAULT_REGION) -> Messages:
    """
    Return the message catalog for a locale.

    Args:
        language: Language code, e.g. 'en'
        region: Region code, e.g. 'us'; empty for language only

    Returns:
        Messages: exact match, else the language-only catalog, else pt_br
    """
    code = locale_code(language, region)
    if code in CATALOG:
        return CATALOG[code]

    language = locale_code(language)
    if language in CATALOG:
        logger.warning(f"[OutputTarget] Locale '{code}' is not available. Using '{language}'.")
        return CATALOG[language]

    logger.warning(f"[OutputTarget] Locale '{code}' is not available. Using '{DEFAULT_LOCALE}'.")
    return CATALOG[DEFAULT_LOCALE]
