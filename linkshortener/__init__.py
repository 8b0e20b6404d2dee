from linkshortener.core import CodeAllocator, LinkTable, UrlRegistry, VisitRecorder
from linkshortener.models import ShortLink, VisitStats
from linkshortener.exceptions import (
    LinkShortenerError,
    RegistrationError,
    InvalidUrlError,
    InvalidAliasError,
    AliasTakenError,
    GenerationExhaustedError,
)


__all__ = [
    'UrlRegistry',
    'CodeAllocator',
    'VisitRecorder',
    'LinkTable',
    'ShortLink',
    'VisitStats',
    'LinkShortenerError',
    'RegistrationError',
    'InvalidUrlError',
    'InvalidAliasError',
    'AliasTakenError',
    'GenerationExhaustedError',
]
