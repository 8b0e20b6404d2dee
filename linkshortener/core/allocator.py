"""Shortcode allocation over a shared LinkTable.

Classes:
    CodeAllocator:
        Reserve custom aliases or randomly generated codes, release them on rollback.

NOTE:
    Generated candidates that collide are rejected and redrawn, at most
    `max_attempts` times per reservation. A saturated namespace raises
    GenerationExhaustedError; increase `code_length` to grow it.
"""

import random
import logging

from linkshortener.constants import ALPHABET, Defaults
from linkshortener.core.link_table import LinkTable
from linkshortener.exceptions import AliasTakenError, GenerationExhaustedError, InvalidAliasError
from linkshortener.types import CodeFactory
from linkshortener.utils.shortener import generate_shortcode
from linkshortener.utils.validators import is_blank, is_valid_alias


logger = logging.getLogger(__name__)


class CodeAllocator:
    """Own the namespace of reserved codes in a LinkTable.

    Attributes:
        table (LinkTable):
            Shared key set. The registry stores its entities in the same table.
        code_length (int):
            Length of generated codes.
        max_attempts (int):
            Maximum number of generated candidates tried per reservation.

    Example:
        >>> allocator = CodeAllocator(LinkTable())
        >>> allocator.reserve('promo')
        'promo'
        >>> allocator.reserve('promo')
        AliasTakenError: Alias 'promo' is already taken.
        >>> len(allocator.reserve())
        6
    """

    def __init__(
        self,
        table: LinkTable | None = None,
        code_length: int = Defaults.CODE_LENGTH,
        max_attempts: int = Defaults.MAX_ATTEMPTS,
        alphabet: str = ALPHABET,
        rng: random.Random | None = None,
    ):
        if max_attempts <= 0:
            raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

        self.table = table if table is not None else LinkTable()
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.alphabet = alphabet
        self.rng = rng

    def reserve(self, alias: str | None = None, factory: CodeFactory | None = None) -> str:
        """Reserve `alias`, or a freshly generated code when `alias` is blank.

        Reservation and the unused-check are one atomic step (LinkTable.claim).
        When `factory` is given, the value it builds is bound to the code in that
        same step.

        Args:
            alias (str | None):
                Custom alias. None, '' or whitespace-only means "generate one".
            factory (CodeFactory | None):
                Builds the entity to bind to the reserved code.

        Returns:
            str: the reserved code

        Raises:
            InvalidAliasError: If the alias contains whitespace.
            AliasTakenError: If the alias is already reserved (case-sensitive).
            GenerationExhaustedError: If no unused code was found in `max_attempts` tries.
        """
        if not is_blank(alias):
            if not is_valid_alias(alias):
                raise InvalidAliasError(f'Alias {alias!r} must not contain whitespace.')
            if not self.table.claim(alias, factory):
                raise AliasTakenError(f"Alias '{alias}' is already taken.")
            return alias

        for attempt in range(1, self.max_attempts + 1):
            code = generate_shortcode(self.code_length, self.alphabet, self.rng)
            if self.table.claim(code, factory):
                if attempt > 1:
                    logger.debug('Generated code after %d attempts.', attempt, extra={'shortcode': code})
                return code

        logger.warning(
            'Code generation exhausted. Namespace is saturated for the configured code length.',
            extra={'maxAttempts': self.max_attempts, 'codeLength': self.code_length, 'reserved': len(self.table)},
        )
        raise GenerationExhaustedError(f'No unused code of length {self.code_length} found after {self.max_attempts} attempts.')

    def release(self, code: str) -> bool:
        """Remove `code` from the reserved set. Returns True if it was reserved."""
        return self.table.discard(code)

    def reserved(self, code: str) -> bool:
        return code in self.table
