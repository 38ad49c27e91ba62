"""IdentifierNormalizer: email addresses and profile hashes → upstream lookup keys."""

from __future__ import annotations

import hashlib

from gravatar_mcp.constants import EMAIL_PATTERN, HASH_MD5_PATTERN, HASH_SHA256_PATTERN
from gravatar_mcp.errors import GravatarValidationError


class IdentifierNormalizer:
    """Normalize and validate the identifiers accepted by the Gravatar API.

    The API keys every profile and avatar by a hex digest of the owner's
    normalized email address:

    - current scheme: SHA-256, 64 hex characters
    - legacy scheme: MD5, 32 hex characters (deprecated upstream)

    Validation is purely syntactic. A well-formed hash is never checked
    against the upstream for existence.
    """

    def normalize_email(self, raw: str) -> str:
        """Trim surrounding whitespace and lowercase.

        Idempotent, never fails.

        Examples:
            >>> IdentifierNormalizer().normalize_email("  Test@Example.COM ")
            'test@example.com'
        """
        return raw.strip().lower()

    def is_valid_email(self, raw: str) -> bool:
        """Check the normalized form of *raw* against the permissive email pattern."""
        return bool(EMAIL_PATTERN.fullmatch(self.normalize_email(raw)))

    def is_valid_hash(self, value: str) -> bool:
        """True iff *value* is exactly 32 or 64 hex characters (any case).

        Examples:
            >>> normalizer = IdentifierNormalizer()
            >>> normalizer.is_valid_hash("0" * 32)
            True
            >>> normalizer.is_valid_hash("0" * 63)
            False
        """
        if not isinstance(value, str):
            return False
        return bool(HASH_SHA256_PATTERN.fullmatch(value) or HASH_MD5_PATTERN.fullmatch(value))

    def derive_hash(self, raw: str, *, legacy: bool = False) -> str:
        """Derive the lookup hash for an email address.

        Args:
            raw: The email address as supplied by the caller.
            legacy: Produce the deprecated 32-character MD5 digest instead
                of the 64-character SHA-256 digest.

        Returns:
            Lowercase hex digest of the normalized email.

        Raises:
            GravatarValidationError: If the normalized email does not look
                like an email address.
        """
        email = self.normalize_email(raw)
        if not EMAIL_PATTERN.fullmatch(email):
            raise GravatarValidationError("Invalid email format", details={"field": "email"})
        digest = hashlib.md5 if legacy else hashlib.sha256
        return digest(email.encode("utf-8")).hexdigest()

    def require_hash(self, value: str) -> str:
        """Return *value* unchanged if it is a valid hash, otherwise raise."""
        if not self.is_valid_hash(value):
            raise GravatarValidationError(
                "Invalid hash format. Must be a 32-character (MD5) or 64-character (SHA256) hexadecimal string.",
                details={"field": "hash"},
            )
        return value


_default = IdentifierNormalizer()


def normalize_email(raw: str) -> str:
    return _default.normalize_email(raw)


def is_valid_email(raw: str) -> bool:
    return _default.is_valid_email(raw)


def is_valid_hash(value: str) -> bool:
    return _default.is_valid_hash(value)


def derive_hash_from_email(raw: str, *, legacy: bool = False) -> str:
    return _default.derive_hash(raw, legacy=legacy)
