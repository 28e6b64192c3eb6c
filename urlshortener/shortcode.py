"""Short code generation utilities."""

import base64
import hashlib
import string

MIN_CODE_LENGTH = 4
MAX_CODE_LENGTH = 12


class ShortCodeGenerator:
    """Generate deterministic short codes for canonical URLs."""

    # URL-safe base64 alphabet
    ALPHABET = string.ascii_letters + string.digits + "-_"

    def __init__(self, default_length: int = 7):
        """Initialize short code generator.

        Args:
            default_length: Length of generated codes, in [4, 12]

        Raises:
            ValueError: If the length is out of range
        """
        if not MIN_CODE_LENGTH <= default_length <= MAX_CODE_LENGTH:
            raise ValueError(
                f"code length must be between {MIN_CODE_LENGTH} and {MAX_CODE_LENGTH}"
            )
        self.default_length = default_length

    def generate(self, canonical_url: str, attempt: int = 0) -> str:
        """Generate the short code for a canonical URL and attempt number.

        The code is the URL-safe base64 encoding of
        SHA-256(``canonical_url:attempt``), unpadded and truncated. The same
        inputs always give the same code; each attempt gives an independent one.

        Args:
            canonical_url: Canonical form of the URL
            attempt: Collision attempt counter, starting at 0

        Returns:
            Short code of ``default_length`` characters
        """
        payload = f"{canonical_url}:{attempt}".encode("utf-8")
        digest = hashlib.sha256(payload).digest()
        encoded = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
        return encoded[:self.default_length]

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code only uses the URL-safe base64 alphabet.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.ALPHABET for c in code)
