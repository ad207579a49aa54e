"""Base-N rendering of digest bytes over an arbitrary alphabet."""

from typing import Callable, Iterable

from password_maker.errors import SettingsError, SettingsErrorKind


class BaseEncoder:
    """Renders byte strings as digits over a caller-supplied alphabet.

    The alphabet is an ordered sequence of characters; duplicates are
    allowed and simply make some characters more likely.
    """

    def __init__(self, alphabet: str):
        if not alphabet:
            raise SettingsError(
                SettingsErrorKind.EMPTY_ALPHABET,
                "The character set must not be empty",
            )
        self.alphabet = alphabet

    @property
    def base(self) -> int:
        return len(self.alphabet)

    def encode(self, data: bytes) -> str:
        """Render ``data`` as one big-endian integer in base N.

        Digits are collected least significant first and reversed. Zero
        renders as the first alphabet character. A single character alphabet
        yields one character per input byte.
        """
        if self.base == 1:
            return self.alphabet * len(data)

        value = int.from_bytes(data, byteorder="big")
        if value == 0:
            return self.alphabet[0]

        digits: list[str] = []
        while value:
            value, remainder = divmod(value, self.base)
            digits.append(self.alphabet[remainder])
        digits.reverse()
        return "".join(digits)

    def encode_stream(
        self,
        blocks: Iterable[bytes],
        length: int,
        transform: Callable[[str], str] | None = None,
    ) -> str:
        """Render consecutive blocks until ``length`` characters exist.

        Each block is encoded on its own, optionally transformed, and
        appended; the result is cut to exactly ``length`` characters.

        Args:
            blocks: Digest blocks in expansion order
            length: Number of characters to produce
            transform: Applied to each rendered block before appending
        """
        if length <= 0:
            return ""

        output = ""
        for block in blocks:
            part = self.encode(block)
            if transform is not None:
                part = transform(part)
            output += part
            if len(output) >= length:
                break
        return output[:length]

    def contains_only_alphabet(self, text: str) -> bool:
        """Check that every character of ``text`` belongs to the alphabet."""
        allowed = set(self.alphabet)
        return all(char in allowed for char in text)
