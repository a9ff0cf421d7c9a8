"""
Name analysis: length, vowel/consonant counts and a complexity score.

Pure functions only; the HTTP layer lives in app.py.
"""
import string
from dataclasses import asdict, dataclass

DEFAULT_MAX_LENGTH = 100

VOWELS = frozenset("aeiou")
LETTERS = frozenset(string.ascii_lowercase)


class InvalidInputError(ValueError):
    """Raised when a name is empty or longer than the allowed maximum."""


@dataclass(frozen=True)
class NameMetrics:
    name: str
    length: int
    vowel_count: int
    consonant_count: int
    complexity: float

    def to_dict(self) -> dict:
        return asdict(self)


def complexity_score(length: int, vowel_count: int, consonant_count: int) -> float:
    """length * (vowels + 1) / (consonants + 1), rounded to 4 places."""
    return round(length * (vowel_count + 1) / (consonant_count + 1), 4)


def analyze(name: str, max_length: int = DEFAULT_MAX_LENGTH) -> NameMetrics:
    """
    Analyze a name.

    Surrounding whitespace is stripped before validation. Only ASCII letters
    are classified; digits, spaces, punctuation and other scripts count
    towards ``length`` but neither bucket.

    Raises:
        InvalidInputError: if the stripped name is empty or has more than
            ``max_length`` characters.
    """
    name = (name or "").strip()
    if not name:
        raise InvalidInputError("name must not be empty")
    if len(name) > max_length:
        raise InvalidInputError(
            f"name must be at most {max_length} characters, got {len(name)}"
        )

    vowels = consonants = 0
    for ch in name.lower():
        if ch in VOWELS:
            vowels += 1
        elif ch in LETTERS:
            consonants += 1

    return NameMetrics(
        name=name,
        length=len(name),
        vowel_count=vowels,
        consonant_count=consonants,
        complexity=complexity_score(len(name), vowels, consonants),
    )
