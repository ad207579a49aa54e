"""Engine module - the password derivation pipeline.

Contains:
- URL parsing: builds the derivation key from a URL
- Leet transform: character substitution before and after hashing
- Base encoder: renders digests over an arbitrary alphabet
- Password Engine: orchestrates a derivation for a profile
- Validation Engine: reports problems in profiles
"""

from password_maker.engine.encoding import BaseEncoder
from password_maker.engine.leet import LeetMode, LeetTransform, leet_convert
from password_maker.engine.password_engine import GenerationResult, PasswordEngine
from password_maker.engine.url_parsing import UrlComponents, UrlMode, UrlParsing
from password_maker.engine.validation_engine import ProfileValidator, ValidationResult

__all__ = [
    "BaseEncoder",
    "LeetMode",
    "LeetTransform",
    "leet_convert",
    "GenerationResult",
    "PasswordEngine",
    "UrlComponents",
    "UrlMode",
    "UrlParsing",
    "ProfileValidator",
    "ValidationResult",
]
