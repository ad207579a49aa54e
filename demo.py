#!/usr/bin/env python3
"""
Demo script showing basic usage of Password Maker.

Run this script after installing the package:
    pip install -e .
    python demo.py
"""

import tempfile
from pathlib import Path

from password_maker.context import AppContext
from password_maker.engine.leet import LeetMode
from password_maker.engine.password_engine import PasswordEngine
from password_maker.engine.url_parsing import UrlComponents, UrlMode
from password_maker.engine.validation_engine import ProfileValidator
from password_maker.profiles.base import ALPHANUMERIC_ALPHABET, Profile, ProfileBuilder

MASTER = "correct horse battery staple"
URL = "https://alice@shop.example.com:8443/cart?item=42"


def demo_profile_creation():
    """Demonstrate creating profiles programmatically."""
    print("=" * 60)
    print("1. CREATING PROFILES")
    print("=" * 60)

    shopping = (
        ProfileBuilder("shopping")
        .hash_algorithm("sha256")
        .alphabet(ALPHANUMERIC_ALPHABET)
        .length(16)
        .username("alice")
        .suffix("!")
        .build()
    )

    print(f"Created profile: {shopping.name}")
    print(f"  Algorithm: {shopping.hash_algorithm}")
    print(f"  Length: {shopping.password_length} (+ suffix {shopping.suffix!r})")
    print(f"  Alphabet size: {len(shopping.alphabet)}")
    print()

    return shopping


def demo_url_keys():
    """Demonstrate how URL flags select the derivation key."""
    print("=" * 60)
    print("2. URL KEYS")
    print("=" * 60)

    parts = UrlComponents.parse(URL)
    print(f"URL: {URL}")
    print(f"  scheme={parts.scheme!r} userinfo={parts.userinfo!r} port={parts.port!r}")
    print(f"  subdomain={parts.subdomain!r} domain={parts.domain!r} params={parts.params!r}")
    print()

    engine = PasswordEngine()
    variants = {
        "default": Profile(),
        "domain only": Profile(use_subdomain=False),
        "everything": Profile(
            use_protocol=True,
            use_userinfo=True,
            use_params=True,
            url_mode=UrlMode.ALL,
        ),
    }
    for label, profile in variants.items():
        print(f"  {label:12} -> {engine.used_text(URL, profile)}")
    print()


def demo_generation(profile):
    """Demonstrate deriving passwords."""
    print("=" * 60)
    print("3. GENERATING PASSWORDS")
    print("=" * 60)

    engine = PasswordEngine()
    for url in (URL, "https://www.example.org/login"):
        print(f"{url}")
        print(f"  {engine.generate(url, MASTER, profile)}")
    print()

    print("Leet variants:")
    for mode in (LeetMode.BEFORE, LeetMode.AFTER, LeetMode.BEFORE_AND_AFTER):
        leet_profile = ProfileBuilder(f"leet-{mode.value}").leet(mode, 5).build()
        print(f"  {mode.value:15} {engine.generate(URL, MASTER, leet_profile)}")
    print()

    print(f"Master checksum: {engine.verify(MASTER)}")
    print()


def demo_validation():
    """Demonstrate profile validation."""
    print("=" * 60)
    print("4. VALIDATION")
    print("=" * 60)

    broken = Profile(
        name="broken",
        hash_algorithm="sha512",
        leet_mode="After",
        alphabet="aa",
        use_params=True,
    )

    engine = PasswordEngine()
    result = engine.try_generate(URL, MASTER, broken)
    print(f"Generation result: {result.text}")

    report = ProfileValidator().validate_profile(broken)
    print(f"Valid: {report.valid} ({report.error_count} errors, {report.warning_count} warnings)")
    for issue in report.issues:
        print(f"  - [{issue.severity.value}] {issue.path}: {issue.message}")
    print()


def demo_context():
    """Demonstrate the application context with a throwaway settings file."""
    print("=" * 60)
    print("5. APPLICATION CONTEXT")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        app = AppContext(settings_path=Path(tmpdir) / "passwordmaker.yaml")

        error = app.load_settings()
        print(f"First load: {error.kind.value if error else 'ok'}; profiles {app.list_names()}")

        app.add("work")
        profile = app.get_active_profile()
        profile.password_length = 12
        app.set_active_profile(profile)
        print(f"Added 'work'; active index {app.get_active_index()}")

        app.save_settings()
        reloaded = AppContext(settings_path=app.settings_path)
        reloaded.load_settings()
        print(f"Reloaded profiles: {reloaded.list_names()}")
        print(f"Password for {URL}: {reloaded.generate(URL, MASTER).text}")
    print()


def main():
    """Run all demos."""
    print()
    print("PASSWORD MAKER DEMO")
    print("=" * 60)
    print()

    profile = demo_profile_creation()
    demo_url_keys()
    demo_generation(profile)
    demo_validation()
    demo_context()

    print()
    print("=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print()
    print("To use the CLI, install the package and run:")
    print("  pip install -e .")
    print("  pwm --help")
    print()


if __name__ == "__main__":
    main()
