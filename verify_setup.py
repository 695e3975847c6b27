#!/usr/bin/env python3
"""Verify that the storyteller setup is correct and all components load properly."""

import sys


def verify_setup():
    """Run verification checks on the storyteller setup."""
    print("Picture Storyteller Setup Verification")
    print("=" * 40)
    errors = []
    warnings = []

    # Check Python version
    print("\n1. Checking Python version...")
    if sys.version_info < (3, 10):
        errors.append(f"Python 3.10+ required, found {sys.version}")
    else:
        print(f"   OK: Python {sys.version_info.major}.{sys.version_info.minor}")

    # Try importing modules
    print("\n2. Checking module imports...")
    try:
        from storyteller.narrator.storyteller import Storyteller  # noqa: F401
        print("   OK: Storyteller")
    except ImportError as e:
        errors.append(f"Failed to import Storyteller: {e}")

    try:
        from app import create_app  # noqa: F401
        print("   OK: Web app")
    except ImportError as e:
        errors.append(f"Failed to import web app: {e}")

    # Check prompt and front end files
    print("\n3. Checking required files...")
    from storyteller.config import PUBLIC_DIR
    from storyteller.narrator.assembler import SYSTEM_PROMPT_FILE, build_system_prompt

    if SYSTEM_PROMPT_FILE.exists():
        print(f"   OK: {SYSTEM_PROMPT_FILE.name}")
        try:
            build_system_prompt("kids playing")
            print("   OK: System prompt renders")
        except (KeyError, IndexError, ValueError) as e:
            errors.append(f"System prompt has bad placeholders: {e}")
    else:
        errors.append(f"Missing prompt file: {SYSTEM_PROMPT_FILE}")

    if (PUBLIC_DIR / "index.html").exists():
        print("   OK: public/index.html")
    else:
        warnings.append("public/index.html not found - web UI will show a placeholder page")

    # Check environment
    print("\n4. Checking environment...")
    from storyteller.config import load_settings
    try:
        settings = load_settings()
    except ValueError as e:
        errors.append(f"Invalid environment: {e}")
        settings = None

    if settings is not None:
        if settings.remote_enabled:
            print(f"   OK: OPENAI_API_KEY found ({len(settings.openai_api_key)} chars)")
            print(f"   OK: Replies from {settings.llm_model}")
        else:
            warnings.append("OPENAI_API_KEY not set - replies come from the local storyteller")
            print("   WARN: OPENAI_API_KEY not set")
        print(f"   OK: Port {settings.port}")

    # Summary
    print("\n" + "=" * 40)
    if errors:
        print("\nERRORS:")
        for err in errors:
            print(f"  - {err}")
        print(f"\nVerification FAILED with {len(errors)} error(s)")
        return False
    else:
        if warnings:
            print("\nWARNINGS:")
            for warn in warnings:
                print(f"  - {warn}")
        print("\nVerification PASSED!")
        print("\nTo start the server, run:")
        print("  python app.py")
        print("\nTo chat in the terminal, run:")
        print("  python main.py")
        return True


if __name__ == "__main__":
    success = verify_setup()
    sys.exit(0 if success else 1)
