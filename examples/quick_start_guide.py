#!/usr/bin/env python3
"""
Quick Start Guide for piwis-zdc.

Loads a session directory, walks to a few well-known values and compares the
session with a second one when given.

Usage:
    python examples/quick_start_guide.py SESSION_DIR [OTHER_SESSION_DIR]
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from piwis_zdc import ZdcError, load_session
from piwis_zdc.tools import diff_frame, diff_sessions, dump_lines


def quick_start_example(directory):
    """Load a session and look up values by title and label."""

    print("🚀 QUICK START - piwis-zdc")
    print("=" * 30)

    session = load_session(directory, on_match=lambda path: print(f"📄 Export: {path.name}"))
    print(f"✅ Loaded {len(session.sections)} sections (content version {session.content_version})")

    for section in session.sections:
        print(f"\n🔧 {section.title}")
        for measurement in section.measurements:
            count = len(measurement.values or ())
            print(f"  - {measurement.kind.value}: {measurement.title} ({count} values)")

    print("\n📋 First dump lines:")
    for line in list(dump_lines(session))[:5]:
        print(f"  {line}")

    return session


def diff_example(session, other_directory):
    """Compare two sessions and tabulate the differences with pandas."""

    print("\n🔍 Session diff")
    print("-" * 30)

    entries = diff_sessions(session, load_session(other_directory))
    if not entries:
        print("✅ No differences")
        return

    frame = diff_frame(entries)
    print(frame.groupby("kind").size().to_string())
    print(frame[["section", "label", "old_value", "new_value"]].head(10).to_string(index=False))


def main():
    """Main function."""
    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    try:
        session = quick_start_example(sys.argv[1])
        if len(sys.argv) > 2:
            diff_example(session, sys.argv[2])
        return 0

    except ZdcError as e:
        print(f"\n❌ Example failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
