#!/usr/bin/env python3
"""
Reset the persisted best score.

Removes the stored best score so the next game starts from 0.

Usage:
    python backend/cli/reset_best_score.py [--confirm]
"""

import os
import sys
import argparse

# Add parent directory to path to import database modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from database import get_database_path, init_database
from data_access import load_best_score, clear_best_score


def reset_best_score(confirm: bool = False) -> bool:
    """
    Delete the stored best score.

    Args:
        confirm: If True, skip confirmation prompt

    Returns:
        True if reset was successful, False otherwise
    """
    db_path = get_database_path()

    try:
        init_database()
        current = load_best_score()
    except Exception as e:
        print(f"❌ Could not read best score from {db_path}: {e}")
        return False

    if not confirm:
        print("=" * 70)
        print("⚠️  BEST SCORE RESET WARNING ⚠️")
        print("=" * 70)
        print(f"Database path: {db_path}")
        print(f"Current best score: {current}")
        print("=" * 70)

        response = input("\nType 'RESET' to confirm: ")

        if response != 'RESET':
            print("❌ Reset cancelled")
            return False

    try:
        removed = clear_best_score()
    except Exception as e:
        print(f"\n❌ Error resetting best score: {e}")
        return False

    if removed:
        print(f"✅ Best score {current} cleared")
    else:
        print("✅ No best score stored, nothing to clear")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Reset the persisted Snake best score"
    )
    parser.add_argument(
        '--confirm',
        action='store_true',
        help="Skip confirmation prompt"
    )

    args = parser.parse_args()

    success = reset_best_score(confirm=args.confirm)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
