"""
Browser assets for the Snake game page.
"""

from pathlib import Path

TEMPLATE_DIR = str(Path(__file__).parent / "templates")
