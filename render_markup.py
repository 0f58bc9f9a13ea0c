#!/usr/bin/env python3
"""
tracmark - Trac markup tree renderer

Simple usage:
    python render_markup.py comment.json              # Outputs comment-rendered.html
    python render_markup.py /folder/path              # Processes all trees in folder
    python render_markup.py comment.json -f text      # Markdown-style plain text
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from tracmark.cli import app

if __name__ == "__main__":
    app()
