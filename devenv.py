#!/usr/bin/env python3
"""
AI Development Environment Setup Tool.

Usage:
    devenv.py                      # Interactive setup
    devenv.py --non-interactive    # Use catalog defaults
    devenv.py --help
"""

import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from ai_dev_env.cli import run


if __name__ == "__main__":
    run()
