#!/usr/bin/env python3
"""TomatoTimer entry point.

Run with:
    python main.py
    python -m tomatotimer
"""

from tomatotimer.__main__ import main


if __name__ == "__main__":
    main()
