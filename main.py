# main.py
"""
Entry Point: secure-now

Usage
-----
    python main.py certs
    python main.py --prefix booom serve --dir dist --port 4173
"""

from __future__ import annotations

from secure_now.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
