"""Entry point for the ballistic turret range."""
from __future__ import annotations

from turret.app import main


if __name__ == "__main__":
    main()
