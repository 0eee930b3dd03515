from __future__ import annotations

from m_o.cli import main

if __name__ == "__main__":
    main()
