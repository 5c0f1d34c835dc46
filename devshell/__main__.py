from __future__ import annotations

from devshell.main import main

if __name__ == '__main__':
    raise SystemExit(main())
