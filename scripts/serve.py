#!/usr/bin/env python3
from __future__ import annotations

import os
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from sortbench.config.load_config import ConfigError, load_app_config  # noqa: E402


def main() -> int:
    try:
        server = load_app_config().server
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    reload = os.getenv("SORTBENCH_RELOAD", "0").strip().lower() in {"1", "true", "yes", "y", "on"}

    import uvicorn

    uvicorn.run(
        "sortbench.api.app:app",
        host=server.host,
        port=server.port,
        reload=reload,
        log_level=server.log_level,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
