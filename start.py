#!/usr/bin/env python
"""Start the Domainer management service."""

import os
import sys
from pathlib import Path

# Change to script directory so relative paths work correctly
script_dir = Path(__file__).parent.resolve()
os.chdir(script_dir)

# Add src to path
src_path = script_dir / "src"
sys.path.insert(0, str(src_path))

if __name__ == "__main__":
    import uvicorn

    from domainer.config import load_config

    config = load_config()
    uvicorn.run(
        "domainer.main:app",
        host=config.server.host,
        port=config.server.port,
        workers=config.server.workers,
        reload=config.server.reload,
    )
