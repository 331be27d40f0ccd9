# citerag/cli/commands/serve.py
"""
Start the REST API server.

Usage:
    citerag serve
    citerag serve --host 0.0.0.0 --port 9000
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import uvicorn

from citerag.api.app import create_app
from citerag.cli.commands.common import load_context
from citerag.cli.ui import ui


def command(host: str, port: int, config: Optional[Path]) -> None:
    context = load_context(config)
    app = create_app(context)

    ui.info(f"Serving on http://{host}:{port} (collection '{context.config.vector_db.collection}')")
    uvicorn.run(app, host=host, port=port, log_level=context.config.logging.level.lower())
