# cli.py
import dataclasses
import logging
from typing import Optional

import click
import uvicorn

from filedrop.core.config import Settings
from filedrop.main import create_app

logger = logging.getLogger(__name__)

@click.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Bind port (default: PORT or 3000)")
@click.option("--upload-dir", default=None, help="Directory uploaded files are written to")
def main(host: Optional[str], port: Optional[int], upload_dir: Optional[str]):
    """Run the filedrop HTTP server."""
    overrides = {"HOST": host, "PORT": port, "UPLOAD_DIR": upload_dir}
    settings = dataclasses.replace(Settings(), **{k: v for k, v in overrides.items() if v is not None})

    app = create_app(settings)
    logger.debug("listening on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

if __name__ == "__main__":
    main()
