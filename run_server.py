import logging

import uvicorn

from catalog.config import load_config

if __name__ == "__main__":
    config = load_config()

    logging.basicConfig(
        level=config.server.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print("Starting Art Catalog Viewer API...")
    print(f"Docs available at: http://{config.server.host}:{config.server.port}/docs")

    uvicorn.run(
        "backend.api.server:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        log_level=config.server.log_level.lower()
    )
