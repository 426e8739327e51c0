import uvicorn
import logging
from shiftwage.core.config import ServerConfig # Import ServerConfig

# Import string so uvicorn can start more than one worker
APP = "shiftwage.main:app"

# Configure logging for the main entry point
log_level = getattr(logging, ServerConfig.LOG_LEVEL.upper())
logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)

def main():
    workers = ServerConfig.WORKERS if ServerConfig.WORKERS > 1 else None

    if ServerConfig.https_enabled():
        logger.info(f"Starting HTTPS server on port {ServerConfig.PORT}...")
        logger.info(f"API Documentation: https://localhost:{ServerConfig.PORT}/docs")

        uvicorn.run(
            APP,
            host=ServerConfig.HOST,
            port=ServerConfig.PORT,
            ssl_keyfile=ServerConfig.SSL_KEY_FILE,
            ssl_certfile=ServerConfig.SSL_CERT_FILE,
            log_level=ServerConfig.LOG_LEVEL.lower(),
            workers=workers
        )
    else:
        logger.info(f"Starting HTTP server on port {ServerConfig.PORT}...")
        logger.info(f"API Documentation: http://localhost:{ServerConfig.PORT}/docs")

        uvicorn.run(
            APP,
            host=ServerConfig.HOST,
            port=ServerConfig.PORT,
            log_level=ServerConfig.LOG_LEVEL.lower(),
            workers=workers
        )

if __name__ == "__main__":
    main()
