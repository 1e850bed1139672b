"""Run the ScanToReturn tag service (scan, activation and dashboard API) under uvicorn."""
import logging
import uvicorn

from scantoreturn.config import API_HOST, API_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    uvicorn.run(
        "scantoreturn.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )
