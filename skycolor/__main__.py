"""Run the API: python -m skycolor"""

import uvicorn

from skycolor.config import API_HOST, API_PORT, LOG_LEVEL

if __name__ == "__main__":
    # Single worker: updater threads and state live in this process
    uvicorn.run("skycolor.main:app", host=API_HOST, port=API_PORT, workers=1, log_level=LOG_LEVEL.lower())
