"""Run the Face Swap Studio API server."""

import uvicorn

from core.config import get_api_host, get_api_port

if __name__ == "__main__":
    uvicorn.run("backend.api:app", host=get_api_host(), port=get_api_port())
