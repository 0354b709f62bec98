import uvicorn

from commitments.config import get_settings
from commitments.main import app

if __name__ == "__main__":
    # Host and port come from HOST / PORT (or the .env file)
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
