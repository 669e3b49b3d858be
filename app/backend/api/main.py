import os

import uvicorn

from app.backend.api.app import app

if __name__ == "__main__":
    # python -m app.backend.api.main
    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
