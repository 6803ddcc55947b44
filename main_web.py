import logging

import uvicorn
from web.api import app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "web.api:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
