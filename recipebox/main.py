import logging

import uvicorn

from recipebox.api.api_run import create_app
from recipebox.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print(f"RecipeBox running on http://{APP_HOST}:{APP_PORT} (Press CTRL+C to quit)")
    uvicorn.run(create_app(), host=APP_HOST, port=APP_PORT)
