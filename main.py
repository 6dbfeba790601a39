import logging
import os

from pureplate.main import create_app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s:%(message)s")

app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 10000))
    app.run(host="0.0.0.0", port=port)
