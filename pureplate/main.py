import logging

from flask import Flask

from pureplate.api.routes import api


# ================================
# APP FACTORY
# ================================
def create_app() -> Flask:
    app = Flask(__name__)
    app.register_blueprint(api)
    logging.info("PurePlate analyzer app created")
    return app
