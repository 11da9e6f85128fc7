"""AWS Lambda entry point: Mangum ASGI adapter, one invocation per request."""

from mangum import Mangum

from api.index import app


def make_handler(asgi_app) -> Mangum:
    # lifespan="off": nenhum evento de startup/shutdown por invocacao
    return Mangum(asgi_app, lifespan="off")


handler = make_handler(app)
