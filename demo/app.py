import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from steemconnect import EndpointConfig, Provider
from steemconnect.api.routers.auth import build_router

load_dotenv()

provider = Provider(EndpointConfig.from_env())

app = FastAPI(title="SteemConnect login demo")
app.add_middleware(SessionMiddleware, secret_key=os.environ.get("SECRET_KEY"))
app.include_router(build_router(provider, success_url="/me"), tags=["auth"])


@app.get("/me")
def me(request: Request):
    return request.session.get("user") or {}

# uvicorn demo.app:app --reload
