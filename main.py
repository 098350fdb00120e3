from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from dotenv import load_dotenv

from db import Base, engine
import recommendation.models  # noqa: F401  registers tables on Base.metadata
from recommendation.routes import router as recommendation_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logging.info("App starting")

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

app = FastAPI(title="Learning Material Recommender")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

app.include_router(recommendation_router)


@app.get("/", tags=["meta"])
def root():
    return {"service": "learning-material-recommender", "status": "ok"}
