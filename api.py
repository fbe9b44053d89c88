# api.py (thin HTTP surface over the ATS scoring core)
import logging
import os
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ai_analyzer import predict_career_path_with_ai
from analyzer import analyze_resume
from logging_config import setup_logging
from settings import load_settings

SETTINGS = load_settings()
setup_logging(SETTINGS.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Resume ATS Scorer")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalysisRequest(BaseModel):
    resume_text: str = ""
    job_description: str = ""


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "ai_enabled": SETTINGS.has_credentials and SETTINGS.enable_ai,
        "semantic_enabled": SETTINGS.has_credentials and SETTINGS.enable_semantic,
    }


@app.post("/analyze/")
def analyze_endpoint(request: AnalysisRequest) -> Dict[str, Any]:
    logger.info(
        "Analyzing resume (%d chars) against job description (%d chars)",
        len(request.resume_text),
        len(request.job_description),
    )
    return analyze_resume(request.resume_text, request.job_description, settings=SETTINGS)


@app.post("/career-path/")
def career_path_endpoint(request: AnalysisRequest) -> Dict[str, Any]:
    return predict_career_path_with_ai(request.resume_text, request.job_description, settings=SETTINGS)
