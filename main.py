from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import ALLOWED_ORIGINS
from services.caption_service import router as caption_router, health_status
from services.summary_service import router as summary_router
import asyncio

app = FastAPI(title="YouTube Transcripts")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(caption_router, prefix="/captions")
app.include_router(summary_router, prefix="/summary")

@app.get("/")
async def root():
    return {"message": "Welcome to the YouTube Transcripts service"}

@app.get("/health")
async def health_check():
    return await asyncio.to_thread(health_status)
