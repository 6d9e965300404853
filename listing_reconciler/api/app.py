"""FastAPI application exposing the extraction engine."""
from fastapi import FastAPI

from listing_reconciler.api.routes import extract

app = FastAPI(
    title="Listing Reconciler",
    description="Reduces captured listing pages, pasted listing data and listing URLs to canonical property records",
    version="0.1.0"
)

# API Routes
app.include_router(extract.router, prefix="/api/extract", tags=["extract"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
