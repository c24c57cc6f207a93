from fastapi import FastAPI
from freight_ingest.db import init_db
from freight_ingest.api.routes import router as api_router

# create FastAPI instance
app = FastAPI(title="freight-ingest")
app.include_router(api_router)


@app.on_event("startup")
def on_startup_create_tables():
    # Ensure database tables exist before the first request
    init_db()
