from fastapi import FastAPI
from app.core.logger import logger
from app.storage.db import init_db

#This is for loging the startup tasks
def setup_startup_tasks(app: FastAPI):
    @app.on_event("startup")
    async def startup_event():
        await init_db()
        logger.info("Application startup complete.")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Application shutdown complete.")
