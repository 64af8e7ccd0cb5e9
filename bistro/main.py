from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from bistro.core.config import settings
from bistro.core.logging import configure_logging
from bistro.api.v1 import endpoints
from bistro.services.dine_in_service import DineInSession

def create_app() -> FastAPI:
    configure_logging()
    
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # One dine-in dashboard per process; routes receive it through Depends
    app.state.dine_in = DineInSession.with_tables(settings.TABLE_COUNT)
    
    # Health check
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.VERSION}
    
    app.include_router(endpoints.router, prefix=settings.API_V1_STR)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
