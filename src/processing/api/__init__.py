from processing.api.routes import perfume_router, processing_router

__all__ = ["perfume_router", "processing_router"]
