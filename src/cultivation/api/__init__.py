from cultivation.api.routes import plant_router

__all__ = ["plant_router"]
