from warehousing.api.routes import dispatch_router, warehouse_router

__all__ = ["dispatch_router", "warehouse_router"]
