from .route_history import RouteHistory

__all__ = [
    'RouteHistory'
]
