from .geojson_export import route_to_geojson, routes_to_geojson

__all__ = [
    'route_to_geojson',
    'routes_to_geojson'
]
