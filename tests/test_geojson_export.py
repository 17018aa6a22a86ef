import geojson

from camina_segura.export.geojson_export import route_to_geojson, routes_to_geojson

from conftest import END, MIDPOINT, START


def test_route_feature_collection(engine, make_report):
    make_report("harassment", MIDPOINT)
    make_report("suspicious", MIDPOINT)
    route = next(r for r in engine.calculate_safe_routes(START, END) if r.id == 'fastest')

    collection = route_to_geojson(route)

    assert collection.is_valid
    kinds = [feature['properties']['type'] for feature in collection['features']]
    assert kinds[0] == 'route'
    assert kinds[-2:] == ['start', 'end']
    assert kinds.count('danger') == len(route.dangerous_points)

    line = collection['features'][0]
    assert line['geometry']['type'] == 'LineString'
    assert line['geometry']['coordinates'][0] == [START.lng, START.lat]
    assert line['properties']['safety_score'] == route.safety_score


def test_geojson_serializes(engine):
    routes = engine.calculate_safe_routes(START, END)
    by_id = routes_to_geojson(routes)

    assert set(by_id) == {'safest', 'fastest', 'balanced'}
    loaded = geojson.loads(geojson.dumps(by_id['safest']))
    assert loaded['features'][-1]['geometry']['coordinates'] == [END.lng, END.lat]
