"""Preset search areas for the metros the Cineplex network covers."""

from crowdplex.models import SearchArea

METRO_AREAS: dict[str, list[SearchArea]] = {
    "Vancouver Metro": [
        SearchArea("Downtown Vancouver", 49.2827, -123.1207, 8),
        SearchArea("Burnaby", 49.2488, -122.9805, 8),
        SearchArea("Surrey", 49.1913, -122.8490, 10),
        SearchArea("Richmond", 49.1666, -123.1336, 8),
        SearchArea("Coquitlam", 49.2838, -122.7932, 8),
        SearchArea("New Westminster", 49.2069, -122.9110, 6),
    ],
    "Toronto Metro": [
        SearchArea("Downtown Toronto", 43.6532, -79.3832, 8),
        SearchArea("Scarborough", 43.7764, -79.2318, 10),
        SearchArea("Mississauga", 43.5890, -79.6441, 10),
        SearchArea("North York", 43.7615, -79.4111, 8),
        SearchArea("Etobicoke", 43.6205, -79.5132, 8),
        SearchArea("Markham", 43.8561, -79.3370, 8),
    ],
    "Calgary Metro": [
        SearchArea("Downtown Calgary", 51.0447, -114.0719, 10),
        SearchArea("North Calgary", 51.1350, -114.0628, 10),
        SearchArea("South Calgary", 50.9430, -114.0581, 10),
    ],
    "Other Cities": [
        SearchArea("Montreal", 45.5017, -73.5673, 12),
        SearchArea("Ottawa", 45.4215, -75.6972, 12),
        SearchArea("Edmonton", 53.5461, -113.4938, 12),
        SearchArea("Winnipeg", 49.8951, -97.1384, 12),
        SearchArea("Quebec City", 46.8139, -71.2080, 12),
        SearchArea("Hamilton", 43.2557, -79.8711, 10),
    ],
}


def find_areas(name: str) -> list[SearchArea]:
    """
    Resolve a metro name or a single area name (case-insensitive).

    Returns:
        Matching areas, or an empty list if nothing matches
    """
    wanted = name.strip().lower()
    for metro, areas in METRO_AREAS.items():
        if metro.lower() == wanted:
            return list(areas)
    return [
        area
        for areas in METRO_AREAS.values()
        for area in areas
        if area.name.lower() == wanted
    ]
