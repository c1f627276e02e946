"""Static reference tables: city geocoding and the category taxonomy.

Both tables are bundled with the package, loaded once at import time and
never mutated. City lookup is an exact match on the trimmed name; category
lookup matches the display label case-insensitively.
"""

from __future__ import annotations

from types import MappingProxyType

from motostock.models._base import CategoryId
from motostock.models.reference import CategoryRef, CityRef

CITIES: tuple[CityRef, ...] = (
    CityRef(name="Chandigarh", region="North India", lat=30.7333, lng=76.7794),
    CityRef(name="Manali", region="North India", lat=32.2432, lng=77.1892),
    CityRef(name="Jaipur", region="North India", lat=26.9124, lng=75.7873),
    CityRef(name="New Delhi", region="North India", lat=28.6139, lng=77.2090),
    CityRef(name="Delhi", region="North India", lat=28.7041, lng=77.1025),
    CityRef(name="Lucknow", region="North India", lat=26.8467, lng=80.9462),
    CityRef(name="Kanpur", region="North India", lat=26.4499, lng=80.3319),
    CityRef(name="Ludhiana", region="North India", lat=30.9010, lng=75.8573),
    CityRef(name="Amritsar", region="North India", lat=31.6340, lng=74.8723),
    CityRef(name="Srinagar", region="North India", lat=34.0837, lng=74.7973),
    CityRef(name="Dehradun", region="North India", lat=30.3165, lng=78.0322),
    CityRef(name="Gurgaon", region="North India", lat=28.4595, lng=77.0266),
    CityRef(name="Noida", region="North India", lat=28.5355, lng=77.3910),
    CityRef(name="Agartala", region="North-East India", lat=23.8315, lng=91.2868),
    CityRef(name="Aizawl", region="North-East India", lat=23.7271, lng=92.7176),
    CityRef(name="Kohima", region="North-East India", lat=25.6701, lng=94.1077),
    CityRef(name="Dimapur", region="North-East India", lat=25.9060, lng=93.7272),
    CityRef(name="Guwahati", region="North-East India", lat=26.1445, lng=91.7362),
    CityRef(name="Shillong", region="North-East India", lat=25.5788, lng=91.8933),
    CityRef(name="Imphal", region="North-East India", lat=24.8170, lng=93.9368),
    CityRef(name="Gangtok", region="North-East India", lat=27.3389, lng=88.6065),
    CityRef(name="Mumbai", region="West India", lat=19.0760, lng=72.8777),
    CityRef(name="Pune", region="West India", lat=18.5204, lng=73.8567),
    CityRef(name="Nagpur", region="West India", lat=21.1458, lng=79.0882),
    CityRef(name="Nashik", region="West India", lat=19.9975, lng=73.7898),
    CityRef(name="Ahmedabad", region="West India", lat=23.0225, lng=72.5714),
    CityRef(name="Surat", region="West India", lat=21.1702, lng=72.8311),
    CityRef(name="Vadodara", region="West India", lat=22.3072, lng=73.1812),
    CityRef(name="Rajkot", region="West India", lat=22.3039, lng=70.8022),
    CityRef(name="Goa", region="West India", lat=15.2993, lng=74.1240),
    CityRef(name="Panaji", region="West India", lat=15.4909, lng=73.8278),
    CityRef(name="Bangalore", region="South India", lat=12.9716, lng=77.5946),
    CityRef(name="Bengaluru", region="South India", lat=12.9716, lng=77.5946),
    CityRef(name="Chennai", region="South India", lat=13.0827, lng=80.2707),
    CityRef(name="Hyderabad", region="South India", lat=17.3850, lng=78.4867),
    CityRef(name="Kochi", region="South India", lat=9.9312, lng=76.2673),
    CityRef(name="Thiruvananthapuram", region="South India", lat=8.5241, lng=76.9366),
    CityRef(name="Coimbatore", region="South India", lat=11.0168, lng=76.9558),
    CityRef(name="Visakhapatnam", region="South India", lat=17.6868, lng=83.2185),
    CityRef(name="Mysore", region="South India", lat=12.2958, lng=76.6394),
    CityRef(name="Kolkata", region="East India", lat=22.5726, lng=88.3639),
    CityRef(name="Patna", region="East India", lat=25.5941, lng=85.1376),
    CityRef(name="Ranchi", region="East India", lat=23.3441, lng=85.3096),
    CityRef(name="Bhubaneswar", region="East India", lat=20.2961, lng=85.8245),
    CityRef(name="Raipur", region="East India", lat=21.2514, lng=81.6296),
    CityRef(name="Bhopal", region="Central India", lat=23.2599, lng=77.4126),
    CityRef(name="Indore", region="Central India", lat=22.7196, lng=75.8577),
    CityRef(name="Gwalior", region="Central India", lat=26.2183, lng=78.1828),
    CityRef(name="Jabalpur", region="Central India", lat=23.1815, lng=79.9864),
)

CATEGORIES: tuple[CategoryRef, ...] = (
    CategoryRef(id=CategoryId.SAFETY, label="Safety", color="#005696"),
    CategoryRef(id=CategoryId.ENGINE, label="Engine", color="#f59e0b"),
    CategoryRef(id=CategoryId.MAINTENANCE, label="Maint.", color="#64748b"),
    CategoryRef(id=CategoryId.COMFORT, label="Comfort", color="#10b981"),
    CategoryRef(id=CategoryId.TECH, label="Tech", color="#6366f1"),
)

_CITY_BY_NAME = MappingProxyType({city.name: city for city in CITIES})
_CATEGORY_BY_LABEL = MappingProxyType({category.label.lower(): category for category in CATEGORIES})
_CATEGORY_BY_ID = MappingProxyType({category.id: category for category in CATEGORIES})

#: Regions in table order, for region pickers.
REGIONS: tuple[str, ...] = tuple(dict.fromkeys(city.region for city in CITIES))


def lookup_city(name: str | None) -> CityRef | None:
    """Return the reference entry for *name*, or ``None`` when unknown."""
    if not name:
        return None
    return _CITY_BY_NAME.get(name.strip())


def lookup_category(label: str | None) -> CategoryRef | None:
    """Return the category whose label matches *label* ignoring case."""
    if not label:
        return None
    return _CATEGORY_BY_LABEL.get(label.strip().lower())


def category_for_id(category_id: CategoryId | str) -> CategoryRef | None:
    # StrEnum members hash like their values, so plain strings work as keys.
    return _CATEGORY_BY_ID.get(str(category_id))


def category_label(category_id: CategoryId | str) -> str:
    """Display label for a category id, falling back to the id itself."""
    category = category_for_id(category_id)
    if category is None:
        return str(category_id)
    return category.label
